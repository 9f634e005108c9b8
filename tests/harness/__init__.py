"""Test harness utilities for driving the question flow."""

from .prompter import CANCEL, ScriptedPrompter

__all__ = [
    "CANCEL",
    "ScriptedPrompter",
]
