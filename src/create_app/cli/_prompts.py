"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

_console = Console()

T = TypeVar("T")


class PromptCancelled(Exception):
    """The operator aborted an interactive question."""


class Prompter(Protocol):
    """The question engine driven by the prompt flow."""

    def text(
        self,
        question: str,
        default: str,
        validate: Callable[[str], str | None] | None = None,
    ) -> str: ...

    def select(self, question: str, options: Sequence[T], labels: Sequence[str]) -> T: ...

    def confirm(self, question: str, default: bool = True) -> bool: ...


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _input(suffix: str) -> str:
    _console.print("[dim]│[/]  ", end="")
    try:
        return input(suffix)
    except (KeyboardInterrupt, EOFError):
        _console.print()
        raise PromptCancelled from None


class ConsolePrompter:
    """Asks questions on the terminal; every method raises PromptCancelled on abort."""

    def text(
        self,
        question: str,
        default: str,
        validate: Callable[[str], str | None] | None = None,
    ) -> str:
        """Free-text prompt. *validate* returns an error message to re-ask, or None."""
        _console.print(f"[bold cyan]◆[/]  {escape(question)}")
        _print_bar()

        # question + bar + each answer line (and error line) printed so far
        printed = 2
        suffix = f"({default}) " if default else ""
        while True:
            answer = _input(suffix).strip() or default
            printed += 1
            error = validate(answer) if validate is not None else None
            if error is None:
                break
            _console.print(f"[dim]│[/]  [yellow]▲ {error}[/]")
            printed += 1

        _clear_lines(printed)

        _console.print(f"[bold green]◇[/]  {escape(question)}")
        _console.print(f"[dim]│[/]  [dim]{escape(answer)}[/]")
        _print_bar()

        return answer

    def select(self, question: str, options: Sequence[T], labels: Sequence[str]) -> T:
        """Display a clack-style selection prompt and return the chosen option."""
        _console.print(f"[bold cyan]◆[/]  {escape(question)}")
        _print_bar()

        menu = TerminalMenu(
            list(labels),
            menu_cursor="│  ● ",
            menu_cursor_style=("fg_cyan", "bold"),
            menu_highlight_style=("fg_cyan",),
        )
        raw_index = menu.show()

        if raw_index is None:
            raise PromptCancelled

        index: int = int(raw_index)
        selected = options[index]

        # Overwrite the ◆ question + │ bar that stayed on screen
        _clear_lines(2)

        _console.print(f"[bold green]◇[/]  {escape(question)}")
        for i, lbl in enumerate(labels):
            if i == index:
                _console.print(f"[dim]│[/]  [bold green]●[/] {lbl}")
            else:
                _console.print(f"[dim]│[/]    [dim s]{lbl}[/]")
        _print_bar()

        return selected

    def confirm(self, question: str, default: bool = True) -> bool:
        """Display a clack-style yes/no prompt."""
        _console.print(f"[bold cyan]◆[/]  {escape(question)}")
        _print_bar()

        suffix = " [Y/n] " if default else " [y/N] "
        answer = _input(suffix).strip().lower()

        result = default if answer == "" else answer in ("y", "yes")

        display = "Yes" if result else "No"

        # Overwrite the ◆ question + │ bar + │ [Y/n] input line
        _clear_lines(3)

        _console.print(f"[bold green]◇[/]  {escape(question)}")
        _console.print(f"[dim]│[/]  {display}")
        _print_bar()

        return result
