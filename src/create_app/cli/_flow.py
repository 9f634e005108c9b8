"""Question flow that resolves the scaffolding configuration.

The flow is a fixed sequence of steps. Each step has a skip predicate and an
``ask`` function; both receive the context accumulated so far and ``ask``
returns the next context. Values supplied on the command line are pre-filled in
the initial context, which makes the corresponding steps skip themselves.
Nothing here touches the filesystem beyond reading the destination directory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from create_app.cli._naming import (
    format_target_dir,
    is_valid_package_name,
    to_valid_package_name,
)
from create_app.cli._prompts import PromptCancelled, Prompter
from create_app.cli._types import FAMILIES, ResolvedConfig, TemplateVariant

log = logging.getLogger(__name__)

DEFAULT_TARGET_DIR = "my-app"


class FlowState(str, Enum):
    TARGET_DIRECTORY = "target-directory"
    OVERWRITE = "overwrite"
    PACKAGE_NAME = "package-name"
    TEMPLATE_FAMILY = "template-family"
    TEMPLATE_VARIANT = "template-variant"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class FlowContext:
    """Answers accumulated while walking the flow."""

    cwd: Path
    target_directory: str | None = None
    package_name: str | None = None
    variants: tuple[TemplateVariant, ...] = ()
    template_id: str | None = None
    overwrite: bool = False


@dataclass(frozen=True)
class Cancelled:
    """Terminal result when the operator aborts; ``state`` is where it happened."""

    state: FlowState


class _Decline(Exception):
    """Raised by a step to end the flow as cancelled without a prompt abort."""


@dataclass(frozen=True)
class Step:
    state: FlowState
    skip: Callable[[FlowContext], bool]
    ask: Callable[[FlowContext, Prompter], FlowContext]


def _target(ctx: FlowContext) -> str:
    return ctx.target_directory if ctx.target_directory is not None else ""


def _is_non_empty_dir(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())


def _ask_target_directory(ctx: FlowContext, prompter: Prompter) -> FlowContext:
    answer = prompter.text("Project name:", DEFAULT_TARGET_DIR)
    return replace(ctx, target_directory=format_target_dir(answer))


def _skip_overwrite(ctx: FlowContext) -> bool:
    return ctx.overwrite or not _is_non_empty_dir(ctx.cwd / _target(ctx).lstrip("/"))


def _ask_overwrite(ctx: FlowContext, prompter: Prompter) -> FlowContext:
    where = "Current directory" if _target(ctx) == "" else f"Target directory '{_target(ctx)}'"
    if not prompter.confirm(f"{where} is not empty. Overwrite existing files?", default=False):
        raise _Decline
    return replace(ctx, overwrite=True)


def _skip_package_name(ctx: FlowContext) -> bool:
    return ctx.package_name is not None or is_valid_package_name(_target(ctx))


def _validate_package_name(value: str) -> str | None:
    return None if is_valid_package_name(value) else "Invalid package.json name"


def _ask_package_name(ctx: FlowContext, prompter: Prompter) -> FlowContext:
    answer = prompter.text(
        "Package name:",
        to_valid_package_name(_target(ctx)),
        validate=_validate_package_name,
    )
    return replace(ctx, package_name=answer)


def _ask_template_family(ctx: FlowContext, prompter: Prompter) -> FlowContext:
    family = prompter.select("Select a template:", FAMILIES, [f.label for f in FAMILIES])
    if not family.variants:
        return replace(ctx, template_id=family.id)
    return replace(ctx, variants=family.variants)


def _skip_template_variant(ctx: FlowContext) -> bool:
    return ctx.template_id is not None or not ctx.variants


def _ask_template_variant(ctx: FlowContext, prompter: Prompter) -> FlowContext:
    variants = ctx.variants
    variant = prompter.select("Select a variant:", variants, [v.label for v in variants])
    return replace(ctx, template_id=variant.id)


STEPS: tuple[Step, ...] = (
    Step(
        FlowState.TARGET_DIRECTORY,
        skip=lambda ctx: ctx.target_directory is not None,
        ask=_ask_target_directory,
    ),
    Step(FlowState.OVERWRITE, skip=_skip_overwrite, ask=_ask_overwrite),
    Step(FlowState.PACKAGE_NAME, skip=_skip_package_name, ask=_ask_package_name),
    Step(
        FlowState.TEMPLATE_FAMILY,
        skip=lambda ctx: ctx.template_id is not None,
        ask=_ask_template_family,
    ),
    Step(FlowState.TEMPLATE_VARIANT, skip=_skip_template_variant, ask=_ask_template_variant),
)


def _finish(ctx: FlowContext) -> ResolvedConfig:
    target = _target(ctx)
    template_id = ctx.template_id
    if template_id is None:
        raise RuntimeError("question flow finished without a template id")
    package_name = ctx.package_name or to_valid_package_name(target)
    return ResolvedConfig(
        target_directory=target,
        package_name=package_name,
        template_id=template_id,
    )


def resolve(
    prompter: Prompter,
    cwd: Path,
    *,
    target_directory: str | None = None,
    template_id: str | None = None,
    overwrite: bool = False,
) -> ResolvedConfig | Cancelled:
    """
    Walk the question flow and return the resolved configuration.

    Args:
        prompter: Question engine used for every step that is not skipped.
        cwd: Directory the target directory is relative to.
        target_directory: Pre-filled project directory, skips the first question.
        template_id: Pre-filled template id, skips both template questions.
        overwrite: Accept writing into a non-empty directory without asking.

    Returns:
        A ``ResolvedConfig``, or ``Cancelled`` if the operator aborted.
    """
    ctx = FlowContext(
        cwd=cwd,
        target_directory=format_target_dir(target_directory)
        if target_directory is not None
        else None,
        template_id=template_id,
        overwrite=overwrite,
    )

    for step in STEPS:
        if step.skip(ctx):
            log.debug("Skipping step %s", step.state.value)
            continue
        try:
            ctx = step.ask(ctx, prompter)
        except (PromptCancelled, _Decline):
            log.info("Flow cancelled at step %s", step.state.value)
            return Cancelled(step.state)

    config = _finish(ctx)
    log.debug("Resolved %s", config)
    return config
