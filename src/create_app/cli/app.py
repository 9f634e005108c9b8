"""Typer CLI application for create-app."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Argument, Context, Exit, Option, Typer

import create_app
from create_app.cli._flow import Cancelled, resolve
from create_app.cli._prompts import ConsolePrompter
from create_app.cli._renderer import ScaffoldError, scaffold
from create_app.cli._types import FAMILIES, template_ids

_CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}

app = Typer(add_completion=False, context_settings=_CONTEXT_SETTINGS)
_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _print_templates() -> None:
    _console.print()
    _console.print("[bold cyan]◆[/]  Available templates")
    _console.print("[dim]│[/]")
    for family in FAMILIES:
        _console.print(f"[dim]│[/]  [bold]{family.label}[/] [dim]{family.description}[/]")
        for variant in family.variants:
            _console.print(f"[dim]│[/]    [bold cyan]{variant.id:<12}[/] {variant.label}")
        _console.print("[dim]│[/]")
    _console.print()


def _list_templates_callback(value: bool) -> None:
    if value:
        _print_templates()
        raise Exit()


def _positional(first: str | None, extra: list[str]) -> str | None:
    """Pick the project directory, skipping unknown options that took its slot."""
    for arg in [first, *extra] if first is not None else extra:
        if arg and not arg.startswith("-"):
            return arg
    return None


def _version_callback(value: bool) -> None:
    if value:
        _console.print(create_app.__version__)
        raise Exit()


@app.command(context_settings=_CONTEXT_SETTINGS)
def create(
    ctx: Context,
    project_directory: Annotated[
        str | None,
        Argument(help="Directory to create the project in", show_default=False),
    ] = None,
    template: Annotated[
        str | None,
        Option(
            "--template",
            "-t",
            help="Template id. Run with --list-templates / -l to see all options.",
            show_default=False,
        ),
    ] = None,
    overwrite: Annotated[
        bool,
        Option("--overwrite", help="Write into a non-empty directory without asking."),
    ] = False,
    verbose: Annotated[bool, Option("--verbose", help="Log every file written.")] = False,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List all available templates and exit.",
            callback=_list_templates_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
    version: Annotated[
        bool,
        Option(
            "--version",
            "-v",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Create a new app from a bundled template."""
    _configure_logging(verbose)
    project_directory = _positional(project_directory, ctx.args)

    if template is not None and template not in template_ids():
        valid = ", ".join(f"'{t}'" for t in template_ids())
        _console.print()
        _console.print(f"[bold red]Error:[/] [bold]{template!r}[/] is not a valid template.")
        _console.print(f"[dim]Valid values:[/] {valid}")
        _print_templates()
        raise Exit(code=2)

    cwd = Path.cwd()

    # Header
    _console.print()
    _console.print(f"[bold cyan]●[/]  create-app v{create_app.__version__}")
    _console.print("[dim]│[/]")

    result = resolve(
        ConsolePrompter(),
        cwd,
        target_directory=project_directory,
        template_id=template,
        overwrite=overwrite,
    )

    if isinstance(result, Cancelled):
        _console.print("[bold red]✖[/]  Operation cancelled")
        _console.print()
        return

    root = result.root(cwd)
    _console.print(f"[bold green]◇[/]  Creating a new app in [green]{escape(str(root))}[/]")

    try:
        created = scaffold(result, cwd)
    except (OSError, ScaffoldError) as exc:
        logging.getLogger(__name__).debug("Scaffolding failed", exc_info=True)
        _err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise Exit(code=1) from exc

    for name in created:
        _console.print(f"[dim]│[/]  {escape(name)}")

    _console.print("[dim]│[/]")
    target = escape(repr(result.target_directory))
    _console.print(f"[bold cyan]●[/]  Done! Created a new app at {target}.")
    _console.print("Now run:")
    _console.print()
    if root.resolve() != cwd.resolve():
        _console.print(f"  cd {escape(os.path.relpath(root, cwd))}")
    _console.print("  npm install")
    _console.print()
