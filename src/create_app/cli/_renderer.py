"""Copies a bundled template to disk and patches its package.json."""

from __future__ import annotations

import importlib.resources as ilr
import json
import logging
import shutil
from pathlib import Path

from create_app.cli._types import ResolvedConfig

log = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"

# Files that cannot ship under their real name inside the wheel.
RENAME_FILES: dict[str, str] = {
    "_gitignore": ".gitignore",
}


class ScaffoldError(Exception):
    """Base class for errors that abort scaffolding."""


class TemplateNotFoundError(ScaffoldError):
    pass


class DescriptorParseError(ScaffoldError):
    """The template's package.json is not a JSON object."""


def templates_root() -> Path:
    return Path(str(ilr.files("create_app").joinpath("templates")))


def template_dir(template_id: str, root: Path | None = None) -> Path:
    return (root or templates_root()) / f"template-{template_id}"


def copy(src: Path, dest: Path) -> None:
    if src.is_dir():
        copy_dir(src, dest)
    else:
        shutil.copyfile(src, dest)
        log.debug("Copied %s -> %s", src, dest)


def copy_dir(src_dir: Path, dest_dir: Path) -> None:
    dest_dir.mkdir(parents=True, exist_ok=True)
    for entry in src_dir.iterdir():
        copy(entry, dest_dir / entry.name)


def patch_package_json(tdir: Path, package_name: str) -> str:
    """Return the template's package.json with its ``name`` replaced."""
    source = tdir / PACKAGE_JSON
    try:
        pkg = json.loads(source.read_bytes())
    except ValueError as exc:
        raise DescriptorParseError(f"{source}: {exc}") from exc

    if not isinstance(pkg, dict):
        raise DescriptorParseError(f"{source}: expected a JSON object")

    pkg["name"] = package_name
    return json.dumps(pkg, indent=2, ensure_ascii=False) + "\n"


def scaffold(
    config: ResolvedConfig,
    cwd: Path,
    templates: Path | None = None,
) -> list[str]:
    """
    Instantiate ``config.template_id`` under ``cwd / config.target_directory``.

    Top-level entries are renamed through ``RENAME_FILES``; nested entries are
    copied verbatim. Existing files in the destination are overwritten.

    Returns:
        The top-level names written to the destination, in write order.
    """
    tdir = template_dir(config.template_id, templates)
    if not tdir.is_dir():
        raise TemplateNotFoundError(f"Template '{config.template_id}' not found at {tdir}")

    root = config.root(cwd)
    root.mkdir(parents=True, exist_ok=True)

    written: list[str] = []

    def write(name: str, content: str | None = None) -> None:
        target = root / RENAME_FILES.get(name, name)
        if content is not None:
            target.write_text(content, encoding="utf-8")
        else:
            copy(tdir / name, target)
        written.append(target.name + ("/" if target.is_dir() else ""))

    for entry in tdir.iterdir():
        if entry.name != PACKAGE_JSON:
            write(entry.name)

    write(PACKAGE_JSON, patch_package_json(tdir, config.package_name))
    log.info("Scaffolded %s into %s", tdir.name, root)

    return written
