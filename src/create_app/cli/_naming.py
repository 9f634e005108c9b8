"""Package name validation and normalization."""

from __future__ import annotations

import re

_PACKAGE_NAME = re.compile(r"(?:@[a-z0-9\-*~][a-z0-9\-*._~]*/)?[a-z0-9\-~][a-z0-9\-._~]*")


def is_valid_package_name(name: str) -> bool:
    """Return True if *name* is usable as the ``name`` field of a package.json."""
    return _PACKAGE_NAME.fullmatch(name) is not None


def to_valid_package_name(name: str) -> str:
    """
    Best-effort conversion of an arbitrary project name into a package name.

    The result is not guaranteed to be valid (``"!!"`` becomes ``"-"``), so callers
    must check it with :func:`is_valid_package_name` before relying on it.
    """
    name = name.strip().lower()
    name = re.sub(r"\s+", "-", name)
    name = re.sub(r"^[._]", "", name)
    return re.sub(r"[^a-z0-9\-~]+", "-", name)


def format_target_dir(value: str) -> str:
    """Trim whitespace and trailing slashes from a target directory answer."""
    return re.sub(r"/+$", "", value.strip())
