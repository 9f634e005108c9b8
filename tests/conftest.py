"""Shared fixtures for the create-app test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def catalog(tmp_path: Path) -> Path:
    """A small template catalog with one template, ``template-demo``."""
    root = tmp_path / "catalog"
    tdir = root / "template-demo"
    (tdir / "src" / "nested").mkdir(parents=True)
    (tdir / "package.json").write_text(
        json.dumps(
            {"name": "template-demo", "version": "0.0.0", "scripts": {"dev": "vite"}},
            indent=2,
        )
    )
    (tdir / "_gitignore").write_text("node_modules\n")
    (tdir / "README.md").write_text("# demo\n")
    (tdir / "src" / "main.js").write_text("console.log('hi')\n")
    (tdir / "src" / "nested" / "_gitignore").write_text("dist\n")
    (tdir / "logo.bin").write_bytes(bytes(range(256)))
    return root


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty working directory that is also the process cwd."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd
