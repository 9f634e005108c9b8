"""Unit tests for the template copier and package.json patcher."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_app.cli._renderer import (
    RENAME_FILES,
    DescriptorParseError,
    ScaffoldError,
    TemplateNotFoundError,
    copy_dir,
    patch_package_json,
    scaffold,
    template_dir,
    templates_root,
)
from create_app.cli._types import ResolvedConfig, template_ids


def _files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


@pytest.fixture
def config() -> ResolvedConfig:
    return ResolvedConfig(target_directory="out", package_name="my-pkg", template_id="demo")


class TestScaffold:
    def test_mirrors_tree_with_top_level_rename(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        scaffold(config, tmp_path, catalog)

        source = _files(catalog / "template-demo")
        expected = {RENAME_FILES.get(name, name) for name in source}
        assert _files(tmp_path / "out") == expected

    def test_nested_reserved_names_are_copied_literally(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        scaffold(config, tmp_path, catalog)

        out = tmp_path / "out"
        assert (out / ".gitignore").read_text() == "node_modules\n"
        assert not (out / "_gitignore").exists()
        assert (out / "src" / "nested" / "_gitignore").read_text() == "dist\n"

    def test_copies_bytes_verbatim(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        scaffold(config, tmp_path, catalog)

        assert (tmp_path / "out" / "logo.bin").read_bytes() == bytes(range(256))

    def test_package_json_name_is_patched(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        scaffold(config, tmp_path, catalog)

        original = json.loads((catalog / "template-demo" / "package.json").read_text())
        written = json.loads((tmp_path / "out" / "package.json").read_text())
        assert written["name"] == "my-pkg"
        assert {k: v for k, v in written.items() if k != "name"} == {
            k: v for k, v in original.items() if k != "name"
        }

    def test_returns_written_names_with_package_json_last(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        written = scaffold(config, tmp_path, catalog)

        assert written[-1] == "package.json"
        assert sorted(written) == sorted(
            [".gitignore", "README.md", "logo.bin", "package.json", "src/"]
        )

    def test_creates_intermediate_directories(
        self, tmp_path: Path, catalog: Path
    ) -> None:
        config = ResolvedConfig("a/b/c", "pkg", "demo")

        scaffold(config, tmp_path, catalog)

        assert (tmp_path / "a" / "b" / "c" / "package.json").is_file()

    def test_overwrites_existing_files(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        out = tmp_path / "out"
        (out / "src").mkdir(parents=True)
        (out / "README.md").write_text("old")
        (out / "extra.txt").write_text("kept")

        scaffold(config, tmp_path, catalog)

        assert (out / "README.md").read_text() == "# demo\n"
        assert (out / "extra.txt").read_text() == "kept"

    def test_absolute_target_stays_under_cwd(self, tmp_path: Path, catalog: Path) -> None:
        cwd = tmp_path / "here"
        cwd.mkdir()

        scaffold(ResolvedConfig("/abs/out", "pkg", "demo"), cwd, catalog)

        assert (cwd / "abs" / "out" / "package.json").is_file()

    def test_empty_target_writes_into_cwd(self, tmp_path: Path, catalog: Path) -> None:
        cwd = tmp_path / "here"
        cwd.mkdir()

        scaffold(ResolvedConfig("", "pkg", "demo"), cwd, catalog)

        assert (cwd / "package.json").is_file()

    def test_missing_template(self, tmp_path: Path, catalog: Path) -> None:
        with pytest.raises(TemplateNotFoundError, match="nope"):
            scaffold(ResolvedConfig("out", "pkg", "nope"), tmp_path, catalog)

        assert not (tmp_path / "out").exists()

    def test_missing_package_json_is_os_error(
        self, tmp_path: Path, catalog: Path, config: ResolvedConfig
    ) -> None:
        (catalog / "template-demo" / "package.json").unlink()

        with pytest.raises(FileNotFoundError):
            scaffold(config, tmp_path, catalog)


class TestPatchPackageJson:
    def test_two_space_indent_and_key_order(self, tmp_path: Path) -> None:
        descriptor = '{"version": "1.0.0", "name": "x", "private": true}'
        (tmp_path / "package.json").write_text(descriptor)

        text = patch_package_json(tmp_path, "@scope/app")

        assert text == (
            '{\n  "version": "1.0.0",\n  "name": "@scope/app",\n  "private": true\n}\n'
        )

    def test_adds_missing_name(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{}")

        assert json.loads(patch_package_json(tmp_path, "app")) == {"name": "app"}

    def test_keeps_non_ascii(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"description": "café"}', encoding="utf-8")

        assert "café" in patch_package_json(tmp_path, "app")

    @pytest.mark.parametrize(
        "content", [b"{not json", b"[1, 2]", b'"name"', b'{"name": "\xff"}']
    )
    def test_invalid_descriptor(self, tmp_path: Path, content: bytes) -> None:
        (tmp_path / "package.json").write_bytes(content)

        with pytest.raises(DescriptorParseError) as info:
            patch_package_json(tmp_path, "app")

        assert isinstance(info.value, ScaffoldError)


class TestCopyDir:
    def test_is_idempotent(self, tmp_path: Path, catalog: Path) -> None:
        src = catalog / "template-demo"
        dest = tmp_path / "copy"

        copy_dir(src, dest)
        copy_dir(src, dest)

        assert _files(dest) == _files(src)


class TestBundledCatalog:
    def test_root_exists(self) -> None:
        assert templates_root().is_dir()

    @pytest.mark.parametrize("template_id", template_ids())
    def test_every_template_has_package_json(self, template_id: str) -> None:
        tdir = template_dir(template_id)
        pkg = json.loads((tdir / "package.json").read_text())
        assert pkg["name"] == f"template-{template_id}"
        assert (tdir / "_gitignore").is_file()

    def test_react_ts_example(self, tmp_path: Path) -> None:
        config = ResolvedConfig("demo", "demo", "react-ts")

        scaffold(config, tmp_path)

        out = tmp_path / "demo"
        assert _files(out) == {
            RENAME_FILES.get(name, name) for name in _files(template_dir("react-ts"))
        }
        assert json.loads((out / "package.json").read_text())["name"] == "demo"
        assert (out / "src" / "App.tsx").is_file()
