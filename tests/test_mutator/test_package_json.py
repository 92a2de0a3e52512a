"""Tests for package.json script registration."""

from __future__ import annotations

import json

import pytest

from nxt_gen.mutator import MutationStatus, SourceParseError, ensure_scripts, read_package_json


pytestmark = pytest.mark.unit


class TestEnsureScripts:
    """Tests for ensure_scripts."""

    def test_adds_missing_scripts(self, next_project):
        result = ensure_scripts(next_project, {"test": "vitest", "format": "prettier --write ."})

        data = read_package_json(next_project)
        assert result.status is MutationStatus.APPLIED
        assert result.changes == ["added script test", "added script format"]
        assert data["scripts"]["test"] == "vitest"
        assert data["scripts"]["dev"] == "next dev"

    def test_never_overwrites(self, next_project):
        result = ensure_scripts(next_project, {"dev": "something else", "test": "vitest"})

        data = read_package_json(next_project)
        assert data["scripts"]["dev"] == "next dev"
        assert result.changes == ["added script test"]

    def test_rerun_is_noop(self, next_project):
        path = next_project / "package.json"
        ensure_scripts(next_project, {"test": "vitest"})
        first = path.read_bytes()

        result = ensure_scripts(next_project, {"test": "vitest"})

        assert result.status is MutationStatus.UNCHANGED
        assert path.read_bytes() == first

    def test_two_space_indent_and_trailing_newline(self, next_project):
        ensure_scripts(next_project, {"test": "vitest"})
        text = (next_project / "package.json").read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '\n  "scripts": {\n    "dev": "next dev",' in text

    def test_creates_scripts_section(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"name": "x"}), encoding="utf-8")
        ensure_scripts(tmp_path, {"test": "vitest"})
        assert read_package_json(tmp_path)["scripts"] == {"test": "vitest"}

    def test_missing_file_is_skipped(self, tmp_path):
        result = ensure_scripts(tmp_path, {"test": "vitest"})
        assert result.status is MutationStatus.SKIPPED
        assert not (tmp_path / "package.json").exists()

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{\n  "name": "x",\n}\n', encoding="utf-8")

        with pytest.raises(SourceParseError) as exc_info:
            ensure_scripts(tmp_path, {"test": "vitest"})

        assert exc_info.value.path == path
        assert exc_info.value.line == 3
        assert path.read_text(encoding="utf-8") == '{\n  "name": "x",\n}\n'
