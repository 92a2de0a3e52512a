"""Tests for the CSS-first Tailwind stylesheet mutator."""

from __future__ import annotations

import pytest

from nxt_gen.mutator import MutationStatus, configure_global_css, uses_css_first_tailwind
from nxt_gen.mutator.global_css import HERO_PLUGIN_DIRECTIVE, HEROUI_CSS_SETUP


pytestmark = pytest.mark.unit


class TestUsesCssFirstTailwind:
    def test_v4_stylesheet(self, next_project_v4):
        assert uses_css_first_tailwind(next_project_v4) is True

    def test_v3_stylesheet(self, next_project):
        assert uses_css_first_tailwind(next_project) is False

    def test_missing_stylesheet(self, tmp_path):
        assert uses_css_first_tailwind(tmp_path) is False


class TestConfigureGlobalCss:
    def test_replaces_tailwind_import(self, next_project_v4):
        css = next_project_v4 / "src" / "app" / "globals.css"

        result = configure_global_css(next_project_v4)

        text = css.read_text(encoding="utf-8")
        assert result.status is MutationStatus.APPLIED
        assert text.startswith(HEROUI_CSS_SETUP)
        assert text.count('@import "tailwindcss";') == 1
        assert ":root {" in text

    def test_rerun_is_noop(self, next_project_v4):
        css = next_project_v4 / "src" / "app" / "globals.css"
        configure_global_css(next_project_v4)
        first = css.read_text(encoding="utf-8")

        result = configure_global_css(next_project_v4)

        assert result.status is MutationStatus.UNCHANGED
        assert css.read_text(encoding="utf-8") == first
        assert first.count(HERO_PLUGIN_DIRECTIVE) == 1

    def test_prepends_without_import(self, next_project):
        css = next_project / "src" / "app" / "globals.css"
        original = css.read_text(encoding="utf-8")

        result = configure_global_css(next_project)

        assert result.changes == ["prepended plugin setup"]
        assert css.read_text(encoding="utf-8") == HEROUI_CSS_SETUP + "\n" + original

    def test_missing_stylesheet_is_skipped(self, tmp_path):
        result = configure_global_css(tmp_path)
        assert result.status is MutationStatus.SKIPPED
        assert list(tmp_path.iterdir()) == []
