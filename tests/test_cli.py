"""Tests for the command-line entry point.

Covers:
- Flag parsing into feature answers
- Config file loading and saving
- Exit codes for success, invalid input, scaffold failures and Ctrl-C
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from nxt_gen.cli import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_OK,
    build_parser,
    feature_answers,
    main,
    resolve_features,
)
from nxt_gen.config import ProjectConfig
from nxt_gen.mutator import SourceParseError
from nxt_gen.scaffolder import ScaffoldError


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def generator_cls():
    """Patch ProjectGenerator with a mock whose generate() succeeds."""
    with patch("nxt_gen.cli.ProjectGenerator") as cls:
        instance = MagicMock()
        instance.generate = AsyncMock(return_value=MagicMock(success=True))
        cls.return_value = instance
        yield cls


def _exit_code(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    def test_unset_flags_are_not_answers(self):
        args = build_parser().parse_args(["my-app"])
        assert feature_answers(args) == {}

    def test_flags_become_answers(self):
        args = build_parser().parse_args(
            ["my-app", "--orm", "drizzle", "--react-query", "--no-lucide", "--ui", "heroui"]
        )
        assert feature_answers(args) == {
            "orm": "drizzle",
            "ui": "heroui",
            "react_query": True,
            "lucide": False,
        }

    def test_prisma_shorthand(self):
        args = build_parser().parse_args(["--prisma"])
        assert feature_answers(args) == {"orm": "prisma"}

    def test_invalid_choice_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--orm", "mongoose"])

    def test_config_file_then_flags(self, tmp_path: Path):
        saved = ProjectConfig(orm="prisma", vitest=True).save(tmp_path / "sel.json")
        args = build_parser().parse_args(["--config", str(saved), "--orm", "drizzle", "--yes"])

        features = resolve_features(args)

        assert features.orm == "drizzle"
        assert features.vitest is True


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_success(self, generator_cls, tmp_path):
        code = _exit_code(["web", "--yes", "--pm", "pnpm", "-o", str(tmp_path), "--skip-install"])

        assert code == EXIT_OK
        config = generator_cls.call_args.args[0]
        assert config.project_name == "web"
        assert config.package_manager == "pnpm"
        assert config.output_dir == tmp_path
        assert config.install is False
        assert config.features == ProjectConfig()

    def test_default_name_with_yes(self, generator_cls):
        assert _exit_code(["--yes"]) == EXIT_OK
        assert generator_cls.call_args.args[0].project_name == "my-app"

    def test_invalid_name(self, generator_cls):
        assert _exit_code(["My App", "--yes"]) == EXIT_FAILURE
        generator_cls.assert_not_called()

    def test_install_failure(self, generator_cls):
        generator_cls.return_value.generate = AsyncMock(return_value=MagicMock(success=False))
        assert _exit_code(["web", "--yes"]) == EXIT_FAILURE

    @pytest.mark.parametrize(
        "error",
        [
            ScaffoldError("create-next-app", "exited with code 1: [error] boom"),
            SourceParseError("unexpected '}'", path=Path("src/app/layout.tsx"), line=3),
        ],
    )
    def test_scaffold_errors(self, generator_cls, error):
        generator_cls.return_value.generate = AsyncMock(side_effect=error)
        assert _exit_code(["web", "--yes"]) == EXIT_FAILURE

    def test_missing_config_file(self, generator_cls, tmp_path):
        assert _exit_code(["web", "--yes", "--config", str(tmp_path / "missing.json")]) == EXIT_FAILURE
        generator_cls.assert_not_called()

    def test_invalid_config_file(self, generator_cls, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"orm": "mongoose"}', encoding="utf-8")
        assert _exit_code(["web", "--yes", "--config", str(path)]) == EXIT_FAILURE

    def test_save_config(self, generator_cls, tmp_path):
        target = tmp_path / "out" / "sel.json"

        _exit_code(["web", "--yes", "--vitest", "--save-config", str(target)])

        assert ProjectConfig.load(target).vitest is True

    def test_keyboard_interrupt(self):
        with patch("nxt_gen.cli._run", side_effect=KeyboardInterrupt):
            assert _exit_code(["web"]) == EXIT_INTERRUPTED
