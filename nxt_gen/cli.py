"""Command-line entry point: ``nxt-gen [name] [options]``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape

from nxt_gen import __version__
from nxt_gen.config import Config, ProjectConfig
from nxt_gen.installer import PACKAGE_MANAGERS
from nxt_gen.mutator import SourceParseError
from nxt_gen.prompts import ask_features, ask_project_name
from nxt_gen.scaffolder import ProjectGenerator, ScaffoldError
from nxt_gen.utils import (
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    validate_project_name,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

_BOOLEAN_FEATURES = {
    "react_query": "TanStack Query",
    "axios": "Axios",
    "framer_motion": "Framer Motion",
    "lucide": "Lucide React icons",
    "docker": "a Dockerfile",
    "ci": "a GitHub Actions workflow",
    "husky": "Husky, lint-staged and Prettier",
    "vitest": "Vitest",
    "playwright": "Playwright",
    "storybook": "Storybook",
    "forms": "React Hook Form + Zod",
    "intl": "next-intl",
}

_CHOICE_FEATURES = {
    "orm": ("prisma", "drizzle", "none"),
    "ui": ("shadcn", "heroui", "both", "none"),
    "examples": ("crud", "auth", "both", "none"),
    "auth": ("next-auth", "clerk", "none"),
    "license": ("MIT", "Apache", "none"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nxt-gen",
        description="Create a Next.js project with the features you pick.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nxt-gen my-app\n"
            "  nxt-gen my-app --orm prisma --react-query --ui heroui --yes\n"
            "  nxt-gen my-app --config nxt-gen.json --pm pnpm\n"
        ),
    )
    parser.add_argument("name", nargs="?", help="Project name (npm package naming rules)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    features = parser.add_argument_group("features")
    for field_name, choices in _CHOICE_FEATURES.items():
        features.add_argument(f"--{field_name}", choices=choices, default=None)
    features.add_argument(
        "--prisma", dest="orm", action="store_const", const="prisma", help="Shorthand for --orm prisma"
    )
    for field_name, label in _BOOLEAN_FEATURES.items():
        features.add_argument(
            f"--{field_name.replace('_', '-')}",
            dest=field_name,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Add {label}",
        )

    run = parser.add_argument_group("run")
    run.add_argument("--pm", choices=PACKAGE_MANAGERS, default=None, help="Package manager (detected when omitted)")
    run.add_argument("--output", "-o", default=None, help="Parent directory for the project (default: cwd)")
    run.add_argument("--next-version", default=None, help="create-next-app version (default: latest)")
    run.add_argument("--skip-install", action="store_true", help="Do not install packages")
    run.add_argument("--yes", "-y", action="store_true", help="Accept defaults for unanswered questions")
    run.add_argument("--config", type=Path, default=None, help="Load a saved feature selection (JSON)")
    run.add_argument("--save-config", type=Path, default=None, help="Save the final feature selection (JSON)")
    return parser


def feature_answers(args: argparse.Namespace) -> dict[str, Any]:
    """Feature values given on the command line, skipping unset flags."""
    answers: dict[str, Any] = {}
    for field_name in (*_CHOICE_FEATURES, *_BOOLEAN_FEATURES):
        value = getattr(args, field_name, None)
        if value is not None:
            answers[field_name] = value
    return answers


def resolve_features(args: argparse.Namespace) -> ProjectConfig:
    answers: dict[str, Any] = {}
    if args.config is not None:
        answers.update(ProjectConfig.load(args.config).model_dump())
    answers.update(feature_answers(args))
    return ask_features(answers, assume_defaults=args.yes)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``nxt-gen`` and ``python -m nxt_gen``."""
    args = build_parser().parse_args(argv)
    try:
        sys.exit(_run(args))
    except KeyboardInterrupt:
        print_warning("\nAborted. Any files already generated were left in place.")
        sys.exit(EXIT_INTERRUPTED)


def _run(args: argparse.Namespace) -> int:
    print_banner(f"nxt-gen {__version__}")

    name = args.name or ("my-app" if args.yes else ask_project_name())
    if not name:
        print_error("Project name is required.")
        return EXIT_FAILURE
    if not validate_project_name(name):
        print_error(
            f"Invalid project name {name!r}: use lowercase letters, digits, '-', '.', '_' or '~' "
            "(optionally @scope/name)."
        )
        return EXIT_FAILURE

    try:
        features = resolve_features(args)
    except FileNotFoundError as exc:
        print_error(f"Config file not found: {exc.filename}")
        return EXIT_FAILURE
    except ValidationError as exc:
        print_error(f"Invalid feature selection:\n{escape(str(exc))}")
        return EXIT_FAILURE

    if args.save_config is not None:
        saved = features.save(args.save_config)
        print_success(f"Saved feature selection to {saved}")

    config = Config.from_env(
        project_name=name,
        output_dir=Path(args.output) if args.output else None,
        package_manager=args.pm,
        next_version=args.next_version,
        install=False if args.skip_install else None,
        features=features,
    )
    print_summary_table(
        {key: str(value) for key, value in features.model_dump().items()},
        title="Selected configuration",
    )

    try:
        result = asyncio.run(ProjectGenerator(config).generate())
    except ScaffoldError as exc:
        print_error(f"Failed to create project: {escape(str(exc))}")
        return EXIT_FAILURE
    except SourceParseError as exc:
        print_error(f"Could not update a generated file: {escape(str(exc))}")
        return EXIT_FAILURE

    return EXIT_OK if result.success else EXIT_FAILURE


if __name__ == "__main__":
    main()
