"""Interactive feature selection.

Only questions without an answer yet (from CLI flags or a saved config) are
asked.  The suggested answer for each question is the ``ProjectConfig``
default, so ``--yes`` and pressing Enter throughout give the same result.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from rich.console import Console
from rich.prompt import Confirm, Prompt

from nxt_gen.config import ProjectConfig
from nxt_gen.utils import console as default_console


class Question(NamedTuple):
    field: str
    message: str
    choices: tuple[str, ...] = ()


QUESTIONS: tuple[Question, ...] = (
    Question("orm", "Which ORM would you like to use?", ("prisma", "drizzle", "none")),
    Question("react_query", "React Query (TanStack Query) for data fetching?"),
    Question("axios", "Axios for API requests?"),
    Question("auth", "Authentication provider?", ("next-auth", "clerk", "none")),
    Question("ui", "UI component library?", ("shadcn", "heroui", "both", "none")),
    Question("framer_motion", "Framer Motion for animations?"),
    Question("lucide", "Lucide React for icons?"),
    Question("examples", "Example pages?", ("crud", "auth", "both", "none")),
    Question("docker", "Generate a Dockerfile?"),
    Question("ci", "Add a GitHub Actions CI workflow?"),
    Question("husky", "Set up Husky, lint-staged and Prettier?"),
    Question("vitest", "Install Vitest and React Testing Library?"),
    Question("playwright", "Install Playwright for E2E testing?"),
    Question("storybook", "Initialise Storybook?"),
    Question("forms", "Set up forms (React Hook Form + Zod)?"),
    Question("intl", "Set up internationalisation (next-intl)?"),
    Question("license", "License?", ("MIT", "Apache", "none")),
)


def question_choices(question: Question, answers: dict[str, Any]) -> tuple[str, ...]:
    """Choices offered for *question* given the answers so far.

    The auth example is only offered once an auth provider was chosen.
    """
    if question.field == "examples" and answers.get("auth", "none") == "none":
        return ("crud", "none")
    return question.choices


def ask_project_name(default: str = "my-app", console: Console | None = None) -> str:
    return Prompt.ask(
        "What is the name of your project?", default=default, console=console or default_console
    ).strip()


def ask_features(
    answers: dict[str, Any] | None = None,
    assume_defaults: bool = False,
    console: Console | None = None,
) -> ProjectConfig:
    """Complete *answers* interactively and validate them into a ``ProjectConfig``.

    Raises:
        pydantic.ValidationError: If a pre-supplied answer is invalid.
    """
    out = console or default_console
    values = dict(answers or {})
    for question in QUESTIONS:
        if question.field in values:
            continue
        default = ProjectConfig.model_fields[question.field].default
        if assume_defaults:
            values[question.field] = default
        elif question.choices:
            values[question.field] = Prompt.ask(
                question.message,
                choices=list(question_choices(question, values)),
                default=default,
                console=out,
            )
        else:
            values[question.field] = Confirm.ask(question.message, default=default, console=out)
    return ProjectConfig(**values)
