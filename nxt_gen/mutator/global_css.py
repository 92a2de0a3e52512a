"""Stylesheet mutator for CSS-first Tailwind setups.

Tailwind v4 projects have no ``tailwind.config.*``; plugins are registered
from ``globals.css`` instead.
"""

from __future__ import annotations

import re
from pathlib import Path

from nxt_gen.mutator.results import MutationResult, MutationStatus

GLOBAL_CSS_PATH = "src/app/globals.css"
HERO_PLUGIN_DIRECTIVE = "@plugin './hero.ts';"

HEROUI_CSS_SETUP = (
    '@import "tailwindcss";\n'
    f"{HERO_PLUGIN_DIRECTIVE}\n"
    "@source '../../node_modules/@heroui/theme/dist/**/*.{js,ts,jsx,tsx}';\n"
    "@custom-variant dark (&:is(.dark *));\n"
)

_TAILWIND_IMPORT_RE = re.compile(r"""@import\s+(["'])tailwindcss\1\s*;[ \t]*\r?\n?""")


def uses_css_first_tailwind(project_root: str | Path, css_path: str = GLOBAL_CSS_PATH) -> bool:
    """``True`` when the stylesheet imports Tailwind directly (v4 style)."""
    path = Path(project_root) / css_path
    if not path.is_file():
        return False
    return bool(_TAILWIND_IMPORT_RE.search(path.read_text(encoding="utf-8")))


def configure_global_css(
    project_root: str | Path,
    css_path: str = GLOBAL_CSS_PATH,
    directive: str = HERO_PLUGIN_DIRECTIVE,
    setup: str = HEROUI_CSS_SETUP,
) -> MutationResult:
    """Install *setup* into the global stylesheet unless *directive* is already there.

    The first ``@import "tailwindcss";`` is replaced by *setup*; without one
    the block is prepended.  An absent stylesheet is a no-op.
    """
    path = Path(project_root) / css_path
    if not path.is_file():
        return MutationResult.skipped("global-css")

    text = path.read_text(encoding="utf-8")
    if directive in text:
        return MutationResult(name="global-css", path=path, status=MutationStatus.UNCHANGED)

    match = _TAILWIND_IMPORT_RE.search(text)
    if match:
        updated = text[: match.start()] + setup + text[match.end() :]
        change = "replaced tailwindcss import with plugin setup"
    else:
        updated = setup + "\n" + text
        change = "prepended plugin setup"

    path.write_text(updated, encoding="utf-8")
    return MutationResult(
        name="global-css", path=path, status=MutationStatus.APPLIED, changes=[change]
    )
