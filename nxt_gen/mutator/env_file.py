"""``.env`` variable registration."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

from nxt_gen.mutator.results import MutationResult, MutationStatus

_ASSIGNMENT_RE = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=", re.M)


def defined_keys(text: str) -> set[str]:
    return set(_ASSIGNMENT_RE.findall(text))


def ensure_env_vars(
    project_root: str | Path,
    values: Mapping[str, str],
    filename: str = ".env",
    comment: str | None = None,
) -> MutationResult:
    """Append ``KEY="value"`` lines for keys the env file does not define.

    The file is created when absent.  Existing assignments are never
    rewritten, so real secrets a developer filled in survive a re-run.
    """
    path = Path(project_root) / filename
    text = path.read_text(encoding="utf-8") if path.is_file() else ""
    present = defined_keys(text)
    missing = [key for key in values if key not in present]
    if not missing:
        return MutationResult(name=filename, path=path, status=MutationStatus.UNCHANGED)

    lines: list[str] = []
    if comment:
        lines.append(f"# {comment}")
    lines.extend(f'{key}="{values[key]}"' for key in missing)

    prefix = text
    if prefix and not prefix.endswith("\n"):
        prefix += "\n"
    if prefix:
        prefix += "\n"
    path.write_text(prefix + "\n".join(lines) + "\n", encoding="utf-8")
    return MutationResult(
        name=filename,
        path=path,
        status=MutationStatus.APPLIED,
        changes=[f"added {key}" for key in missing],
    )
