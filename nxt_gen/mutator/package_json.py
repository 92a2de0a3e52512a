"""``package.json`` script registration."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from nxt_gen.mutator.results import MutationResult, MutationStatus
from nxt_gen.mutator.source import SourceParseError


def read_package_json(project_root: str | Path) -> dict | None:
    """Parse ``package.json``; ``None`` when the file does not exist.

    Raises:
        SourceParseError: If the file is not valid JSON.
    """
    path = Path(project_root) / "package.json"
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SourceParseError(exc.msg, path=path, line=exc.lineno) from exc


def ensure_scripts(project_root: str | Path, scripts: Mapping[str, str]) -> MutationResult:
    """Add each script in *scripts* that ``package.json`` does not define yet.

    Existing entries are never overwritten.  The file is rewritten with
    two-space indentation only when something was added.
    """
    path = Path(project_root) / "package.json"
    data = read_package_json(project_root)
    if data is None:
        return MutationResult.skipped("package.json")

    existing = data.setdefault("scripts", {})
    added = [name for name in scripts if name not in existing]
    if not added:
        return MutationResult(name="package.json", path=path, status=MutationStatus.UNCHANGED)

    for name in added:
        existing[name] = scripts[name]
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return MutationResult(
        name="package.json",
        path=path,
        status=MutationStatus.APPLIED,
        changes=[f"added script {name}" for name in added],
    )
