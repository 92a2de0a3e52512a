"""Structured outcomes returned by the file mutators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class MutationStatus(str, Enum):
    """What a mutator did to its target file."""

    APPLIED = "applied"  # file rewritten
    UNCHANGED = "unchanged"  # file present, nothing left to do
    SKIPPED = "skipped"  # file absent or shape unsupported, nothing written


@dataclass
class MutationResult:
    """Outcome of one mutator call.

    Mutators never print; ``warnings`` carries anything the user should
    hear about (a partially recognised file shape, a manual follow-up).
    """

    name: str
    path: Path | None
    status: MutationStatus
    changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status is MutationStatus.APPLIED

    @classmethod
    def skipped(cls, name: str, path: Path | None = None, warning: str | None = None) -> "MutationResult":
        return cls(
            name=name,
            path=path,
            status=MutationStatus.SKIPPED,
            warnings=[warning] if warning else [],
        )

    def __str__(self) -> str:
        target = self.path.name if self.path else self.name
        if self.changes:
            return f"{target}: {self.status.value} ({', '.join(self.changes)})"
        return f"{target}: {self.status.value}"
