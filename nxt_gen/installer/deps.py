"""Dependency collection for batched package installation.

Feature modules register the packages they need while they render their
files.  Nothing is installed until every module has run; the ``Installer``
then drains the collector once and issues at most one invocation per
dependency class.
"""

from __future__ import annotations

from collections.abc import Iterable


class DependencyCollector:
    """Accumulates runtime and development package names.

    Each set is an insertion-ordered mapping, so ``get_deps()`` and
    ``get_dev_deps()`` return packages in the order they were first added.
    The same package may legitimately be present in both sets; the collector
    records both and leaves the decision to the installer.
    """

    def __init__(self) -> None:
        self._deps: dict[str, None] = {}
        self._dev_deps: dict[str, None] = {}

    def add_dep(self, name: str) -> None:
        self._deps.setdefault(name, None)

    def add_dev_dep(self, name: str) -> None:
        self._dev_deps.setdefault(name, None)

    def add_deps(self, names: Iterable[str]) -> None:
        for name in names:
            self.add_dep(name)

    def add_dev_deps(self, names: Iterable[str]) -> None:
        for name in names:
            self.add_dev_dep(name)

    def get_deps(self) -> list[str]:
        return list(self._deps)

    def get_dev_deps(self) -> list[str]:
        return list(self._dev_deps)

    def get_all(self) -> dict[str, list[str]]:
        """Return both sets as ``{"deps": [...], "dev_deps": [...]}``."""
        return {"deps": self.get_deps(), "dev_deps": self.get_dev_deps()}

    def conflicts(self) -> list[str]:
        """Packages requested both as runtime and as development dependency."""
        return [name for name in self._dev_deps if name in self._deps]

    def is_empty(self) -> bool:
        return not self._deps and not self._dev_deps

    def get_total_count(self) -> int:
        return len(self._deps) + len(self._dev_deps)

    def __repr__(self) -> str:
        return (
            f"DependencyCollector(deps={self.get_deps()!r}, "
            f"dev_deps={self.get_dev_deps()!r})"
        )
