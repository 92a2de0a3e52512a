"""Batched package installation.

Consumes a ``DependencyCollector`` and issues at most two install
invocations (runtime first, then development), followed by the post-install
commands feature modules registered (schema push, browser download, ...).
The first failure stops everything that follows it; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

from nxt_gen.installer.deps import DependencyCollector
from nxt_gen.installer.pm import CommandSpec, PackageManager, get_install_command
from nxt_gen.utils import CommandError, run_command

Runner = Callable[..., Awaitable[tuple[int, str, str]]]


class InstallError(CommandError):
    """Raised when an install or post-install invocation fails.

    ``phase`` names the failing step: ``"dependencies"``,
    ``"devDependencies"`` or the description of a post-install step.
    """

    def __init__(
        self, phase: str, command: list[str], returncode: int, stderr: str = ""
    ) -> None:
        self.phase = phase
        super().__init__(command, returncode, stderr)


@dataclass
class PostInstallStep:
    """A command to run once packages are installed."""

    description: str
    command: CommandSpec


@dataclass
class InstallResult:
    """What the installer actually executed."""

    invocations: list[list[str]] = field(default_factory=list)
    post_install: list[str] = field(default_factory=list)
    dropped_dev_deps: list[str] = field(default_factory=list)

    @property
    def invocation_count(self) -> int:
        return len(self.invocations)


class Installer:
    """Runs the batched install for one project.

    Args:
        pm: Package manager used for every invocation.
        runner: Coroutine with the ``run_command`` signature.  Defaults to
            :func:`nxt_gen.utils.run_command`; tests substitute an ``AsyncMock``.
        capture: Capture child output instead of streaming it to the terminal.
    """

    def __init__(
        self,
        pm: PackageManager,
        runner: Runner | None = None,
        capture: bool = False,
    ) -> None:
        self.pm = pm
        self._runner = runner
        self.capture = capture

    # -- Planning ----------------------------------------------------------

    def plan(self, collector: DependencyCollector) -> list[tuple[str, CommandSpec]]:
        """Return the ``(phase, command)`` pairs :meth:`install` would run.

        Packages requested both ways are installed as runtime dependencies
        only.
        """
        deps = collector.get_deps()
        runtime = set(deps)
        dev_deps = [name for name in collector.get_dev_deps() if name not in runtime]

        steps: list[tuple[str, CommandSpec]] = []
        if deps:
            steps.append(("dependencies", get_install_command(self.pm, deps, False)))
        if dev_deps:
            steps.append(("devDependencies", get_install_command(self.pm, dev_deps, True)))
        return steps

    # -- Execution ---------------------------------------------------------

    async def install(
        self, collector: DependencyCollector, cwd: str | Path
    ) -> InstallResult:
        """Install both dependency sets.

        Raises:
            InstallError: On the first invocation that exits non-zero.  The
                development invocation is not attempted after a runtime
                failure.
        """
        result = InstallResult(dropped_dev_deps=collector.conflicts())
        for phase, spec in self.plan(collector):
            await self._execute(phase, spec, cwd)
            result.invocations.append(spec.argv())
        return result

    async def run_post_install(
        self,
        steps: list[PostInstallStep],
        cwd: str | Path,
        result: InstallResult | None = None,
    ) -> InstallResult:
        """Run *steps* in order, stopping at the first failure."""
        result = result or InstallResult()
        for step in steps:
            await self._execute(step.description, step.command, cwd)
            result.post_install.append(step.description)
        return result

    async def run(
        self,
        collector: DependencyCollector,
        steps: list[PostInstallStep],
        cwd: str | Path,
    ) -> InstallResult:
        """Install packages, then run post-install steps."""
        result = await self.install(collector, cwd)
        return await self.run_post_install(steps, cwd, result)

    async def _execute(self, phase: str, spec: CommandSpec, cwd: str | Path) -> None:
        runner = self._runner or run_command
        returncode, _stdout, stderr = await runner(
            spec.argv(), cwd=cwd, capture=self.capture
        )
        if returncode != 0:
            raise InstallError(phase, spec.argv(), returncode, stderr)

    # -- Remediation -------------------------------------------------------

    def manual_instructions(
        self, collector: DependencyCollector, project_path: str | Path
    ) -> list[str]:
        """Shell commands a user can run to finish an interrupted install."""
        lines = [f"cd {project_path}"]
        planned = self.plan(collector)
        if planned:
            lines.extend(str(spec) for _phase, spec in planned)
        else:
            lines.append(str(get_install_command(self.pm, [], False)))
        return lines
