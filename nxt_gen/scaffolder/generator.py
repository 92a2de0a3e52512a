"""Main scaffolding orchestrator.

Runs ``create-next-app``, then every enabled feature module in a fixed
order, then the batched install.  Feature modules only render files and
register packages; nothing is installed until all of them have run, so the
install costs at most two package-manager invocations whatever the
selection.

Failure policy:

- Precondition and ``create-next-app`` failures raise ``ScaffoldError``.
- ``SourceParseError`` from a mutator propagates unchanged; a layout or
  config we cannot read is not something to paper over.
- Install failures are caught here, reported with manual recovery steps,
  and recorded on the ``ScaffoldResult``.  Post-install steps are skipped.
  Nothing already written is rolled back.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path

from rich.panel import Panel

from nxt_gen.config import Config
from nxt_gen.installer import (
    InstallError,
    Installer,
    InstallResult,
    PackageManager,
    PostInstallStep,
    detect_package_manager,
    format_run_script,
    get_dlx_command,
)
from nxt_gen.installer.installer import Runner
from nxt_gen.mutator import MutationResult
from nxt_gen.utils import (
    console,
    create_progress,
    format_duration,
    print_error,
    print_panel,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    validate_project_name,
)

from .auth_gen import AuthGenerator
from .cleanup import CleanupGenerator
from .client_gen import ClientGenerator
from .context import FeatureContext, FeatureGenerator
from .data_gen import DataGenerator
from .devops_gen import DevOpsGenerator
from .docs_gen import DocsGenerator
from .examples_gen import ExamplesGenerator
from .forms_gen import FormsGenerator
from .i18n_gen import I18nGenerator
from .providers_gen import ProvidersGenerator
from .quality_gen import QualityGenerator
from .templates import TemplateRenderer
from .testing_gen import TestingGenerator
from .ui_gen import UiGenerator

CREATE_NEXT_APP_FLAGS = (
    "--typescript",
    "--tailwind",
    "--eslint",
    "--app",
    "--src-dir",
    "--import-alias",
    "@/*",
)


class ScaffoldError(Exception):
    """Raised when a scaffold precondition or the project generator fails."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        self.message = message
        super().__init__(f"{step}: {message}")


@dataclass
class ScaffoldResult:
    """Everything a scaffold run produced."""

    project_path: Path
    package_manager: PackageManager
    files: list[Path] = field(default_factory=list)
    mutations: list[MutationResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    install: InstallResult | None = None
    install_error: InstallError | None = None
    skipped_post_install: list[PostInstallStep] = field(default_factory=list)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.install_error is None


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Scaffolds one Next.js project from a ``Config``.

    Args:
        config: Run settings and feature selection.
        runner: Coroutine with the ``run_command`` signature, used for every
            external process.  Tests substitute an ``AsyncMock``.
    """

    def __init__(self, config: Config, runner: Runner | None = None) -> None:
        self.config = config
        self.pm: PackageManager = config.package_manager or detect_package_manager()
        self._runner = runner or run_command
        self.renderer = TemplateRenderer()
        # Order matters: later modules see files earlier ones wrote.
        self.features: list[FeatureGenerator] = [
            CleanupGenerator(self.renderer),
            DataGenerator(self.renderer),
            ClientGenerator(self.renderer),
            UiGenerator(self.renderer),
            AuthGenerator(self.renderer),
            FormsGenerator(self.renderer),
            I18nGenerator(self.renderer),
            TestingGenerator(self.renderer),
            QualityGenerator(self.renderer),
            DevOpsGenerator(self.renderer),
            ExamplesGenerator(self.renderer),
            ProvidersGenerator(self.renderer),
            DocsGenerator(self.renderer),
        ]

    # -- Public API --------------------------------------------------------

    async def generate(self) -> ScaffoldResult:
        """Create the project and return what was done.

        Raises:
            ScaffoldError: Invalid name, non-empty target, or generator failure.
            SourceParseError: A mutated file could not be scanned.
        """
        start = time.monotonic()
        project_path = self.config.project_path
        self._check_target(project_path)

        await self._create_next_app()
        if not project_path.is_dir():
            raise ScaffoldError(
                "create-next-app", f"finished but {project_path} was not created"
            )

        ctx = FeatureContext(
            project_root=project_path,
            config=self.config.features,
            package_manager=self.pm,
            project_name=self.config.project_name,
        )
        result = ScaffoldResult(project_path=project_path, package_manager=self.pm)

        await self.run_features(ctx, result)
        await self._install(ctx, result)

        result.duration = time.monotonic() - start
        self._print_summary(ctx, result)
        return result

    async def run_features(self, ctx: FeatureContext, result: ScaffoldResult) -> None:
        """Run every enabled feature module in order against an existing project."""
        enabled = [feature for feature in self.features if feature.enabled(ctx.config)]
        with create_progress() as progress:
            task = progress.add_task("Setting up features...", total=len(enabled))
            for feature in enabled:
                progress.update(task, description=f"Setting up {feature.name}...")
                result.files.extend(await feature.generate(ctx))
                progress.advance(task)
        print_step(f"Set up {', '.join(feature.name for feature in enabled)}")

        result.mutations = list(ctx.mutations)
        result.warnings = list(ctx.warnings)
        for mutation in ctx.mutations:
            result.warnings.extend(mutation.warnings)
        for warning in result.warnings:
            print_warning(warning)

    # -- Steps -------------------------------------------------------------

    def _check_target(self, project_path: Path) -> None:
        name = self.config.project_name
        if not validate_project_name(name):
            raise ScaffoldError(
                "validate",
                f"{name!r} is not a valid npm package name "
                "(lowercase letters, digits, '-', '.', '_' and '~'; optional @scope/)",
            )
        if project_path.exists() and (not project_path.is_dir() or any(project_path.iterdir())):
            raise ScaffoldError("validate", f"{project_path} already exists and is not empty")

    async def _create_next_app(self) -> None:
        output_dir = self.config.output_dir
        await asyncio.to_thread(output_dir.mkdir, parents=True, exist_ok=True)

        argv = get_dlx_command(self.pm).argv(
            f"create-next-app@{self.config.next_version}",
            self.config.project_name,
            *CREATE_NEXT_APP_FLAGS,
            f"--use-{self.pm}",
            "--yes",
        )
        console.print(
            f"[blue]Initialising Next.js project in {self.config.project_path} using {self.pm}...[/blue]"
        )
        returncode, _stdout, stderr = await self._runner(argv, cwd=output_dir, capture=False)
        if returncode != 0:
            detail = f": {stderr}" if stderr else ""
            raise ScaffoldError("create-next-app", f"exited with code {returncode}{detail}")

    async def _install(self, ctx: FeatureContext, result: ScaffoldResult) -> None:
        installer = Installer(self.pm, runner=self._runner)
        if not self.config.install:
            result.skipped_post_install = list(ctx.post_install)
            self._print_manual_steps(installer, ctx, result, title="Install skipped")
            return

        print_step(
            f"Installing {ctx.deps.get_total_count()} packages with {self.pm}..."
            if not ctx.deps.is_empty()
            else "Nothing extra to install"
        )
        try:
            result.install = await installer.run(ctx.deps, ctx.post_install, ctx.project_root)
        except InstallError as exc:
            result.install_error = exc
            result.skipped_post_install = _remaining_steps(ctx.post_install, exc.phase)
            print_error(f"{exc.phase} failed: {' '.join(exc.command)} (exit code {exc.returncode})")
            self._print_manual_steps(installer, ctx, result, title="Finish the setup manually")
            return

        for name in result.install.dropped_dev_deps:
            print_warning(f"{name} requested as both dependency and devDependency; installed as dependency")

    # -- Output ------------------------------------------------------------

    def _print_manual_steps(
        self,
        installer: Installer,
        ctx: FeatureContext,
        result: ScaffoldResult,
        title: str,
    ) -> None:
        lines = installer.manual_instructions(ctx.deps, ctx.project_root)
        lines.extend(str(step.command) for step in result.skipped_post_install)
        print_panel("\n".join(lines), title=title, style="yellow")

    def _print_summary(self, ctx: FeatureContext, result: ScaffoldResult) -> None:
        deps = ctx.deps.get_all()
        print_summary_table(
            {
                "Project": str(result.project_path),
                "Package manager": self.pm,
                "Files written": str(len(result.files)),
                "Dependencies": ", ".join(deps["deps"]) or "-",
                "Dev dependencies": ", ".join(deps["dev_deps"]) or "-",
                "Post-install": ", ".join(step.description for step in ctx.post_install) or "-",
                "Duration": format_duration(result.duration),
            },
            title="Scaffold summary",
        )

        if not result.success:
            print_error(f"{self.config.project_name} was created, but installation did not finish.")
            return

        print_success(f"Successfully created {self.config.project_name}!")
        next_steps = [f"cd {result.project_path}", format_run_script(self.pm, "dev")]
        console.print(
            Panel("\n".join(next_steps), title="[bold]Next steps[/bold]", border_style="green", expand=False)
        )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _remaining_steps(steps: list[PostInstallStep], failed_phase: str) -> list[PostInstallStep]:
    """Post-install steps that did not run because *failed_phase* failed."""
    for index, step in enumerate(steps):
        if step.description == failed_phase:
            return steps[index:]
    return list(steps)
