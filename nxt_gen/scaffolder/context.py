"""State shared by the feature modules during one scaffold run."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nxt_gen.config import ProjectConfig
from nxt_gen.installer import (
    CommandSpec,
    DependencyCollector,
    PackageManager,
    PostInstallStep,
    format_run_script,
    get_dlx_command,
)
from nxt_gen.mutator import MutationResult, ensure_env_vars, ensure_scripts

from .templates import TemplateRenderer


@dataclass
class FeatureContext:
    """Everything a feature module reads or contributes to.

    Feature modules run one at a time in a fixed order, so nothing here is
    guarded against concurrent use.
    """

    project_root: Path
    config: ProjectConfig
    package_manager: PackageManager
    project_name: str = "my-app"
    deps: DependencyCollector = field(default_factory=DependencyCollector)
    post_install: list[PostInstallStep] = field(default_factory=list)
    mutations: list[MutationResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def template_context(self) -> dict[str, Any]:
        """Variables available to every template."""
        pm = self.package_manager
        return {
            "project_name": self.project_name,
            "pm": pm,
            "cfg": self.config,
            "dlx": str(get_dlx_command(pm)),
            "run": {
                script: format_run_script(pm, script)
                for script in ("dev", "build", "start", "lint", "test", "test:e2e", "format", "db:push", "db:studio", "storybook")
            },
        }

    def path(self, relative: str) -> Path:
        return self.project_root / relative

    # -- Contributions -----------------------------------------------------

    def dlx(self, *args: str) -> CommandSpec:
        """Execute-without-install invocation for *args*."""
        prefix = get_dlx_command(self.package_manager)
        return CommandSpec(prefix.command, [*prefix.args, *args])

    def add_post_install(self, description: str, *args: str) -> None:
        self.post_install.append(PostInstallStep(description, self.dlx(*args)))

    def record(self, result: MutationResult) -> MutationResult:
        self.mutations.append(result)
        return result

    async def add_scripts(self, scripts: Mapping[str, str]) -> MutationResult:
        result = await asyncio.to_thread(ensure_scripts, self.project_root, scripts)
        return self.record(result)

    async def add_env(self, values: Mapping[str, str], comment: str | None = None) -> MutationResult:
        result = await asyncio.to_thread(ensure_env_vars, self.project_root, values, ".env", comment)
        return self.record(result)


class FeatureGenerator:
    """Base class for feature modules.

    Subclasses set ``name``, decide in :meth:`enabled` whether the feature
    selection asks for them, and implement :meth:`generate`.
    """

    name = "feature"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def enabled(self, config: ProjectConfig) -> bool:
        return True

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        raise NotImplementedError

    async def _render(self, ctx: FeatureContext, template: str, relative: str, **extra: Any) -> Path:
        context = {**ctx.template_context, **extra}
        return await self.renderer.render_to_file(template, ctx.path(relative), context)

    async def _render_if_absent(
        self, ctx: FeatureContext, template: str, relative: str, **extra: Any
    ) -> Path | None:
        """Render unless *relative* already exists; record a warning when skipped."""
        if ctx.path(relative).exists():
            ctx.warnings.append(
                f"{relative} already exists; {self.name} did not overwrite it. Merge its setup manually."
            )
            return None
        return await self._render(ctx, template, relative, **extra)
