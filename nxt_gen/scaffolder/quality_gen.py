"""Husky pre-commit hook running lint-staged and Prettier."""

from __future__ import annotations

import asyncio
from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator


class QualityGenerator(FeatureGenerator):
    name = "quality"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.husky

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_dev_deps(["husky", "lint-staged", "prettier"])
        hook = await self._render(ctx, "quality/pre-commit.j2", ".husky/pre-commit")
        await asyncio.to_thread(hook.chmod, 0o755)
        written = [
            hook,
            await self._render(ctx, "quality/lintstagedrc.json.j2", ".lintstagedrc.json"),
            await self._render(ctx, "quality/prettierrc.j2", ".prettierrc"),
        ]
        await ctx.add_scripts({"prepare": "husky", "format": "prettier --write ."})
        return written
