"""React Hook Form + Zod contact form."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator


class FormsGenerator(FeatureGenerator):
    name = "forms"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.forms

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_deps(["react-hook-form", "zod", "@hookform/resolvers"])
        return [
            await self._render(ctx, "forms/schemas.ts.j2", "src/lib/schemas.ts"),
            await self._render(ctx, "forms/contact-form.tsx.j2", "src/components/contact-form.tsx"),
        ]
