"""UI kit setup: shadcn/ui, HeroUI, Framer Motion and Lucide icons.

HeroUI needs its Tailwind plugin registered.  Tailwind v3 projects carry a
``tailwind.config.*`` that is mutated in place; a fresh config is written
when none exists.  Tailwind v4 projects register the plugin from
``globals.css`` and a ``hero.ts`` module instead.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from nxt_gen.config import ProjectConfig
from nxt_gen.mutator import (
    configure_global_css,
    configure_style_plugin,
    find_style_config,
    uses_css_first_tailwind,
)

from .context import FeatureContext, FeatureGenerator


class UiGenerator(FeatureGenerator):
    name = "ui"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.ui != "none" or config.framer_motion or config.lucide

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        written: list[Path] = []
        if ctx.config.uses_shadcn:
            written.extend(await self._shadcn(ctx))
        if ctx.config.uses_heroui:
            written.extend(await self._heroui(ctx))
        if ctx.config.framer_motion:
            ctx.deps.add_dep("framer-motion")
        if ctx.config.lucide:
            ctx.deps.add_dep("lucide-react")
        return written

    async def _shadcn(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_deps(["class-variance-authority", "clsx", "tailwind-merge", "lucide-react"])
        return [
            await self._render(ctx, "ui/utils.ts.j2", "src/lib/utils.ts"),
            await self._render(
                ctx,
                "ui/components.json.j2",
                "components.json",
                tailwind_config="" if uses_css_first_tailwind(ctx.project_root) else "tailwind.config.ts",
            ),
        ]

    async def _heroui(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_deps(["@heroui/react", "framer-motion"])
        written: list[Path] = []

        if uses_css_first_tailwind(ctx.project_root):
            written.append(await self._render(ctx, "ui/hero.ts.j2", "src/app/hero.ts"))
            ctx.record(await asyncio.to_thread(configure_global_css, ctx.project_root))
            return written

        if find_style_config(ctx.project_root) is None:
            written.append(await self._render(ctx, "ui/tailwind.config.ts.j2", "tailwind.config.ts"))
        else:
            ctx.record(await asyncio.to_thread(configure_style_plugin, ctx.project_root))
        return written
