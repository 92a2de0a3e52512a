"""Replaces create-next-app's demo content with a minimal starting point."""

from __future__ import annotations

import asyncio
from pathlib import Path

from .context import FeatureContext, FeatureGenerator

_DEMO_ASSETS = ("public/next.svg", "public/vercel.svg")


class CleanupGenerator(FeatureGenerator):
    name = "cleanup"

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        page = await self._render(ctx, "base/page.tsx.j2", "src/app/page.tsx")
        for asset in _DEMO_ASSETS:
            await asyncio.to_thread(ctx.path(asset).unlink, missing_ok=True)
        return [page]
