"""Composes the client providers and mounts them in the root layout."""

from __future__ import annotations

import asyncio
from pathlib import Path

from nxt_gen.mutator import PROVIDERS_WRAPPER, wrap_layout_children

from .context import FeatureContext, FeatureGenerator


class ProvidersGenerator(FeatureGenerator):
    name = "providers"

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        providers = await self._render(ctx, "providers/providers.tsx.j2", "src/components/providers.tsx")
        # SourceParseError propagates: a layout we cannot read aborts the run.
        ctx.record(await asyncio.to_thread(wrap_layout_children, ctx.project_root, PROVIDERS_WRAPPER))
        return [providers]
