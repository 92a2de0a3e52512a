"""Data-fetching client: TanStack Query provider and an Axios instance."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator


class ClientGenerator(FeatureGenerator):
    name = "client"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.react_query or config.axios

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        written: list[Path] = []
        if ctx.config.react_query:
            ctx.deps.add_dep("@tanstack/react-query")
            written.append(
                await self._render(
                    ctx,
                    "client/query-provider.tsx.j2",
                    "src/components/providers/query-provider.tsx",
                )
            )
        if ctx.config.axios:
            ctx.deps.add_dep("axios")
            written.append(await self._render(ctx, "client/axios.ts.j2", "src/lib/axios.ts"))
        return written
