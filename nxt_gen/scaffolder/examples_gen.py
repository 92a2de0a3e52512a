"""Example pages: a posts CRUD app and an auth page."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator


class ExamplesGenerator(FeatureGenerator):
    name = "examples"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.examples != "none"

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        written: list[Path] = []
        if ctx.config.wants_crud_example:
            written += [
                await self._render(ctx, "examples/posts-route.ts.j2", "src/app/api/posts/route.ts"),
                await self._render(
                    ctx, "examples/post-id-route.ts.j2", "src/app/api/posts/[id]/route.ts"
                ),
                await self._render(ctx, "examples/posts-page.tsx.j2", "src/app/posts/page.tsx"),
            ]
        if ctx.config.wants_auth_example:
            written.append(
                await self._render(ctx, "examples/auth-page.tsx.j2", "src/app/auth/page.tsx")
            )
        return written
