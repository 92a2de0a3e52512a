"""Authentication: Auth.js (next-auth v5) or Clerk."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator


class AuthGenerator(FeatureGenerator):
    name = "auth"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.auth != "none"

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        if ctx.config.auth == "next-auth":
            return await self._next_auth(ctx)
        return await self._clerk(ctx)

    async def _next_auth(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_dep("next-auth@beta")
        written = [
            await self._render(ctx, "auth/next-auth/auth.ts.j2", "src/auth.ts"),
            await self._render(
                ctx, "auth/next-auth/route.ts.j2", "src/app/api/auth/[...nextauth]/route.ts"
            ),
            await self._render(ctx, "auth/next-auth/middleware.ts.j2", "src/middleware.ts"),
        ]
        await ctx.add_env({"AUTH_SECRET": "change-me"}, comment="Auth.js")
        return written

    async def _clerk(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_dep("@clerk/nextjs")
        written = [await self._render(ctx, "auth/clerk/middleware.ts.j2", "src/middleware.ts")]
        await ctx.add_env(
            {"NEXT_PUBLIC_CLERK_PUBLISHABLE_KEY": "", "CLERK_SECRET_KEY": ""},
            comment="Clerk",
        )
        return written
