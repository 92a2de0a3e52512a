"""Data layer: Prisma, Drizzle, or a JSON-file store for the CRUD example."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator

DATABASE_URL = "file:./dev.db"


class DataGenerator(FeatureGenerator):
    name = "data"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.orm != "none" or config.wants_crud_example

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        orm = ctx.config.orm
        if orm == "prisma":
            return await self._prisma(ctx)
        if orm == "drizzle":
            return await self._drizzle(ctx)
        return [await self._render(ctx, "data/local-db.ts.j2", "src/lib/db.ts")]

    async def _prisma(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_dep("@prisma/client")
        ctx.deps.add_dev_dep("prisma")
        written = [
            await self._render(ctx, "data/prisma/schema.prisma.j2", "prisma/schema.prisma"),
            await self._render(ctx, "data/prisma/prisma.ts.j2", "src/lib/prisma.ts"),
        ]
        await ctx.add_env({"DATABASE_URL": DATABASE_URL}, comment="Database")
        await ctx.add_scripts({"db:push": "prisma db push", "db:studio": "prisma studio"})
        ctx.add_post_install("Push Prisma schema", "prisma", "db", "push")
        return written

    async def _drizzle(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_deps(["drizzle-orm", "@libsql/client"])
        ctx.deps.add_dev_dep("drizzle-kit")
        written = [
            await self._render(ctx, "data/drizzle/drizzle.config.ts.j2", "drizzle.config.ts"),
            await self._render(ctx, "data/drizzle/index.ts.j2", "src/db/index.ts"),
            await self._render(ctx, "data/drizzle/schema.ts.j2", "src/db/schema.ts"),
        ]
        await ctx.add_env({"DATABASE_URL": DATABASE_URL}, comment="Database")
        await ctx.add_scripts({"db:push": "drizzle-kit push", "db:studio": "drizzle-kit studio"})
        ctx.add_post_install("Push Drizzle schema", "drizzle-kit", "push")
        return written
