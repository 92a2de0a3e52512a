"""Dockerfile, GitHub Actions workflow and ``.env.example``."""

from __future__ import annotations

from pathlib import Path

from .context import FeatureContext, FeatureGenerator


class DevOpsGenerator(FeatureGenerator):
    name = "devops"

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        written: list[Path] = []
        if ctx.config.docker:
            written += [
                await self._render(ctx, "devops/Dockerfile.j2", "Dockerfile"),
                await self._render(ctx, "devops/dockerignore.j2", ".dockerignore"),
            ]
        if ctx.config.ci:
            written.append(await self._render(ctx, "devops/ci.yml.j2", ".github/workflows/ci.yml"))
        written.append(await self._render(ctx, "devops/env.example.j2", ".env.example"))
        return written
