"""Test tooling: Vitest, Playwright and Storybook."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator

VITEST_DEV_DEPS = (
    "vitest",
    "@vitejs/plugin-react",
    "jsdom",
    "@testing-library/react",
    "@testing-library/dom",
    "@testing-library/jest-dom",
    "vite-tsconfig-paths",
)


class TestingGenerator(FeatureGenerator):
    __test__ = False  # not a pytest class
    name = "testing"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.vitest or config.playwright or config.storybook

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        written: list[Path] = []
        if ctx.config.vitest:
            ctx.deps.add_dev_deps(VITEST_DEV_DEPS)
            written += [
                await self._render(ctx, "testing/vitest.config.mts.j2", "vitest.config.mts"),
                await self._render(ctx, "testing/vitest.setup.ts.j2", "vitest.setup.ts"),
                await self._render(ctx, "testing/page.test.tsx.j2", "__tests__/page.test.tsx"),
            ]
            await ctx.add_scripts({"test": "vitest"})

        if ctx.config.playwright:
            ctx.deps.add_dev_dep("@playwright/test")
            written += [
                await self._render(ctx, "testing/playwright.config.ts.j2", "playwright.config.ts"),
                await self._render(ctx, "testing/example.spec.ts.j2", "e2e/example.spec.ts"),
            ]
            await ctx.add_scripts({"test:e2e": "playwright test"})
            ctx.add_post_install("Install Playwright browsers", "playwright", "install")

        if ctx.config.storybook:
            ctx.add_post_install("Initialise Storybook", "storybook@latest", "init", "--yes")
        return written
