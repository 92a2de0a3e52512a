"""Internationalisation with next-intl."""

from __future__ import annotations

from pathlib import Path

from nxt_gen.config import ProjectConfig

from .context import FeatureContext, FeatureGenerator

LOCALES = ("en", "de")


class I18nGenerator(FeatureGenerator):
    name = "i18n"

    def enabled(self, config: ProjectConfig) -> bool:
        return config.intl

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        ctx.deps.add_dep("next-intl")
        written = [
            await self._render(ctx, "i18n/request.ts.j2", "src/i18n/request.ts", locales=LOCALES),
        ]
        for locale in LOCALES:
            written.append(
                await self._render(ctx, "i18n/messages.json.j2", f"messages/{locale}.json", locale=locale)
            )
        # Auth middleware takes precedence; the two cannot both own the file.
        middleware = await self._render_if_absent(
            ctx, "i18n/middleware.ts.j2", "src/middleware.ts", locales=LOCALES
        )
        if middleware is not None:
            written.append(middleware)
        return written
