"""README and LICENSE."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from .context import FeatureContext, FeatureGenerator

_LICENSE_TEMPLATES = {
    "MIT": "docs/LICENSE-MIT.j2",
    "Apache": "docs/LICENSE-Apache.j2",
}


class DocsGenerator(FeatureGenerator):
    name = "docs"

    async def generate(self, ctx: FeatureContext) -> list[Path]:
        written = [await self._render(ctx, "docs/README.md.j2", "README.md")]
        template = _LICENSE_TEMPLATES.get(ctx.config.license)
        if template:
            written.append(await self._render(ctx, template, "LICENSE", year=date.today().year))
        return written
