"""Shared pytest fixtures for the nxt-gen test suite.

Provides reusable fixtures for:
- The files ``create-next-app`` generates (layout, Tailwind config, ...)
- A fake on-disk Next.js project
- A fake process runner standing in for ``run_command``
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from unittest.mock import AsyncMock

import pytest


# ---------------------------------------------------------------------------
# create-next-app output
# ---------------------------------------------------------------------------

LAYOUT_TSX = textwrap.dedent(
    """\
    import type { Metadata } from "next";
    import { Geist, Geist_Mono } from "next/font/google";
    import "./globals.css";

    const geistSans = Geist({
      variable: "--font-geist-sans",
      subsets: ["latin"],
    });

    const geistMono = Geist_Mono({
      variable: "--font-geist-mono",
      subsets: ["latin"],
    });

    export const metadata: Metadata = {
      title: "Create Next App",
      description: "Generated by create next app",
    };

    export default function RootLayout({
      children,
    }: Readonly<{
      children: React.ReactNode;
    }>) {
      return (
        <html lang="en">
          <body
            className={`${geistSans.variable} ${geistMono.variable} antialiased`}
          >
            {children}
          </body>
        </html>
      );
    }
    """
)

TAILWIND_CONFIG_TS = textwrap.dedent(
    """\
    import type { Config } from "tailwindcss";

    const config: Config = {
      content: [
        "./src/pages/**/*.{js,ts,jsx,tsx,mdx}",
        "./src/components/**/*.{js,ts,jsx,tsx,mdx}",
        "./src/app/**/*.{js,ts,jsx,tsx,mdx}",
      ],
      theme: {
        extend: {
          colors: {
            background: "var(--background)",
            foreground: "var(--foreground)",
          },
        },
      },
      plugins: [],
    };
    export default config;
    """
)

GLOBALS_CSS_V3 = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n"

GLOBALS_CSS_V4 = textwrap.dedent(
    """\
    @import "tailwindcss";

    :root {
      --background: #ffffff;
      --foreground: #171717;
    }
    """
)

PACKAGE_JSON = {
    "name": "my-app",
    "version": "0.1.0",
    "private": True,
    "scripts": {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
        "lint": "next lint",
    },
    "dependencies": {"next": "15.0.0", "react": "19.0.0", "react-dom": "19.0.0"},
}


def make_next_project(root: Path, tailwind_v4: bool = False) -> Path:
    """Write a minimal create-next-app tree under *root* and return it."""
    (root / "src" / "app").mkdir(parents=True, exist_ok=True)
    (root / "public").mkdir(exist_ok=True)
    (root / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2) + "\n", encoding="utf-8")
    (root / "src" / "app" / "layout.tsx").write_text(LAYOUT_TSX, encoding="utf-8")
    (root / "src" / "app" / "page.tsx").write_text(
        "export default function Home() {\n  return <main>Get started</main>;\n}\n",
        encoding="utf-8",
    )
    (root / "public" / "next.svg").write_text("<svg/>", encoding="utf-8")
    (root / "public" / "vercel.svg").write_text("<svg/>", encoding="utf-8")
    if tailwind_v4:
        (root / "src" / "app" / "globals.css").write_text(GLOBALS_CSS_V4, encoding="utf-8")
    else:
        (root / "src" / "app" / "globals.css").write_text(GLOBALS_CSS_V3, encoding="utf-8")
        (root / "tailwind.config.ts").write_text(TAILWIND_CONFIG_TS, encoding="utf-8")
    return root


def make_runner(fail_matching: str | None = None, tailwind_v4: bool = False) -> AsyncMock:
    """An ``AsyncMock`` with the ``run_command`` signature.

    ``create-next-app`` invocations write a fake project into ``cwd``.  Any
    invocation whose argv contains *fail_matching* exits with code 1.
    """

    async def _run(argv, cwd=None, timeout=None, capture=True, env=None):
        if fail_matching is not None and fail_matching in argv:
            return (1, "", f"{fail_matching} failed")
        for index, arg in enumerate(argv):
            if arg.startswith("create-next-app@"):
                make_next_project(Path(cwd) / argv[index + 1], tailwind_v4=tailwind_v4)
                break
        return (0, "", "")

    return AsyncMock(side_effect=_run)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def layout_text() -> str:
    return LAYOUT_TSX


@pytest.fixture
def tailwind_config_text() -> str:
    return TAILWIND_CONFIG_TS


@pytest.fixture
def next_project(tmp_path: Path) -> Path:
    """A create-next-app tree using a Tailwind v3 config file."""
    return make_next_project(tmp_path / "my-app")


@pytest.fixture
def next_project_v4(tmp_path: Path) -> Path:
    """A create-next-app tree using CSS-first Tailwind v4."""
    return make_next_project(tmp_path / "v4-app", tailwind_v4=True)


@pytest.fixture
def runner() -> AsyncMock:
    return make_runner()


@pytest.fixture
def runner_factory():
    """Build a fake runner that fails on a given argv element."""
    return make_runner
