"""Package-manager command shapes.

Pure functions mapping a package-manager identifier to the concrete command
line for installing packages, running a published binary without installing
it, and running a ``package.json`` script.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from typing import Literal, NamedTuple

PackageManager = Literal["npm", "pnpm", "yarn", "bun"]

PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "pnpm", "yarn", "bun")


class CommandSpec(NamedTuple):
    """An executable plus its argument vector."""

    command: str
    args: list[str]

    def argv(self, *extra: str) -> list[str]:
        """Full argument vector, optionally extended with *extra*."""
        return [self.command, *self.args, *extra]

    def __str__(self) -> str:
        return " ".join(self.argv())


def detect_package_manager(env: Mapping[str, str] | None = None) -> PackageManager:
    """Infer the package manager that launched us from ``npm_config_user_agent``.

    Falls back to ``npm`` when the variable is absent or unrecognised.
    """
    environ = os.environ if env is None else env
    user_agent = environ.get("npm_config_user_agent", "")
    if user_agent.startswith("pnpm"):
        return "pnpm"
    if user_agent.startswith("yarn"):
        return "yarn"
    if user_agent.startswith("bun"):
        return "bun"
    return "npm"


def get_install_command(
    pm: PackageManager,
    packages: Sequence[str],
    is_dev: bool = False,
) -> CommandSpec:
    """Return the install invocation for *packages*.

    An empty *packages* list yields a bare ``<pm> install`` (lockfile-only
    install).  Otherwise npm uses ``install`` and the others use ``add``;
    ``-D`` is inserted before the package names for dev dependencies.
    """
    if not packages:
        return CommandSpec(pm, ["install"])

    args = ["install" if pm == "npm" else "add"]
    if is_dev:
        args.append("-D")
    args.extend(packages)
    return CommandSpec(pm, args)


def get_dlx_command(pm: PackageManager) -> CommandSpec:
    """Return the "run a published binary without installing it" prefix."""
    if pm == "pnpm":
        return CommandSpec("pnpm", ["dlx"])
    if pm == "bun":
        return CommandSpec("bun", ["x"])
    # Yarn classic has no dlx; npx works for both npm and yarn projects.
    return CommandSpec("npx", [])


def format_run_script(pm: PackageManager, script: str) -> str:
    """Human-readable command for running a ``package.json`` script.

    Bun needs ``run`` too: ``bun test`` and ``bun build`` are built-ins.
    """
    if pm in ("npm", "bun"):
        return f"{pm} run {script}"
    return f"{pm} {script}"
