"""Dependency batching and package installation."""

from nxt_gen.installer.deps import DependencyCollector
from nxt_gen.installer.installer import (
    InstallError,
    Installer,
    InstallResult,
    PostInstallStep,
)
from nxt_gen.installer.pm import (
    PACKAGE_MANAGERS,
    CommandSpec,
    PackageManager,
    detect_package_manager,
    format_run_script,
    get_dlx_command,
    get_install_command,
)

__all__ = [
    "PACKAGE_MANAGERS",
    "CommandSpec",
    "DependencyCollector",
    "InstallError",
    "InstallResult",
    "Installer",
    "PackageManager",
    "PostInstallStep",
    "detect_package_manager",
    "format_run_script",
    "get_dlx_command",
    "get_install_command",
]
