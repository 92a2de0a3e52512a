"""Idempotent edits to files produced by create-next-app."""

from nxt_gen.mutator.env_file import ensure_env_vars
from nxt_gen.mutator.global_css import configure_global_css, uses_css_first_tailwind
from nxt_gen.mutator.layout import PROVIDERS_WRAPPER, WrapperSpec, find_layout, wrap_layout_children
from nxt_gen.mutator.package_json import ensure_scripts, read_package_json
from nxt_gen.mutator.results import MutationResult, MutationStatus
from nxt_gen.mutator.source import SourceFile, SourceParseError
from nxt_gen.mutator.style_config import (
    HEROUI_PLUGIN,
    PluginSpec,
    configure_style_plugin,
    find_style_config,
)

__all__ = [
    "HEROUI_PLUGIN",
    "PROVIDERS_WRAPPER",
    "MutationResult",
    "MutationStatus",
    "PluginSpec",
    "SourceFile",
    "SourceParseError",
    "WrapperSpec",
    "configure_global_css",
    "configure_style_plugin",
    "ensure_env_vars",
    "ensure_scripts",
    "find_layout",
    "find_style_config",
    "read_package_json",
    "uses_css_first_tailwind",
]
