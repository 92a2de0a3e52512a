"""Tailwind config mutator.

Registers a Tailwind plugin in a conventional ``tailwind.config.*`` file::

    import type { Config } from "tailwindcss";
    import { heroui } from "@heroui/react";

    const config: Config = {
      content: ["./src/**/*.{ts,tsx}", "./node_modules/@heroui/theme/dist/**/*.{js,ts,jsx,tsx}"],
      plugins: [heroui()],
    };
    export default config;

Every insertion is preceded by a presence check, so re-running the
mutator changes nothing.  Shapes other than the one above (CommonJS,
``export default { ... }``, a non-array ``plugins``) are reported as
warnings and left as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from nxt_gen.mutator.results import MutationResult, MutationStatus
from nxt_gen.mutator.source import SourceFile

STYLE_CONFIG_CANDIDATES = (
    "tailwind.config.ts",
    "tailwind.config.mts",
    "tailwind.config.js",
    "tailwind.config.mjs",
)

_COMMONJS_EXPORT_RE = r"\b(?:module\.exports|exports\.[A-Za-z_$][\w$]*)\s*="
_EXPORT_DEFAULT_RE = r"\bexport\s+default\b"


@dataclass(frozen=True)
class PluginSpec:
    """A Tailwind plugin factory and the theme assets it needs scanned."""

    factory: str = "heroui"
    module: str = "@heroui/react"
    asset_marker: str = "@heroui/theme"
    content_glob: str = "./node_modules/@heroui/theme/dist/**/*.{js,ts,jsx,tsx}"
    variable: str = "config"

    @property
    def call(self) -> str:
        return f"{self.factory}()"


HEROUI_PLUGIN = PluginSpec()


def find_style_config(project_root: str | Path) -> Path | None:
    root = Path(project_root)
    for candidate in STYLE_CONFIG_CANDIDATES:
        path = root / candidate
        if path.is_file():
            return path
    return None


def configure_style_plugin(
    project_root: str | Path,
    plugin: PluginSpec = HEROUI_PLUGIN,
) -> MutationResult:
    """Import *plugin*, add it to ``plugins`` and its theme glob to ``content``.

    A missing config file is a ``SKIPPED`` no-op with no writes.

    Raises:
        SourceParseError: If the config file cannot be scanned.  The file is
            left untouched.
    """
    path = find_style_config(project_root)
    if path is None:
        return MutationResult.skipped("style-config")

    original = SourceFile.read(path)
    updated, result = apply_plugin(original, plugin)
    if updated.text != original.text:
        updated.save(path)
    return result


def apply_plugin(
    source: SourceFile, plugin: PluginSpec = HEROUI_PLUGIN
) -> tuple[SourceFile, MutationResult]:
    """Pure form of :func:`configure_style_plugin` working on an in-memory file."""
    label = source.path.name if source.path else "style config"
    result = MutationResult(name="style-config", path=source.path, status=MutationStatus.UNCHANGED)

    if _is_commonjs(source):
        result.status = MutationStatus.SKIPPED
        result.warnings.append(
            f"{label}: CommonJS config is not supported; "
            f"add {plugin.call} to plugins and {plugin.content_glob!r} to content manually"
        )
        return source, result

    updated = source
    if _config_object(updated, plugin) is None:
        result.warnings.append(
            f"{label}: expected `const {plugin.variable} = {{...}}; export default {plugin.variable};`; "
            f"add {plugin.call} to plugins and {plugin.content_glob!r} to content manually"
        )
    else:
        updated = _ensure_plugin(updated, plugin, label, result)
        updated = _ensure_content(updated, plugin, label, result)

    # Imports go last: they shift every offset below them.
    if not updated.binds_name(plugin.factory, plugin.module):
        updated = updated.add_named_import(plugin.factory, plugin.module)
        result.changes.append(f"imported {plugin.factory} from {plugin.module}")

    if result.changes:
        result.status = MutationStatus.APPLIED
    return updated, result


def _is_commonjs(source: SourceFile) -> bool:
    """``module.exports``/``exports.x`` assignments and no ES default export.

    ``require(...)`` alone does not count: ESM configs commonly load plugins
    with it.
    """
    if any(source.finditer(_EXPORT_DEFAULT_RE)):
        return False
    return any(source.finditer(_COMMONJS_EXPORT_RE))


def _config_object(source: SourceFile, plugin: PluginSpec) -> int | None:
    if source.default_export_name() != plugin.variable:
        return None
    return source.variable_initializer(plugin.variable)


def _ensure_plugin(
    source: SourceFile, plugin: PluginSpec, label: str, result: MutationResult
) -> SourceFile:
    obj = _config_object(source, plugin)
    prop = source.get_property(obj, "plugins")
    if prop is None:
        result.changes.append("added plugins")
        return source.append_entry(obj, f"plugins: [{plugin.call}]", pad=True)

    array = source.array_literal(prop.value)
    if array is None:
        result.warnings.append(f"{label}: plugins is not an array literal; add {plugin.call} manually")
        return source

    if any(f"{plugin.factory}(" in source.slice(item.span) for item in source.entries(array)):
        return source
    result.changes.append(f"added {plugin.call} to plugins")
    return source.append_entry(array, plugin.call)


def _ensure_content(
    source: SourceFile, plugin: PluginSpec, label: str, result: MutationResult
) -> SourceFile:
    obj = _config_object(source, plugin)
    prop = source.get_property(obj, "content")
    if prop is None:
        result.warnings.append(
            f"{label}: no content array; add {plugin.content_glob!r} manually"
        )
        return source

    array = source.array_literal(prop.value)
    if array is None:
        result.warnings.append(
            f"{label}: content is not an array literal; add {plugin.content_glob!r} manually"
        )
        return source

    if any(plugin.asset_marker in source.slice(item.span) for item in source.entries(array)):
        return source
    result.changes.append("added theme glob to content")
    return source.append_entry(array, f'"{plugin.content_glob}"')
