"""Root-layout mutator.

Wraps the ``{children}`` slot of the root layout's returned markup in a
provider component and imports that component::

    <body>{children}</body>
        ->
    <body><Providers>{children}</Providers></body>

Re-running is a no-op: a slot whose parent element is already the wrapper
is left alone and the import is only added when missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from nxt_gen.mutator.results import MutationResult, MutationStatus
from nxt_gen.mutator.source import JsxExpression, SourceFile

LAYOUT_CANDIDATES = (
    "src/app/layout.tsx",
    "src/app/layout.jsx",
    "app/layout.tsx",
    "app/layout.jsx",
)


@dataclass(frozen=True)
class WrapperSpec:
    """The component wrapped around the children slot and where it is imported from."""

    name: str = "Providers"
    module: str = "@/components/providers"
    slot: str = "children"

    @property
    def placeholder(self) -> str:
        return "{" + self.slot + "}"

    def wrap(self, placeholder: str) -> str:
        return f"<{self.name}>{placeholder}</{self.name}>"


PROVIDERS_WRAPPER = WrapperSpec()


def find_layout(project_root: str | Path) -> Path | None:
    """Return the first existing root layout file, or ``None``."""
    root = Path(project_root)
    for candidate in LAYOUT_CANDIDATES:
        path = root / candidate
        if path.is_file():
            return path
    return None


def wrap_layout_children(
    project_root: str | Path,
    wrapper: WrapperSpec = PROVIDERS_WRAPPER,
) -> MutationResult:
    """Wrap the root layout's children slot in *wrapper*.

    Returns a ``SKIPPED`` result without touching the filesystem when no
    layout file exists, or when the file has no default-exported function
    or no bare children slot.

    Raises:
        SourceParseError: If the layout file cannot be scanned.  The file is
            left untouched.
    """
    path = find_layout(project_root)
    if path is None:
        return MutationResult.skipped("layout")

    original = SourceFile.read(path)
    updated, result = apply_wrapper(original, wrapper)
    if updated.text != original.text:
        updated.save(path)
    return result


def apply_wrapper(
    source: SourceFile, wrapper: WrapperSpec = PROVIDERS_WRAPPER
) -> tuple[SourceFile, MutationResult]:
    """Pure form of :func:`wrap_layout_children` working on an in-memory file."""
    result = MutationResult(name="layout", path=source.path, status=MutationStatus.UNCHANGED)

    fn = source.default_export_function()
    if fn is None:
        result.status = MutationStatus.SKIPPED
        result.warnings.append(
            f"{_label(source)}: no default-exported function found; "
            f"wrap {wrapper.placeholder} in <{wrapper.name}> manually"
        )
        return source, result

    bare: list[JsxExpression] = []
    wrapped = 0
    for statement in source.return_statements(fn):
        for expression in source.jsx_expressions_in(statement):
            if source.slice(expression.span) != wrapper.placeholder:
                continue
            if expression.parent_tag == wrapper.name:
                wrapped += 1
            else:
                bare.append(expression)

    if not bare and not wrapped:
        result.status = MutationStatus.SKIPPED
        result.warnings.append(
            f"{_label(source)}: no {wrapper.placeholder} slot in the returned markup; "
            f"wrap it in <{wrapper.name}> manually"
        )
        return source, result

    updated = source
    # Later slots first so earlier offsets stay valid.
    for expression in sorted(bare, key=lambda e: e.span.start, reverse=True):
        updated = updated.replace(
            expression.span.start,
            expression.span.end,
            wrapper.wrap(wrapper.placeholder),
        )
    if bare:
        result.changes.append(f"wrapped {wrapper.placeholder} in <{wrapper.name}>")

    if not updated.binds_name(wrapper.name, wrapper.module):
        updated = updated.add_named_import(wrapper.name, wrapper.module)
        result.changes.append(f"imported {wrapper.name} from {wrapper.module}")

    if result.changes:
        result.status = MutationStatus.APPLIED
    return updated, result


def _label(source: SourceFile) -> str:
    return source.path.name if source.path else "layout"
