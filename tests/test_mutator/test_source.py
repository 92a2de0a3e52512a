"""Tests for the structure-aware source scanner.

Covers:
- JSX element and expression discovery
- String, comment and template-literal handling
- Parse errors with line numbers
- Import discovery and insertion
- Default-exported function lookup
- Array/object entries and appending
"""

from __future__ import annotations

import pytest

from nxt_gen.mutator.source import SourceFile, SourceParseError


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


class TestScanning:
    """Tests for the structural index built on construction."""

    def test_jsx_inferred_from_suffix(self):
        assert SourceFile("", "layout.tsx").jsx is True
        assert SourceFile("", "tailwind.config.ts").jsx is False

    def test_children_slot_is_a_jsx_expression(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        slots = [e for e in source.jsx_expressions if source.slice(e.span) == "{children}"]
        assert len(slots) == 1
        assert slots[0].parent_tag == "body"

    def test_type_annotation_braces_are_not_jsx(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        parents = {e.parent_tag for e in source.jsx_expressions}
        assert parents == {"body"}

    def test_elements_are_recorded(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        tags = {element.tag for element in source.jsx_elements}
        assert tags == {"html", "body"}

    def test_fragment(self):
        source = SourceFile("const x = <>{a}</>;\n", jsx=True)
        assert source.jsx_expressions[0].parent_tag == ""

    def test_self_closing_element(self):
        source = SourceFile("const x = <Spinner size={2} />;\n", jsx=True)
        assert [e.tag for e in source.jsx_elements] == ["Spinner"]
        assert source.jsx_expressions == []

    def test_comparison_is_not_jsx(self):
        source = SourceFile("const ok = a <b;\nconst c = d > e;\n", jsx=True)
        assert source.jsx_elements == []

    def test_strings_are_opaque(self):
        text = 'const s = "{ not code }";\n'
        source = SourceFile(text)
        assert source.is_code(text.index("const"))
        assert not source.is_code(text.index("not"))
        assert source.pairs == {}

    def test_comments_are_opaque(self):
        text = "// a ( comment\n/* and { another */\nconst x = 1;\n"
        source = SourceFile(text)
        assert source.pairs == {}
        assert not source.is_code(text.index("comment"))
        assert source.is_code(text.index("const"))

    def test_template_literal_expressions_are_code(self):
        text = 'const s = `${a ? "}" : "{"} done`;\n'
        source = SourceFile(text)
        assert source.is_code(text.index("a ?"))
        assert not source.is_code(text.index("done"))

    def test_crlf_newlines_detected(self):
        assert SourceFile("const a = 1;\r\nconst b = 2;\r\n").newline == "\r\n"
        assert SourceFile("const a = 1;\n").newline == "\n"


class TestParseErrors:
    """Tests for SourceParseError reporting."""

    def test_unexpected_closer(self):
        with pytest.raises(SourceParseError) as exc_info:
            SourceFile("const a = 1;\n}\n")
        assert exc_info.value.line == 2
        assert "unexpected '}'" in exc_info.value.reason

    def test_missing_closer(self):
        with pytest.raises(SourceParseError, match="missing"):
            SourceFile("function f() {\n  return 1;\n")

    def test_unterminated_string(self):
        with pytest.raises(SourceParseError, match="unterminated string"):
            SourceFile('const a = "oops;\n')

    def test_unterminated_template(self):
        with pytest.raises(SourceParseError, match="unterminated template"):
            SourceFile("const a = `oops;\n")

    def test_unterminated_block_comment(self):
        with pytest.raises(SourceParseError, match="unterminated block comment"):
            SourceFile("/* never closed\nconst a = 1;\n")

    def test_mismatched_jsx_closing_tag(self):
        text = "export default function A() {\n  return <body>{children}</div>;\n}\n"
        with pytest.raises(SourceParseError) as exc_info:
            SourceFile(text, "layout.tsx")
        assert exc_info.value.line == 2
        assert "expected </body>" in str(exc_info.value)

    def test_error_message_includes_path(self):
        with pytest.raises(SourceParseError) as exc_info:
            SourceFile("(\n", "src/app/layout.tsx")
        assert str(exc_info.value).startswith("src/app/layout.tsx:")
        assert exc_info.value.path is not None


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


class TestImports:
    """Tests for import discovery and insertion."""

    def test_imports_in_order(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        modules = [decl.module for decl in source.imports()]
        assert modules == ["next", "next/font/google", "./globals.css"]

    def test_named_imports(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        (fonts,) = source.find_imports("next/font/google")
        assert fonts.names == ("Geist", "Geist_Mono")
        assert source.has_named_import("Metadata", "next")
        assert not source.has_named_import("Metadata", "next/font/google")

    @pytest.mark.parametrize(
        "line",
        [
            'import Providers from "@/components/providers";',
            'import * as Providers from "@/components/providers";',
            'import { Wrapper as Providers } from "@/components/providers";',
            'import Other, { Providers } from "@/components/providers";',
        ],
    )
    def test_binds_name(self, line):
        source = SourceFile(line + "\n")
        assert source.binds_name("Providers", "@/components/providers")
        assert not source.binds_name("Providers", "@/components/other")

    def test_default_import_is_not_named(self):
        source = SourceFile('import Providers from "@/components/providers";\n')
        assert not source.has_named_import("Providers", "@/components/providers")

    def test_import_inside_string_ignored(self):
        source = SourceFile("const s = 'import { a } from \"b\";';\n")
        assert source.imports() == []

    def test_add_after_last_import(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        updated = source.add_named_import("Providers", "@/components/providers")
        assert (
            'import "./globals.css";\nimport { Providers } from "@/components/providers";\n'
            in updated.text
        )

    def test_add_extends_existing_clause(self):
        source = SourceFile('import { A } from "m";\n')
        assert source.add_named_import("B", "m").text == 'import { A, B } from "m";\n'

    def test_add_extends_clause_with_trailing_comma(self):
        source = SourceFile('import {\n  A,\n} from "m";\n')
        assert source.add_named_import("B", "m").text == 'import {\n  A, B,\n} from "m";\n'

    def test_add_is_noop_when_present(self):
        source = SourceFile('import { A } from "m";\n')
        assert source.add_named_import("A", "m") is source

    def test_add_after_use_client_directive(self):
        source = SourceFile('"use client";\n\nexport default function X() {}\n')
        updated = source.add_named_import("P", "m")
        assert updated.text == '"use client";\nimport { P } from "m";\n\nexport default function X() {}\n'

    def test_add_to_file_without_imports(self):
        source = SourceFile("export const a = 1;\n")
        updated = source.add_named_import("P", "m")
        assert updated.text == 'import { P } from "m";\nexport const a = 1;\n'

    def test_add_keeps_crlf(self):
        source = SourceFile('import { A } from "a";\r\nconst x = 1;\r\n')
        updated = source.add_named_import("B", "b")
        assert 'import { A } from "a";\r\nimport { B } from "b";\r\n' in updated.text


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


class TestDefaultExport:
    """Tests for default-export lookup."""

    def test_export_default_function(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        fn = source.default_export_function()
        assert fn is not None
        assert fn.name == "RootLayout"
        assert source.text[fn.body_open] == "{"
        assert source.text[fn.body_close] == "}"

    def test_separate_export_statement(self):
        text = "function Layout({ children }) {\n  return <main>{children}</main>;\n}\n\nexport default Layout;\n"
        source = SourceFile(text, "layout.jsx")
        fn = source.default_export_function()
        assert fn is not None
        assert fn.name == "Layout"
        assert source.default_export_name() == "Layout"

    def test_arrow_function_not_recognised(self):
        text = "const Layout = ({ children }) => <main>{children}</main>;\nexport default Layout;\n"
        source = SourceFile(text, "layout.tsx")
        assert source.default_export_function() is None

    def test_export_default_function_keyword_is_not_a_name(self):
        source = SourceFile("export default function () {}\n")
        assert source.default_export_name() is None

    def test_return_statements(self, layout_text):
        source = SourceFile(layout_text, "layout.tsx")
        fn = source.default_export_function()
        (statement,) = source.return_statements(fn)
        body = source.slice(statement)
        assert body.startswith("return (")
        assert body.endswith(");")
        assert "{children}" in body


# ---------------------------------------------------------------------------
# Objects and arrays
# ---------------------------------------------------------------------------


class TestEntries:
    """Tests for literal entry listing and appending."""

    def test_variable_initializer(self, tailwind_config_text):
        source = SourceFile(tailwind_config_text, "tailwind.config.ts")
        obj = source.variable_initializer("config")
        assert obj is not None
        names = [prop.name for prop in source.properties(obj)]
        assert names == ["content", "theme", "plugins"]

    def test_entries_skip_comments(self):
        text = 'const a = [\n  // first\n  "x", // trailing\n  /* gap */\n];\n'
        source = SourceFile(text)
        (entry,) = source.entries(text.index("["))
        assert source.slice(entry.span) == '"x"'
        assert entry.comma is not None

    def test_entries_ignore_nested_commas(self):
        text = "const a = [f(1, 2), { b: 1, c: 2 }, `x${[1, 2]}`];\n"
        source = SourceFile(text)
        assert len(source.entries(text.index("["))) == 3

    def test_array_literal(self, tailwind_config_text):
        source = SourceFile(tailwind_config_text, "tailwind.config.ts")
        obj = source.variable_initializer("config")
        plugins = source.get_property(obj, "plugins")
        assert source.array_literal(plugins.value) is not None
        theme = source.get_property(obj, "theme")
        assert source.array_literal(theme.value) is None

    def test_append_to_empty(self):
        source = SourceFile("const a = [];\n")
        assert source.append_entry(10, "x").text == "const a = [x];\n"

    def test_append_to_empty_padded(self):
        source = SourceFile("const a = {};\n")
        assert source.append_entry(10, "k: 1", pad=True).text == "const a = { k: 1 };\n"

    def test_append_single_line(self):
        source = SourceFile('const a = ["x"];\n')
        assert source.append_entry(10, '"y"').text == 'const a = ["x", "y"];\n'

    def test_append_multi_line_with_trailing_comma(self):
        source = SourceFile('const a = [\n  "x",\n];\n')
        assert source.append_entry(10, '"y"').text == 'const a = [\n  "x",\n  "y",\n];\n'

    def test_append_multi_line_without_trailing_comma(self):
        source = SourceFile('const a = [\n  "x"\n];\n')
        assert source.append_entry(10, '"y"').text == 'const a = [\n  "x",\n  "y"\n];\n'

    def test_edit_returns_new_file(self):
        source = SourceFile("const a = [];\n")
        updated = source.append_entry(10, "x")
        assert source.text == "const a = [];\n"
        assert updated is not source
