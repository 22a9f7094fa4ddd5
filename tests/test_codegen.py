"""Tests for replacement text rendering and splicing."""

from __future__ import annotations

from dataclasses import replace

import pytest

from svelte_hmr.codegen import HmrContext, TemplateEngine, flatten_lines, render_apply_hmr, splice


@pytest.fixture
def engine() -> TemplateEngine:
    return TemplateEngine()


@pytest.fixture
def context() -> HmrContext:
    return HmrContext(
        id="App.svelte",
        hot_api_import="/rt/hot-api-esm.js",
        adapter_import="/rt/proxy-adapter-dom.js",
        adapter_name="ADAPTER",
        hot_options='{"a":1}',
        compile_data="null",
        compile_options="undefined",
        css_id="svelte-xyz",
        non_css_hash="abc",
    )


class TestFlattenLines:
    def test_strips_and_joins(self):
        assert flatten_lines("  if (x) {\n\n    y();\n  }\n") == "if (x) { y(); }"

    def test_empty(self):
        assert flatten_lines("\n \n") == ""


class TestRenderApplyHmr:
    def test_full_output(self, context, engine):
        expected = (
            'import * as ___SVELTE_HMR_HOT_API from "/rt/hot-api-esm.js";'
            'import ADAPTER from "/rt/proxy-adapter-dom.js";'
            "if (import.meta && import.meta.hot) {"
            " App = ___SVELTE_HMR_HOT_API.applyHmr({"
            " m: import.meta,"
            ' id: "App.svelte",'
            ' hotOptions: {"a":1},'
            " Component: App,"
            " ProxyAdapter: ADAPTER,"
            " compileData: null,"
            " compileOptions: undefined,"
            ' cssId: "svelte-xyz",'
            ' nonCssHash: "abc",'
            " }); }"
            "\nexport default App;\n"
            "\nif (typeof add_css !== 'undefined' && "
            '!document.getElementById("svelte-xyz")) add_css();'
            "\n"
        )
        assert render_apply_hmr(context, "App", engine) == expected

    def test_activation_is_single_line(self, context, engine):
        text = render_apply_hmr(context, "App", engine)
        first_line = text.split("\n")[0]
        assert first_line.startswith("import * as ___SVELTE_HMR_HOT_API")
        assert first_line.endswith("}); }")
        assert text.count("\n") == 4

    def test_compat_vite(self, context, engine):
        text = render_apply_hmr(replace(context, compat_vite=True), "App", engine)
        assert "if (import.meta.hot) {" in text
        assert "import.meta && " not in text
        assert "}); import.meta.hot.accept(); }" in text

    def test_no_accept_without_compat_vite(self, context, engine):
        assert "accept()" not in render_apply_hmr(context, "App", engine)

    def test_no_css_injection_when_disabled(self, context, engine):
        text = render_apply_hmr(replace(context, inject_css=False), "App", engine)
        assert "add_css()" not in text
        assert text.endswith("\nexport default App;\n\n")

    def test_no_css_injection_without_css_id(self, context, engine):
        text = render_apply_hmr(replace(context, css_id=None, non_css_hash=None), "App", engine)
        assert "add_css()" not in text
        assert "cssId: undefined," in text
        assert "nonCssHash: undefined," in text

    def test_add_css_without_id_renders_null(self, context, engine):
        bare = replace(context, css_id=None, non_css_hash=None, has_add_css=True)
        text = render_apply_hmr(bare, "App", engine)
        assert "cssId: null," in text
        assert "nonCssHash: undefined," in text
        assert "add_css()" not in text

    def test_multiline_component_keeps_newlines(self, context, engine):
        code = "class App {}\nexport default (\n  App\n);"
        result = splice(code, lambda c: render_apply_hmr(context, c, engine))
        assert "if (import.meta && import.meta.hot) { (\n  App\n) = " in result
        assert " Component: (\n  App\n)," in result
        assert "\nexport default (\n  App\n);\n" in result

    def test_meta_expression(self, context, engine):
        text = render_apply_hmr(replace(context, meta="module"), "App", engine)
        assert "m: module," in text

    def test_id_is_escaped(self, context, engine):
        text = render_apply_hmr(replace(context, id='src/"quoted"\n.svelte'), "App", engine)
        assert 'id: "src/\\"quoted\\"\\n.svelte",' in text

    def test_import_paths_are_quoted(self, context, engine):
        text = render_apply_hmr(replace(context, hot_api_import="/it's/api.js"), "App", engine)
        assert "from \"/it's/api.js\";" in text


class TestSplice:
    def test_no_export_returns_unchanged(self):
        code = "const App = 1;\nexport { App };\n"
        assert splice(code, lambda c: "REPLACED") == code

    def test_replaces_statement_and_leading_newline(self):
        code = "class Foo {}\n\nexport default Foo;\n"
        assert splice(code, lambda c: f"<{c}>") == "class Foo {}\n<Foo>\n"

    def test_prefix_bytes_preserved(self):
        code = "const a = 1;\r\n\t  \texport default Foo;// tail"
        result = splice(code, lambda c: f"<{c}>")
        assert result == "const a = 1;\r\n\t  \t<Foo>// tail"

    def test_last_export_replaced(self):
        code = "export default A;\nfoo();\nexport default B;\nbar();"
        assert splice(code, lambda c: f"<{c}>") == "export default A;\nfoo();<B>\nbar();"

    def test_only_one_replacement(self):
        calls: list[str] = []

        def render(component: str) -> str:
            calls.append(component)
            return ""

        splice("export default A;\nexport default B;", render)
        assert calls == ["B"]

    def test_replacement_text_taken_literally(self):
        code = "export default App;"
        assert splice(code, lambda c: "$2 \\1 $&") == "$2 \\1 $&"
