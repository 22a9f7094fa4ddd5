"""Shared fixtures for svelte_hmr tests."""

from __future__ import annotations

from typing import Any

import pytest

from svelte_hmr.make_hot import MakeHot

COMPILED_CODE = (
    'import { SvelteComponent, append, element, init } from "svelte/internal";\n'
    "\n"
    "function add_css() {\n"
    '\tvar style = element("style");\n'
    '\tstyle.id = "svelte-1x2y3z";\n'
    '\tstyle.textContent = "h1.svelte-1x2y3z{color:red}";\n'
    "\tappend(document.head, style);\n"
    "}\n"
    "\n"
    "function create_fragment(ctx) {\n"
    '\tconst h1 = element("h1");\n'
    '\th1.className = "svelte-1x2y3z";\n'
    "\treturn { c() {}, m() {}, d() {} };\n"
    "}\n"
    "\n"
    "class App extends SvelteComponent {\n"
    "\tconstructor(options) {\n"
    "\t\tsuper();\n"
    '\t\tif (!document.getElementById("svelte-1x2y3z")) add_css();\n'
    "\t\tinit(this, options, null, create_fragment, safe_not_equal, {});\n"
    "\t}\n"
    "}\n"
    "\n"
    "export default App;\n"
)


def make_compiled(accessors: Any = None) -> dict[str, Any]:
    """A compile result with an optional ``<svelte:options accessors>`` node."""
    children: list[dict[str, Any]] = [
        {"type": "Element", "name": "h1", "attributes": [], "children": []},
    ]
    if accessors is not None:
        children.insert(
            0,
            {
                "type": "Options",
                "name": "svelte:options",
                "attributes": [{"type": "Attribute", "name": "accessors", "value": accessors}],
                "children": [],
            },
        )
    return {
        "vars": [{"name": "name", "export_name": "name", "writable": True}],
        "ast": {"html": {"type": "Fragment", "children": children}},
    }


@pytest.fixture
def compiled_code() -> str:
    """Compiled component code with an add_css function."""
    return COMPILED_CODE


@pytest.fixture
def make_hot() -> MakeHot:
    """A transformer with default settings."""
    return MakeHot()


@pytest.fixture
def compiled_factory():
    """Factory for compile results, see ``make_compiled``."""
    return make_compiled
