"""Replacement text generation and splicing.

The generated code replaces the module's final ``export default X;``
statement. Everything it adds sits on the line of the replaced statement,
so all original characters before it keep their position and no source map
is needed.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from svelte_hmr.codegen.templates import APPLY_HMR_TEMPLATE
from svelte_hmr.config import GLOBAL_NAME
from svelte_hmr.types import js_literal

if TYPE_CHECKING:
    from collections.abc import Callable

    from svelte_hmr.codegen.context import HmrContext
    from svelte_hmr.codegen.templates import TemplateEngine

__all__ = ["flatten_lines", "render_apply_hmr", "splice"]

logger = logging.getLogger(__name__)

_EXPORT_DEFAULT_RE = re.compile(r"(\n?export default ([^;]*);)")

# Rendered in place of the component identifier, which is substituted after
# flattening so an identifier spanning several lines keeps its newlines.
_COMPONENT_SLOT = "\x00component\x00"


def flatten_lines(text: str) -> str:
    """Join non-blank lines, stripped, with single spaces."""
    return " ".join(line.strip() for line in text.split("\n") if line.strip())


def render_apply_hmr(context: HmrContext, component: str, engine: TemplateEngine) -> str:
    """Render the text that replaces ``export default <component>;``.

    Args:
        context: Per-component render data.
        component: Identifier of the default-exported component.
        engine: Template engine providing ``apply_hmr.js.j2``.

    Raises:
        TemplateError: If the template cannot be rendered.
    """
    imports = [
        f"import * as {GLOBAL_NAME} from {js_literal(context.hot_api_import)}",
        f"import {context.adapter_name} from {js_literal(context.adapter_import)}",
    ]
    block = engine.render(
        APPLY_HMR_TEMPLATE,
        context,
        component=_COMPONENT_SLOT,
        global_name=GLOBAL_NAME,
    )
    flat = flatten_lines(block).replace(_COMPONENT_SLOT, component)

    parts = [";".join(imports), ";", flat, f"\nexport default {component};\n"]

    # Components already mounted when the module is reloaded never run
    # add_css again, so the stylesheet is injected at load time.
    if context.inject_css and context.css_id:
        parts.append(
            "\nif (typeof add_css !== 'undefined' && "
            f"!document.getElementById({js_literal(context.css_id)})) add_css();"
        )
    parts.append("\n")

    return "".join(parts)


def splice(code: str, render: Callable[[str], str]) -> str:
    """Replace the last ``export default X;`` statement with ``render(X)``.

    The statement's leading newline, if any, is part of the replaced span.
    Code without such a statement is returned unchanged.
    """
    match = None
    for match in _EXPORT_DEFAULT_RE.finditer(code):
        pass

    if match is None:
        logger.debug("No default export statement found, leaving code unchanged")
        return code

    return code[: match.start(1)] + render(match.group(2)) + code[match.end(1) :]
