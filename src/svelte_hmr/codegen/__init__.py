"""Code generation: renders and splices the HMR activation code."""

from svelte_hmr.codegen.context import HmrContext
from svelte_hmr.codegen.render import flatten_lines, render_apply_hmr, splice
from svelte_hmr.codegen.templates import APPLY_HMR_TEMPLATE, TemplateEngine

__all__ = [
    "APPLY_HMR_TEMPLATE",
    "HmrContext",
    "TemplateEngine",
    "flatten_lines",
    "render_apply_hmr",
    "splice",
]
