"""Render context for the code generation stage.

This frozen dataclass defines the contract between the transformer (which
populates it) and the ``apply_hmr.js.j2`` template (which consumes it).
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["HmrContext"]


@dataclass(frozen=True)
class HmrContext:
    """All data available to the generator for one component.

    ``hot_options``, ``compile_data`` and ``compile_options`` are already
    serialized JS literals; the remaining strings are raw values.
    """

    id: str
    hot_api_import: str
    adapter_import: str
    adapter_name: str

    # Serialized literals
    hot_options: str = "{}"
    compile_data: str = "null"
    compile_options: str = "undefined"

    # From the stylesheet extractor
    css_id: str | None = None
    non_css_hash: str | None = None
    has_add_css: bool = False

    # Flags
    inject_css: bool = True
    compat_vite: bool = False

    # Module metadata handle expression
    meta: str = "import.meta"
