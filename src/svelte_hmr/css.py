"""Stylesheet metadata extraction from compiled component code.

Finds the ``add_css`` function the Svelte compiler emits for components
with styles, reads the stylesheet id it assigns, and hashes the rest of the
module with the CSS-specific hash removed. Two compilations with the same
non-CSS hash differ only in their styles.
"""

from __future__ import annotations

import logging
import re
import struct

from svelte_hmr.types import CssMetadata

__all__ = ["parse_css_id", "string_hashcode"]

logger = logging.getLogger(__name__)

# The function must start a line and end at a closing brace alone on its line.
_ADD_CSS_RE = re.compile(r"^function add_css\(\) \{.*?^\}", re.MULTILINE | re.DOTALL)
_STYLE_ID_RE = re.compile(r"\bstyle\.id\s*=\s*(['\"])([^'\"]*)\1", re.ASCII)

_HASH_SEED = 5381
_UINT32_MASK = 0xFFFFFFFF
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def string_hashcode(text: str) -> str:
    """Hash a string the way the Svelte compiler hashes component styles.

    djb2 variant over UTF-16 code units, iterated from the end, with 32-bit
    wraparound. The unsigned result is rendered in base 36.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    units = struct.unpack(f"<{len(data) // 2}H", data)

    value = _HASH_SEED
    for unit in reversed(units):
        value = (((value << 5) - value) & _UINT32_MASK) ^ unit
    return _to_base36(value)


def parse_css_id(code: str, parse_hash: bool) -> CssMetadata:
    """Extract the stylesheet id and, optionally, the non-CSS hash.

    Args:
        code: Compiled component code.
        parse_hash: Also compute ``non_css_hash`` when a stylesheet id is found.

    Returns:
        Empty metadata when no ``add_css`` function is present.
    """
    match = _ADD_CSS_RE.search(code)
    if not match:
        return CssMetadata()

    code_except_css = code[: match.start()] + code[match.end() :]

    id_match = _STYLE_ID_RE.search(match.group(0))
    css_id = id_match.group(2) if id_match else None
    if css_id is None:
        logger.debug("add_css found without a style id")

    if not parse_hash or not css_id:
        return CssMetadata(css_id=css_id, has_add_css=True)

    parts = css_id.split("-")
    css_hash = parts[1] if len(parts) > 1 else ""
    if css_hash:
        code_except_css = re.sub(
            rf"\b{re.escape(css_hash)}\b", "", code_except_css, flags=re.ASCII
        )

    return CssMetadata(
        css_id=css_id, non_css_hash=string_hashcode(code_except_css), has_add_css=True
    )
