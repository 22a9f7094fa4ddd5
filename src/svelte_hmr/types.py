"""Data contracts for the transform stages.

Frozen dataclasses that flow from the extractors into the code generator:
  compiled code → CssMetadata
  compile result → CompileMetadata
  HotOptions → ImportSpecifiers
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "CompileMetadata",
    "CssMetadata",
    "ImportSpecifiers",
    "js_literal",
    "json_literal",
]

# Stands for a value JSON cannot express (functions and other objects).
_OMIT = object()


def _jsonable(value: Any) -> Any:
    """Reduce ``value`` to what ``JSON.stringify`` would keep.

    Mapping entries that cannot be expressed are dropped, list items become
    ``null`` and a top-level value becomes ``_OMIT``.
    """
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Mapping):
        items = ((str(key), _jsonable(item)) for key, item in value.items())
        return {key: item for key, item in items if item is not _OMIT}
    if isinstance(value, (list, tuple)):
        return [None if item is _OMIT else item for item in map(_jsonable, value)]
    return _OMIT


def json_literal(value: Any) -> str:
    """Serialize a value as a compact JSON literal; ``None`` renders as ``null``."""
    data = _jsonable(value)
    if data is _OMIT:
        return "undefined"
    return json.dumps(data, separators=(",", ":"))


def js_literal(value: Any, null: bool = False) -> str:
    """Serialize a value as a compact JSON literal for embedding in JS code.

    ``None`` renders as ``undefined``, matching what the runtime receives
    for values that were never computed, or as ``null`` when ``null`` is set.
    Functions are left out the way ``JSON.stringify`` leaves them out.
    """
    if value is None:
        return "null" if null else "undefined"
    return json_literal(value)


@dataclass(frozen=True)
class CssMetadata:
    """Stylesheet id and non-CSS hash extracted from compiled code."""

    css_id: str | None = None
    non_css_hash: str | None = None
    # an add_css function was found, even if it sets no style id
    has_add_css: bool = False


@dataclass(frozen=True)
class CompileMetadata:
    """Subset of the compile result forwarded to the HMR runtime."""

    vars: Any = None
    accessors: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict, omitting unknown (``None``) values."""
        data: dict[str, Any] = {}
        if self.vars is not None:
            data["vars"] = self.vars
        if self.accessors is not None:
            data["accessors"] = self.accessors
        return data


@dataclass(frozen=True)
class ImportSpecifiers:
    """Module specifiers imported by the generated code."""

    hot_api_import: str
    adapter_import: str
