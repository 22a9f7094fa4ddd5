"""Accessor detection on the compiled component AST.

A component declaring ``<svelte:options accessors />`` shows up in the
template AST as an ``Options`` node with an ``accessors`` attribute. The
walker is injectable: any callable yielding nodes depth-first will do.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from svelte_hmr.types import CompileMetadata

__all__ = ["Walker", "compile_metadata", "has_accessors", "iter_nodes"]

logger = logging.getLogger(__name__)

Walker = Callable[[Any], Iterable[Mapping[str, Any]]]


def iter_nodes(root: Any) -> Iterator[Mapping[str, Any]]:
    """Yield every AST node (mapping with a ``type`` key) depth-first, pre-order."""
    stack: list[Any] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Mapping):
            if "type" in node:
                yield node
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, (list, tuple)):
            stack.extend(reversed(node))


def _truthy(value: Any) -> bool:
    """JS truthiness: empty lists and objects are true."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)):
        return value == value and value != 0
    return True


def _is_accessors_option(node: Mapping[str, Any]) -> bool:
    if node.get("type") != "Options":
        return False
    attributes = node.get("attributes") or ()
    return any(
        attr.get("name") == "accessors" and _truthy(attr.get("value")) for attr in attributes
    )


def has_accessors(compiled: Mapping[str, Any], walk: Walker = iter_nodes) -> bool | None:
    """Check whether the component declares the ``accessors`` option inline.

    Returns ``None`` when the compile result carries no template AST.
    """
    ast = compiled.get("ast")
    if not ast or not ast.get("html"):
        return None
    return any(_is_accessors_option(node) for node in walk(ast["html"]))


def compile_metadata(
    compiled: Mapping[str, Any] | None, walk: Walker = iter_nodes
) -> CompileMetadata | None:
    """Summarize the compile result for the HMR runtime, ``None`` without one."""
    if compiled is None:
        return None
    accessors = has_accessors(compiled, walk)
    logger.debug("Compile result accessors: %s", accessors)
    return CompileMetadata(vars=compiled.get("vars"), accessors=accessors)
