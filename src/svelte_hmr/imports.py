"""Import specifier resolution for the generated HMR code.

The generated code imports the hot API and a proxy adapter. By default they
are imported by absolute file path from this package's ``runtime``
directory, because some bundlers cannot resolve relative package imports
from generated code that lives outside the project root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from svelte_hmr.types import ImportSpecifiers

if TYPE_CHECKING:
    from svelte_hmr.config import HotOptions

__all__ = [
    "DEFAULT_HOT_API",
    "RUNTIME_DIR",
    "posixify",
    "resolve_adapter_import",
    "resolve_hot_api_import",
    "resolve_imports",
]

logger = logging.getLogger(__name__)

DEFAULT_HOT_API = "hot-api-esm.js"
DOM_ADAPTER = "proxy-adapter-dom.js"
# Only ever imported from generated code: it requires NativeScript modules
# that are not resolvable for web users.
NATIVE_ADAPTER = "svelte-native/proxy-adapter-native.js"

RUNTIME_DIR = Path(__file__).resolve().parent / "runtime"
PACKAGE_RUNTIME = "svelte-hmr/runtime/"


def posixify(file: str) -> str:
    """Normalize path separators to forward slashes."""
    return file.replace("\\", "/")


def _apply_absolute_imports(absolute_imports: bool, target: str) -> str:
    base = os.fspath(RUNTIME_DIR) + "/" if absolute_imports else PACKAGE_RUNTIME
    return base + target


def resolve_adapter_import(options: HotOptions) -> str:
    """Return the proxy adapter module for the configured platform."""
    file = NATIVE_ADAPTER if options.native else DOM_ADAPTER
    return posixify(_apply_absolute_imports(options.absolute_imports, file))


def resolve_hot_api_import(options: HotOptions, hot_api: str | None = None) -> str:
    """Return the hot API module, ``hot_api`` taking precedence when given."""
    return posixify(hot_api or _apply_absolute_imports(options.absolute_imports, DEFAULT_HOT_API))


def resolve_imports(
    options: HotOptions,
    hot_api: str | None = None,
    adapter: str | None = None,
) -> ImportSpecifiers:
    """Resolve both import specifiers for one transform call.

    Args:
        options: Resolved hot options (``native``, ``absolute_imports``).
        hot_api: Explicit hot API module path.
        adapter: Explicit adapter module path, wins over the platform choice.
    """
    specifiers = ImportSpecifiers(
        hot_api_import=resolve_hot_api_import(options, hot_api),
        adapter_import=posixify(adapter) if adapter else resolve_adapter_import(options),
    )
    logger.debug(
        "Resolved imports: hot api %s, adapter %s",
        specifiers.hot_api_import,
        specifiers.adapter_import,
    )
    return specifiers
