"""svelte_hmr: hot module reload code injection for compiled Svelte components."""

from svelte_hmr.config import HotOptions, resolve_hot_options
from svelte_hmr.css import parse_css_id, string_hashcode
from svelte_hmr.make_hot import MakeHot, create_make_hot, transform

__version__ = "0.1.0"

__all__ = [
    "HotOptions",
    "MakeHot",
    "__version__",
    "create_make_hot",
    "parse_css_id",
    "resolve_hot_options",
    "string_hashcode",
    "transform",
]
