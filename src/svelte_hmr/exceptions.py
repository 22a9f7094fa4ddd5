"""Custom exception hierarchy for svelte_hmr."""

__all__ = [
    "ConfigError",
    "SvelteHmrError",
    "TemplateError",
    "TransformError",
]


class SvelteHmrError(Exception):
    """Base exception for all svelte_hmr errors."""


class ConfigError(SvelteHmrError):
    """Raised when configuration loading or saving fails."""


class TemplateError(SvelteHmrError):
    """Raised when a code generation template is missing or fails to render."""


class TransformError(SvelteHmrError):
    """Raised when transform inputs cannot be read or decoded."""
