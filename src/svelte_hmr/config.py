"""Configuration system for svelte_hmr.

Hot options are a frozen dataclass with defaults for every field. Caller
overrides are shallow-merged on top (camelCase or snake_case keys) and the
state preservation escape hatch is resolved before the options are embedded
into generated code. Project-level settings can also be kept in a
``svelte-hmr.toml`` file with ``[hot]`` and ``[transformer]`` sections.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from svelte_hmr.exceptions import ConfigError
from svelte_hmr.types import json_literal

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "GLOBAL_ADAPTER_NAME",
    "GLOBAL_NAME",
    "HotOptions",
    "SvelteHmrConfig",
    "TransformerConfig",
    "default_config",
    "load_config",
    "merge_hot_options",
    "resolve_hot_options",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "svelte-hmr.toml"

# Bindings injected into user modules, must never collide with identifiers
# emitted by the compiler.
GLOBAL_NAME = "___SVELTE_HMR_HOT_API"
GLOBAL_ADAPTER_NAME = "___SVELTE_HMR_HOT_API_PROXY_ADAPTER"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class HotOptions:
    """[hot] section: options forwarded to the HMR runtime.

    Serialized with the runtime's camelCase key names. Keys the runtime
    knows about but this class does not are kept in ``extra`` and passed
    through untouched.
    """

    # don't preserve local state
    no_preserve_state: bool = False
    # if this string appears anywhere in the component's source, state is
    # not preserved for this update
    no_preserve_state_key: str = "@!hmr"
    # don't reload on fatal error
    no_reload: bool = False
    # try to recover after runtime errors during component init
    optimistic: bool = False
    # auto accept modules of components that have named exports
    accept_named_exports: bool = True
    # auto accept modules of components that have accessors
    accept_accessors: bool = True
    # only inject CSS instead of recreating components when only CSS changes
    inject_css: bool = True
    # ms between stylesheet removal and accept, mitigates FOUC
    css_eject_delay: int = 100
    # Svelte Native mode
    native: bool = False
    # Vite mode
    compat_vite: bool = False
    # name of the adapter import binding
    import_adapter_name: str = GLOBAL_ADAPTER_NAME
    # import runtime deps by absolute file path
    absolute_imports: bool = True

    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the runtime's camelCase mapping."""
        data = {
            _camel(f.name): getattr(self, f.name) for f in fields(self) if f.name != "extra"
        }
        data.update(self.extra)
        return data

    def to_json(self) -> str:
        """Render as a compact JSON literal for embedding in generated code."""
        return json_literal(self.to_dict())


_FIELD_BY_KEY: dict[str, str] = {
    key: f.name
    for f in fields(HotOptions)
    if f.name != "extra"
    for key in (f.name, _camel(f.name))
}


def merge_hot_options(defaults: HotOptions, overrides: Mapping[str, Any] | None) -> HotOptions:
    """Shallow-merge ``overrides`` on top of ``defaults``.

    Override wins per key. Unknown keys are collected into ``extra``.
    """
    if not overrides:
        return replace(defaults, extra=dict(defaults.extra))

    changes: dict[str, Any] = {}
    extra = dict(defaults.extra)
    for key, value in overrides.items():
        name = _FIELD_BY_KEY.get(key)
        if name is None:
            extra[key] = value
        else:
            changes[name] = value

    return replace(defaults, extra=extra, **changes)


def resolve_hot_options(
    overrides: Mapping[str, Any] | None = None,
    original_code: str | None = None,
    defaults: HotOptions | None = None,
) -> HotOptions:
    """Merge overrides and resolve the effective ``no_preserve_state`` flag.

    The flag is set when requested directly, or when the escape hatch marker
    is non-empty and found in ``original_code``. Without ``original_code``
    only the direct flag applies.
    """
    options = merge_hot_options(defaults if defaults is not None else HotOptions(), overrides)

    key = options.no_preserve_state_key
    escaped = bool(key and original_code and key in original_code)
    no_preserve_state = bool(options.no_preserve_state) or escaped
    if escaped and not options.no_preserve_state:
        logger.debug("Found %r in source, state will not be preserved", key)

    return replace(options, no_preserve_state=no_preserve_state)


@dataclass
class TransformerConfig:
    """[transformer] section: settings owned by the bundler plugin."""

    # expression for the module metadata handle ('import.meta' or 'module')
    meta: str = "import.meta"
    # explicit hot API import path, empty for the bundled runtime
    hot_api: str = ""
    # explicit adapter import path, empty to pick by platform
    adapter: str = ""
    # directory holding an apply_hmr.js.j2 override
    template_dir: str = ""


@dataclass
class SvelteHmrConfig:
    """Root configuration combining all sections."""

    hot: HotOptions = field(default_factory=HotOptions)
    transformer: TransformerConfig = field(default_factory=TransformerConfig)


def default_config() -> SvelteHmrConfig:
    """Return a config with all default values."""
    return SvelteHmrConfig()


def _config_to_dict(config: SvelteHmrConfig) -> dict[str, object]:
    """Convert SvelteHmrConfig to a nested dict suitable for TOML serialization."""
    hot: dict[str, object] = {
        f.name: getattr(config.hot, f.name) for f in fields(config.hot) if f.name != "extra"
    }
    hot.update(config.hot.extra)
    return {"hot": hot, "transformer": dict(vars(config.transformer))}


def save_config(config: SvelteHmrConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except (OSError, TypeError) as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def load_config(path: Path) -> SvelteHmrConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values. Unknown ``[hot]`` keys are
    kept as pass-through options; unknown ``[transformer]`` keys are ignored.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = SvelteHmrConfig()

    hot = data.get("hot", {})
    if not isinstance(hot, dict):
        raise ConfigError(f"[hot] must be a table in {path}")
    config.hot = merge_hot_options(config.hot, hot)

    transformer = data.get("transformer", {})
    if not isinstance(transformer, dict):
        raise ConfigError(f"[transformer] must be a table in {path}")
    known_fields = {f.name for f in fields(TransformerConfig)}
    config.transformer = TransformerConfig(
        **{k: v for k, v in transformer.items() if k in known_fields}
    )

    logger.info("Loaded config from %s", path)
    return config
