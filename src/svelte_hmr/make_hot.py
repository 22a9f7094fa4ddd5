"""HMR transformer for compiled Svelte components.

Orchestrates the transform stages:
  hot options → resolved options
  compiled code → CssMetadata
  compile result → CompileMetadata
  resolved options → ImportSpecifiers
  all of the above → spliced code

Hot options can be customized by end users through bundler plugin options,
while the ``MakeHot`` constructor arguments belong to the plugin implementer.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from svelte_hmr.accessors import Walker, compile_metadata, iter_nodes
from svelte_hmr.codegen import HmrContext, TemplateEngine, render_apply_hmr, splice
from svelte_hmr.config import resolve_hot_options
from svelte_hmr.css import parse_css_id
from svelte_hmr.imports import resolve_imports
from svelte_hmr.types import js_literal, json_literal

if TYPE_CHECKING:
    from collections.abc import Mapping

    from svelte_hmr.config import HotOptions, TransformerConfig

__all__ = ["MakeHot", "create_make_hot", "transform"]

logger = logging.getLogger(__name__)


class MakeHot:
    """Callable that rewrites compiled component code to enable HMR.

    Args:
        walk: AST walker yielding nodes depth-first.
        meta: Expression for the module metadata handle, ``import.meta`` or
            ``module``.
        hot_api: Explicit hot API import path. Exposed as ``self.hot_api``.
        adapter: Explicit proxy adapter import path.
        defaults: Base hot options that call-site overrides merge onto.
        template_dir: Directory with an ``apply_hmr.js.j2`` override.

    Usage::

        make_hot = MakeHot(meta="import.meta")
        code = make_hot("App.svelte", compiled_js, {"compatVite": True}, compiled)
    """

    def __init__(
        self,
        walk: Walker = iter_nodes,
        meta: str = "import.meta",
        hot_api: str | None = None,
        adapter: str | None = None,
        defaults: HotOptions | None = None,
        template_dir: Path | None = None,
    ) -> None:
        self.walk = walk
        self.meta = meta
        self.hot_api = hot_api
        self.adapter = adapter
        self.defaults = defaults
        self._engine = TemplateEngine(template_dir)

    @classmethod
    def from_config(cls, config: TransformerConfig, defaults: HotOptions | None = None) -> MakeHot:
        """Create a transformer from the ``[transformer]`` config section."""
        return cls(
            meta=config.meta or "import.meta",
            hot_api=config.hot_api or None,
            adapter=config.adapter or None,
            defaults=defaults,
            template_dir=Path(config.template_dir) if config.template_dir else None,
        )

    def __call__(
        self,
        id: str,  # noqa: A002
        compiled_code: str,
        hot_options: Mapping[str, Any] | None = None,
        compiled: Mapping[str, Any] | None = None,
        original_code: str | None = None,
        compile_options: Any = None,
    ) -> str:
        """Rewrite ``compiled_code`` with the HMR activation code.

        Args:
            id: Component identifier, usually its file path.
            compiled_code: JS output of the Svelte compiler.
            hot_options: Hot option overrides (camelCase or snake_case keys).
            compiled: Compile result with ``vars`` and ``ast``, if available.
            original_code: Component source, checked for the escape hatch marker.
            compile_options: Compiler options, forwarded as a literal.

        Returns:
            The rewritten code, or ``compiled_code`` unchanged when it has no
            default export statement.
        """
        if not isinstance(compiled_code, str):
            raise TypeError(f"compiled_code must be str, not {type(compiled_code).__name__}")

        options = resolve_hot_options(hot_options, original_code, self.defaults)
        metadata = compile_metadata(compiled, self.walk)
        imports = resolve_imports(options, self.hot_api, self.adapter)
        css = parse_css_id(compiled_code, options.inject_css)

        context = HmrContext(
            id=id,
            hot_api_import=imports.hot_api_import,
            adapter_import=imports.adapter_import,
            adapter_name=options.import_adapter_name,
            hot_options=options.to_json(),
            compile_data=json_literal(metadata.to_dict() if metadata is not None else None),
            compile_options=js_literal(compile_options),
            css_id=css.css_id,
            non_css_hash=css.non_css_hash,
            has_add_css=css.has_add_css,
            inject_css=options.inject_css,
            compat_vite=options.compat_vite,
            meta=self.meta,
        )

        logger.debug("Making %s hot (css id: %s)", id, css.css_id)
        return splice(
            compiled_code,
            lambda component: render_apply_hmr(context, component, self._engine),
        )


def create_make_hot(
    walk: Walker = iter_nodes,
    meta: str = "import.meta",
    hot_api: str | None = None,
    adapter: str | None = None,
) -> MakeHot:
    """Create a ``MakeHot`` transformer."""
    return MakeHot(walk=walk, meta=meta, hot_api=hot_api, adapter=adapter)


@functools.cache
def _default_make_hot() -> MakeHot:
    return MakeHot()


def transform(
    id: str,  # noqa: A002
    compiled_code: str,
    hot_options: Mapping[str, Any] | None = None,
    compiled: Mapping[str, Any] | None = None,
    original_code: str | None = None,
    compile_options: Any = None,
) -> str:
    """Rewrite compiled code with a default ``MakeHot`` transformer."""
    return _default_make_hot()(
        id, compiled_code, hot_options, compiled, original_code, compile_options
    )
