"""Jinja2 template engine for HMR code generation.

Loads templates from an optional user-override directory and the built-in
templates in src/svelte_hmr/templates/. Overrides take precedence.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jinja2

from svelte_hmr.exceptions import TemplateError
from svelte_hmr.types import js_literal

if TYPE_CHECKING:
    from svelte_hmr.codegen.context import HmrContext

__all__ = ["APPLY_HMR_TEMPLATE", "TemplateEngine"]

logger = logging.getLogger(__name__)

APPLY_HMR_TEMPLATE = "apply_hmr.js.j2"


class TemplateEngine:
    """Jinja2 template engine with built-in and user-override support.

    Template search order:
      1. ``template_dir`` (user overrides, optional)
      2. src/svelte_hmr/templates/ (built-in, always present)

    Templates get a ``js`` filter that renders a value as a JS literal.

    Args:
        template_dir: Directory with override templates, if any.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        from importlib.resources import files

        search_paths: list[str] = []
        self._user_template_dir: Path | None = None

        if template_dir is not None:
            self._user_template_dir = template_dir
            if template_dir.is_dir():
                search_paths.append(str(template_dir))
                logger.info("User template overrides enabled: %s", template_dir)
            else:
                logger.warning("Template override directory not found: %s", template_dir)

        builtin_dir = Path(str(files("svelte_hmr") / "templates"))
        if not builtin_dir.is_dir():
            logger.debug("Expected template dir at: %s", builtin_dir)
            raise TemplateError(
                "Built-in template directory not found, installation may be corrupted"
            )
        search_paths.append(str(builtin_dir))

        self._loader = jinja2.FileSystemLoader(search_paths)
        self._env = jinja2.Environment(
            loader=self._loader,
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["js"] = js_literal
        logger.debug("TemplateEngine initialized with %d search path(s)", len(search_paths))

    def render(self, template_name: str, context: HmrContext, **extra: Any) -> str:
        """Render a template with the given context.

        Context is flattened via ``dataclasses.asdict()``; ``extra`` values
        are added on top.

        Raises:
            TemplateError: If the template is not found or rendering fails.
        """
        try:
            template = self._env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e

        try:
            return template.render(**asdict(context), **extra)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def list_templates(self) -> list[str]:
        """List all available template names (built-in + overrides)."""
        return sorted(self._loader.list_templates())

    def is_overridden(self, template_name: str) -> bool:
        """Check if a template has a user override."""
        if self._user_template_dir is None:
            return False
        return (self._user_template_dir / template_name).is_file()
