"""CLI interface for svelte_hmr.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from svelte_hmr import __version__
from svelte_hmr.config import (
    CONFIG_FILE,
    SvelteHmrConfig,
    default_config,
    load_config,
    resolve_hot_options,
    save_config,
)
from svelte_hmr.css import parse_css_id
from svelte_hmr.exceptions import SvelteHmrError, TransformError
from svelte_hmr.make_hot import MakeHot

__all__ = ["app"]

app = typer.Typer(
    name="svelte-hmr",
    help="Injects hot module reload code into compiled Svelte components.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Hot module reload code injection for Svelte."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TransformError(f"Failed to read {path}: {e}") from e


def _read_json(path: Path) -> Any:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise TransformError(f"Invalid JSON in {path}: {e}") from e


def _read_compile_result(path: Path) -> dict[str, Any]:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise TransformError(f"Compile result in {path} must be a JSON object")
    return data


def _load_project_config(config_path: Path | None) -> SvelteHmrConfig:
    """Load an explicit config, else ./svelte-hmr.toml if present, else defaults."""
    if config_path is not None:
        return load_config(config_path)
    local = Path.cwd() / CONFIG_FILE
    if local.is_file():
        return load_config(local)
    return default_config()


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help=f"Config file (default: ./{CONFIG_FILE} if present)"),
]


@app.command()
def version() -> None:
    """Show svelte-hmr version."""
    console.print(f"svelte-hmr {__version__}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file"),
    ] = False,
) -> None:
    """Write a default config file in the current directory."""
    path = Path.cwd() / CONFIG_FILE
    if path.exists() and not force:
        console.print(f"[yellow]{CONFIG_FILE} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        save_config(default_config(), path)
    except SvelteHmrError as e:
        console.print(f"[red]Failed to write config:[/red] {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Created[/green] {path}")


@app.command()
def transform(
    file: Annotated[Path, typer.Argument(help="Compiled component JS file")],
    component_id: Annotated[
        str | None,
        typer.Option("--id", "-i", help="Component id (default: file path)"),
    ] = None,
    compiled: Annotated[
        Path | None,
        typer.Option("--compiled", "-c", help="Compile result JSON (vars, ast)"),
    ] = None,
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Original .svelte source"),
    ] = None,
    compile_options: Annotated[
        Path | None,
        typer.Option("--compile-options", help="Compiler options JSON"),
    ] = None,
    config_path: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to file instead of stdout"),
    ] = None,
) -> None:
    """Rewrite a compiled component with HMR activation code."""
    try:
        config = _load_project_config(config_path)
        make_hot = MakeHot.from_config(config.transformer, defaults=config.hot)
        code = make_hot(
            component_id or file.as_posix(),
            _read_text(file),
            None,
            _read_compile_result(compiled) if compiled else None,
            _read_text(source) if source else None,
            _read_json(compile_options) if compile_options else None,
        )
    except SvelteHmrError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if output is None:
        typer.echo(code, nl=False)
        return

    try:
        output.write_text(code, encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Failed to write {output}:[/red] {e}")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Wrote[/green] {output}")


@app.command()
def css(
    file: Annotated[Path, typer.Argument(help="Compiled component JS file")],
) -> None:
    """Show the stylesheet id and non-CSS hash of a compiled component."""
    try:
        code = _read_text(file)
    except SvelteHmrError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    meta = parse_css_id(code, True)
    if meta.css_id is None:
        console.print(f"[dim]No stylesheet found in {file.name}[/dim]")
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("field", style="dim")
    table.add_column("value", style="bold")
    table.add_row("cssId", meta.css_id)
    table.add_row("nonCssHash", meta.non_css_hash or "")
    console.print(table)


@app.command()
def options(
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Original .svelte source, for the escape hatch"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Show the resolved hot options."""
    try:
        config = _load_project_config(config_path)
        resolved = resolve_hot_options(
            None, _read_text(source) if source else None, config.hot
        )
    except SvelteHmrError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("option", style="dim")
    table.add_column("value", style="bold")
    for key, value in resolved.to_dict().items():
        table.add_row(key, escape(json.dumps(value)))
    console.print(table)
