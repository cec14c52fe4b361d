# pagesmith/cli.py
"""CLI entry point for pagesmith."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from .config import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE, SiteConfig, load_config
from .exceptions import PagesmithError
from .site import build_site, load_registry

app = typer.Typer(
    name="pagesmith",
    help="Static site builder - transforms a tree of HTML and Markdown pages.",
)

config_app = typer.Typer(help="Manage pagesmith configuration.")
app.add_typer(config_app, name="config")

# Global state
_config_path: Optional[str] = None


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _get_config() -> SiteConfig:
    try:
        return load_config(_config_path)
    except PagesmithError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    ] = None,
) -> None:
    """Global options."""
    global _config_path
    _config_path = config


@app.command()
def build(
    source: Annotated[
        Optional[Path], typer.Option("--source", help="Override source_dir")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Override output_dir")
    ] = None,
    trim: Annotated[
        bool, typer.Option("--trim", help="Drop whitespace-only text nodes")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Debug logging")
    ] = False,
) -> None:
    """Build every resource of the site into the output directory."""
    cfg = _get_config()
    updates = {}
    if source is not None:
        updates["source_dir"] = str(source)
    if output is not None:
        updates["output_dir"] = str(output)
    if trim:
        updates["trim"] = True
    cfg = cfg.model_copy(update=updates)

    _setup_logging("debug" if verbose else cfg.log_level)

    try:
        written = build_site(cfg)
    except (PagesmithError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Wrote {len(written)} files to {cfg.output_dir}")


@app.command("list")
def list_resources() -> None:
    """List registered resources and where they will be written."""
    cfg = _get_config()
    try:
        registry = load_registry(cfg)
    except (PagesmithError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for resource in registry.all_resources().values():
        typer.echo(f"{resource.identifier()} -> {resource.output_path().as_posix()}")


@config_app.command("init")
def config_init(
    force: Annotated[bool, typer.Option("--force", help="Overwrite existing file")] = False,
) -> None:
    """Write a default pagesmith.yaml in the current directory."""
    path = Path(CONFIG_FILENAME)
    if path.exists() and not force:
        typer.echo(f"{CONFIG_FILENAME} already exists (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)
    path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    typer.echo(f"Created {CONFIG_FILENAME}")
