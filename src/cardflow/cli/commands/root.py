"""Root CLI command registration."""

from __future__ import annotations

from pathlib import Path

import click

from cardflow import __version__

from .board import run, shell
from .config import config


@click.group()
@click.version_option(__version__, prog_name="cardflow")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (defaults to the user config directory)",
)
@click.option("--debug", is_flag=True, help="Capture debug logs (view with the 'logs' command)")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, debug: bool) -> None:
    """Kanban board engine with an interactive terminal front end."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if debug:
        from cardflow.debug_log import setup_debug_logging

        setup_debug_logging()


cli.add_command(shell)
cli.add_command(run)
cli.add_command(config)
