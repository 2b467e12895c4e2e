"""Config file commands."""

from __future__ import annotations

import tomllib
from pathlib import Path

import click
from pydantic import ValidationError

from cardflow.config import CardflowConfig
from cardflow.paths import get_config_path


def resolve_config_path(ctx: click.Context) -> Path:
    path = (ctx.obj or {}).get("config_path")
    return path if path is not None else get_config_path()


def load_config(ctx: click.Context) -> CardflowConfig:
    """Load the config selected on the command line, reporting bad files."""
    path = resolve_config_path(ctx)
    try:
        return CardflowConfig.load(path)
    except (tomllib.TOMLDecodeError, ValidationError) as exc:
        raise click.ClickException(f"Invalid config file {path}: {exc}") from exc


@click.group()
def config() -> None:
    """Inspect or create the configuration file."""


@config.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Write the default configuration."""
    path = resolve_config_path(ctx)
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    CardflowConfig().save(path)
    click.echo(f"Wrote {path}")


@config.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the effective configuration as TOML."""
    click.echo(load_config(ctx).dumps().rstrip())


@config.command()
@click.pass_context
def path(ctx: click.Context) -> None:
    """Print the config file location."""
    click.echo(str(resolve_config_path(ctx)))
