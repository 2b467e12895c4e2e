"""Board commands: interactive shell and script runner."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from cardflow.cli.shell import BoardShell, ShellExit
from cardflow.services.board import BoardService
from cardflow.ui.render import render_board

from .config import load_config

PROMPT = "cardflow"


def _open_shell(ctx: click.Context) -> BoardShell:
    service = BoardService.from_config(load_config(ctx))
    return BoardShell(service, Console(highlight=False))


@click.command()
@click.pass_context
def shell(ctx: click.Context) -> None:
    """Edit a fresh board interactively (state is not saved)."""
    board_shell = _open_shell(ctx)
    board_shell.console.print("Type 'help' for commands.", style="dim")
    board_shell.console.print(render_board(board_shell.service.board))
    try:
        while True:
            try:
                line = click.prompt(PROMPT, default="", show_default=False, prompt_suffix="> ")
            except click.Abort:
                break
            try:
                board_shell.execute(line)
            except ShellExit:
                break
    finally:
        board_shell.close()


@click.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Stop at the first failing command")
@click.pass_context
def run(ctx: click.Context, script: Path, strict: bool) -> None:
    """Replay SCRIPT (one shell command per line) and print the final board."""
    try:
        lines = script.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Cannot read {script}: {exc}") from exc

    board_shell = _open_shell(ctx)
    failures = 0
    try:
        for lineno, line in enumerate(lines, start=1):
            try:
                ok = board_shell.execute(line)
            except ShellExit:
                break
            if not ok:
                failures += 1
                if strict:
                    raise click.ClickException(f"{script}:{lineno}: command failed: {line.strip()}")
        board_shell.console.print(render_board(board_shell.service.board))
    finally:
        board_shell.close()
    if failures:
        click.echo(f"{failures} command(s) failed", err=True)
