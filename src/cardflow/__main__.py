"""CLI entry point for cardflow."""

from __future__ import annotations

from cardflow.cli.commands.root import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
