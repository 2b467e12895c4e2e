"""Rich rendering of board snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

    from cardflow.core.events import DomainEvent
    from cardflow.core.models.entities import Board, Card
    from cardflow.debug_log import LogEntry

EMPTY_PLACEHOLDER = "(empty)"


def render_card(card: Card) -> Text:
    text = Text(card.id, style="bold cyan")
    text.append("\n")
    text.append(card.content)
    return text


def render_board(board: Board, *, title: str | None = "Board") -> Table:
    """Build a table with one column per board column, cards in display order."""
    table = Table(title=title, show_lines=True, expand=True)
    for column in board.columns:
        header = Text(column.title, style="bold")
        header.append(f"\n{column.id} ({len(column.cards)})", style="dim")
        table.add_column(header, overflow="fold")

    rows = max((len(column.cards) for column in board.columns), default=0)
    if rows == 0:
        table.add_row(*(Text(EMPTY_PLACEHOLDER, style="dim") for _ in board.columns))
        return table

    for row in range(rows):
        cells: list[Text] = []
        for column in board.columns:
            cells.append(render_card(column.cards[row]) if row < len(column.cards) else Text(""))
        table.add_row(*cells)
    return table


def render_columns(board: Board) -> Table:
    table = Table(title="Columns")
    table.add_column("#", justify="right")
    table.add_column("id")
    table.add_column("title")
    table.add_column("cards", justify="right")
    for index, column in enumerate(board.columns):
        table.add_row(str(index), column.id, column.title, str(len(column.cards)))
    return table


def describe_event(event: DomainEvent) -> Text:
    """One-line summary of a domain event for the shell transcript."""
    from cardflow.core.events import CardAdded, CardMoved

    if isinstance(event, CardAdded):
        return Text(f"+ {event.card_id} -> {event.column_id}[{event.index}]", style="green")
    if isinstance(event, CardMoved):
        return Text(
            f"~ {event.card_id} {event.from_column_id}[{event.from_index}]"
            f" -> {event.to_column_id}[{event.to_index}]",
            style="yellow",
        )
    return Text(type(event).__name__)


def print_logs(console: Console, entries: list[LogEntry]) -> None:
    from cardflow.debug_log import format_entry

    if not entries:
        console.print("No log entries.", style="dim")
        return
    for entry in entries:
        console.print(Text(format_entry(entry)), soft_wrap=True)
