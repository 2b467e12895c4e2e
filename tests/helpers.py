"""Board builders shared by tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cardflow.core.models.entities import Board, Card, Column

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def make_board(layout: Mapping[str, Sequence[str]]) -> Board:
    """Build a board from ``{column_id: [card_id, ...]}``.

    Column titles are the ids; card content is ``"content <card_id>"``.
    """
    return Board(
        columns=tuple(
            Column(
                id=column_id,
                title=column_id,
                cards=tuple(
                    Card(id=card_id, content=f"content {card_id}", column_id=column_id)
                    for card_id in card_ids
                ),
            )
            for column_id, card_ids in layout.items()
        )
    )


def layout_of(board: Board) -> dict[str, list[str]]:
    """Inverse of ``make_board``: ``{column_id: [card_id, ...]}``."""
    return {column.id: list(column.card_ids()) for column in board.columns}
