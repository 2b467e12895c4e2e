"""Translate drop gestures into engine move instructions.

Drag-and-drop adapters report what the dragged card was released over: either
another card or a column body. The engine only understands raw indices, so
this module resolves the target once, using the same remove-then-insert
convention as ``move_card``:

- over a card in another column: insert before that card
- over a card in the same column: take that card's current slot
- over a column id: append at the end of that column
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cardflow.core.engine import move_card

if TYPE_CHECKING:
    from cardflow.core.models.entities import Board


@dataclass(frozen=True, slots=True)
class MoveInstruction:
    """Self-describing move request for ``move_card``."""

    card_id: str
    from_column_id: str
    to_column_id: str
    to_index: int

    def apply(self, board: Board) -> Board:
        return move_card(
            board,
            self.card_id,
            self.to_column_id,
            self.to_index,
            from_column_id=self.from_column_id,
        )


def resolve_drop(board: Board, card_id: str, over_id: str) -> MoveInstruction | None:
    """Resolve a drop of ``card_id`` over ``over_id`` to a raw-index move.

    Returns None when either id is unknown.
    """
    position = board.locate(card_id)
    if position is None:
        return None
    source = board.columns[position[0]]

    over_position = board.locate(over_id)
    if over_position is not None:
        over_column_index, over_card_index = over_position
        target = board.columns[over_column_index]
        return MoveInstruction(card_id, source.id, target.id, over_card_index)

    target = board.get_column(over_id)
    if target is None:
        return None
    # Same column: the dragged card is removed first, so the end is one slot earlier.
    end = len(target.cards) - 1 if target.id == source.id else len(target.cards)
    return MoveInstruction(card_id, source.id, target.id, end)


def drop_card(board: Board, card_id: str, over_id: str) -> Board:
    """Apply a drop gesture; unknown ids leave the board unchanged."""
    instruction = resolve_drop(board, card_id, over_id)
    if instruction is None:
        return board
    return instruction.apply(board)
