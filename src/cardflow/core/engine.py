"""Board engine: pure state transitions over immutable boards.

``add_card`` and ``move_card`` are the only ways card placement changes. Both
take a board and return a board. A lookup that fails (unknown card or column)
returns the input board object unchanged, so callers can detect a no-op with
``new is old``.

Index convention for ``move_card``: the card is removed first, then inserted
at ``to_index`` in the resulting sequence. Moving ``c1`` to index 2 in
``[c1, c2, c3]`` yields ``[c2, c3, c1]``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cardflow.core.errors import (
    BoardIntegrityError,
    DuplicateCardIdError,
    InvalidCardContentError,
)
from cardflow.core.models.entities import Board, Card, Column, board_violations
from cardflow.limits import MAX_CONTENT_LENGTH

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cardflow.core.ids import IdFactory

log = logging.getLogger(__name__)

DEFAULT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("column1", "To Do"),
    ("column2", "In Progress"),
    ("column3", "Review"),
    ("column4", "Done"),
)


def create_board(columns: Iterable[tuple[str, str]]) -> Board:
    """Build an empty board from ``(id, title)`` pairs, in order."""
    return Board(columns=tuple(Column(id=column_id, title=title) for column_id, title in columns))


def default_board() -> Board:
    return create_board(DEFAULT_COLUMNS)


def normalize_content(content: str, *, max_length: int = MAX_CONTENT_LENGTH) -> str:
    """Trim ``content`` and reject it when empty or longer than ``max_length``."""
    text = content.strip()
    if not text:
        raise InvalidCardContentError("Card content cannot be empty", content=content)
    if len(text) > max_length:
        raise InvalidCardContentError(
            f"Card content exceeds {max_length} characters", content=content
        )
    return text


def _replace_columns(board: Board, changed: dict[int, Column]) -> Board:
    columns = tuple(changed.get(index, column) for index, column in enumerate(board.columns))
    return board.model_copy(update={"columns": columns})


def add_card(
    board: Board,
    column_id: str,
    content: str,
    *,
    id_factory: IdFactory,
    max_length: int = MAX_CONTENT_LENGTH,
) -> Board:
    """Append a new card to ``column_id``.

    Raises:
        InvalidCardContentError: content is empty after trimming or too long.
        DuplicateCardIdError: ``id_factory`` produced an id already on the board.
    """
    text = normalize_content(content, max_length=max_length)
    column_index = board.column_index(column_id)
    if column_index is None:
        log.debug("add_card: unknown column %s, board unchanged", column_id)
        return board

    card_id = id_factory()
    if board.locate(card_id) is not None:
        raise DuplicateCardIdError(card_id)

    column = board.columns[column_index]
    card = Card(id=card_id, content=text, column_id=column.id)
    updated = column.model_copy(update={"cards": (*column.cards, card)})
    return _replace_columns(board, {column_index: updated})


def clamp_index(index: int | None, size: int) -> int:
    """Clamp an insertion index into ``[0, size]``; None means the end."""
    if index is None:
        return size
    return max(0, min(index, size))


def move_card(
    board: Board,
    card_id: str,
    to_column_id: str,
    to_index: int | None = None,
    *,
    from_column_id: str | None = None,
) -> Board:
    """Relocate ``card_id`` to ``to_index`` of ``to_column_id``.

    ``to_index`` counts positions after the card has been taken out of its
    current column; out-of-range values are clamped and None appends. When
    ``from_column_id`` is given and the card is not in that column the move is
    treated as stale and ignored.
    """
    position = board.locate(card_id)
    if position is None:
        log.debug("move_card: unknown card %s, board unchanged", card_id)
        return board
    source_index, card_index = position
    source = board.columns[source_index]
    if from_column_id is not None and source.id != from_column_id:
        log.debug(
            "move_card: card %s is in %s, not %s, board unchanged",
            card_id,
            source.id,
            from_column_id,
        )
        return board

    target_index = board.column_index(to_column_id)
    if target_index is None:
        log.debug("move_card: unknown column %s, board unchanged", to_column_id)
        return board

    card = source.cards[card_index]
    remaining = source.cards[:card_index] + source.cards[card_index + 1 :]

    if target_index == source_index:
        insert_at = clamp_index(to_index, len(remaining))
        if insert_at == card_index:
            return board
        cards = (*remaining[:insert_at], card, *remaining[insert_at:])
        return _replace_columns(board, {source_index: source.model_copy(update={"cards": cards})})

    target = board.columns[target_index]
    insert_at = clamp_index(to_index, len(target.cards))
    moved = card.model_copy(update={"column_id": target.id})
    cards = (*target.cards[:insert_at], moved, *target.cards[insert_at:])
    return _replace_columns(
        board,
        {
            source_index: source.model_copy(update={"cards": remaining}),
            target_index: target.model_copy(update={"cards": cards}),
        },
    )


def check_invariants(board: Board) -> None:
    """Raise if ``board`` breaks id uniqueness or column membership.

    Raises:
        DuplicateCardIdError: a card id appears more than once.
        BoardIntegrityError: any other structural violation.
    """
    for kind, detail in board_violations(board.columns):
        if kind == "duplicate_card":
            raise DuplicateCardIdError(detail)
        raise BoardIntegrityError(detail)
