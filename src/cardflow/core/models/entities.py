"""Core domain entities.

Boards are immutable values. Every change produces a new ``Board`` that shares
the untouched ``Column`` objects with the previous one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, model_validator

from cardflow.core.errors import CardNotFoundError, ColumnNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator


class DomainModel(BaseModel):
    """Base model with common config."""

    model_config = ConfigDict(frozen=True)


class Card(DomainModel):
    """Work item with an opaque text payload.

    ``column_id`` always names the column whose sequence holds the card.
    """

    id: str
    content: str
    column_id: str


class Column(DomainModel):
    """Named, ordered sequence of cards. Order is display order."""

    id: str
    title: str
    cards: tuple[Card, ...] = ()

    def index_of(self, card_id: str) -> int | None:
        for index, card in enumerate(self.cards):
            if card.id == card_id:
                return index
        return None

    def card_ids(self) -> tuple[str, ...]:
        return tuple(card.id for card in self.cards)


def board_violations(columns: tuple[Column, ...]) -> Iterator[tuple[str, str]]:
    """Yield ``(kind, message)`` for every structural problem in ``columns``.

    Kinds: ``duplicate_column``, ``duplicate_card``, ``misplaced_card``.
    """
    seen_columns: set[str] = set()
    seen_cards: set[str] = set()
    for column in columns:
        if column.id in seen_columns:
            yield "duplicate_column", f"Duplicate column id {column.id!r}"
        seen_columns.add(column.id)
        for card in column.cards:
            if card.id in seen_cards:
                yield "duplicate_card", card.id
            seen_cards.add(card.id)
            if card.column_id != column.id:
                yield (
                    "misplaced_card",
                    f"Card {card.id!r} claims column {card.column_id!r} "
                    f"but sits in {column.id!r}",
                )


class Board(DomainModel):
    """Ordered, fixed set of columns."""

    columns: tuple[Column, ...] = ()

    @model_validator(mode="after")
    def _check_structure(self) -> Self:
        for kind, detail in board_violations(self.columns):
            if kind == "duplicate_card":
                raise ValueError(f"Duplicate card id {detail!r}")
            raise ValueError(detail)
        return self

    def column_ids(self) -> tuple[str, ...]:
        return tuple(column.id for column in self.columns)

    def column_index(self, column_id: str) -> int | None:
        for index, column in enumerate(self.columns):
            if column.id == column_id:
                return index
        return None

    def get_column(self, column_id: str) -> Column | None:
        index = self.column_index(column_id)
        return self.columns[index] if index is not None else None

    def locate(self, card_id: str) -> tuple[int, int] | None:
        """Return ``(column_index, card_index)`` for ``card_id``, or None."""
        for column_index, column in enumerate(self.columns):
            card_index = column.index_of(card_id)
            if card_index is not None:
                return column_index, card_index
        return None

    def find_card(self, card_id: str) -> Card | None:
        position = self.locate(card_id)
        if position is None:
            return None
        column_index, card_index = position
        return self.columns[column_index].cards[card_index]

    def require_column(self, column_id: str) -> Column:
        column = self.get_column(column_id)
        if column is None:
            raise ColumnNotFoundError(column_id)
        return column

    def require_card(self, card_id: str) -> Card:
        card = self.find_card(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def iter_cards(self) -> Iterator[Card]:
        for column in self.columns:
            yield from column.cards

    def card_count(self) -> int:
        return sum(len(column.cards) for column in self.columns)

    def positions(self) -> dict[str, tuple[str, int]]:
        """Map every card id to ``(column_id, index)``, derived from order."""
        return {
            card.id: (column.id, index)
            for column in self.columns
            for index, card in enumerate(column.cards)
        }
