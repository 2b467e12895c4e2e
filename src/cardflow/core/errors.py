"""Board error taxonomy.

Lookup failures are normally absorbed by the engine (the board comes back
unchanged); the NotFound classes exist for adapters that want a strict lookup
and a message to show. Integrity errors signal a programming defect and are
never caught inside the package.
"""

from __future__ import annotations


class BoardError(Exception):
    """Base for board domain errors with a machine-readable code."""

    code: str = "BOARD_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class CardNotFoundError(BoardError, LookupError):
    """Raised when a card id is not present on the board."""

    code = "CARD_NOT_FOUND"

    def __init__(self, card_id: str) -> None:
        super().__init__(f"Card {card_id} not found")
        self.card_id = card_id


class ColumnNotFoundError(BoardError, LookupError):
    """Raised when a column id is not present on the board."""

    code = "COLUMN_NOT_FOUND"

    def __init__(self, column_id: str) -> None:
        super().__init__(f"Column {column_id} not found")
        self.column_id = column_id


class InvalidCardContentError(BoardError, ValueError):
    """Raised when card content is empty after trimming or too long."""

    code = "INVALID_CONTENT"

    def __init__(self, message: str, *, content: str) -> None:
        super().__init__(message)
        self.content = content


class BoardIntegrityError(BoardError, RuntimeError):
    """Raised when a board violates its structural invariants."""

    code = "BOARD_INTEGRITY"


class DuplicateCardIdError(BoardIntegrityError):
    """Raised when a card id appears twice, which means id generation is broken."""

    code = "DUPLICATE_CARD_ID"

    def __init__(self, card_id: str) -> None:
        super().__init__(f"Duplicate card id {card_id!r}")
        self.card_id = card_id


__all__ = [
    "BoardError",
    "BoardIntegrityError",
    "CardNotFoundError",
    "ColumnNotFoundError",
    "DuplicateCardIdError",
    "InvalidCardContentError",
]
