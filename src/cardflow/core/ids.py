"""Card id factories.

The engine never reads a clock. Callers inject one of these factories so two
cards created back to back can never share an id.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING
from uuid import uuid4

from cardflow.core.models.enums import IdStrategy, coerce_id_strategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from cardflow.core.models.entities import Board

type IdFactory = Callable[[], str]

DEFAULT_ID_PREFIX = "card-"


class CounterIdFactory:
    """Strictly monotonic ``<prefix><n>`` ids."""

    def __init__(self, prefix: str = DEFAULT_ID_PREFIX, start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"

    @classmethod
    def after(cls, board: Board, prefix: str = DEFAULT_ID_PREFIX) -> CounterIdFactory:
        """Build a factory that continues past ids already on ``board``."""
        highest = 0
        for card in board.iter_cards():
            suffix = card.id.removeprefix(prefix)
            if suffix != card.id and suffix.isdigit():
                highest = max(highest, int(suffix))
        return cls(prefix, start=highest + 1)


def uuid_id_factory() -> str:
    return uuid4().hex


def make_id_factory(
    strategy: IdStrategy | str,
    *,
    prefix: str = DEFAULT_ID_PREFIX,
    board: Board | None = None,
) -> IdFactory:
    """Return an id factory for ``strategy``, seeded past ``board`` when given."""
    if coerce_id_strategy(strategy) is IdStrategy.UUID:
        return uuid_id_factory
    if board is not None:
        return CounterIdFactory.after(board, prefix)
    return CounterIdFactory(prefix)
