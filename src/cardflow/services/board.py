"""Board service: the single writer in front of the engine."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from cardflow.core import engine
from cardflow.core.drop import resolve_drop
from cardflow.core.events import CardAdded, CardMoved, InMemoryEventBus
from cardflow.core.ids import make_id_factory
from cardflow.limits import MAX_CONTENT_LENGTH

if TYPE_CHECKING:
    from cardflow.config import CardflowConfig
    from cardflow.core.events import EventBus
    from cardflow.core.ids import IdFactory
    from cardflow.core.models.entities import Board, Card

log = logging.getLogger(__name__)


class BoardService:
    """Holds the current board and applies engine operations to it.

    Calls are serialized with a re-entrant lock. Drops are resolved and applied
    under it, and events are published before it is released, so handlers see
    changes in commit order. Each successful operation replaces the board
    wholesale, so ``board`` always returns an immutable snapshot.
    """

    def __init__(
        self,
        board: Board,
        *,
        id_factory: IdFactory,
        event_bus: EventBus | None = None,
        check_invariants: bool = False,
        max_content_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        self._board = board
        self._id_factory = id_factory
        self._events: EventBus = event_bus if event_bus is not None else InMemoryEventBus()
        self._check_invariants = check_invariants
        self._max_content_length = max_content_length
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: CardflowConfig,
        *,
        event_bus: EventBus | None = None,
    ) -> BoardService:
        board = config.build_board()
        return cls(
            board,
            id_factory=make_id_factory(
                config.general.id_strategy, prefix=config.general.id_prefix, board=board
            ),
            event_bus=event_bus,
            check_invariants=config.general.check_invariants,
            max_content_length=config.general.max_content_length,
        )

    @property
    def board(self) -> Board:
        return self._board

    @property
    def events(self) -> EventBus:
        return self._events

    def _commit(self, board: Board) -> None:
        if self._check_invariants:
            engine.check_invariants(board)
        self._board = board

    def add_card(self, column_id: str, content: str) -> Card | None:
        """Append a card to ``column_id``; None when the column is unknown.

        Raises:
            InvalidCardContentError: content is blank or too long.
        """
        with self._lock:
            before = self._board
            after = engine.add_card(
                before,
                column_id,
                content,
                id_factory=self._id_factory,
                max_length=self._max_content_length,
            )
            if after is before:
                return None
            self._commit(after)
            column = after.require_column(column_id)
            card = column.cards[-1]
            log.info("Added card %s to %s", card.id, column_id)
            self._events.publish(
                CardAdded(
                    card_id=card.id,
                    column_id=column_id,
                    content=card.content,
                    index=len(column.cards) - 1,
                )
            )
            return card

    def move_card(
        self,
        card_id: str,
        to_column_id: str,
        to_index: int | None = None,
        *,
        from_column_id: str | None = None,
    ) -> bool:
        """Move a card by raw index. Returns True when the board changed."""
        with self._lock:
            return self._move(card_id, to_column_id, to_index, from_column_id)

    def drop(self, card_id: str, over_id: str) -> bool:
        """Move a card dropped over another card or a column body."""
        with self._lock:
            instruction = resolve_drop(self._board, card_id, over_id)
            if instruction is None:
                log.debug("Ignoring drop of %s over unknown target %s", card_id, over_id)
                return False
            return self._move(
                instruction.card_id,
                instruction.to_column_id,
                instruction.to_index,
                instruction.from_column_id,
            )

    def _move(
        self,
        card_id: str,
        to_column_id: str,
        to_index: int | None,
        from_column_id: str | None,
    ) -> bool:
        # Caller holds the lock.
        before = self._board
        origin = before.locate(card_id)
        after = engine.move_card(
            before, card_id, to_column_id, to_index, from_column_id=from_column_id
        )
        if after is before or origin is None:
            return False
        self._commit(after)
        destination = after.locate(card_id)
        assert destination is not None
        event = CardMoved(
            card_id=card_id,
            from_column_id=before.columns[origin[0]].id,
            to_column_id=to_column_id,
            from_index=origin[1],
            to_index=destination[1],
        )
        log.debug(
            "Moved card %s %s[%d] -> %s[%d]",
            card_id,
            event.from_column_id,
            event.from_index,
            event.to_column_id,
            event.to_index,
        )
        self._events.publish(event)
        return True
