"""Domain events and the in-process event bus."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol
from uuid import uuid4

log = logging.getLogger(__name__)


def _new_event_id() -> str:
    return uuid4().hex


def _now() -> datetime:
    return datetime.now()


class DomainEvent(Protocol):
    """Base protocol for all domain events."""

    @property
    def event_id(self) -> str: ...

    @property
    def occurred_at(self) -> datetime: ...


EventHandler = Callable[[DomainEvent], None]


class EventBus(Protocol):
    """Synchronous fan-out bus for domain events."""

    def publish(self, event: DomainEvent) -> None:
        """Publish a single event to handlers."""
        ...

    def add_handler(
        self,
        handler: EventHandler,
        event_type: type[DomainEvent] | None = None,
    ) -> None:
        """Register a handler for events (renderers use this)."""
        ...

    def remove_handler(self, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        ...


@dataclass(frozen=True)
class CardAdded:
    card_id: str
    column_id: str
    content: str
    index: int
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class CardMoved:
    card_id: str
    from_column_id: str
    to_column_id: str
    from_index: int
    to_index: int
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)

    @property
    def crossed_columns(self) -> bool:
        return self.from_column_id != self.to_column_id


class InMemoryEventBus:
    """Simple synchronous event bus.

    Handlers run in registration order on the publishing thread. A handler
    that raises is logged and skipped; the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: list[tuple[type[DomainEvent] | None, EventHandler]] = []

    def publish(self, event: DomainEvent) -> None:
        """Publish event to all matching handlers."""
        for filter_type, handler in list(self._handlers):
            if filter_type is None or isinstance(event, filter_type):
                try:
                    handler(event)
                except Exception:
                    log.exception("Event handler %r failed for %s", handler, type(event).__name__)

    def add_handler(
        self,
        handler: EventHandler,
        event_type: type[DomainEvent] | None = None,
    ) -> None:
        """Register a synchronous handler for events."""
        self._handlers.append((event_type, handler))

    def remove_handler(self, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        self._handlers = [(t, h) for t, h in self._handlers if h != handler]
