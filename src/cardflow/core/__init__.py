"""Core domain models, events, and the board engine."""

from cardflow.core import engine, events
from cardflow.core.models import entities, enums

__all__ = [
    "engine",
    "entities",
    "enums",
    "events",
]
