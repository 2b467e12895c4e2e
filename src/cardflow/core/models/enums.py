"""Core domain enums."""

from __future__ import annotations

from enum import StrEnum


class IdStrategy(StrEnum):
    """How new card ids are generated."""

    COUNTER = "counter"
    UUID = "uuid"


VALID_ID_STRATEGIES: frozenset[str] = frozenset(s.value for s in IdStrategy)


def coerce_id_strategy(value: object) -> IdStrategy:
    """Coerce a config value to an id strategy, falling back to COUNTER."""
    if isinstance(value, IdStrategy):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in VALID_ID_STRATEGIES:
            return IdStrategy(normalized)
    return IdStrategy.COUNTER
