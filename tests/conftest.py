"""Pytest fixtures for cardflow tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="cardflow-tests-"))
os.environ["CARDFLOW_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["CARDFLOW_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

from cardflow.core.engine import default_board  # noqa: E402
from cardflow.core.events import InMemoryEventBus  # noqa: E402
from cardflow.core.ids import CounterIdFactory  # noqa: E402
from cardflow.debug_log import clear_log_buffer, teardown_debug_logging  # noqa: E402
from cardflow.services.board import BoardService  # noqa: E402
from tests.helpers import make_board  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Generator

    from cardflow.core.models.entities import Board


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def _reset_debug_logging() -> Generator[None, None, None]:
    """Keep the shared log buffer and handler from leaking between tests."""
    clear_log_buffer()
    yield
    teardown_debug_logging()
    clear_log_buffer()


@pytest.fixture
def board() -> Board:
    """Default four-column board, empty."""
    return default_board()


@pytest.fixture
def stocked_board() -> Board:
    """A = [c1, c2, c3], B = [c4], C = []."""
    return make_board({"A": ["c1", "c2", "c3"], "B": ["c4"], "C": []})


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def service(stocked_board: Board, event_bus: InMemoryEventBus) -> BoardService:
    return BoardService(
        stocked_board,
        id_factory=CounterIdFactory(prefix="n"),
        event_bus=event_bus,
        check_invariants=True,
    )
