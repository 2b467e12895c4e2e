"""cardflow: immutable Kanban board engine with a terminal front end."""

from cardflow.core.engine import add_card, check_invariants, create_board, default_board, move_card

__version__ = "0.1.0"

__all__ = ["add_card", "check_invariants", "create_board", "default_board", "move_card"]
