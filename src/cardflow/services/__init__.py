"""Service layer."""

from cardflow.services.board import BoardService

__all__ = ["BoardService"]
