"""Line-oriented command interpreter over a ``BoardService``.

Used by both ``cardflow shell`` (interactive) and ``cardflow run`` (scripts).
Command words and ids are shell-quoted; the TEXT of ``add`` is taken verbatim
from the rest of the line.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import TYPE_CHECKING

from cardflow.core.errors import CardNotFoundError, ColumnNotFoundError, InvalidCardContentError
from cardflow.debug_log import clear_log_buffer, export_logs_to_file, log_buffer
from cardflow.paths import get_debug_log_path
from cardflow.ui.render import describe_event, print_logs, render_board, render_columns

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from cardflow.core.events import DomainEvent
    from cardflow.core.models.entities import Board
    from cardflow.services.board import BoardService

HELP_TEXT = """\
Commands:
  add COLUMN TEXT...           append a card to COLUMN (id or title)
  move CARD COLUMN [INDEX]     move CARD to INDEX of COLUMN (end if omitted)
  drop CARD OVER               drop CARD over another card or a column
  show                         print the board
  columns                      list columns
  logs [clear | export [PATH]] print, clear or export captured debug logs
  help                         show this help
  quit                         leave the shell
Lines starting with '#' are ignored."""


class ShellExit(Exception):
    """Raised by the ``quit`` command."""


class CommandError(Exception):
    """A shell command was malformed; the message is shown to the user."""


# Integrity errors are not listed; they propagate out of the shell.
USER_ERRORS = (CommandError, CardNotFoundError, ColumnNotFoundError, InvalidCardContentError)


def split_leading(line: str, count: int) -> tuple[list[str], str]:
    """Split up to ``count`` shell-quoted words off ``line``.

    Returns the words and the unparsed remainder, stripped.

    Raises:
        CommandError: a leading word has an unbalanced quote.
    """
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    words: list[str] = []
    try:
        while len(words) < count:
            word = lexer.get_token()
            if word is None:
                break
            words.append(word)
    except ValueError as exc:
        raise CommandError(str(exc)) from exc
    return words, lexer.instream.read().strip()


def split_words(text: str) -> list[str]:
    try:
        return shlex.split(text)
    except ValueError as exc:
        raise CommandError(str(exc)) from exc


def resolve_column_id(board: Board, token: str) -> str:
    """Accept a column id or a case-insensitive column title."""
    if board.column_index(token) is not None:
        return token
    lowered = token.casefold()
    for column in board.columns:
        if column.title.casefold() == lowered:
            return column.id
    raise CommandError(f"Unknown column: {token}")


class BoardShell:
    """Parses shell lines and dispatches them to the board service."""

    def __init__(self, service: BoardService, console: Console) -> None:
        self.service = service
        self.console = console
        self._handlers: dict[str, Callable[[str], None]] = {
            "add": self._add,
            "move": self._move,
            "drop": self._drop,
            "show": self._show,
            "columns": self._columns,
            "logs": self._logs,
            "help": self._help,
            "quit": self._quit,
            "exit": self._quit,
        }
        service.events.add_handler(self._on_event)

    def close(self) -> None:
        self.service.events.remove_handler(self._on_event)

    def _on_event(self, event: DomainEvent) -> None:
        self.console.print(describe_event(event))

    def _error(self, message: str) -> None:
        self.console.print(f"error: {message}", style="red", markup=False)

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when a user error was reported.

        Raises:
            ShellExit: on ``quit``.
            BoardIntegrityError: the board was corrupted; never reported inline.
        """
        line = line.strip()
        if not line or line.startswith("#"):
            return True

        command, *rest = line.split(None, 1)
        command = command.lower()
        handler = self._handlers.get(command)
        if handler is None:
            self._error(f"unknown command {command!r} (try 'help')")
            return False
        try:
            handler(rest[0] if rest else "")
        except USER_ERRORS as exc:
            self._error(str(exc))
            return False
        return True

    def _add(self, rest: str) -> None:
        words, content = split_leading(rest, 1)
        if not words:
            raise CommandError("usage: add COLUMN TEXT...")
        column_id = resolve_column_id(self.service.board, words[0])
        if not content:
            raise InvalidCardContentError("Card content cannot be empty", content=content)
        self.service.add_card(column_id, content)

    def _move(self, rest: str) -> None:
        args = split_words(rest)
        if len(args) not in (2, 3):
            raise CommandError("usage: move CARD COLUMN [INDEX]")
        card_id = args[0]
        board = self.service.board
        board.require_card(card_id)
        column_id = resolve_column_id(board, args[1])
        index: int | None = None
        if len(args) == 3:
            try:
                index = int(args[2])
            except ValueError as exc:
                raise CommandError(f"INDEX must be an integer, got {args[2]!r}") from exc
        if not self.service.move_card(card_id, column_id, index):
            self.console.print(f"{card_id} already there", style="dim")

    def _drop(self, rest: str) -> None:
        args = split_words(rest)
        if len(args) != 2:
            raise CommandError("usage: drop CARD OVER")
        card_id, over = args
        board = self.service.board
        board.require_card(card_id)
        if board.find_card(over) is None:
            over = resolve_column_id(board, over)
        if not self.service.drop(card_id, over):
            self.console.print(f"{card_id} already there", style="dim")

    def _show(self, rest: str) -> None:
        self.console.print(render_board(self.service.board))

    def _columns(self, rest: str) -> None:
        self.console.print(render_columns(self.service.board))

    def _logs(self, rest: str) -> None:
        args = split_words(rest)
        if not args:
            print_logs(self.console, list(log_buffer))
            return
        action = args[0].lower()
        if action == "clear" and len(args) == 1:
            clear_log_buffer()
            self.console.print("Log buffer cleared.", style="dim")
        elif action == "export" and len(args) <= 2:
            target = Path(args[1]) if len(args) == 2 else get_debug_log_path()
            try:
                written = export_logs_to_file(target)
            except OSError as exc:
                raise CommandError(f"Cannot write {target}: {exc}") from exc
            self.console.print(f"Exported {written} log entries to {target}", markup=False)
        else:
            raise CommandError("usage: logs [clear | export [PATH]]")

    def _help(self, rest: str) -> None:
        self.console.print(HELP_TEXT, markup=False, highlight=False)

    def _quit(self, rest: str) -> None:
        raise ShellExit
