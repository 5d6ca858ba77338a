"""Input state of an in-application debug console.

:class:`ConsoleState` holds the line being typed, the history of confirmed
lines and a cursor for browsing that history with up/down. Rendering,
reading keys and running commands are left to the host application.

:class:`DisabledConsole` has the same interface, stores nothing and does
nothing, for builds that must not ship a working console. Pick one with
:func:`new_console` or use ``dbg_console.Console``, which is bound once at
import.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from dbg_console.config import Config, console_enabled
from dbg_console.debug_log import DebugLogger
from dbg_console.history import HistoryList, HistoryView
from dbg_console.input_buffer import InputBuffer
from dbg_console.types import LIVE, Browsing, CursorState

T = TypeVar("T")


class ConsoleState:
    """Editable entry, newest-first history and a browsing cursor.

    While browsing (cursor is ``Browsing(n)``) the displayed entry is history
    item ``n``. Any edit made while browsing first copies that item into the
    live buffer and returns to ``Live``, so confirmed history never changes.
    """

    def __init__(self, logger: DebugLogger | None = None):
        self._shown = False
        self._buffer = InputBuffer()
        self._history = HistoryList()
        self._cursor: CursorState = LIVE
        self._logger = logger

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConsoleState):
            return NotImplemented
        return (
            self._shown == other._shown
            and self._buffer.text == other._buffer.text
            and self._history == other._history
            and self._cursor == other._cursor
        )

    def __repr__(self) -> str:
        return (
            f"ConsoleState(entry={self.entry()!r}, cursor={self._cursor!r}, "
            f"history_len={len(self._history)}, shown={self._shown})"
        )

    def copy(self) -> ConsoleState:
        """Return an independent copy sharing only the logger."""
        other = ConsoleState(logger=self._logger)
        other._shown = self._shown
        other._buffer = InputBuffer(self._buffer.text)
        other._history = HistoryList(self._history.view())
        other._cursor = self._cursor
        return other

    def enabled(self) -> bool:
        """Whether this console does anything. Always True here."""
        return True

    @property
    def cursor(self) -> CursorState:
        return self._cursor

    @property
    def logger(self) -> DebugLogger | None:
        return self._logger

    def close(self):
        """Stop the event log, if any. The console stays usable, unlogged."""
        if self._logger:
            self._logger.stop()

    def __enter__(self) -> ConsoleState:
        return self

    def __exit__(self, *exc):
        self.close()

    # --- Queries ---

    def entry(self) -> str:
        """The text currently displayed: a browsed history item or the live buffer."""
        if isinstance(self._cursor, Browsing):
            return self._history[self._cursor.index]
        return self._buffer.text

    def history(self) -> HistoryView:
        """Previously confirmed entries, most recent first."""
        return self._history.view()

    def history_deduped(self) -> HistoryView:
        """Like history(), but never yields the same entry twice in a row."""
        return self._history.view().deduped()

    def history_len(self) -> int:
        """Number of history entries, duplicates included."""
        return len(self._history)

    # --- Editing ---

    def _fork(self):
        """Promote the browsed history item into the live buffer."""
        if isinstance(self._cursor, Browsing):
            self._buffer.set_text(self._history[self._cursor.index])
            self._cursor = LIVE

    def receive_char(self, ch: str):
        """Append a single character to the entry."""
        if not isinstance(ch, str) or len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self._fork()
        self._buffer.append(ch)

    def receive_text(self, text: str):
        """Append a text fragment to the entry."""
        self._fork()
        self._buffer.append(text)

    def receive_char_if(self, ch: str, predicate: Callable[[str], bool]) -> bool:
        """Append ``ch`` only if ``predicate(ch)`` holds. Returns whether it was accepted.

        Useful for limiting which characters can be entered::

            console.receive_char_if("?", str.isalnum)  # False, entry unchanged
        """
        accept = bool(predicate(ch))
        if accept:
            self.receive_char(ch)
        return accept

    def receive_text_if(self, text: str, predicate: Callable[[str], bool]) -> bool:
        """Append ``text`` only if ``predicate(text)`` holds. Returns whether it was accepted."""
        accept = bool(predicate(text))
        if accept:
            self.receive_text(text)
        return accept

    def backspace(self):
        """Remove the last character of the entry."""
        self._fork()
        self._buffer.backspace()

    def set_entry(self, text: str):
        """Replace the whole live entry and stop browsing."""
        self._buffer.set_text(text)
        self._cursor = LIVE

    def clear(self):
        """Empty the live buffer. A browsed entry stays displayed."""
        self._buffer.clear()

    def clear_history(self):
        """Forget every confirmed entry."""
        self._history.clear()
        self._cursor = LIVE
        if self._logger:
            self._logger.log_event("clear", "history cleared")

    def confirm(self, parse: Callable[[str], T] = str) -> T:
        """Parse the displayed entry, commit it to history and start a fresh entry.

        The entry is committed even when ``parse`` raises; its exception
        propagates unchanged.
        """
        self._fork()
        text = self._buffer.clear()
        self._history.push(text)
        if self._logger:
            self._logger.log_event("confirm", text)
        return parse(text)

    # --- Navigation ---

    def up(self) -> bool:
        """Move towards older entries. Returns False at the oldest one (or with no history)."""
        if isinstance(self._cursor, Browsing):
            n = self._cursor.index
            if n + 1 < len(self._history):
                self._cursor = Browsing(n + 1)
                return True
            return False
        if self._history:
            self._cursor = Browsing(0)
            return True
        return False

    def down(self) -> bool:
        """Move towards newer entries, ending at the live entry.

        Returns False only when already at the live entry.
        """
        if not isinstance(self._cursor, Browsing):
            return False
        n = self._cursor.index
        self._cursor = Browsing(n - 1) if n > 0 else LIVE
        return True

    def up_deduped(self) -> bool:
        """Move to the next older entry that differs from the displayed one."""
        start = self.entry()
        while self.up() and self.entry() == start:
            pass
        return self.entry() != start

    def down_deduped(self) -> bool:
        """Move to the next newer entry that differs from the displayed one."""
        start = self.entry()
        while self.down() and self.entry() == start:
            pass
        return self.entry() != start

    # --- Visibility ---

    def shown(self) -> bool:
        """Whether the host should draw the console. Affects nothing else."""
        return self._shown

    def show(self):
        self._set_shown(True)

    def hide(self):
        self._set_shown(False)

    def toggle_shown(self):
        self._set_shown(not self._shown)

    def _set_shown(self, shown: bool):
        if shown != self._shown and self._logger:
            self._logger.log_event("show" if shown else "hide")
        self._shown = shown


class DisabledConsole:
    """Inert stand-in for :class:`ConsoleState`.

    Instances carry no state; mutators do nothing and queries return empty
    defaults.
    """

    __slots__ = ()

    def __init__(self, logger: DebugLogger | None = None):
        pass

    def __eq__(self, other) -> bool:
        if not isinstance(other, DisabledConsole):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(DisabledConsole)

    def __repr__(self) -> str:
        return "DisabledConsole()"

    def copy(self) -> DisabledConsole:
        return DisabledConsole()

    def enabled(self) -> bool:
        return False

    @property
    def cursor(self) -> CursorState:
        return LIVE

    @property
    def logger(self) -> DebugLogger | None:
        return None

    def close(self):
        pass

    def __enter__(self) -> DisabledConsole:
        return self

    def __exit__(self, *exc):
        pass

    def entry(self) -> str:
        return ""

    def history(self) -> HistoryView:
        return HistoryView()

    def history_deduped(self) -> HistoryView:
        return HistoryView(deduped=True)

    def history_len(self) -> int:
        return 0

    def receive_char(self, ch: str):
        pass

    def receive_text(self, text: str):
        pass

    def receive_char_if(self, ch: str, predicate: Callable[[str], bool]) -> bool:
        return False

    def receive_text_if(self, text: str, predicate: Callable[[str], bool]) -> bool:
        return False

    def backspace(self):
        pass

    def set_entry(self, text: str):
        pass

    def clear(self):
        pass

    def clear_history(self):
        pass

    def confirm(self, parse: Callable[[str], T] = str) -> T:
        return parse("")

    def up(self) -> bool:
        return False

    def down(self) -> bool:
        return False

    def up_deduped(self) -> bool:
        return False

    def down_deduped(self) -> bool:
        return False

    def shown(self) -> bool:
        return False

    def show(self):
        pass

    def hide(self):
        pass

    def toggle_shown(self):
        pass


def new_console(
    enabled: bool | None = None, logger: DebugLogger | None = None
) -> ConsoleState | DisabledConsole:
    """Build a console, real or inert.

    Args:
        enabled: Which implementation to use. None defers to
            :func:`dbg_console.config.console_enabled`.
        logger: Event log for a real console; ignored when disabled.
    """
    if enabled is None:
        enabled = console_enabled()
    if enabled:
        return ConsoleState(logger=logger)
    return DisabledConsole()


def console_from_config(config: Config) -> ConsoleState | DisabledConsole:
    """Build a console as described by a loaded config, starting its event log if asked.

    Call ``close()`` on the result, or use it as a context manager, to close
    the log file.
    """
    enabled = console_enabled(config)
    logger = None
    if enabled and config.log.enabled:
        logger = DebugLogger(config.log.path)
        logger.start()
    return new_console(enabled=enabled, logger=logger)
