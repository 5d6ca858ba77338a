"""Translate curses key input into console operations.

The host reads keys (``getch()`` codes or ``get_wch()`` characters) and
hands each one to :func:`handle_key`. Nothing is translated while the
console is hidden, so the host can feed every key unconditionally.
"""

from __future__ import annotations

import curses
from typing import TYPE_CHECKING, Callable

from dbg_console.constants import NO_INPUT, VALID_CHARS

if TYPE_CHECKING:
    from dbg_console.config import Config
    from dbg_console.console import ConsoleState, DisabledConsole

BACKSPACE_KEYS = frozenset({curses.KEY_BACKSPACE, 127, 8})
UP_KEYS = frozenset({curses.KEY_UP})
DOWN_KEYS = frozenset({curses.KEY_DOWN})


def handle_key(
    console: "ConsoleState | DisabledConsole",
    key: int | str,
    valid_chars: str = VALID_CHARS,
) -> bool:
    """Apply a single key to the console. Returns True if the key was consumed."""
    if not console.shown() or key == NO_INPUT:
        return False

    def allowed(text: str) -> bool:
        return len(text) == 1 and text in valid_chars

    if isinstance(key, str):
        # get_wch() reports backspace/delete as control characters
        if len(key) == 1 and ord(key) in BACKSPACE_KEYS:
            key = ord(key)
        else:
            return console.receive_text_if(key, allowed)

    if key in BACKSPACE_KEYS:
        console.backspace()
        return True
    if key in UP_KEYS:
        console.up_deduped()
        return True
    if key in DOWN_KEYS:
        console.down_deduped()
        return True

    if 0 <= key < 0x110000:
        return console.receive_text_if(chr(key), allowed)
    return False


def key_handler(
    console: "ConsoleState | DisabledConsole", config: "Config"
) -> Callable[[int | str], bool]:
    """Bind :func:`handle_key` to a console and the config's allow-list."""
    valid_chars = config.keys.valid_chars

    def on_key(key: int | str) -> bool:
        return handle_key(console, key, valid_chars)

    return on_key
