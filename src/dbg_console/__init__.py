"""Debug console input state; set DBG_CONSOLE_FORCE_ENABLED before the first import to choose ``Console``."""

try:
    from importlib.metadata import version

    __version__ = version("dbg-console")
except Exception:
    __version__ = "0.0.0.dev"

from dbg_console.config import console_enabled
from dbg_console.console import ConsoleState, DisabledConsole, console_from_config, new_console
from dbg_console.types import Browsing, Live

# Chosen once per process; swap implementations with new_console() instead.
Console = ConsoleState if console_enabled() else DisabledConsole

__all__ = [
    "Browsing",
    "Console",
    "ConsoleState",
    "DisabledConsole",
    "Live",
    "console_enabled",
    "console_from_config",
    "new_console",
]
