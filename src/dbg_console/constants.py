import string

# Characters the key adapter lets through to the entry
VALID_CHARS = string.ascii_letters + string.digits + " ._-\"'/\\~"

NO_INPUT = -1  # getch() with a timeout and nothing pressed

FORCE_ENABLED_ENV = "DBG_CONSOLE_FORCE_ENABLED"
TRUTHY = ("1", "true", "yes", "on")
FALSY = ("0", "false", "no", "off")

DEFAULT_LOG_PATH = "dbg_console.log"
