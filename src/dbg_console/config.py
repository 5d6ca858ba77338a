"""Configuration for the debug console.

Configuration lives in small YAML files. Only the subset the console needs
is understood, parsed without external dependencies:
- Nested mappings (key: value, key: with indented children)
- Scalars (strings, integers, floats, booleans, null)
- Comments (# ...)
- Quoted strings (single and double)

Whether the console is enabled at all is decided by :func:`console_enabled`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dbg_console.constants import DEFAULT_LOG_PATH, FALSY, FORCE_ENABLED_ENV, TRUTHY, VALID_CHARS

# --- YAML subset parser ---


def parse_simple_yaml(text: str) -> dict:
    """Parse a YAML document made of nested mappings into a dict.

    Raises:
        ValueError: On a line that is neither a comment nor a ``key:`` entry,
            or on inconsistent indentation.
    """
    root: dict = {}
    # Stack of (indent, mapping) pairs; the innermost open mapping is last
    stack: list[tuple[int, dict]] = [(-1, root)]
    pending: tuple[int, dict, str] | None = None

    for lineno, line in enumerate(text.split("\n"), start=1):
        stripped = line.lstrip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = len(line) - len(stripped)

        if pending is not None:
            parent_indent, parent, key = pending
            pending = None
            if indent > parent_indent:
                child: dict = {}
                parent[key] = child
                stack.append((indent, child))

        while len(stack) > 1 and indent < stack[-1][0]:
            stack.pop()
        if indent != stack[-1][0] and stack[-1][0] != -1:
            raise ValueError(f"line {lineno}: unexpected indentation")
        if stack[-1][0] == -1:
            stack[-1] = (indent, root)

        colon = _find_unquoted_colon(stripped)
        if colon <= 0:
            raise ValueError(f"line {lineno}: expected 'key: value'")
        key = stripped[:colon].strip()
        value = _remove_inline_comment(stripped[colon + 1 :].strip())

        mapping = stack[-1][1]
        if value:
            mapping[key] = _parse_value(value)
        else:
            # Either a nested block follows or the value is null
            mapping[key] = None
            pending = (indent, mapping, key)

    return root


def _unquoted(s: str):
    """Yield (index, char) for characters outside quoted sections."""
    quote = None
    i = 0
    while i < len(s):
        c = s[i]
        if quote:
            if c == "\\" and quote == '"':
                i += 1
            elif c == quote:
                quote = None
        elif c in ("'", '"'):
            quote = c
        else:
            yield i, c
        i += 1


def _find_unquoted_colon(s: str) -> int:
    """Find the first colon not inside quotes, or -1."""
    for i, c in _unquoted(s):
        if c == ":":
            return i
    return -1


def _remove_inline_comment(s: str) -> str:
    """Strip a ' #' comment that is not inside quotes."""
    for i, c in _unquoted(s):
        if c == "#" and (i == 0 or s[i - 1] == " "):
            return s[:i].rstrip()
    return s


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "/": "/", "0": "\0"}


def _parse_value(s: str) -> str | int | float | bool | None:
    """Parse a scalar YAML value."""
    lowered = s.lower()
    if lowered in ("null", "~", "none"):
        return None
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False

    if len(s) >= 2 and s[0] == s[-1] == '"':
        out = []
        chars = iter(s[1:-1])
        for c in chars:
            if c == "\\":
                nxt = next(chars, "\\")
                out.append(_ESCAPES.get(nxt, "\\" + nxt))
            else:
                out.append(c)
        return "".join(out)
    if len(s) >= 2 and s[0] == s[-1] == "'":
        return s[1:-1].replace("''", "'")

    try:
        return float(s) if "." in s else int(s)
    except ValueError:
        return s


# --- Config dataclasses ---


@dataclass
class ConsoleSection:
    """Build switch; None defers to the interpreter's optimisation mode."""

    enabled: bool | None = None


@dataclass
class KeysConfig:
    """Key adapter settings."""

    valid_chars: str = VALID_CHARS


@dataclass
class LogConfig:
    """Debug event log."""

    enabled: bool = False
    path: str = DEFAULT_LOG_PATH


@dataclass
class Config:
    """Complete console configuration."""

    console: ConsoleSection = field(default_factory=ConsoleSection)
    keys: KeysConfig = field(default_factory=KeysConfig)
    log: LogConfig = field(default_factory=LogConfig)


# --- Config loading ---


def _get_user_data_dir() -> Path:
    """Get the user's data directory ($HOME/.dbg-console)."""
    return Path.home() / ".dbg-console"


def _looks_like_path(name_or_path: str) -> bool:
    return "/" in name_or_path or "\\" in name_or_path or name_or_path.endswith(".yml")


def _get_config_search_paths(config_name: str) -> list[Path]:
    config_filename = f"{config_name}.yml"
    return [
        _get_user_data_dir() / "configs" / config_filename,
        Path.cwd() / "configs" / config_filename,
    ]


def _find_config_file(config_name_or_path: str) -> Path | None:
    """Find a config file by name or path.

    Search order:
    1. If it looks like a path (contains / or \\ or ends in .yml), treat as path
    2. $HOME/.dbg-console/configs/<name>.yml
    3. Current working directory configs/<name>.yml
    """
    if _looks_like_path(config_name_or_path):
        path = Path(config_name_or_path).expanduser()
        return path if path.is_file() else None

    for candidate in _get_config_search_paths(config_name_or_path):
        if candidate.is_file():
            return candidate
    return None


def load_config(config_name_or_path: str | None = None) -> Config:
    """Load configuration from a YAML file.

    Args:
        config_name_or_path: Config name (without .yml) or a path. If None or
            empty, uses 'default', which may be absent.

    Returns:
        Config with loaded values merged over defaults.

    Raises:
        FileNotFoundError: If a non-default config is specified but not found.
        ValueError: If the file is malformed or holds a value of the wrong type.
    """
    if not config_name_or_path:
        config_name_or_path = "default"

    config = Config()
    config_path = _find_config_file(config_name_or_path)

    if config_path is None:
        if config_name_or_path == "default":
            return config
        if _looks_like_path(config_name_or_path):
            raise FileNotFoundError(f"Config file not found: {config_name_or_path}")
        paths_str = "\n  - ".join(str(p) for p in _get_config_search_paths(config_name_or_path))
        raise FileNotFoundError(
            f"Config '{config_name_or_path}' not found. Searched:\n  - {paths_str}"
        )

    with open(config_path, encoding="utf-8") as f:
        data = parse_simple_yaml(f.read())
    _merge_config(config, data)
    return config


def _section(data: dict, name: str) -> dict:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be a mapping")
    return value


def _expect_bool(section: str, key: str, value) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{section}.{key} must be true or false, got {value!r}")
    return value


def _merge_config(config: Config, data: dict):
    """Merge parsed YAML data into a Config object."""
    console = _section(data, "console")
    if "enabled" in console:
        enabled = console["enabled"]
        config.console.enabled = None if enabled is None else _expect_bool("console", "enabled", enabled)

    keys = _section(data, "keys")
    if "valid_chars" in keys:
        # Bare digits parse as numbers; the allow-list is always text
        config.keys.valid_chars = str(keys["valid_chars"])

    log = _section(data, "log")
    if "enabled" in log:
        config.log.enabled = _expect_bool("log", "enabled", log["enabled"])
    if "path" in log:
        config.log.path = str(log["path"])


def get_default_config() -> Config:
    """Return a Config with all default values."""
    return Config()


def console_enabled(config: Config | None = None) -> bool:
    """Decide whether consoles are real or inert for this process.

    The DBG_CONSOLE_FORCE_ENABLED environment variable wins, then the
    config's ``console.enabled``, then ``__debug__`` (False under ``python -O``).
    """
    forced = os.environ.get(FORCE_ENABLED_ENV, "").strip().lower()
    if forced in TRUTHY:
        return True
    if forced in FALSY:
        return False
    if config is not None and config.console.enabled is not None:
        return config.console.enabled
    return __debug__
