from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class Live:
    """Cursor state: the live buffer is displayed and edited."""


@dataclass(frozen=True)
class Browsing:
    """Cursor state: history entry `index` is displayed (0 = newest)."""

    index: int


LIVE = Live()

CursorState = Live | Browsing


def ts_str(t: float) -> str:
    lt = time.localtime(t)
    return time.strftime("%H:%M:%S", lt)
