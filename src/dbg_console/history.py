from __future__ import annotations

from collections import deque
from itertools import groupby
from typing import Iterable, Iterator


def dedup(entries: Iterable[str]) -> Iterator[str]:
    """Yield entries with runs of consecutive equal strings collapsed to one."""
    for entry, _ in groupby(entries):
        yield entry


class HistoryView:
    """Read-only, restartable view over a snapshot of confirmed entries.

    Iterating yields newest first. Each call to ``iter()`` starts over from
    the snapshot taken when the view was created, so later confirms on the
    console do not show up in an existing view.
    """

    __slots__ = ("_entries", "_deduped")

    def __init__(self, entries: Iterable[str] = (), deduped: bool = False):
        self._entries = tuple(entries)
        self._deduped = deduped

    def __iter__(self) -> Iterator[str]:
        if self._deduped:
            return dedup(self._entries)
        return iter(self._entries)

    def __len__(self) -> int:
        if self._deduped:
            return sum(1 for _ in self)
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"HistoryView({list(self)!r})"

    def deduped(self) -> HistoryView:
        return HistoryView(self._entries, deduped=True)


class HistoryList:
    """Confirmed entries, newest first. Duplicates are kept."""

    def __init__(self, entries: Iterable[str] = ()):
        self._entries: deque[str] = deque(entries)

    def push(self, entry: str):
        """Record a newly confirmed entry as the newest one."""
        self._entries.appendleft(entry)

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, HistoryList):
            return NotImplemented
        return self._entries == other._entries

    def view(self) -> HistoryView:
        return HistoryView(self._entries)
