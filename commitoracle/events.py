"""Ordered, append-only log of emitted outcome events."""

from __future__ import annotations

from collections import deque
from typing import Iterator, Optional


class EventLog:
    """Outcome tags in call order, one entry per evaluation.

    Unbounded by default. With ``max_entries`` only the most recent tags
    are kept; ``dropped`` counts the ones that fell off the front.
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._entries: deque[str] = deque(maxlen=max_entries)
        self.dropped = 0

    @property
    def max_entries(self) -> Optional[int]:
        return self._entries.maxlen

    def append(self, tag: str) -> None:
        if self._entries.maxlen is not None and len(self._entries) == self._entries.maxlen:
            self.dropped += 1
        self._entries.append(tag)

    def get_logs(self) -> list[str]:
        """Return a copy of the retained tags, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self.dropped = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
