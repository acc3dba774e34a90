"""Bounded snapshot history: oldest entries evicted, newest popped first."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional

from .validation import ensure_capacity


@dataclass(frozen=True, slots=True)
class Snapshot:
    text: str
    sequence: int = 0


class SnapshotHistory:
    """Linear undo stack capped at ``capacity`` entries.

    ``deque(maxlen=...)`` drops from the left on append, so a full history
    loses its oldest snapshot when a new one is pushed. Shrinking the capacity
    rebuilds the deque, which keeps the rightmost (newest) entries.
    """

    def __init__(self, capacity: int) -> None:
        capacity = ensure_capacity(capacity)
        self._entries: Deque[Snapshot] = deque(maxlen=capacity)
        self._sequence = 0

    @property
    def capacity(self) -> int:
        maxlen = self._entries.maxlen
        return 0 if maxlen is None else maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._entries)

    def push(self, text: str) -> Optional[Snapshot]:
        """Record ``text`` as the newest snapshot.

        Returns the evicted snapshot when the history was already full.
        """

        if not self.capacity:
            return None
        evicted: Optional[Snapshot] = None
        if len(self._entries) == self.capacity:
            evicted = self._entries[0]
        self._sequence += 1
        self._entries.append(Snapshot(text=text, sequence=self._sequence))
        return evicted

    def pop(self) -> Optional[Snapshot]:
        if self._entries:
            return self._entries.pop()
        return None

    def peek(self) -> Optional[Snapshot]:
        if self._entries:
            return self._entries[-1]
        return None

    def clear(self) -> None:
        self._entries.clear()

    def resize(self, capacity: int) -> List[Snapshot]:
        """Change the capacity, returning the snapshots evicted (oldest first)."""

        capacity = ensure_capacity(capacity)
        overflow = max(0, len(self._entries) - capacity)
        evicted = [self._entries[index] for index in range(overflow)]
        self._entries = deque(self._entries, maxlen=capacity)
        return evicted

    def texts(self) -> tuple[str, ...]:
        return tuple(entry.text for entry in self._entries)


__all__ = ["Snapshot", "SnapshotHistory"]
