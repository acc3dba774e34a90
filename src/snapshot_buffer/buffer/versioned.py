"""Text buffer facade with a bounded, snapshot-based undo history."""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import ContextManager, Iterator, Optional

from snapshot_buffer.runtime import telemetry
from snapshot_buffer.settings import get_settings

from .history import Snapshot, SnapshotHistory
from .validation import ensure_range


class VersionedBuffer:
    """Mutable text with a capped stack of pre-mutation snapshots.

    ``append`` and ``delete`` capture the current text before changing it
    while auto-snapshot is on; ``undo`` restores the newest capture and drops
    it. There is no redo. Passing ``text`` (even ``""``) records that text as
    the first snapshot, so undo depth is one more than the number of edits.
    With ``synchronized=True`` every public call holds a single re-entrant
    lock.
    """

    def __init__(
        self,
        text: Optional[str] = None,
        capacity: Optional[int] = None,
        *,
        auto_snapshot: bool = True,
        synchronized: bool = False,
        name: str = "default",
        logger_name: Optional[str] = None,
    ) -> None:
        if capacity is None:
            capacity = get_settings().history_capacity
        self.name = name
        self._logger_name = logger_name
        self._history = SnapshotHistory(capacity)
        self._auto_snapshot = auto_snapshot
        self._lock: ContextManager[object] = (
            threading.RLock() if synchronized else nullcontext()
        )
        self._text = ""
        if text is not None:
            self._text = _require_str(text)
            if self._auto_snapshot:
                self._capture()

    @classmethod
    def from_text(
        cls, text: str, *, capacity: Optional[int] = None, name: str = "default"
    ) -> "VersionedBuffer":
        return cls(text, capacity, name=name)

    # -- accessors -------------------------------------------------------

    @property
    def capacity(self) -> int:
        with self._lock:
            return self._history.capacity

    @property
    def auto_snapshot(self) -> bool:
        with self._lock:
            return self._auto_snapshot

    @property
    def history_size(self) -> int:
        with self._lock:
            return len(self._history)

    def can_undo(self) -> bool:
        with self._lock:
            return len(self._history) > 0

    def history(self) -> tuple[str, ...]:
        """Snapshot texts, oldest first."""

        with self._lock:
            return self._history.texts()

    def peek(self) -> Optional[Snapshot]:
        with self._lock:
            return self._history.peek()

    def to_text(self) -> str:
        with self._lock:
            return self._text

    def __str__(self) -> str:
        return self.to_text()

    def __len__(self) -> int:
        with self._lock:
            return len(self._text)

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"{type(self).__name__}(name={self.name!r}, "
                f"length={len(self._text)}, "
                f"history={len(self._history)}/{self._history.capacity})"
            )

    # -- mutations -------------------------------------------------------

    def append(self, text: str) -> None:
        text = _require_str(text)
        with Edit(self, "append") as edit:
            edit.annotate("appended", len(text))
            if self._auto_snapshot:
                edit.capture()
            self._text += text

    def delete(self, start: int, end: int) -> None:
        """Remove ``[start, end)``; the range must lie within the content."""

        with Edit(self, "delete") as edit:
            edit.annotate("range", f"{start}:{end}")
            start, end = ensure_range(start, end, len(self._text))
            if self._auto_snapshot:
                edit.capture()
            self._text = self._text[:start] + self._text[end:]

    def undo(self) -> bool:
        with Edit(self, "undo") as edit:
            snapshot = self._history.pop()
            if snapshot is None:
                edit.annotate("status", "noop")
                return False
            self._text = snapshot.text
            self._event(
                "buffer.undo",
                sequence=snapshot.sequence,
                remaining=len(self._history),
            )
            return True

    def save_manual_snapshot(self) -> None:
        with Edit(self, "save_manual_snapshot") as edit:
            edit.capture()

    # -- history management ----------------------------------------------

    def enable_auto_snapshot(self) -> None:
        with self._lock:
            self._auto_snapshot = True

    def disable_auto_snapshot(self) -> None:
        with self._lock:
            self._auto_snapshot = False

    @contextmanager
    def auto_snapshot_suspended(self) -> Iterator["VersionedBuffer"]:
        """Run a block with auto-snapshot off, restoring the previous flag."""

        with self._lock:
            previous = self._auto_snapshot
            self._auto_snapshot = False
        try:
            yield self
        finally:
            with self._lock:
                self._auto_snapshot = previous

    def clear_history(self) -> None:
        with Edit(self, "clear_history"):
            dropped = len(self._history)
            self._history.clear()
            self._event("history.cleared", dropped=dropped)

    def set_capacity(self, new_capacity: int) -> None:
        """Change the capacity, evicting the oldest snapshots that no longer fit."""

        with Edit(self, "set_capacity") as edit:
            edit.annotate("capacity", new_capacity)
            evicted = self._history.resize(new_capacity)
            for snapshot in evicted:
                self._event("history.evicted", sequence=snapshot.sequence)

    # -- internals -------------------------------------------------------

    def _capture(self) -> None:
        evicted = self._history.push(self._text)
        if evicted is not None:
            self._event("history.evicted", sequence=evicted.sequence)

    def _event(self, name: str, **data: object) -> None:
        telemetry.record_event(
            name,
            level="debug",
            data={"buffer": self.name, **data},
            logger_name=self._logger_name,
        )


class Edit(AbstractContextManager["Edit"]):
    """One buffer operation: holds the buffer lock inside a telemetry span."""

    def __init__(self, buffer: VersionedBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Edit":
        self.buffer._lock.__enter__()
        try:
            self._span_cm = telemetry.span(
                name=f"buffer::{self.label}",
                logger_name=self.buffer._logger_name,
                component="buffer",
                context={"buffer": self.buffer.name},
            )
            self._handle = self._span_cm.__enter__()
        except BaseException:
            self.buffer._lock.__exit__(None, None, None)
            raise
        return self

    def annotate(self, key: str, value: object) -> None:
        if self._handle is not None:
            self._handle.annotate(key, value)

    def capture(self) -> None:
        self.buffer._capture()

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        finally:
            self.buffer._lock.__exit__(exc_type, exc, tb)
        return False


def _require_str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"text must be a str, got {type(value).__name__}")
    return value


__all__ = ["Edit", "VersionedBuffer"]
