"""Validation helpers shared by the history and the buffer facade."""

from __future__ import annotations


class BufferRangeError(IndexError):
    """Raised when a delete range falls outside the buffer content."""

    def __init__(self, message: str, *, start: int, end: int, length: int) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.length = length


def _require_int(value: object, label: str) -> int:
    # bool is an int subclass but never a meaningful index or size
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{label} must be an int, got {type(value).__name__}")
    return value


def ensure_range(start: int, end: int, length: int) -> tuple[int, int]:
    start = _require_int(start, "start")
    end = _require_int(end, "end")
    if start < 0:
        raise BufferRangeError(
            f"start {start} is negative", start=start, end=end, length=length
        )
    if start > end:
        raise BufferRangeError(
            f"start {start} is past end {end}", start=start, end=end, length=length
        )
    if end > length:
        raise BufferRangeError(
            f"end {end} is past content length {length}",
            start=start,
            end=end,
            length=length,
        )
    return start, end


def ensure_capacity(capacity: int) -> int:
    """Validate a snapshot capacity; zero means no history is retained."""

    capacity = _require_int(capacity, "capacity")
    if capacity < 0:
        raise ValueError(f"capacity must be >= 0, got {capacity}")
    return capacity


__all__ = ["BufferRangeError", "ensure_capacity", "ensure_range"]
