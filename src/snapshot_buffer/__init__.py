"""Mutable text buffer with a bounded snapshot undo history."""

from .buffer import BufferRangeError, Snapshot, VersionedBuffer

__all__ = [
    "BufferRangeError",
    "Snapshot",
    "VersionedBuffer",
    "buffer",
    "runtime",
    "settings",
]

__version__ = "0.1.0"
