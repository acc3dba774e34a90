"""Versioned text buffer and its snapshot history."""

from .history import Snapshot, SnapshotHistory
from .validation import BufferRangeError, ensure_capacity, ensure_range
from .versioned import Edit, VersionedBuffer

__all__ = [
    "VersionedBuffer",
    "Edit",
    "Snapshot",
    "SnapshotHistory",
    "BufferRangeError",
    "ensure_capacity",
    "ensure_range",
]
