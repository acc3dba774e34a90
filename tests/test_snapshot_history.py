import dataclasses

import pytest

from snapshot_buffer.buffer import (
    BufferRangeError,
    Snapshot,
    SnapshotHistory,
    ensure_capacity,
    ensure_range,
)


def make_history(*texts: str, capacity: int = 3) -> SnapshotHistory:
    history = SnapshotHistory(capacity)
    for text in texts:
        history.push(text)
    return history


def test_push_and_pop_are_lifo() -> None:
    history = make_history("a", "b")

    assert history.pop() == Snapshot(text="b", sequence=2)
    assert history.pop() == Snapshot(text="a", sequence=1)
    assert history.pop() is None


def test_push_reports_evicted_oldest() -> None:
    history = make_history("a", "b", "c")

    evicted = history.push("d")

    assert evicted is not None
    assert evicted.text == "a"
    assert history.texts() == ("b", "c", "d")


def test_push_below_capacity_evicts_nothing() -> None:
    history = make_history("a")

    assert history.push("b") is None
    assert len(history) == 2


def test_zero_capacity_discards_pushes() -> None:
    history = SnapshotHistory(0)

    assert history.push("a") is None
    assert len(history) == 0
    assert history.peek() is None


def test_resize_returns_evicted_oldest_first() -> None:
    history = make_history("a", "b", "c")

    evicted = history.resize(1)

    assert [snapshot.text for snapshot in evicted] == ["a", "b"]
    assert history.capacity == 1
    assert history.texts() == ("c",)


def test_resize_larger_keeps_entries() -> None:
    history = make_history("a", "b")

    assert history.resize(10) == []
    assert history.texts() == ("a", "b")
    assert history.capacity == 10


def test_clear_keeps_capacity() -> None:
    history = make_history("a", "b")

    history.clear()

    assert len(history) == 0
    assert history.capacity == 3


def test_sequence_keeps_increasing_after_pop() -> None:
    history = make_history("a", "b")
    history.pop()

    history.push("c")

    assert [snapshot.sequence for snapshot in history] == [1, 3]


def test_snapshot_is_frozen() -> None:
    snapshot = Snapshot(text="a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.text = "b"  # type: ignore[misc]


def test_ensure_range_accepts_bounds() -> None:
    assert ensure_range(0, 0, 0) == (0, 0)
    assert ensure_range(1, 3, 3) == (1, 3)


def test_ensure_range_error_carries_context() -> None:
    with pytest.raises(BufferRangeError) as excinfo:
        ensure_range(2, 5, 4)

    error = excinfo.value
    assert (error.start, error.end, error.length) == (2, 5, 4)
    assert "past content length" in str(error)


def test_ensure_range_rejects_non_integers() -> None:
    with pytest.raises(TypeError):
        ensure_range(0.5, 1, 3)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        ensure_range(True, 1, 3)


@pytest.mark.parametrize("value", [-1, -10])
def test_ensure_capacity_rejects_negative(value: int) -> None:
    with pytest.raises(ValueError):
        ensure_capacity(value)


def test_ensure_capacity_rejects_non_integers() -> None:
    with pytest.raises(TypeError):
        ensure_capacity("5")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        SnapshotHistory(False)
