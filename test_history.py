"""Tests for the fixed-capacity FIFO sample buffer."""

import pytest

from toroidal_life.history import BoundedHistoryBuffer


def test_push_below_capacity():
    buf = BoundedHistoryBuffer(4)
    for v in (1, 2, 3):
        buf.push(v)
    assert len(buf) == 3
    assert buf.capacity == 4
    assert not buf.is_full
    assert buf.snapshot() == [1, 2, 3]


@pytest.mark.parametrize("capacity, extra", [(1, 1), (3, 1), (3, 2), (5, 7), (4, 12)])
def test_overflow_keeps_most_recent(capacity, extra):
    buf = BoundedHistoryBuffer(capacity)
    pushed = list(range(capacity + extra))
    for v in pushed:
        buf.push(v)
    assert len(buf) == capacity
    assert buf.is_full
    assert buf.snapshot() == pushed[-capacity:]
    assert list(buf) == pushed[-capacity:]


def test_spans_concatenate_oldest_first():
    buf = BoundedHistoryBuffer(4)
    for v in range(6):
        buf.push(v)
    first, second = buf.as_spans()
    assert first + second == [2, 3, 4, 5]
    assert len(first) + len(second) == 4
    assert second, "wrapped contents span the ring boundary"


def test_spans_without_wrap():
    buf = BoundedHistoryBuffer(4)
    buf.push("a")
    buf.push("b")
    assert buf.as_spans() == (["a", "b"], [])


def test_clear_keeps_capacity():
    buf = BoundedHistoryBuffer(3)
    for v in range(5):
        buf.push(v)
    buf.clear()
    assert len(buf) == 0
    assert buf.capacity == 3
    assert buf.snapshot() == []
    buf.push(9)
    assert buf.snapshot() == [9]


def test_sum_and_mean():
    buf = BoundedHistoryBuffer(3)
    assert buf.mean() is None
    assert buf.sum() == 0
    for v in (10.0, 20.0, 30.0, 40.0):
        buf.push(v)
    assert buf.sum() == pytest.approx(90.0)
    assert buf.mean() == pytest.approx(30.0)


@pytest.mark.parametrize("capacity", [0, -1, 2.5, None, True])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(ValueError):
        BoundedHistoryBuffer(capacity)
