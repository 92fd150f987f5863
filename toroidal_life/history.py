"""
Fixed-capacity FIFO sample buffer.

A circular list with a head index and a count. Once full, every push
overwrites the oldest sample, so the buffer always holds the most recent
`capacity` values in insertion order.
"""

from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedHistoryBuffer(Generic[T]):
    """Ring buffer keeping the last `capacity` pushed values.

    A capacity below 1 is rejected: a buffer that can never hold a sample
    has no use as a smoothing window.
    """

    def __init__(self, capacity):
        """
        Args:
            capacity: Maximum number of samples kept, a positive integer

        Raises:
            ValueError: If capacity is not a positive integer
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self._items = [None] * capacity
        self._head = 0  # index of the oldest sample
        self._count = 0

    @property
    def capacity(self):
        return len(self._items)

    @property
    def is_full(self):
        return self._count == len(self._items)

    def __len__(self):
        return self._count

    def push(self, value):
        """Append value, evicting the oldest sample when full."""
        capacity = len(self._items)
        if self._count < capacity:
            self._items[(self._head + self._count) % capacity] = value
            self._count += 1
        else:
            self._items[self._head] = value
            self._head = (self._head + 1) % capacity

    def as_spans(self):
        """Contents as two contiguous slices of the ring, older span first.

        Concatenating the two lists gives the samples oldest to newest. The
        second span is empty whenever the samples do not wrap around the
        end of the ring.
        """
        end = self._head + self._count
        if end <= len(self._items):
            return self._items[self._head:end], []
        return self._items[self._head:], self._items[:end - len(self._items)]

    def snapshot(self):
        """Samples oldest to newest, as a new list."""
        first, second = self.as_spans()
        return first + second

    def __iter__(self):
        return iter(self.snapshot())

    def clear(self):
        self._items = [None] * len(self._items)
        self._head = 0
        self._count = 0

    def sum(self):
        first, second = self.as_spans()
        return sum(first) + sum(second)

    def mean(self):
        """Average of the samples, or None when empty."""
        if self._count == 0:
            return None
        return self.sum() / self._count

    def __repr__(self):
        return f"BoundedHistoryBuffer(capacity={self.capacity}, samples={self.snapshot()!r})"
