"""
Fixed-capacity circular buffer.

Stores per-ticker price history with O(1) append; once full, each push
silently overwrites the oldest item.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from src.core.exceptions.simulation import ConfigurationError


T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Circular buffer ordered oldest to newest."""

    def __init__(self, capacity: int) -> None:
        """Create an empty buffer.

        Args:
            capacity: Maximum number of items kept

        Raises:
            ConfigurationError: If capacity is not positive
        """
        if capacity <= 0:
            raise ConfigurationError(f"RingBuffer capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._buffer: list[T | None] = [None] * capacity
        self._head = 0
        self._size = 0

    def push(self, item: T) -> None:
        """Add an item, overwriting the oldest one when full."""
        self._buffer[self._head] = item
        self._head = (self._head + 1) % self._capacity
        self._size = min(self._size + 1, self._capacity)

    def peek(self) -> T | None:
        """Get the most recently added item."""
        if self._size == 0:
            return None
        return self._buffer[(self._head - 1) % self._capacity]

    def get(self, index: int) -> T | None:
        """Get item at index (0 = oldest, size - 1 = newest)."""
        if index < 0 or index >= self._size:
            return None
        start = self._head if self._size == self._capacity else 0
        return self._buffer[(start + index) % self._capacity]

    def to_list(self) -> list[T]:
        """Get all items, oldest first."""
        return list(self)

    def get_last(self, n: int) -> list[T]:
        """Get the last n items, newest first."""
        count = min(max(n, 0), self._size)
        return [self.get(self._size - 1 - i) for i in range(count)]  # type: ignore[misc]

    def clear(self) -> None:
        """Remove all items."""
        self._buffer = [None] * self._capacity
        self._head = 0
        self._size = 0

    @property
    def size(self) -> int:
        """Number of items currently held."""
        return self._size

    @property
    def capacity(self) -> int:
        """Maximum number of items."""
        return self._capacity

    @property
    def is_full(self) -> bool:
        return self._size == self._capacity

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self.get(i)  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self._capacity}, size={self._size})"
