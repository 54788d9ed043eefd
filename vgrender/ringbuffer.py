"""Fixed-capacity ring buffer that overwrites its oldest element when full."""

from __future__ import annotations

from typing import Any


class RingBuffer:
    """Circular buffer of fixed capacity.

    Pushing onto a full buffer drops the oldest element. Indexing addresses
    the underlying storage slots directly, not logical positions.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("ring buffer size must be positive")
        self._buffer: list[Any] = [None] * size
        self._head = 1 % size
        self._tail = 0
        self._count = 0

    def _bump_head(self) -> None:
        if self._count == 0:
            return
        self._head += 1
        self._count -= 1
        if self._head == len(self._buffer):
            self._head = 0

    def _bump_tail(self) -> None:
        self._tail += 1
        self._count += 1
        if self._tail == len(self._buffer):
            self._tail = 0

    def front(self) -> Any:
        """Return the oldest element."""
        if self._count == 0:
            raise IndexError("front of empty ring buffer")
        return self._buffer[self._head]

    def back(self) -> Any:
        """Return the most recently pushed element."""
        if self._count == 0:
            raise IndexError("back of empty ring buffer")
        return self._buffer[self._tail]

    def push_back(self, element: Any) -> None:
        """Append ``element``, dropping the oldest one if the buffer is full."""
        self._bump_tail()
        if self._count > len(self._buffer):
            self._bump_head()
        self._buffer[self._tail] = element

    def pop_front(self) -> None:
        """Drop the oldest element; does nothing when empty."""
        self._bump_head()

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index: int) -> Any:
        return self._buffer[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self._buffer[index] = value