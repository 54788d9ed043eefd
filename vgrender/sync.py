"""Mutual exclusion primitive with an explicit lock/unlock interface."""

from __future__ import annotations

import threading


class CriticalSection:
    """Non-recursive mutex usable directly or as a context manager."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def lock(self) -> None:
        """Block until the section is acquired."""
        self._lock.acquire()

    def try_lock(self) -> bool:
        """Acquire the section without blocking; return whether it succeeded."""
        return self._lock.acquire(blocking=False)

    def unlock(self) -> None:
        """Release the section. Raises RuntimeError if it is not held."""
        self._lock.release()

    def __enter__(self) -> "CriticalSection":
        self.lock()
        return self

    def __exit__(self, *args: object) -> None:
        self.unlock()