"""Thread-local pseudo-random number helpers with deterministic seeding."""

from __future__ import annotations

import random
import threading

_DEFAULT_SEED = 5489
_local = threading.local()


def _generator() -> random.Random:
    gen = getattr(_local, "generator", None)
    if gen is None:
        gen = random.Random(_DEFAULT_SEED)
        _local.generator = gen
    return gen


def seed(*args: int) -> None:
    """Reseed the calling thread's generator from a sequence of 32-bit integers."""
    material = b"".join((int(a) & 0xFFFFFFFF).to_bytes(4, "little") for a in args)
    _generator().seed(material)


def rand_int(low: int, high: int) -> int:
    """Return a uniformly distributed integer in ``[low, high]``."""
    if low > high:
        raise ValueError("low must not exceed high")
    return _generator().randint(low, high)


def rand_float(low: float, high: float) -> float:
    """Return a uniformly distributed float in ``[low, high)``."""
    if low > high:
        raise ValueError("low must not exceed high")
    return low + (high - low) * _generator().random()