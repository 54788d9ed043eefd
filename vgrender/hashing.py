"""Deterministic 64-bit hashing with seed combination."""

from __future__ import annotations

import dataclasses
import enum
import struct
from pathlib import PurePath
from typing import Any

_MASK = 0xFFFFFFFFFFFFFFFF
_GOLDEN = 0x9E3779B9
_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3


def _fnv1a(data: bytes) -> int:
    h = _FNV_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & _MASK
    return h


def hash_value(value: Any) -> int:
    """Return a stable 64-bit hash of ``value``.

    Integers hash to themselves (modulo 2**64), enums to the hash of their
    value, strings, bytes and paths by FNV-1a, and sequences and dataclass
    instances by combining their elements in order.
    """
    if value is None:
        return 0
    if isinstance(value, enum.Enum):
        return hash_value(value.value)
    if isinstance(value, int):
        return value & _MASK
    if isinstance(value, float):
        if value == 0.0:
            return 0
        return _fnv1a(struct.pack("<d", value))
    if isinstance(value, str):
        return _fnv1a(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _fnv1a(bytes(value))
    if isinstance(value, PurePath):
        return hash_value(value.as_posix())
    if isinstance(value, (tuple, list)):
        return hash_combine(0, *value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return hash_combine(0, *(getattr(value, f.name) for f in dataclasses.fields(value)))
    raise TypeError(f"cannot hash value of type {type(value).__name__}")


def hash_combine(seed: int, *args: Any) -> int:
    """Mix the hashes of ``args`` into ``seed`` in order and return the new seed."""
    seed &= _MASK
    for arg in args:
        mixed = (hash_value(arg) + _GOLDEN + (seed << 6) + (seed >> 2)) & _MASK
        seed ^= mixed
    return seed