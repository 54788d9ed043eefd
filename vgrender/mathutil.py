"""Small numeric helpers: alignment, powers of two, range remapping and filter kernels."""

from __future__ import annotations

import math

_U32 = 0xFFFFFFFF


def aligned_size(base: int, alignment: int) -> int:
    """Round ``base`` up to the next multiple of ``alignment`` (a power of two)."""
    if alignment <= 0:
        raise ValueError("alignment must be positive")
    return (base + alignment - 1) & ~(alignment - 1)


def is_power_of_2(value: int) -> bool:
    """Return True if the 32-bit value is a power of two. Zero also counts."""
    v = value & _U32
    return (v & ((v - 1) & _U32)) == 0


def next_power_of_2(value: int) -> int:
    """Round a 32-bit value up to a power of two; powers of two are returned unchanged."""
    v = (value - 1) & _U32
    for shift in (1, 2, 4, 8, 16):
        v |= v >> shift
    return (v + 1) & _U32


def previous_power_of_2(value: int) -> int:
    """Return the largest power of two strictly below ``value`` (at least 1)."""
    v = value & _U32
    result = 1
    while result * 2 < v:
        result *= 2
    return result


def remap_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map ``value`` linearly from one range onto another without clamping."""
    return out_min + ((value - in_min) / (in_max - in_min)) * (out_max - out_min)


def remap_range_clamped(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map ``value`` linearly and clamp the result to ``[out_min, out_max]``."""
    mapped = remap_range(value, in_min, in_max, out_min, out_max)
    if mapped < out_min:
        return out_min
    if out_max < mapped:
        return out_max
    return mapped


def gaussian_kernel(radius: int, sigma: float) -> list[float]:
    """One-sided 1D Gaussian weights from the centre outwards, normalised over the mirrored kernel."""
    if radius <= 0:
        raise ValueError("radius must be positive")
    if sigma == 0:
        raise ValueError("sigma must be non-zero")
    weights = [math.exp(-(i ** 2) / (2.0 * sigma ** 2)) for i in range(radius)]
    total = 2.0 * sum(weights) - weights[0]
    return [w / total for w in weights]