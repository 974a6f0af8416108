"""Math utilities for common operations."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def smoothstep(x: float) -> float:
    """Hermite ease 3x^2 - 2x^3 for x in [0, 1]; zero slope at both ends."""
    return x * x * (3.0 - 2.0 * x)


def smoothstep_array(x: np.ndarray) -> np.ndarray:
    result: np.ndarray = x * x * (3.0 - 2.0 * x)
    return result


def to_int32(value: int) -> int:
    """Wrap an arbitrary int into the signed 32-bit range."""
    return ((int(value) + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def rotl32(value: int, shift: int) -> int:
    """Rotate a 32-bit pattern left by ``shift`` bits."""
    value &= 0xFFFFFFFF
    return ((value << shift) | (value >> (32 - shift))) & 0xFFFFFFFF


def smootherstep(x: float) -> float:
    """Quintic ease 6x^5 - 15x^4 + 10x^3; zero slope and curvature at both ends."""
    return x * x * x * (x * (x * 6.0 - 15.0) + 10.0)


def smootherstep_array(x: np.ndarray) -> np.ndarray:
    result: np.ndarray = x * x * x * (x * (x * 6.0 - 15.0) + 10.0)
    return result
