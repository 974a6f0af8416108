"""Continuous sway functions for light modulation.

Both functions map a continuous phase to [-1, 1] and are smooth (continuous
first derivative), deterministic and cheap:

- ``sway_tight``: periodic with period 1, peak at integers, trough at
  half-integers, extrema flatter than a sine (a triangle wave eased with a
  quintic curve).
- ``sway_randomized``: seeded 1-D value noise; a 32-bit integer hash of the
  seed and the integer part of the phase picks a lattice value, and adjacent
  lattice values are blended with a Hermite curve. The hash is pure integer
  arithmetic, so a seed gives the same waveform in every process.

The ``*_array`` variants perform the same arithmetic over numpy arrays.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from glimmer.core.utils.math import (
    smootherstep,
    smootherstep_array,
    smoothstep,
    smoothstep_array,
)

_MASK32 = 0xFFFFFFFF
_HALF_RANGE = 2147483648.0  # 2**31


def _mix32(z: int) -> int:
    z ^= z >> 16
    z = (z * 0x7FEB352D) & _MASK32
    z ^= z >> 15
    z = (z * 0x846CA68B) & _MASK32
    z ^= z >> 16
    return z


def _lattice(seed: int, cell: int) -> float:
    """Hashed lattice value in [-1, 1)."""
    z = _mix32((seed & _MASK32) ^ _mix32(cell & _MASK32))
    return (z - _HALF_RANGE) / _HALF_RANGE


def sway_randomized(seed: int, value: float) -> float:
    """Seeded smooth noise in [-1, 1).

    Args:
        seed: Any int; only the low 32 bits are used.
        value: Continuous phase; each unit step reaches a new random level.

    Returns:
        Noise value; 0.0 for non-finite input.
    """
    if not math.isfinite(value):
        return 0.0
    floor = math.floor(value)
    start = _lattice(seed, floor)
    end = _lattice(seed, floor + 1)
    blend = smoothstep(value - floor)
    return start + blend * (end - start)


def sway_tight(value: float) -> float:
    """Periodic pulse in [-1, 1] with period 1 and flat peaks.

    Returns 1.0 at every integer and -1.0 at every half-integer; 0.0 for
    non-finite input.
    """
    if not math.isfinite(value):
        return 0.0
    fraction = value - math.floor(value)
    distance = abs(fraction - 0.5) * 2.0
    return smootherstep(distance) * 2.0 - 1.0


# =============================================================================
# Vectorized variants
# =============================================================================


def _mix32_array(z: np.ndarray) -> np.ndarray:
    z = z ^ (z >> 16)
    z = (z * 0x7FEB352D) & _MASK32
    z = z ^ (z >> 15)
    z = (z * 0x846CA68B) & _MASK32
    z = z ^ (z >> 16)
    return z


def _lattice_array(seed: int, cells: np.ndarray) -> np.ndarray:
    hashed = _mix32_array((cells & _MASK32).astype(np.uint64))
    z = _mix32_array(np.uint64(seed & _MASK32) ^ hashed)
    result: np.ndarray = (z.astype(np.float64) - _HALF_RANGE) / _HALF_RANGE
    return result


def sway_randomized_array(seed: int, values: Any) -> np.ndarray:
    """Vectorized :func:`sway_randomized`."""
    values = np.asarray(values, dtype=np.float64)
    finite = np.isfinite(values)
    safe = np.where(finite, values, 0.0)
    floors = np.floor(safe)
    cells = floors.astype(np.int64)
    start = _lattice_array(seed, cells)
    end = _lattice_array(seed, cells + 1)
    blend = smoothstep_array(safe - floors)
    return np.where(finite, start + blend * (end - start), 0.0)


def sway_tight_array(values: Any) -> np.ndarray:
    """Vectorized :func:`sway_tight`."""
    values = np.asarray(values, dtype=np.float64)
    finite = np.isfinite(values)
    safe = np.where(finite, values, 0.0)
    distance = np.abs((safe - np.floor(safe)) - 0.5) * 2.0
    return np.where(finite, smootherstep_array(distance) * 2.0 - 1.0, 0.0)
