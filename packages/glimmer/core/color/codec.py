"""YCwCm+Sat packed color codec.

A packed color is a 32-bit pattern held in a plain ``int``. The same bits are
also a valid IEEE-754 single-precision float, so packed colors can live in
float-sized storage; use :func:`bits_to_float` and :func:`float_to_bits` to
move between the two views.

Contract:
    - luma        = bits 0..7    (mask: 0x000000FF)
    - warm        = bits 8..15   (mask: 0x0000FF00)
    - mild        = bits 16..23  (mask: 0x00FF0000)
    - saturation  = bits 24..30  (mask: 0x7F000000), stored as saturation >> 1
    - bit 31 (float sign) is always 0

Luma is ``0.375R + 0.5G + 0.125B``; warm is the red/cyan axis ``R - B`` and
mild the green/magenta axis ``G - B``, both rescaled so 128 is neutral.
Saturation multiplies the chroma axes and keeps only its top seven bits.

Encoding is permissive: channel values outside 0..255 are wrapped by masking,
never rejected. A pattern whose float exponent (bits 23..30) would be all ones
has its saturation stepped down one level, so no packed color is ever a NaN or
infinity when viewed as a float.
"""

from __future__ import annotations

import math
from typing import Any, NamedTuple

import numpy as np

LUMA_MASK = 0x000000FF
WARM_MASK = 0x0000FF00
MILD_MASK = 0x00FF0000
SATURATION_MASK = 0x7F000000

_EXPONENT_MASK = 0x7F800000
_SATURATION_STEP = 1 << 24
_BITS = 0xFFFFFFFF


class YCwCmSat(NamedTuple):
    """Unpacked channels of a packed color.

    Integer form holds 0..255 per channel (saturation always even); float
    form holds the same values divided by 255.
    """

    luma: Any
    warm: Any
    mild: Any
    saturation: Any


# =============================================================================
# Float reinterpretation
# =============================================================================


def bits_to_float(bits: int) -> float:
    """Reinterpret a 32-bit pattern as an IEEE-754 single-precision float."""
    return float(np.uint32(int(bits) & _BITS).view(np.float32))


def float_to_bits(value: float) -> int:
    """Return the 32-bit pattern of ``value`` rounded to single precision."""
    return int(np.float32(value).view(np.uint32))


def is_finite_pattern(bits: int) -> bool:
    """True when the pattern is neither NaN nor infinity as a float."""
    return (int(bits) & _EXPONENT_MASK) != _EXPONENT_MASK


def _as_bits(packed: int | float) -> int:
    if isinstance(packed, (float, np.floating)):
        return float_to_bits(packed)
    return int(packed) & _BITS


# =============================================================================
# Scalar codec
# =============================================================================


def _channel_byte(value: int | float) -> int:
    """Float channels in [0, 1] scale by 255 (truncating); ints pass through."""
    if isinstance(value, (float, np.floating)):
        if not math.isfinite(value):
            return 0
        return int(value * 255)
    return int(value)


def _truncate(value: float) -> int:
    """Truncate toward zero; NaN and infinities become 0."""
    if not math.isfinite(value):
        return 0
    return int(value)


def _assemble(luma: int, warm: int, mild: int, saturation: int) -> int:
    bits = (
        ((saturation & 0xFE) << 23)  # bits 24-30: saturation >> 1
        | ((mild & 0xFF) << 16)
        | ((warm & 0xFF) << 8)
        | (luma & 0xFF)
    )
    if bits & _EXPONENT_MASK == _EXPONENT_MASK:
        bits -= _SATURATION_STEP
    return bits


def encode(
    luma: int | float,
    warm: int | float,
    mild: int | float,
    saturation: int | float,
) -> int:
    """Pack four channels into a YCwCm+Sat color.

    Each channel may be given as a float in [0, 1] or an int in [0, 255];
    the two forms can be mixed.

    Args:
        luma: Lightness; 0 is black, 255 (1.0) is white.
        warm: Red/cyan chroma; 128 (0.5) is neutral, higher is redder.
        mild: Green/magenta chroma; 128 (0.5) is neutral, higher is greener.
        saturation: Chroma multiplier; 128 (0.5) is neutral, 0 is grayscale.

    Returns:
        Packed 32-bit color pattern.

    Example:
        >>> hex(encode(255, 128, 128, 128))
        '0x408080ff'
    """
    return _assemble(
        _channel_byte(luma),
        _channel_byte(warm),
        _channel_byte(mild),
        _channel_byte(saturation),
    )


def decode(packed: int | float) -> YCwCmSat:
    """Unpack a color into integer channels.

    Args:
        packed: Packed pattern, or its float reinterpretation.

    Returns:
        YCwCmSat of ints; saturation is always even.
    """
    bits = _as_bits(packed)
    return YCwCmSat(
        luma=bits & 0xFF,
        warm=(bits >> 8) & 0xFF,
        mild=(bits >> 16) & 0xFF,
        saturation=(bits >> 23) & 0xFE,
    )


def decode_float(packed: int | float) -> YCwCmSat:
    """Unpack a color into float channels in [0, 1]."""
    channels = decode(packed)
    return YCwCmSat(*(c / 255.0 for c in channels))


def derive_channels(red: float, green: float, blue: float) -> tuple[float, float, float]:
    """Project a display RGB color (components in [0, 1]) onto luma, warm and mild.

    The projection is lossy; recovering RGB is the rendering layer's job.

    Returns:
        (luma, warm, mild), each in [0, 1] for in-gamut input.
    """
    luma = red * 0.375 + green * 0.5 + blue * 0.125
    warm = (red - blue) * 0.5 + 0.5
    mild = (green - blue) * 0.5 + 0.5
    return luma, warm, mild


def lerp(start: int | float, end: int | float, t: float) -> int:
    """Interpolate two packed colors channel by channel.

    Works on the unpacked integer channels, never on the float view. ``t`` is
    not clamped; extrapolated channels wrap the same way :func:`encode` does.

    Args:
        start: Packed color returned at t=0.
        end: Packed color returned at t=1.
        t: Interpolation factor.

    Returns:
        Packed color.
    """
    s = decode(start)
    e = decode(end)
    return _assemble(
        _truncate(s.luma + t * (e.luma - s.luma)),
        _truncate(s.warm + t * (e.warm - s.warm)),
        _truncate(s.mild + t * (e.mild - s.mild)),
        _truncate(s.saturation + t * (e.saturation - s.saturation)),
    )


# =============================================================================
# Bulk codec
# =============================================================================


def _channel_bytes_array(values: Any) -> np.ndarray:
    arr = np.asarray(values)
    if np.issubdtype(arr.dtype, np.floating):
        finite = np.nan_to_num(arr.astype(np.float64), nan=0.0, posinf=0.0, neginf=0.0)
        arr = np.trunc(finite * 255.0)
    return arr.astype(np.int64)


def _assemble_array(luma: np.ndarray, warm: np.ndarray, mild: np.ndarray, saturation: np.ndarray) -> np.ndarray:
    bits = (
        ((saturation & 0xFE) << 23)
        | ((mild & 0xFF) << 16)
        | ((warm & 0xFF) << 8)
        | (luma & 0xFF)
    )
    bits = np.where((bits & _EXPONENT_MASK) == _EXPONENT_MASK, bits - _SATURATION_STEP, bits)
    return bits.astype(np.uint32)


def encode_array(luma: Any, warm: Any, mild: Any, saturation: Any) -> np.ndarray:
    """Vectorized :func:`encode`.

    Args:
        luma, warm, mild, saturation: Broadcastable arrays; float arrays are
            read as [0, 1], integer arrays as [0, 255].

    Returns:
        uint32 array of packed colors.
    """
    return _assemble_array(
        _channel_bytes_array(luma),
        _channel_bytes_array(warm),
        _channel_bytes_array(mild),
        _channel_bytes_array(saturation),
    )


def decode_array(packed: Any) -> YCwCmSat:
    """Vectorized :func:`decode`; float32 input is read as its bit pattern."""
    arr = np.asarray(packed)
    if arr.dtype == np.float32:
        arr = arr.view(np.uint32)
    bits = arr.astype(np.int64) & _BITS
    return YCwCmSat(
        luma=bits & 0xFF,
        warm=(bits >> 8) & 0xFF,
        mild=(bits >> 16) & 0xFF,
        saturation=(bits >> 23) & 0xFE,
    )


def lerp_array(start: Any, end: Any, t: Any) -> np.ndarray:
    """Vectorized :func:`lerp`; ``t`` may be a scalar or a broadcastable array."""
    s = decode_array(start)
    e = decode_array(end)
    t = np.asarray(t, dtype=np.float64)
    channels = [_truncate_array(a + t * (b - a)) for a, b in zip(s, e)]
    return _assemble_array(*channels)


def _truncate_array(values: np.ndarray) -> np.ndarray:
    # fmod by 256 keeps every channel bit and stays inside int64
    finite = np.isfinite(values)
    wrapped = np.fmod(np.trunc(np.where(finite, values, 0.0)), 256.0)
    return wrapped.astype(np.int64)


def as_float32(packed: Any) -> np.ndarray:
    """View an array of packed colors as float32 without copying when possible."""
    return np.ascontiguousarray(packed, dtype=np.uint32).view(np.float32)
