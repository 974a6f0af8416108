"""Radiance: a light source's emission profile.

A Radiance has a base range (radius in grid cells, 0 meaning "this cell
only"), a packed YCwCm+Sat color and up to two patterns that shrink the range
over time:

- flicker: seeded random fluctuation, like a campfire
- strobe: orderly retract/expand pulsing, like a rotating beacon

``delay`` shifts both patterns in phase so several lights can pulse in
sequence, and ``flare`` raises the minimum radius (0.0 = no floor, 1.0 =
always full range). ``flare`` is the one field meant to change after
construction; writes to it are last-write-wins, so a Radiance shared across
threads needs a single owner for brightening.

Float fields are held at single precision, which keeps the fixed-width text
form (see :meth:`Radiance.serialize`) lossless.
"""

from __future__ import annotations

import logging
import math
import random
import time
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from glimmer.core.color.codec import bits_to_float, float_to_bits, is_finite_pattern
from glimmer.core.color.palette import WHITE, from_rgb, resolve_color
from glimmer.core.lighting.sway import (
    sway_randomized,
    sway_randomized_array,
    sway_tight,
    sway_tight_array,
)
from glimmer.core.utils.math import rotl32, to_int32

logger = logging.getLogger(__name__)

# Time is wrapped to 2**18 ms (about 262 s) so the phase stays small.
WRAP_MASK = 0x3FFFF
PHASE_SCALE = 0.0030517578125  # 0x1.9p-9 phase units per millisecond

FIELD_WIDTH = 8
FIELD_COUNT = 7
FIELD_STRIDE = FIELD_WIDTH + 1
SERIALIZED_LENGTH = 1 + FIELD_COUNT * FIELD_STRIDE
MIN_SERIALIZED_LENGTH = 54

_MASK32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000
_HEX_DIGITS = {c: int(c, 16) for c in "0123456789abcdefABCDEF"}


def phase_of(millis: int | float) -> float:
    """Map a millisecond timestamp onto the wrapped phase domain.

    Non-finite times map to phase 0.

    Example:
        >>> phase_of(1000)
        3.0517578125
    """
    if isinstance(millis, (float, np.floating)) and not math.isfinite(millis):
        return 0.0
    return (int(millis) & WRAP_MASK) * PHASE_SCALE


def _wrapped_millis(times: Any) -> np.ndarray:
    millis = np.asarray(times)
    if np.issubdtype(millis.dtype, np.floating):
        # 2**62 is a multiple of the wrap period, so fmod keeps the phase
        finite = np.isfinite(millis)
        millis = np.fmod(np.trunc(np.where(finite, millis, 0.0)), 2.0**62)
    return millis.astype(np.int64) & WRAP_MASK


def now_millis() -> int:
    """Wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def _to_float32(value: float) -> float:
    return float(np.float32(value))


def _random_seed() -> int:
    return to_int32(random.getrandbits(32))


def _int_from_hex(data: str, start: int, end: int) -> int:
    """Read a signed 32-bit hex int from data[start:end].

    A window reaching past the end of ``data``, or starting with a character
    that is neither a hex digit nor a sign, reads as 0. After an optional
    ``-``/``+`` the digits are read until the first non-hex character, the
    end of the window or the eighth digit.
    """
    if start < 0 or end <= start or end > len(data):
        return 0
    first = data[start]
    if first in "+-":
        sign, result, limit = (-1 if first == "-" else 1), 0, 9
    else:
        digit = _HEX_DIGITS.get(first)
        if digit is None:
            return 0
        sign, result, limit = 1, digit, 8
    for ch in data[start + 1 : min(end, start + limit)]:
        digit = _HEX_DIGITS.get(ch)
        if digit is None:
            break
        result = (result << 4) | digit
    return to_int32(result * sign)


class Radiance(BaseModel):
    """Light emission profile with temporal modulation.

    Attributes:
        range: Radius in cells; may be fractional.
        color: Packed YCwCm+Sat color; bit 31 clear and finite as a float.
        flicker: Rate of random continuous change to the range.
        strobe: Rate of periodic continuous change to the range.
        delay: Phase offset for flicker and strobe, usually 0.0-1.0.
        flare: Minimum range as a fraction of ``range``, usually 0.0-1.0.
        seed: Seed of the flicker pattern (signed 32-bit).

    Example:
        >>> torch = Radiance(range=4.0, color="torch", flicker=1.5, seed=7)
        >>> 0.0 <= torch.current_range(12_000) <= 4.0
        True
    """

    model_config = ConfigDict(validate_assignment=True)

    range: float = Field(default=0.0, ge=0.0, description="Radius in cells")
    color: int = Field(default=WHITE, description="Packed YCwCm+Sat color")
    flicker: float = Field(default=0.0, ge=0.0, description="Random fluctuation rate")
    strobe: float = Field(default=0.0, ge=0.0, description="Periodic fluctuation rate")
    delay: float = Field(default=0.0, description="Phase offset for flicker and strobe")
    flare: float = Field(default=0.0, description="Minimum range fraction")
    seed: int = Field(default_factory=_random_seed, description="Flicker seed")

    @field_validator("color", mode="before")
    @classmethod
    def _resolve_color(cls, value: Any) -> Any:
        if isinstance(value, (str, float)):
            return resolve_color(value)
        return value

    @field_validator("color", mode="after")
    @classmethod
    def _check_color_pattern(cls, value: int) -> int:
        bits = value & _MASK32
        if bits & _SIGN_BIT or not is_finite_pattern(bits):
            raise ValueError(f"0x{bits:08X} is not a packed color (sign bit set or NaN/infinite float view)")
        return bits

    @field_validator("range", "flicker", "strobe", "delay", "flare", mode="after")
    @classmethod
    def _single_precision(cls, value: float) -> float:
        return _to_float32(value)

    @field_validator("seed", mode="after")
    @classmethod
    def _wrap_seed(cls, value: int) -> int:
        return to_int32(value)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_rgb(
        cls,
        light_range: float,
        red: float,
        green: float,
        blue: float,
        flicker: float = 0.0,
        strobe: float = 0.0,
    ) -> Radiance:
        """Build a Radiance from a display RGB color (components in [0, 1])."""
        return cls(
            range=light_range,
            color=from_rgb(red, green, blue),
            flicker=flicker,
            strobe=strobe,
        )

    @classmethod
    def make_chain(
        cls,
        length: int,
        light_range: float,
        color: int | str,
        strobe: float,
    ) -> list[Radiance]:
        """Make lights that pulse in sequence, expanding from one to the next.

        Each light gets ``delay = -2 / length * index`` and no flicker.

        Args:
            length: Number of lights; 1 or less gives a single undelayed light.
            light_range: Largest radius of every light, in cells.
            color: Packed color (or any form ``resolve_color`` accepts).
            strobe: Pulse rate; should be greater than 0.

        Returns:
            Lights in chain order.
        """
        if length <= 1:
            return [cls(range=light_range, color=color, strobe=strobe)]
        logger.debug("Building radiance chain of %d lights (strobe=%s)", length, strobe)
        return [
            cls(range=light_range, color=color, strobe=strobe, delay=0.0 - 2.0 * index / length)
            for index in range(length)
        ]

    def reseeded(self) -> Radiance:
        """Copy with every field kept except the seed, which is drawn fresh."""
        return self.model_copy(update={"seed": _random_seed()})

    # ------------------------------------------------------------------
    # Temporal modulation
    # ------------------------------------------------------------------

    def current_range(self, now: int | float | None = None) -> float:
        """Effective range at a point in time.

        Flicker and strobe only ever shrink the range; flare puts a floor
        under the result. The value is fully determined by the fields and
        ``now``.

        Args:
            now: Time in milliseconds; None uses the wall clock.

        Returns:
            Range between ``range * flare`` and ``range`` (for flare <= 1).
        """
        phase = phase_of(now_millis() if now is None else now)
        current = self.range
        if self.flicker != 0.0:
            current *= sway_randomized(self.seed, phase * self.flicker + self.delay) * 0.25 + 0.75
        if self.strobe != 0.0:
            current *= sway_tight(phase * self.strobe + self.delay) * 0.5 + 0.5
        return max(current, self.range * self.flare)

    def sample_ranges(self, times: Any) -> np.ndarray:
        """Vectorized :meth:`current_range` over an array of millisecond timestamps."""
        phase = _wrapped_millis(times) * PHASE_SCALE
        current = np.full(phase.shape, self.range, dtype=np.float64)
        if self.flicker != 0.0:
            current = current * (
                sway_randomized_array(self.seed, phase * self.flicker + self.delay) * 0.25 + 0.75
            )
        if self.strobe != 0.0:
            current = current * (sway_tight_array(phase * self.strobe + self.delay) * 0.5 + 0.5)
        return np.maximum(current, self.range * self.flare)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def to_bits(self) -> tuple[int, int, int, int, int, int, int]:
        """Bit patterns of (range, color, flicker, strobe, delay, flare, seed)."""
        return (
            float_to_bits(self.range),
            self.color & _MASK32,
            float_to_bits(self.flicker),
            float_to_bits(self.strobe),
            float_to_bits(self.delay),
            float_to_bits(self.flare),
            self.seed & _MASK32,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Radiance):
            return NotImplemented
        return self.to_bits() == other.to_bits()

    def __hash__(self) -> int:
        bits = self.to_bits()
        result = bits[6]
        for field_bits in bits[:6]:
            result ^= (rotl32(result, 11) + rotl32(result, 19) + field_bits) & _MASK32
        return to_int32(result)

    # ------------------------------------------------------------------
    # Text form
    # ------------------------------------------------------------------

    def serialize(self) -> str:
        """Fixed-width text form.

        ``{RRRRRRRR,CCCCCCCC,FFFFFFFF,SSSSSSSS,DDDDDDDD,LLLLLLLL,EEEEEEEE}``:
        uppercase hex bit patterns of range, color, flicker, strobe, delay,
        flare and seed; always 64 characters.
        """
        return "{" + ",".join(f"{bits:0{FIELD_WIDTH}X}" for bits in self.to_bits()) + "}"

    @classmethod
    def deserialize(cls, data: str | None) -> Radiance | None:
        """Rebuild a Radiance from :meth:`serialize` output.

        Fields are read at fixed offsets. Separators are not checked, hex
        parsing stops at the first non-hex character in a field and a field
        running past the end of the text reads as 0, so damaged text decodes
        to a wrong Radiance rather than an error. The result is not
        validated; only trust text this library wrote.

        Returns:
            The Radiance, or None when ``data`` is None or too short.
        """
        if data is None or len(data) < MIN_SERIALIZED_LENGTH:
            logger.debug("Rejecting serialized radiance of length %s", None if data is None else len(data))
            return None
        fields = [
            _int_from_hex(data, 1 + FIELD_STRIDE * i, 1 + FIELD_STRIDE * i + FIELD_WIDTH)
            for i in range(FIELD_COUNT)
        ]
        return cls.model_construct(
            range=bits_to_float(fields[0]),
            color=fields[1] & _MASK32,
            flicker=bits_to_float(fields[2]),
            strobe=bits_to_float(fields[3]),
            delay=bits_to_float(fields[4]),
            flare=bits_to_float(fields[5]),
            seed=to_int32(fields[6]),
        )


def serialize(radiance: Radiance) -> str:
    """Module-level alias of :meth:`Radiance.serialize`."""
    return radiance.serialize()


def deserialize(data: str | None) -> Radiance | None:
    """Module-level alias of :meth:`Radiance.deserialize`."""
    return Radiance.deserialize(data)
