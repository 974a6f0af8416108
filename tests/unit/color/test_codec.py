"""Tests for the YCwCm+Sat packed color codec."""

from __future__ import annotations

import math

import numpy as np
import pytest

from glimmer.core.color import (
    YCwCmSat,
    as_float32,
    bits_to_float,
    decode,
    decode_array,
    decode_float,
    derive_channels,
    encode,
    encode_array,
    float_to_bits,
    is_finite_pattern,
    lerp,
    lerp_array,
)


class TestEncode:
    """Tests for packing channels."""

    def test_known_pattern(self) -> None:
        """Test full luma with neutral chroma and saturation."""
        assert encode(255, 128, 128, 128) == 0x408080FF

    def test_field_positions(self) -> None:
        """Test each channel lands in its own byte."""
        assert encode(0x12, 0, 0, 0) == 0x00000012
        assert encode(0, 0x34, 0, 0) == 0x00003400
        assert encode(0, 0, 0x56, 0) == 0x00560000
        assert encode(0, 0, 0, 0x20) == 0x10000000

    @pytest.mark.parametrize("luma", [0, 1, 64, 127, 128, 200, 255])
    @pytest.mark.parametrize("saturation", [0, 2, 100, 128, 252])
    def test_round_trip(self, luma: int, saturation: int) -> None:
        """Test decode recovers encoded channels when saturation is even."""
        packed = encode(luma, 37, 201, saturation)
        assert decode(packed) == (luma, 37, 201, saturation)

    @pytest.mark.parametrize("saturation", [1, 3, 99, 129, 253])
    def test_odd_saturation_loses_low_bit(self, saturation: int) -> None:
        """Test saturation keeps only its top seven bits."""
        assert decode(encode(10, 20, 30, saturation)).saturation == saturation & 0xFE

    def test_sign_bit_always_clear(self) -> None:
        """Test bit 31 is never set, even for all-ones input."""
        for values in [(255, 255, 255, 255), (0, 0, 0, 255), (255, 0, 127, 254)]:
            assert encode(*values) & 0x80000000 == 0

    def test_out_of_range_values_wrap(self) -> None:
        """Test channels outside 0..255 are masked instead of rejected."""
        assert decode(encode(256, -1, 0, 0)) == (0, 255, 0, 0)
        assert encode(300, 0, 0, 0) == encode(44, 0, 0, 0)

    def test_float_channels_scale_by_255(self) -> None:
        """Test float channels in [0, 1] are scaled and truncated."""
        assert encode(1.0, 0.5, 0.5, 0.5) == encode(255, 127, 127, 127)
        assert encode(1.0, 0.5, 0.5, 0.5) == 0x3F7F7FFF

    def test_mixed_float_and_int_channels(self) -> None:
        """Test float and int channels can be combined."""
        assert encode(1.0, 128, 0.5, 128) == encode(255, 128, 127, 128)

    def test_non_finite_float_channels_encode_as_zero(self) -> None:
        """Test NaN and infinity never raise."""
        assert encode(math.nan, math.inf, -math.inf, 0.0) == 0


class TestExponentGuard:
    """Tests for keeping packed colors finite in their float view."""

    def test_all_ones_exponent_is_stepped_down(self) -> None:
        """Test saturation 254 with mild >= 128 drops one saturation level."""
        packed = encode(0, 0, 255, 254)
        assert packed == 0x7EFF0000
        assert decode(packed).saturation == 252

    def test_all_channels_full(self) -> None:
        """Test the all-ones input becomes the largest finite pattern."""
        assert encode(255, 255, 255, 255) == 0x7EFFFFFF

    def test_low_mild_keeps_full_saturation(self) -> None:
        """Test saturation 254 survives when mild is below 128."""
        assert decode(encode(0, 0, 127, 254)).saturation == 254

    @pytest.mark.parametrize("mild", [0, 127, 128, 255])
    @pytest.mark.parametrize("saturation", [0, 128, 254, 255])
    def test_float_view_is_finite(self, mild: int, saturation: int) -> None:
        """Test no encoded color reads as NaN or infinity."""
        packed = encode(255, 255, mild, saturation)
        assert is_finite_pattern(packed)
        assert math.isfinite(bits_to_float(packed))


class TestFloatView:
    """Tests for the IEEE-754 reinterpretation helpers."""

    def test_bits_to_float(self) -> None:
        """Test known single-precision patterns."""
        assert bits_to_float(0x3F800000) == 1.0
        assert bits_to_float(0x40600000) == 3.5
        assert bits_to_float(0x00000000) == 0.0

    def test_float_to_bits(self) -> None:
        """Test values are rounded to single precision before reading bits."""
        assert float_to_bits(1.0) == 0x3F800000
        assert float_to_bits(0.2) == 0x3E4CCCCD
        assert float_to_bits(-0.0) == 0x80000000

    def test_decode_accepts_float_view(self) -> None:
        """Test decode reads the bits of a float-viewed color."""
        packed = encode(255, 128, 128, 128)
        assert decode(bits_to_float(packed)) == decode(packed)

    def test_is_finite_pattern(self) -> None:
        """Test NaN and infinity patterns are detected."""
        assert not is_finite_pattern(0x7F800000)
        assert not is_finite_pattern(0x7FC00000)
        assert is_finite_pattern(0x7F7FFFFF)


class TestDecode:
    """Tests for unpacking channels."""

    def test_returns_named_tuple(self) -> None:
        """Test decode exposes channels by name."""
        channels = decode(0x408080FF)
        assert isinstance(channels, YCwCmSat)
        assert channels.luma == 255
        assert channels.warm == 128
        assert channels.mild == 128
        assert channels.saturation == 128

    def test_decode_float(self) -> None:
        """Test float channels are the integer channels over 255."""
        channels = decode_float(0x408080FF)
        assert channels.luma == 1.0
        assert channels.warm == pytest.approx(128 / 255)
        assert channels.saturation == pytest.approx(128 / 255)


class TestDeriveChannels:
    """Tests for projecting display RGB onto luma, warm and mild."""

    @pytest.mark.parametrize(
        ("rgb", "expected"),
        [
            ((1.0, 1.0, 1.0), (1.0, 0.5, 0.5)),
            ((0.0, 0.0, 0.0), (0.0, 0.5, 0.5)),
            ((1.0, 0.0, 0.0), (0.375, 1.0, 0.5)),
            ((0.0, 1.0, 0.0), (0.5, 0.5, 1.0)),
            ((0.0, 0.0, 1.0), (0.125, 0.0, 0.0)),
            ((0.5, 0.5, 0.5), (0.5, 0.5, 0.5)),
        ],
    )
    def test_projection(self, rgb: tuple[float, float, float], expected: tuple[float, float, float]) -> None:
        """Test luma weights and chroma axes."""
        assert derive_channels(*rgb) == pytest.approx(expected)

    def test_grays_are_neutral(self) -> None:
        """Test equal components give neutral chroma."""
        for level in (0.1, 0.3, 0.9):
            _, warm, mild = derive_channels(level, level, level)
            assert warm == pytest.approx(0.5)
            assert mild == pytest.approx(0.5)


class TestLerp:
    """Tests for channel-wise interpolation."""

    def test_endpoints(self) -> None:
        """Test t=0 gives start and t=1 gives end."""
        start = encode(10, 20, 30, 40)
        end = encode(200, 100, 50, 100)
        assert lerp(start, end, 0.0) == start
        assert lerp(start, end, 1.0) == end

    def test_midpoint(self) -> None:
        """Test each channel interpolates independently."""
        mid = lerp(encode(0, 0, 0, 0), encode(200, 100, 50, 100), 0.5)
        assert decode(mid) == (100, 50, 25, 50)

    def test_interpolates_channels_not_float_view(self) -> None:
        """Test the result differs from interpolating the float reinterpretation."""
        start = encode(0, 0, 0, 0)
        end = encode(200, 100, 50, 100)
        assert lerp(start, end, 0.5) == 0x19193264

    def test_extrapolation_wraps(self) -> None:
        """Test t outside [0, 1] wraps channels rather than failing."""
        result = lerp(encode(100, 0, 0, 0), encode(200, 0, 0, 0), 2.0)
        assert decode(result).luma == 44

    def test_accepts_float_views(self) -> None:
        """Test lerp reads float-viewed colors by their bits."""
        start = encode(0, 0, 0, 0)
        end = encode(200, 100, 50, 100)
        assert lerp(bits_to_float(start), bits_to_float(end), 0.5) == lerp(start, end, 0.5)

    @pytest.mark.parametrize("t", [math.nan, math.inf, -math.inf])
    def test_non_finite_t_never_raises(self, t: float) -> None:
        """Test NaN and infinite t zero every channel that moves."""
        start = encode(10, 20, 30, 40)
        end = encode(200, 100, 50, 100)
        assert decode(lerp(start, end, t)) == (0, 0, 0, 0)

    def test_non_finite_t_keeps_equal_channels_at_zero(self) -> None:
        """Test channels equal at both ends also become 0 when t is NaN."""
        color = encode(10, 20, 30, 40)
        assert lerp(color, color, math.nan) == 0

    def test_result_stays_finite(self) -> None:
        """Test lerp applies the same assembly rules as encode."""
        result = lerp(encode(0, 0, 255, 0), encode(0, 0, 255, 254), 1.0)
        assert is_finite_pattern(result)


class TestBulkCodec:
    """Tests for the numpy variants."""

    def test_encode_array_matches_scalar(self) -> None:
        """Test vectorized encode equals scalar encode element-wise."""
        luma = np.array([0, 17, 128, 255, 300])
        warm = np.array([255, 0, 128, 64, -1])
        mild = np.array([128, 255, 0, 255, 33])
        sat = np.array([128, 254, 1, 255, 77])
        packed = encode_array(luma, warm, mild, sat)
        assert packed.dtype == np.uint32
        expected = [encode(int(a), int(b), int(c), int(d)) for a, b, c, d in zip(luma, warm, mild, sat)]
        assert packed.tolist() == expected

    def test_encode_array_float_input(self) -> None:
        """Test float arrays are read as [0, 1] channels."""
        values = np.array([0.0, 0.25, 0.5, 1.0])
        packed = encode_array(values, 0.5, 0.5, 0.5)
        expected = [encode(float(v), 0.5, 0.5, 0.5) for v in values]
        assert packed.tolist() == expected

    def test_decode_array_matches_scalar(self) -> None:
        """Test vectorized decode equals scalar decode."""
        packed = np.array([0x408080FF, 0x3F7F7FFF, 0x7EFF0000], dtype=np.uint32)
        channels = decode_array(packed)
        for i, value in enumerate(packed.tolist()):
            assert tuple(int(c[i]) for c in channels) == decode(value)

    def test_float32_view_round_trip(self) -> None:
        """Test decoding the float32 view gives the same channels."""
        packed = encode_array(np.arange(0, 256, 51), 128, 128, 128)
        view = as_float32(packed)
        assert view.dtype == np.float32
        for a, b in zip(decode_array(view), decode_array(packed)):
            np.testing.assert_array_equal(a, b)

    def test_lerp_array_matches_scalar(self) -> None:
        """Test vectorized lerp equals scalar lerp for several t."""
        start = encode(10, 20, 30, 40)
        end = encode(200, 100, 50, 100)
        ts = np.array([-0.5, 0.0, 0.3, 0.5, 1.0, 2.0])
        result = lerp_array(np.full(ts.shape, start, dtype=np.uint32), np.full(ts.shape, end, dtype=np.uint32), ts)
        assert result.tolist() == [lerp(start, end, float(t)) for t in ts]

    def test_lerp_array_non_finite_and_large_t(self) -> None:
        """Test vectorized lerp matches scalar lerp for NaN, infinite and huge t."""
        start = encode(10, 20, 30, 40)
        end = encode(200, 100, 50, 100)
        ts = np.array([math.nan, math.inf, -math.inf, 1e12, -3.7e9])
        result = lerp_array(np.full(ts.shape, start, dtype=np.uint32), np.full(ts.shape, end, dtype=np.uint32), ts)
        assert result.tolist() == [lerp(start, end, float(t)) for t in ts]
