"""Packed YCwCm+Sat colors."""

from glimmer.core.color.codec import (
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
from glimmer.core.color.palette import (
    BLACK,
    COLD,
    GRAY,
    HOT,
    LIGHT,
    NAMED_COLORS,
    NEUTRAL,
    WHITE,
    color_from_name,
    from_hex,
    from_rgb,
    resolve_color,
)

__all__ = [
    # Codec
    "YCwCmSat",
    "encode",
    "decode",
    "decode_float",
    "derive_channels",
    "lerp",
    "bits_to_float",
    "float_to_bits",
    "is_finite_pattern",
    # Bulk codec
    "encode_array",
    "decode_array",
    "lerp_array",
    "as_float32",
    # Palette
    "from_rgb",
    "from_hex",
    "color_from_name",
    "resolve_color",
    "NAMED_COLORS",
    "WHITE",
    "BLACK",
    "GRAY",
    "NEUTRAL",
    "HOT",
    "COLD",
    "LIGHT",
]
