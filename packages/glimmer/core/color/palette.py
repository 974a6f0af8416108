"""
Named packed colors and display-color conversion.

Provides color name resolution and construction of packed YCwCm+Sat colors
from display RGB values and hex strings.
"""

from __future__ import annotations

from glimmer.core.color.codec import derive_channels, encode, float_to_bits
from glimmer.core.utils.math import clamp


def from_rgb(red: float, green: float, blue: float, saturation: float = 0.5) -> int:
    """
    Pack a display RGB color.

    Args:
        red: Red component (0.0-1.0, clamped)
        green: Green component (0.0-1.0, clamped)
        blue: Blue component (0.0-1.0, clamped)
        saturation: Saturation multiplier (0.5 = neutral)

    Returns:
        Packed color
    """
    luma, warm, mild = derive_channels(
        clamp(float(red), 0.0, 1.0),
        clamp(float(green), 0.0, 1.0),
        clamp(float(blue), 0.0, 1.0),
    )
    return encode(luma, warm, mild, float(saturation))


def from_hex(hex_color: str, saturation: float = 0.5) -> int:
    """
    Pack a hex color string.

    Args:
        hex_color: Hex string like "#FF6B00", "#F60", "FF6B00"
        saturation: Saturation multiplier (0.5 = neutral)

    Returns:
        Packed color

    Raises:
        ValueError: If hex format is invalid
    """
    hex_str = hex_color.strip().lstrip("#")

    # Expand shorthand (#RGB -> #RRGGBB)
    if len(hex_str) == 3:
        hex_str = "".join(c * 2 for c in hex_str)

    if len(hex_str) != 6:
        raise ValueError(f"Invalid hex color: {hex_color}")

    try:
        r = int(hex_str[0:2], 16) / 255.0
        g = int(hex_str[2:4], 16) / 255.0
        b = int(hex_str[4:6], 16) / 255.0
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_color}") from None

    return from_rgb(r, g, b, saturation)


WHITE = from_hex("#FFFFFF")
BLACK = from_hex("#000000")
GRAY = from_hex("#5A5A5A")
NEUTRAL = from_hex("#808080")
HOT = from_hex("#FF2020")
COLD = from_hex("#7FFFD4")
LIGHT = from_hex("#FFE87C")

NAMED_COLORS: dict[str, int] = {
    # Lighting defaults
    "white": WHITE,
    "black": BLACK,
    "gray": GRAY,
    "neutral": NEUTRAL,
    "hot": HOT,
    "cold": COLD,
    "light": LIGHT,

    # Flames and lamps
    "torch": from_hex("#FF9A3C"),
    "candle": from_hex("#FFC46B"),
    "ember": from_hex("#C8401A"),
    "lantern": from_hex("#FFD98A"),

    # Hues
    "red": from_hex("#FF0000"),
    "orange": from_hex("#FF8000"),
    "yellow": from_hex("#FFFF00"),
    "green": from_hex("#00FF00"),
    "cyan": from_hex("#00FFFF"),
    "blue": from_hex("#0000FF"),
    "purple": from_hex("#8000FF"),
    "magenta": from_hex("#FF00FF"),
}


def color_from_name(name: str) -> int:
    """
    Resolve a color name to a packed color.

    Args:
        name: Color name (e.g., "white", "torch", "Cold")

    Returns:
        Packed color

    Raises:
        ValueError: If color name is not recognized
    """
    key = name.lower().strip().replace(" ", "_")
    if key in NAMED_COLORS:
        return NAMED_COLORS[key]
    raise ValueError(f"Unknown color name: {name}")


def resolve_color(color: int | float | str) -> int:
    """
    Resolve a color given as a packed int, its float view, or a string.

    Strings may be hex ("#RRGGBB"/"#RGB"), a raw pattern ("0x3F7F7FFF"),
    or a name from NAMED_COLORS.

    Raises:
        ValueError: If a string cannot be resolved
    """
    if isinstance(color, bool):
        raise ValueError(f"Invalid color: {color!r}")
    if isinstance(color, int):
        return color & 0xFFFFFFFF
    if isinstance(color, float):
        return float_to_bits(color)
    text = color.strip()
    if text.startswith("#"):
        return from_hex(text)
    if text.lower().startswith("0x"):
        try:
            return int(text, 16) & 0xFFFFFFFF
        except ValueError:
            raise ValueError(f"Invalid packed color: {color}") from None
    return color_from_name(text)
