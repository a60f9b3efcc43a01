"""
Huecraft Color Conversions

Bidirectional RGB <-> HSL <-> HEX math and the canonical Color constructors.
All results are rounded to integer channels, degrees and percentages.
"""

import math
import re
from typing import Tuple, Union

from huecraft.errors import InvalidColorFormat, ColorChannelRange
from huecraft.schemas import RGB, HSL, Color

RGBLike = Union[RGB, Tuple[float, float, float]]
HSLLike = Union[HSL, Tuple[float, float, float]]

_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, not to even."""
    return int(math.floor(value + 0.5))


def _rgb_channels(rgb: RGBLike) -> Tuple[float, float, float]:
    if isinstance(rgb, RGB):
        return rgb.r, rgb.g, rgb.b
    r, g, b = rgb
    return r, g, b


def _hsl_channels(hsl: HSLLike) -> Tuple[float, float, float]:
    if isinstance(hsl, HSL):
        return hsl.h, hsl.s, hsl.l
    h, s, l = hsl
    return h, s, l


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert hex color string to RGB.

    Args:
        hex_color: Color as #RRGGBB or #RGB (leading # optional, any case)

    Returns:
        RGB with integer channels

    Raises:
        InvalidColorFormat: If the string is not 3 or 6 hex digits
    """
    if not isinstance(hex_color, str):
        raise InvalidColorFormat(str(hex_color))

    cleaned = hex_color[1:] if hex_color.startswith("#") else hex_color
    if not _HEX_DIGITS.fullmatch(cleaned):
        raise InvalidColorFormat(hex_color)

    # Expand shorthand (#F00 -> #FF0000)
    if len(cleaned) == 3:
        cleaned = "".join(ch * 2 for ch in cleaned)

    return RGB(
        r=int(cleaned[0:2], 16),
        g=int(cleaned[2:4], 16),
        b=int(cleaned[4:6], 16),
    )


def rgb_to_hex(rgb: RGBLike) -> str:
    """
    Convert RGB to canonical hex format.

    Args:
        rgb: RGB model or (r, g, b) tuple; float channels are rounded

    Returns:
        Hex color string in format #RRGGBB (uppercase)

    Raises:
        ColorChannelRange: If a rounded channel falls outside [0, 255]
    """
    channels = []
    for name, value in zip("rgb", _rgb_channels(rgb)):
        rounded = round_half_up(value)
        if rounded < 0 or rounded > 255:
            raise ColorChannelRange(name, rounded)
        channels.append(rounded)

    r, g, b = channels
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_to_hsl(rgb: RGBLike) -> HSL:
    """
    Convert RGB to HSL.

    Args:
        rgb: RGB model or (r, g, b) tuple with channels in [0, 255]

    Returns:
        HSL with hue in [0, 360) and saturation/lightness in [0, 100]
    """
    r, g, b = (channel / 255.0 for channel in _rgb_channels(rgb))

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    h = 0.0
    s = 0.0
    l = (max_c + min_c) / 2

    if delta != 0:
        s = delta / (2 - max_c - min_c) if l > 0.5 else delta / (max_c + min_c)

        # Six-sector hue from the maximal channel
        if max_c == r:
            h = ((g - b) / delta + (6 if g < b else 0)) / 6
        elif max_c == g:
            h = ((b - r) / delta + 2) / 6
        else:
            h = ((r - g) / delta + 4) / 6

    return HSL(
        h=round_half_up(h * 360) % 360,
        s=round_half_up(s * 100),
        l=round_half_up(l * 100),
    )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hsl: HSLLike) -> RGB:
    """
    Convert HSL to RGB.

    Args:
        hsl: HSL model or (h, s, l) tuple in degrees and percentages

    Returns:
        RGB with integer channels
    """
    h_deg, s_pct, l_pct = _hsl_channels(hsl)
    h = (h_deg % 360) / 360.0
    s = s_pct / 100.0
    l = l_pct / 100.0

    if s == 0:
        # Achromatic
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return RGB(
        r=round_half_up(r * 255),
        g=round_half_up(g * 255),
        b=round_half_up(b * 255),
    )


def hex_to_hsl(hex_color: str) -> HSL:
    """Convert hex color string to HSL."""
    return rgb_to_hsl(hex_to_rgb(hex_color))


def hsl_to_hex(hsl: HSLLike) -> str:
    """Convert HSL to canonical hex format."""
    return rgb_to_hex(hsl_to_rgb(hsl))


def create_color_from_hex(hex_color: str) -> Color:
    """
    Create a Color from a hex string.

    Shorthand and lowercase input are normalized to the canonical
    uppercase 6-digit form.
    """
    rgb = hex_to_rgb(hex_color)
    return Color(hex=rgb_to_hex(rgb), rgb=rgb, hsl=rgb_to_hsl(rgb))


def create_color_from_rgb(rgb: RGBLike) -> Color:
    """Create a Color from RGB channels."""
    hex_color = rgb_to_hex(rgb)
    rgb_model = hex_to_rgb(hex_color)
    return Color(hex=hex_color, rgb=rgb_model, hsl=rgb_to_hsl(rgb_model))


def create_color_from_hsl(hsl: HSLLike) -> Color:
    """Create a Color from HSL, keeping the given HSL values."""
    h, s, l = _hsl_channels(hsl)
    hsl_model = HSL(h=round_half_up(h) % 360, s=round_half_up(s), l=round_half_up(l))
    rgb = hsl_to_rgb(hsl_model)
    return Color(hex=rgb_to_hex(rgb), rgb=rgb, hsl=hsl_model)
