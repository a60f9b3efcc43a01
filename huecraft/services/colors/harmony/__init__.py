"""
Huecraft Color Harmony Engine

This module implements color theory rules for generating complementary, analogous,
triadic, tetradic, monochromatic and random palettes from a base color. Companion
colors keep the base saturation and lightness unless the rule varies them.
"""

import random
from typing import Callable, Dict, List, Optional, Union

from huecraft.config import Config
from huecraft.errors import InvalidPaletteSize, UnknownScheme
from huecraft.schemas import Color, ColorScheme
from huecraft.services.colors.conversions import create_color_from_hsl, round_half_up

ANALOGOUS_WINDOW_DEGREES = 30
TETRADIC_DEFAULT_ANGLE = 30
MONOCHROMATIC_MIN_LIGHTNESS = 15
MONOCHROMATIC_MAX_LIGHTNESS = 85


def normalize_hue(hue: float) -> float:
    """Wrap a hue in degrees into [0, 360)."""
    return hue % 360


def rotate_hue(hue: float, degrees: float) -> int:
    """
    Rotate hue by specified degrees.

    Args:
        hue: Original hue in degrees
        degrees: Rotation in degrees (can be negative)

    Returns:
        Rotated hue as integer degrees in [0, 360)
    """
    return round_half_up(normalize_hue(hue + degrees)) % 360


def get_hue_distance(h1: float, h2: float) -> float:
    """
    Calculate the minimum angular separation between two hues.

    Returns:
        Minimum separation in degrees [0, 180]
    """
    diff = abs(normalize_hue(h1) - normalize_hue(h2))
    return min(diff, 360 - diff)


def _shifted(base: Color, degrees: float) -> Color:
    return create_color_from_hsl((rotate_hue(base.hsl.h, degrees), base.hsl.s, base.hsl.l))


def generate_complementary(base: Color) -> List[Color]:
    """Base plus the color opposite on the wheel (+180°)."""
    return [base, _shifted(base, 180)]


def generate_analogous(base: Color, count: int = 3) -> List[Color]:
    """
    Generate colors spread evenly across ±30° around the base hue.

    For 3 colors: -30°, base, +30°. For 5: -30°, -15°, base, +15°, +30°.
    The middle step is taken by the unmodified base color and the result is
    sorted by ascending hue.
    """
    if not Config.validate_palette_size(count):
        raise InvalidPaletteSize(count, 1, ColorScheme.ANALOGOUS.value)

    step = (ANALOGOUS_WINDOW_DEGREES * 2) / (count - 1) if count > 1 else 0
    middle = count // 2

    colors = [base]
    for i in range(count):
        if i == middle:
            continue
        colors.append(_shifted(base, -ANALOGOUS_WINDOW_DEGREES + i * step))

    return sorted(colors, key=lambda color: color.hsl.h)


def generate_triadic(base: Color) -> List[Color]:
    """Three colors evenly spaced 120° apart."""
    return [base, _shifted(base, 120), _shifted(base, 240)]


def generate_tetradic(base: Color, angle: float = TETRADIC_DEFAULT_ANGLE) -> List[Color]:
    """Two complementary pairs forming a rectangle on the wheel."""
    return [
        base,
        _shifted(base, angle),
        _shifted(base, 180),
        _shifted(base, 180 + angle),
    ]


def generate_monochromatic(base: Color, count: int = 5) -> List[Color]:
    """
    Generate shades of the base hue, dark to light.

    Lightness is stepped evenly from 15% to 85% inclusive; hue and
    saturation are kept.
    """
    if not Config.validate_palette_size(count, minimum=2):
        raise InvalidPaletteSize(count, 2, ColorScheme.MONOCHROMATIC.value)

    step = (MONOCHROMATIC_MAX_LIGHTNESS - MONOCHROMATIC_MIN_LIGHTNESS) / (count - 1)
    return [
        create_color_from_hsl((
            base.hsl.h,
            base.hsl.s,
            round_half_up(MONOCHROMATIC_MIN_LIGHTNESS + i * step),
        ))
        for i in range(count)
    ]


def generate_random_color(rng: Optional[random.Random] = None) -> Color:
    """Random vivid color: saturation 70-100%, lightness 40-70%."""
    rng = rng or random
    return create_color_from_hsl((
        rng.randrange(0, 360),
        rng.randint(70, 100),
        rng.randint(40, 70),
    ))


def generate_random(count: int = 5, rng: Optional[random.Random] = None) -> List[Color]:
    """Independently sampled random colors."""
    if not Config.validate_palette_size(count):
        raise InvalidPaletteSize(count, 1, ColorScheme.RANDOM.value)
    return [generate_random_color(rng) for _ in range(count)]


def coerce_scheme(scheme: Union[ColorScheme, str]) -> ColorScheme:
    """Resolve a scheme tag to the enum, raising UnknownScheme otherwise."""
    if isinstance(scheme, ColorScheme):
        return scheme
    try:
        return ColorScheme(scheme)
    except ValueError:
        raise UnknownScheme(scheme) from None


_GENERATORS: Dict[ColorScheme, Callable[[Color, int], List[Color]]] = {
    ColorScheme.COMPLEMENTARY: lambda base, count: generate_complementary(base),
    ColorScheme.ANALOGOUS: generate_analogous,
    ColorScheme.TRIADIC: lambda base, count: generate_triadic(base),
    ColorScheme.TETRADIC: lambda base, count: generate_tetradic(base),
    ColorScheme.MONOCHROMATIC: generate_monochromatic,
    ColorScheme.RANDOM: lambda base, count: generate_random(count),
}


def generate_palette(
    base: Color,
    scheme: Union[ColorScheme, str],
    count: int = 5
) -> List[Color]:
    """
    Generate a color palette based on a color scheme.

    Args:
        base: Base color
        scheme: Scheme tag (enum member or its string value)
        count: Number of colors for analogous, monochromatic and random

    Returns:
        Ordered list of colors following the scheme

    Raises:
        UnknownScheme: If the scheme tag is outside the supported set
    """
    return _GENERATORS[coerce_scheme(scheme)](base, count)
