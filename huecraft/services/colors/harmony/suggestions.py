"""
Huecraft Suggestion Engine

Generates a ranked set of related palettes from a single request. Each
suggestion perturbs the base color with a fixed strategy and regenerates the
full palette from the perturbed color.
"""

from typing import Callable, List, NamedTuple, Optional, Union

from huecraft.config import Config
from huecraft.errors import InvalidSuggestionCount
from huecraft.schemas import (
    Color, ColorScheme, GenerationMethod, Palette, PaletteMetadata,
    Suggestion, SuggestionSet, SuggestionStrategy,
)
from huecraft.services.colors.conversions import create_color_from_hsl
from huecraft.services.colors.harmony import coerce_scheme, generate_palette, rotate_hue
from huecraft.utils.ids import generate_palette_id
from huecraft.utils.logging import get_logger

SATURATION_BOUNDS = (0, 100)
LIGHTNESS_BOUNDS = (10, 90)

ALTERNATIVE_SCHEMES = {
    ColorScheme.COMPLEMENTARY: ColorScheme.TRIADIC,
    ColorScheme.ANALOGOUS: ColorScheme.COMPLEMENTARY,
    ColorScheme.TRIADIC: ColorScheme.ANALOGOUS,
    ColorScheme.TETRADIC: ColorScheme.COMPLEMENTARY,
    ColorScheme.MONOCHROMATIC: ColorScheme.ANALOGOUS,
    ColorScheme.RANDOM: ColorScheme.ANALOGOUS,
}


def adjust_saturation(color: Color, delta: int) -> Color:
    """Shift saturation, clamped to [0, 100]."""
    low, high = SATURATION_BOUNDS
    s = max(low, min(high, color.hsl.s + delta))
    return create_color_from_hsl((color.hsl.h, s, color.hsl.l))


def adjust_hue(color: Color, delta: int) -> Color:
    """Rotate hue, wrapped into [0, 360)."""
    return create_color_from_hsl((rotate_hue(color.hsl.h, delta), color.hsl.s, color.hsl.l))


def adjust_lightness(color: Color, delta: int) -> Color:
    """Shift lightness, clamped to [10, 90]."""
    low, high = LIGHTNESS_BOUNDS
    l = max(low, min(high, color.hsl.l + delta))
    return create_color_from_hsl((color.hsl.h, color.hsl.s, l))


def get_alternative_scheme(scheme: Union[ColorScheme, str]) -> ColorScheme:
    """Static fallback scheme used by the scheme-alternative suggestion."""
    return ALTERNATIVE_SCHEMES[coerce_scheme(scheme)]


def create_palette(
    base: Color,
    scheme: Union[ColorScheme, str],
    palette_size: int = Config.DEFAULT_PALETTE_SIZE
) -> Palette:
    """Generate a fresh palette with new id and scheme metadata."""
    scheme = coerce_scheme(scheme)
    return Palette(
        id=generate_palette_id(),
        colors=generate_palette(base, scheme, palette_size),
        scheme=scheme,
        metadata=PaletteMetadata(generation_method=GenerationMethod.SCHEME),
    )


class _Variation(NamedTuple):
    """One rank of the fixed suggestion ladder."""
    strategy: SuggestionStrategy
    perturb: Callable[[Color], Color]
    describe: Callable[[str], str]


_VARIATIONS: List[Optional[_Variation]] = [
    _Variation(SuggestionStrategy.HUE_SHIFT, lambda c: c,
               lambda s: f"Original {s} palette"),
    _Variation(SuggestionStrategy.SATURATION_VARIATION, lambda c: adjust_saturation(c, 15),
               lambda s: f"Vibrant {s} (higher saturation)"),
    _Variation(SuggestionStrategy.SATURATION_VARIATION, lambda c: adjust_saturation(c, -15),
               lambda s: f"Muted {s} (softer tones)"),
    _Variation(SuggestionStrategy.HUE_SHIFT, lambda c: adjust_hue(c, -15),
               lambda s: f"Warm {s} (warmer hues)"),
    _Variation(SuggestionStrategy.HUE_SHIFT, lambda c: adjust_hue(c, 15),
               lambda s: f"Cool {s} (cooler hues)"),
    _Variation(SuggestionStrategy.LIGHTNESS_VARIATION, lambda c: adjust_lightness(c, 10),
               lambda s: f"Light {s} (brighter tones)"),
    _Variation(SuggestionStrategy.LIGHTNESS_VARIATION, lambda c: adjust_lightness(c, -10),
               lambda s: f"Dark {s} (deeper tones)"),
    # Rank 8 (scheme alternative) is built separately
    None,
    _Variation(SuggestionStrategy.HYBRID, lambda c: adjust_hue(adjust_saturation(c, 10), -10),
               lambda s: f"Warm vibrant {s} (hybrid)"),
    _Variation(SuggestionStrategy.HYBRID, lambda c: adjust_hue(adjust_saturation(c, -10), 10),
               lambda s: f"Cool muted {s} (hybrid)"),
]


def _scheme_alternative(base: Color, scheme: ColorScheme, palette_size: int) -> Suggestion:
    if scheme == ColorScheme.RANDOM:
        return Suggestion(
            palette=create_palette(adjust_hue(base, 30), ColorScheme.RANDOM, palette_size),
            description="Shifted random palette",
            strategy=SuggestionStrategy.HUE_SHIFT,
            rank=8,
        )

    alternative = get_alternative_scheme(scheme)
    return Suggestion(
        palette=create_palette(base, alternative, palette_size),
        description=f"Alternative {alternative.value} scheme",
        strategy=SuggestionStrategy.SCHEME_ALTERNATIVE,
        rank=8,
    )


def generate_suggestions(
    base: Color,
    scheme: Union[ColorScheme, str],
    count: int = Config.DEFAULT_SUGGESTIONS,
    palette_size: int = Config.DEFAULT_PALETTE_SIZE
) -> SuggestionSet:
    """
    Generate multiple palette suggestions with variations.

    Args:
        base: Starting color for variations
        scheme: Requested color scheme
        count: Number of suggestions, 1-10
        palette_size: Colors per palette for count-driven schemes

    Returns:
        SuggestionSet with ranks 1..count; rank 1 is the unmodified request

    Raises:
        InvalidSuggestionCount: If count is outside [1, 10]
        UnknownScheme: If the scheme tag is not supported
    """
    if not Config.validate_suggestion_count(count):
        raise InvalidSuggestionCount(count, Config.MIN_SUGGESTIONS, Config.MAX_SUGGESTIONS)

    scheme = coerce_scheme(scheme)
    suggestions: List[Suggestion] = []

    for index, variation in enumerate(_VARIATIONS[:count]):
        rank = index + 1
        if variation is None:
            suggestions.append(_scheme_alternative(base, scheme, palette_size))
            continue

        suggestions.append(Suggestion(
            palette=create_palette(variation.perturb(base), scheme, palette_size),
            description=variation.describe(scheme.value),
            strategy=variation.strategy,
            rank=rank,
        ))

    get_logger().debug("Suggestion set generated", extra={
        "base_hex": base.hex,
        "scheme": scheme.value,
        "count": len(suggestions),
    })

    return SuggestionSet(
        suggestions=suggestions,
        base_color=base,
        requested_scheme=scheme,
    )
