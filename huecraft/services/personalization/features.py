"""
Preference computation for deriving user taste from interaction history.

Every summary is recomputed from the full history passed in; nothing is cached
or persisted between calls.
"""

from collections import Counter
from typing import Dict, Iterable, List, Sequence

import numpy as np

from huecraft.config import Config
from huecraft.schemas import (
    ColorPreferences, HueRange, Interaction, InteractionType,
    UserPreferences, ValueRange,
)

# Interaction types that reveal which colors the user liked
COLOR_SIGNAL_TYPES = frozenset({InteractionType.SAVE, InteractionType.EDIT})

# Interaction types that reveal which schemes the user reaches for
SCHEME_SIGNAL_TYPES = frozenset({InteractionType.SAVE, InteractionType.GENERATE})

DEFAULT_SATURATION = 0.7
DEFAULT_LIGHTNESS = 0.5
RANGE_HALF_WIDTH = 0.2

# (min, max, name); min inclusive, max exclusive
HUE_BUCKETS = [
    (0, 30, "red-orange"),
    (30, 60, "yellow"),
    (60, 120, "green"),
    (120, 180, "cyan"),
    (180, 240, "blue"),
    (240, 300, "purple"),
    (300, 360, "magenta"),
]


def analyze_color_preferences(interactions: Sequence[Interaction]) -> ColorPreferences:
    """
    Collect hues and mean saturation/lightness from saved and edited palettes.

    Saturation and lightness are returned as fractions in [0, 1]. Without any
    save/edit interaction the defaults (0.7, 0.5) and an empty hue list are
    returned.
    """
    colors = [
        color
        for interaction in interactions
        if interaction.type in COLOR_SIGNAL_TYPES
        for color in interaction.colors
    ]

    if not colors:
        return ColorPreferences(hues=[], saturation=DEFAULT_SATURATION, lightness=DEFAULT_LIGHTNESS)

    hsl = np.array([(c.hsl.h, c.hsl.s, c.hsl.l) for c in colors], dtype=float)

    return ColorPreferences(
        hues=[c.hsl.h for c in colors],
        saturation=float(hsl[:, 1].mean() / 100.0),
        lightness=float(hsl[:, 2].mean() / 100.0),
    )


def analyze_scheme_preferences(interactions: Sequence[Interaction]) -> Dict[str, int]:
    """Count schemes across save and generate interactions."""
    counts = Counter(
        interaction.scheme.value
        for interaction in interactions
        if interaction.type in SCHEME_SIGNAL_TYPES
    )
    return dict(counts)


def analyze_tag_frequency(interactions: Sequence[Interaction]) -> Dict[str, int]:
    """Count how often each tag appears in interaction metadata."""
    counts: Counter = Counter()
    for interaction in interactions:
        counts.update(interaction.tags)
    return dict(counts)


def build_hue_histogram(hues: Iterable[float]) -> List[HueRange]:
    """
    Bucket hues into the seven named ranges of the color wheel.

    Only buckets with at least one hue are returned, in wheel order.
    """
    hue_array = np.asarray(list(hues), dtype=float) % 360
    ranges = []
    for low, high, name in HUE_BUCKETS:
        count = int(np.count_nonzero((hue_array >= low) & (hue_array < high)))
        if count > 0:
            ranges.append(HueRange(min=low, max=high, count=count, name=name))
    return ranges


def _preferred_range(mean: float) -> ValueRange:
    return ValueRange(
        min=max(0.0, mean - RANGE_HALF_WIDTH),
        max=min(1.0, mean + RANGE_HALF_WIDTH),
    )


def build_user_preferences(interactions: Sequence[Interaction]) -> UserPreferences:
    """
    Build the full preference summary from interaction history.

    Args:
        interactions: Interaction log in insertion order

    Returns:
        UserPreferences; recent_activity holds the last 20 interactions
    """
    interactions = list(interactions)
    color_prefs = analyze_color_preferences(interactions)

    return UserPreferences(
        total_interactions=len(interactions),
        favorite_schemes=analyze_scheme_preferences(interactions),
        favorite_hue_ranges=build_hue_histogram(color_prefs.hues),
        favorite_saturation_range=_preferred_range(color_prefs.saturation),
        favorite_lightness_range=_preferred_range(color_prefs.lightness),
        common_tags=analyze_tag_frequency(interactions),
        recent_activity=interactions[-Config.RECENT_ACTIVITY:] if Config.RECENT_ACTIVITY > 0 else [],
    )
