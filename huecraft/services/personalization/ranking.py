"""
Personalized palette scoring and re-ranking.
Maps a palette plus a preference summary to a bounded 0-100 score.
"""

import time
from typing import List, Optional, Sequence

import numpy as np

from huecraft.schemas import Palette, ScoredPalette, UserPreferences
from huecraft.services.colors.conversions import round_half_up
from huecraft.services.personalization.features import analyze_color_preferences
from huecraft.utils.logging import get_logger

BASE_SCORE = 50.0
SCHEME_WEIGHT = 20.0
HUE_WEIGHT = 15.0
SATURATION_WEIGHT = 7.5
LIGHTNESS_WEIGHT = 7.5
HUE_MATCH_DEGREES = 30.0


def _hue_match_fraction(palette_hues: np.ndarray, preferred_hues: np.ndarray) -> float:
    """Fraction of palette hues within the match window of any preferred hue."""
    diff = np.abs(palette_hues[:, None] - preferred_hues[None, :]) % 360
    circular = np.minimum(diff, 360 - diff)
    matches = (circular < HUE_MATCH_DEGREES).any(axis=1)
    return float(matches.mean())


def calculate_preference_score(palette: Palette, preferences: UserPreferences) -> int:
    """
    Calculate preference score for a palette based on user history.

    Components:
        base 50
        scheme bonus up to 20 (share of scheme interactions using this scheme)
        hue bonus up to 15 (share of colors near a preferred hue)
        saturation and lightness bonus up to 7.5 each (only with hue data)

    Returns:
        Integer score in [0, 100]
    """
    score = BASE_SCORE

    total_scheme_interactions = sum(preferences.favorite_schemes.values())
    if total_scheme_interactions > 0:
        scheme_count = preferences.favorite_schemes.get(palette.scheme.value, 0)
        score += SCHEME_WEIGHT * scheme_count / total_scheme_interactions

    color_prefs = analyze_color_preferences(preferences.recent_activity)
    if color_prefs.hues:
        hsl = np.array([(c.hsl.h, c.hsl.s, c.hsl.l) for c in palette.colors], dtype=float)

        score += HUE_WEIGHT * _hue_match_fraction(hsl[:, 0], np.asarray(color_prefs.hues, dtype=float))

        saturation_diff = abs(hsl[:, 1].mean() / 100.0 - color_prefs.saturation)
        score += SATURATION_WEIGHT * (1 - saturation_diff)

        lightness_diff = abs(hsl[:, 2].mean() / 100.0 - color_prefs.lightness)
        score += LIGHTNESS_WEIGHT * (1 - lightness_diff)

    clamped = max(0.0, min(100.0, score))
    return round_half_up(clamped)


class PersonalizedRanker:
    """Applies preference scores to re-rank candidate palettes."""

    def rerank(
        self,
        palettes: Sequence[Palette],
        preferences: UserPreferences,
        reasonings: Optional[Sequence[Optional[str]]] = None
    ) -> List[ScoredPalette]:
        """
        Score every palette and order by descending score.

        Ties keep their input order.

        Raises:
            ValueError: If reasonings are given but do not pair one-to-one
                with palettes
        """
        start_time = time.time()
        palettes = list(palettes)
        reasonings = list(reasonings) if reasonings is not None else [None] * len(palettes)
        if len(reasonings) != len(palettes):
            raise ValueError(
                f"Got {len(reasonings)} reasonings for {len(palettes)} palettes"
            )

        scored = [
            ScoredPalette(
                palette=palette,
                score=calculate_preference_score(palette, preferences),
                reasoning=reasoning,
            )
            for palette, reasoning in zip(palettes, reasonings)
        ]
        scored.sort(key=lambda item: item.score, reverse=True)

        reranking_time_ms = (time.time() - start_time) * 1000
        get_logger().debug(
            f"Re-ranked {len(scored)} palettes in {reranking_time_ms:.2f}ms",
            extra={"total_interactions": preferences.total_interactions},
        )
        return scored


# Factory function for dependency injection
def get_personalized_ranker() -> PersonalizedRanker:
    """Get personalized ranker instance."""
    return PersonalizedRanker()
