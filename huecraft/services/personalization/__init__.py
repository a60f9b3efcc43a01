"""
Personalization services for Huecraft.

Learns taste from the interaction log, scores palettes against it and asks an
AI collaborator for tailored recommendations.
"""

from huecraft.services.personalization.features import build_user_preferences
from huecraft.services.personalization.ranking import (
    PersonalizedRanker, calculate_preference_score, get_personalized_ranker,
)

__all__ = [
    "build_user_preferences",
    "calculate_preference_score",
    "PersonalizedRanker",
    "get_personalized_ranker",
]
