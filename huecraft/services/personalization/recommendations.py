"""
AI-assisted palette generation and personalized recommendations.

The language model itself is an injected collaborator: anything implementing
PaletteCompletionClient can be passed in. This module builds the prompts,
validates what comes back and ranks accepted candidates against the user's
preference summary.
"""

import json
import re
from typing import Any, List, Optional, Protocol, Sequence

from pydantic import ValidationError

from huecraft.config import Config
from huecraft.errors import InsufficientHistory, MalformedCandidate
from huecraft.schemas import (
    CandidateBatch, ColorPreferences, GenerationMethod, Interaction, Palette,
    PaletteCandidate, PaletteMetadata, ScoredPalette, UserPreferences,
)
from huecraft.services.colors.conversions import create_color_from_hex, round_half_up
from huecraft.services.personalization.features import (
    analyze_color_preferences, build_user_preferences,
)
from huecraft.services.personalization.ranking import get_personalized_ranker
from huecraft.utils.ids import generate_palette_id
from huecraft.utils.logging import get_logger

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

DEFAULT_REASONING = "Personalized recommendation"

PALETTE_SYSTEM_PROMPT = """You are a professional color designer who creates beautiful color palettes based on descriptions.

When given a description, you will:
1. Understand the mood, theme, and aesthetic intent
2. Generate a harmonious color palette of exactly 5 colors
3. Return ONLY a JSON object with this exact structure:

{
  "colors": ["#FF5733", "#C70039", "#900C3F", "#581845", "#FFC300"],
  "scheme": "analogous",
  "reasoning": "Brief explanation of color choices"
}

Rules:
- Colors must be valid 6-character hex codes with # prefix
- Always provide exactly 5 colors
- Scheme must be one of: complementary, analogous, triadic, tetradic, monochromatic, random
- Reasoning should be 1-2 sentences explaining the aesthetic intent"""

RECOMMENDATION_SYSTEM_PROMPT = """You are an expert color designer specializing in personalized palette recommendations.

Based on a user's interaction history and color preferences, you create tailored palette suggestions that match their unique taste.

Return recommendations as JSON array with this structure:
[
  {
    "colors": ["#FF5733", "#C70039", "#900C3F", "#581845", "#FFC300"],
    "scheme": "analogous",
    "reasoning": "Brief explanation of why this palette suits their taste"
  }
]

Rules:
- Colors must be valid 6-character hex codes with # prefix
- Each palette must have exactly 5 colors
- Scheme must be one of: complementary, analogous, triadic, tetradic, monochromatic, random
- Reasoning should explain how the palette matches the user's preferences
- Make recommendations diverse but aligned with their taste patterns"""


class PaletteCompletionClient(Protocol):
    """Text-completion collaborator that answers palette prompts."""

    def complete(self, system: str, prompt: str) -> str:
        ...


def extract_json(text: str, kind: str = "object") -> Any:
    """
    Pull the first JSON object or array out of free-form model output.

    Raises:
        MalformedCandidate: If no JSON of the requested kind is present or it
            does not parse
    """
    pattern = _JSON_ARRAY if kind == "array" else _JSON_OBJECT
    match = pattern.search(text or "")
    if not match:
        raise MalformedCandidate(f"Invalid response format from AI: no JSON {kind} found")

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise MalformedCandidate(f"Invalid JSON in AI response: {e}") from e


def parse_palette_candidate(data: Any) -> PaletteCandidate:
    """
    Validate one AI palette candidate.

    A candidate needs exactly 5 colors matching #RRGGBB and one of the six
    known scheme tags.
    """
    if not isinstance(data, dict):
        raise MalformedCandidate(f"Candidate must be an object, got {type(data).__name__}")

    try:
        return PaletteCandidate.model_validate(data)
    except ValidationError as e:
        reasons = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise MalformedCandidate("Invalid palette candidate", reasons=reasons) from e


def parse_palette_response(text: str) -> PaletteCandidate:
    """Parse a single-palette response; any defect is fatal."""
    return parse_palette_candidate(extract_json(text, "object"))


def parse_recommendations(text: str) -> CandidateBatch:
    """
    Parse a list of candidate palettes.

    Invalid entries are dropped individually; the drop count and reasons are
    logged and returned. If nothing valid remains the whole response is
    rejected.
    """
    data = extract_json(text, "array")
    if not isinstance(data, list):
        raise MalformedCandidate("Recommendation response must be a JSON array")

    batch = CandidateBatch()
    for index, item in enumerate(data):
        try:
            batch.candidates.append(parse_palette_candidate(item))
        except MalformedCandidate as e:
            batch.dropped += 1
            detail = "; ".join(e.reasons) if e.reasons else str(e)
            batch.reasons.append(f"candidate {index}: {detail}")

    if batch.dropped:
        get_logger().warning(
            f"Dropped {batch.dropped} of {len(data)} AI palette candidates",
            extra={"dropped": batch.dropped, "reasons": batch.reasons},
        )

    if not batch.candidates:
        raise MalformedCandidate("No valid palette candidates in AI response", reasons=batch.reasons)

    return batch


def candidate_to_palette(
    candidate: PaletteCandidate,
    method: GenerationMethod = GenerationMethod.PROMPT,
    prompt: Optional[str] = None,
    default_reasoning: Optional[str] = None
) -> Palette:
    """
    Convert a validated candidate into a Palette with canonical colors.

    An empty candidate reasoning is replaced by `default_reasoning`.
    """
    return Palette(
        id=generate_palette_id(),
        colors=[create_color_from_hex(hex_color) for hex_color in candidate.colors],
        scheme=candidate.scheme,
        metadata=PaletteMetadata(
            generation_method=method,
            original_prompt=prompt,
            ai_reasoning=candidate.reasoning or default_reasoning,
        ),
    )


def generate_from_prompt(prompt: str, client: PaletteCompletionClient) -> Palette:
    """
    Generate a color palette from a natural language prompt.

    Args:
        prompt: Natural language description of desired palette
        client: Completion collaborator

    Returns:
        Palette carrying the prompt and the model's reasoning
    """
    response = client.complete(PALETTE_SYSTEM_PROMPT, prompt)
    candidate = parse_palette_response(response)
    return candidate_to_palette(candidate, GenerationMethod.PROMPT, prompt)


def build_recommendation_prompt(
    preferences: UserPreferences,
    color_prefs: ColorPreferences,
    count: int
) -> str:
    """Describe the user's taste profile for the recommendation model."""
    if preferences.favorite_schemes:
        favorite_scheme = max(preferences.favorite_schemes.items(), key=lambda item: item[1])[0]
    else:
        favorite_scheme = "random"

    top_ranges = sorted(preferences.favorite_hue_ranges, key=lambda r: r.count, reverse=True)[:3]
    favorite_hues = ", ".join(f"{r.name} ({r.min}-{r.max}°)" for r in top_ranges) or "varied"

    tag_lines = "\n".join(
        f"- {tag} ({tag_count}x)"
        for tag, tag_count in list(preferences.common_tags.items())[:5]
    ) or "- No tags yet"

    sat_range = preferences.favorite_saturation_range
    light_range = preferences.favorite_lightness_range

    return f"""Generate {count} personalized palette recommendations for a user with these preferences:

**Color Scheme Preferences:**
- Favorite scheme: {favorite_scheme}
- All schemes used: {', '.join(preferences.favorite_schemes.keys())}

**Color Preferences:**
- Favorite hue ranges: {favorite_hues}
- Preferred saturation: {round_half_up(color_prefs.saturation * 100)}%
- Preferred lightness: {round_half_up(color_prefs.lightness * 100)}%
- Saturation range: {round_half_up(sat_range.min * 100)}-{round_half_up(sat_range.max * 100)}%
- Lightness range: {round_half_up(light_range.min * 100)}-{round_half_up(light_range.max * 100)}%

**Tags Used:**
{tag_lines}

**Activity:**
- Total interactions: {preferences.total_interactions}
- Recent activity: {len(preferences.recent_activity)} interactions

Create {count} diverse palettes that match these preferences. Return ONLY the JSON array, no other text."""


def generate_personalized_recommendations(
    interactions: Sequence[Interaction],
    client: PaletteCompletionClient,
    count: int = 5
) -> List[ScoredPalette]:
    """
    Generate personalized palette recommendations.

    Args:
        interactions: User interaction history
        client: Completion collaborator
        count: Number of recommendations to return

    Returns:
        Up to `count` palettes ordered by descending preference score

    Raises:
        ValueError: If count is below 1
        InsufficientHistory: With fewer than Config.MIN_HISTORY interactions
        MalformedCandidate: If the response holds no valid candidate
    """
    if count < 1:
        raise ValueError(f"Recommendation count must be at least 1, got {count}")

    interactions = list(interactions)
    if len(interactions) < Config.MIN_HISTORY:
        raise InsufficientHistory(len(interactions), Config.MIN_HISTORY)

    preferences = build_user_preferences(interactions)
    color_prefs = analyze_color_preferences(interactions)

    prompt = build_recommendation_prompt(preferences, color_prefs, count)
    response = client.complete(RECOMMENDATION_SYSTEM_PROMPT, prompt)
    batch = parse_recommendations(response)

    palettes = [
        candidate_to_palette(c, GenerationMethod.PROMPT, default_reasoning=DEFAULT_REASONING)
        for c in batch.candidates
    ]
    reasonings = [p.metadata.ai_reasoning for p in palettes]

    ranked = get_personalized_ranker().rerank(palettes, preferences, reasonings)

    get_logger().info("Personalized recommendations scored", extra={
        "candidates": len(batch.candidates),
        "dropped": batch.dropped,
        "returned": min(count, len(ranked)),
    })
    return ranked[:count]
