"""
Huecraft: color palette generation, suggestion and personalization.
"""

from huecraft.errors import (
    ColorChannelRange, HuecraftError, InsufficientHistory, InvalidColorFormat,
    InvalidPaletteSize, InvalidSuggestionCount, MalformedCandidate, StorageError,
    UnknownScheme,
)
from huecraft.schemas import (
    HSL, RGB, Color, ColorPreferences, ColorScheme, FavoritePalette,
    GenerationMethod, Interaction, InteractionType, Palette, PaletteMetadata,
    ScoredPalette, Suggestion, SuggestionSet, SuggestionStrategy, UserPreferences,
)
from huecraft.services.colors import __version__
from huecraft.services.colors.conversions import (
    create_color_from_hex, create_color_from_hsl, create_color_from_rgb,
    hex_to_hsl, hex_to_rgb, hsl_to_hex, hsl_to_rgb, rgb_to_hex, rgb_to_hsl,
)
from huecraft.services.colors.harmony import generate_palette
from huecraft.services.colors.harmony.suggestions import generate_suggestions
from huecraft.services.personalization import (
    build_user_preferences, calculate_preference_score,
)
from huecraft.services.storage import PaletteStore

__all__ = [
    "__version__",
    # conversions
    "hex_to_rgb", "rgb_to_hex", "rgb_to_hsl", "hsl_to_rgb", "hex_to_hsl", "hsl_to_hex",
    "create_color_from_hex", "create_color_from_rgb", "create_color_from_hsl",
    # generation
    "generate_palette", "generate_suggestions",
    # personalization
    "build_user_preferences", "calculate_preference_score",
    # storage
    "PaletteStore",
    # schemas
    "RGB", "HSL", "Color", "ColorScheme", "GenerationMethod", "PaletteMetadata",
    "Palette", "FavoritePalette", "Suggestion", "SuggestionSet", "SuggestionStrategy",
    "Interaction", "InteractionType", "ColorPreferences", "UserPreferences", "ScoredPalette",
    # errors
    "HuecraftError", "InvalidColorFormat", "ColorChannelRange", "UnknownScheme",
    "InvalidSuggestionCount", "InvalidPaletteSize", "InsufficientHistory",
    "MalformedCandidate", "StorageError",
]
