"""
Huecraft error types.

Every failure raised by the color core and its collaborators derives from
HuecraftError. Input-validation failures also derive from ValueError.
"""
from typing import List, Optional


class HuecraftError(Exception):
    """Base exception for Huecraft."""
    pass


class InvalidColorFormat(HuecraftError, ValueError):
    """Malformed hex color input."""

    def __init__(self, color: str, expected_format: str = "#RRGGBB or #RGB"):
        self.color = color
        self.expected_format = expected_format
        super().__init__(f'Invalid color format: "{color}" (expected {expected_format})')


class ColorChannelRange(HuecraftError, ValueError):
    """RGB channel outside [0, 255] after rounding."""

    def __init__(self, channel: str, value: float, minimum: int = 0, maximum: int = 255):
        self.channel = channel
        self.value = value
        super().__init__(
            f'Color channel "{channel}" value {value} is out of range. '
            f"Expected {minimum}-{maximum}"
        )


class UnknownScheme(HuecraftError, ValueError):
    """Scheme tag outside the closed set."""

    def __init__(self, scheme: object):
        self.scheme = scheme
        super().__init__(f"Unknown color scheme: {scheme!s}")


class InvalidSuggestionCount(HuecraftError, ValueError):
    """Suggestion count outside [1, 10]."""

    def __init__(self, count: int, minimum: int = 1, maximum: int = 10):
        self.count = count
        super().__init__(f"Suggestion count must be between {minimum} and {maximum}, got {count}")


class InvalidPaletteSize(HuecraftError, ValueError):
    """Requested palette color count is too small for the scheme."""

    def __init__(self, count: int, minimum: int, scheme: str):
        self.count = count
        super().__init__(f"{scheme} palettes need at least {minimum} colors, got {count}")


class InsufficientHistory(HuecraftError):
    """Too few interactions to personalize."""

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"Need at least {required} interactions to generate personalized "
            f"recommendations, have {available}"
        )


class MalformedCandidate(HuecraftError, ValueError):
    """AI-returned candidate palette failed shape or format validation."""

    def __init__(self, message: str, reasons: Optional[List[str]] = None):
        self.reasons = reasons or []
        super().__init__(message)


class StorageError(HuecraftError):
    """Palette store could not be read or written."""
    pass
