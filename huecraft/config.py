"""
Huecraft Configuration
Manages environment variables and defaults for palette generation and personalization.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for Huecraft services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("HUECRAFT_LOG_LEVEL", "INFO")
    LOG_CONFIGURE: bool = os.environ.get("HUECRAFT_LOG_CONFIGURE", "").lower() in ("1", "true", "yes")

    # Storage
    DATA_DIR: str = os.environ.get(
        "HUECRAFT_DATA_DIR", os.path.join(os.path.expanduser("~"), ".huecraft")
    )
    STORE_FILENAME: str = os.environ.get("HUECRAFT_STORE_FILENAME", "favorites.json")
    MAX_INTERACTIONS: int = int(os.environ.get("HUECRAFT_MAX_INTERACTIONS", "500"))

    # Preference learning
    RECENT_ACTIVITY: int = int(os.environ.get("HUECRAFT_RECENT_ACTIVITY", "20"))
    MIN_HISTORY: int = int(os.environ.get("HUECRAFT_MIN_HISTORY", "3"))

    # Generation defaults
    DEFAULT_PALETTE_SIZE: int = int(os.environ.get("HUECRAFT_DEFAULT_PALETTE_SIZE", "5"))
    DEFAULT_SUGGESTIONS: int = int(os.environ.get("HUECRAFT_DEFAULT_SUGGESTIONS", "5"))

    # Hard limits
    MIN_SUGGESTIONS: int = 1
    MAX_SUGGESTIONS: int = 10
    AI_PALETTE_SIZE: int = 5

    @classmethod
    def validate_suggestion_count(cls, count: int) -> bool:
        """Validate number of requested suggestions."""
        return cls.MIN_SUGGESTIONS <= count <= cls.MAX_SUGGESTIONS

    @classmethod
    def validate_palette_size(cls, count: int, minimum: int = 1) -> bool:
        """Validate number of colors requested for a palette."""
        return count >= minimum

    @classmethod
    def store_path(cls) -> str:
        """Full path of the JSON palette store."""
        return os.path.join(cls.DATA_DIR, cls.STORE_FILENAME)


# Global config instance
config = Config()
