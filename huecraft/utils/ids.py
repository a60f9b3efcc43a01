"""
Huecraft ID Utilities
Generate unique identifiers for palettes and interactions.
"""
import uuid
from datetime import datetime


def _short_uuid() -> str:
    return uuid.uuid4().hex[:8]


def generate_palette_id() -> str:
    """
    Generate a unique palette ID.

    Returns:
        Unique palette ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    return f"pal-{timestamp}-{_short_uuid()}"


def generate_interaction_id() -> str:
    """
    Generate a unique interaction ID.

    Returns:
        Unique interaction ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    return f"int-{timestamp}-{_short_uuid()}"


def extract_timestamp_from_id(identifier: str) -> str:
    """
    Extract timestamp from a palette or interaction ID.

    Args:
        identifier: ID string produced by this module

    Returns:
        Timestamp string or empty if not found
    """
    parts = identifier.split("-")
    if len(parts) >= 3 and parts[0] in ("pal", "int"):
        return parts[1]
    return ""
