"""
Shared fixtures for Huecraft tests.
"""
import pytest

from huecraft.schemas import (
    ColorScheme, GenerationMethod, Interaction, InteractionType, Palette, PaletteMetadata,
)
from huecraft.services.colors.conversions import create_color_from_hex, create_color_from_hsl
from huecraft.services.colors.harmony import generate_palette
from huecraft.services.storage import InMemoryBackend, PaletteStore
from huecraft.utils.ids import generate_interaction_id, generate_palette_id


@pytest.fixture
def red():
    """Pure red base color."""
    return create_color_from_hex("#FF0000")


@pytest.fixture
def violet():
    """Fully saturated mid-lightness color at 270°."""
    return create_color_from_hsl((270, 100, 50))


@pytest.fixture
def make_palette():
    """Factory for scheme palettes built from a base hex."""
    def _make(base_hex="#3366CC", scheme=ColorScheme.TRIADIC, count=5, prompt=None):
        base = create_color_from_hex(base_hex)
        return Palette(
            id=generate_palette_id(),
            colors=generate_palette(base, scheme, count),
            scheme=scheme,
            metadata=PaletteMetadata(
                generation_method=GenerationMethod.PROMPT if prompt else GenerationMethod.SCHEME,
                original_prompt=prompt,
            ),
        )
    return _make


@pytest.fixture
def make_interaction(make_palette):
    """Factory for interactions against a freshly generated palette."""
    def _make(interaction_type=InteractionType.SAVE, scheme=ColorScheme.TRIADIC,
              base_hex="#3366CC", tags=None):
        palette = make_palette(base_hex, scheme)
        return Interaction(
            id=generate_interaction_id(),
            type=interaction_type,
            palette_id=palette.id,
            colors=palette.colors,
            scheme=scheme,
            metadata={"tags": tags} if tags else {},
        )
    return _make


@pytest.fixture
def memory_store():
    """Palette store backed by memory only."""
    return PaletteStore(backend=InMemoryBackend())
