"""
Huecraft Schemas
Pydantic models for colors, palettes, suggestions, interactions and preferences.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from huecraft.config import Config

HEX_PATTERN = r"^#[0-9A-F]{6}$"
CANDIDATE_HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ColorScheme(str, Enum):
    """Color harmony rules supported by the theory generator."""
    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    MONOCHROMATIC = "monochromatic"
    RANDOM = "random"


class GenerationMethod(str, Enum):
    """How a palette came to exist."""
    RANDOM = "random"
    PROMPT = "prompt"
    URL = "url"
    IMAGE = "image"
    SCHEME = "scheme"


class SuggestionStrategy(str, Enum):
    """Perturbation strategy used to derive a suggestion."""
    HUE_SHIFT = "hue-shift"
    SATURATION_VARIATION = "saturation-variation"
    LIGHTNESS_VARIATION = "lightness-variation"
    SCHEME_ALTERNATIVE = "scheme-alternative"
    HYBRID = "hybrid"


class InteractionType(str, Enum):
    """User actions recorded against palettes."""
    GENERATE = "generate"
    SAVE = "save"
    EDIT = "edit"
    VIEW = "view"
    SEARCH = "search"
    EXPORT = "export"
    DELETE = "delete"


# ============================================================================
# COLOR SCHEMAS
# ============================================================================

class RGB(BaseModel):
    """RGB color with 8-bit integer channels."""
    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")

    def as_tuple(self):
        return (self.r, self.g, self.b)


class HSL(BaseModel):
    """HSL color with integer degrees and percentages."""
    model_config = ConfigDict(frozen=True)

    h: int = Field(..., ge=0, lt=360, description="Hue in degrees [0, 360)")
    s: int = Field(..., ge=0, le=100, description="Saturation percentage [0, 100]")
    l: int = Field(..., ge=0, le=100, description="Lightness percentage [0, 100]")


class Color(BaseModel):
    """Immutable color value carrying all three representations."""
    model_config = ConfigDict(frozen=True)

    hex: str = Field(..., pattern=HEX_PATTERN, description="Canonical hex color #RRGGBB")
    rgb: RGB = Field(..., description="RGB representation")
    hsl: HSL = Field(..., description="HSL representation")
    locked: Optional[bool] = Field(None, description="Whether the color is locked while editing")

    @model_validator(mode="after")
    def _hex_matches_rgb(self) -> "Color":
        expected = f"#{self.rgb.r:02X}{self.rgb.g:02X}{self.rgb.b:02X}"
        if self.hex != expected:
            raise ValueError(f"hex {self.hex} does not match rgb {self.rgb.as_tuple()}")
        return self

    def with_locked(self, locked: bool = True) -> "Color":
        """Return a copy of this color with the lock flag set."""
        return self.model_copy(update={"locked": locked})


# ============================================================================
# PALETTE SCHEMAS
# ============================================================================

class PaletteMetadata(BaseModel):
    """Provenance of a palette."""
    model_config = ConfigDict(frozen=True)

    created: datetime = Field(default_factory=_utcnow, description="Creation timestamp")
    generation_method: GenerationMethod = Field(..., description="How the palette was produced")
    original_prompt: Optional[str] = Field(None, description="Natural-language prompt, if any")
    source_url: Optional[str] = Field(None, description="Source website, if extracted")
    source_image: Optional[str] = Field(None, description="Source image path, if extracted")
    ai_reasoning: Optional[str] = Field(None, description="Reasoning returned by the AI collaborator")


class Palette(BaseModel):
    """Ordered colors produced by one generation call."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique palette id")
    colors: List[Color] = Field(..., min_length=1, description="Palette colors in order")
    scheme: ColorScheme = Field(..., description="Scheme the palette follows")
    metadata: PaletteMetadata = Field(..., description="Palette provenance")

    def with_colors(self, colors: List[Color]) -> "Palette":
        """Return a new palette with the color sequence replaced."""
        return type(self).model_validate({**self.model_dump(), "colors": list(colors)})


class FavoritePalette(Palette):
    """Palette saved by the user with naming and usage data."""
    name: str = Field(..., description="User-facing name")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    usage_count: int = Field(1, ge=0, description="Number of times the favorite was used")
    saved_at: datetime = Field(default_factory=_utcnow, description="When the favorite was saved")
    last_used: Optional[datetime] = Field(None, description="Last time the favorite was used")


# ============================================================================
# SUGGESTION SCHEMAS
# ============================================================================

class Suggestion(BaseModel):
    """One ranked variation of a requested palette."""
    model_config = ConfigDict(frozen=True)

    palette: Palette
    description: str = Field(..., description="Human-readable label")
    strategy: SuggestionStrategy
    rank: int = Field(..., ge=1, description="1-based position in the set")


class SuggestionSet(BaseModel):
    """Ranked suggestions generated for one request."""
    model_config = ConfigDict(frozen=True)

    suggestions: List[Suggestion]
    base_color: Color
    requested_scheme: ColorScheme
    generated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _ranks_are_contiguous(self) -> "SuggestionSet":
        ranks = [s.rank for s in self.suggestions]
        if ranks != list(range(1, len(ranks) + 1)):
            raise ValueError(f"suggestion ranks must be 1..{len(ranks)}, got {ranks}")
        return self


# ============================================================================
# INTERACTION & PREFERENCE SCHEMAS
# ============================================================================

class Interaction(BaseModel):
    """Recorded user action against a palette."""
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime = Field(default_factory=_utcnow)
    type: InteractionType
    palette_id: str
    colors: List[Color] = Field(default_factory=list, description="Snapshot of palette colors")
    scheme: ColorScheme
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Tags, query, format, prompt")

    @property
    def tags(self) -> List[str]:
        tags = self.metadata.get("tags") or []
        if isinstance(tags, str):
            return [tags]
        return [str(tag) for tag in tags]


class HueRange(BaseModel):
    """Histogram bucket of preferred hues."""
    min: int
    max: int
    count: int = 0
    name: str


class ValueRange(BaseModel):
    """Preferred [min, max] interval on a 0-1 scale."""
    min: float = Field(..., ge=0.0, le=1.0)
    max: float = Field(..., ge=0.0, le=1.0)


class ColorPreferences(BaseModel):
    """Raw color statistics over saved and edited palettes."""
    hues: List[int] = Field(default_factory=list, description="Every collected hue in degrees")
    saturation: float = Field(0.7, description="Mean saturation as a fraction")
    lightness: float = Field(0.5, description="Mean lightness as a fraction")


class UserPreferences(BaseModel):
    """Preference summary derived from the full interaction history."""
    total_interactions: int = 0
    favorite_schemes: Dict[str, int] = Field(default_factory=dict)
    favorite_hue_ranges: List[HueRange] = Field(default_factory=list)
    favorite_saturation_range: ValueRange
    favorite_lightness_range: ValueRange
    common_tags: Dict[str, int] = Field(default_factory=dict)
    recent_activity: List[Interaction] = Field(default_factory=list)


# ============================================================================
# AI CANDIDATE & RANKING SCHEMAS
# ============================================================================

CandidateHex = Annotated[str, Field(pattern=CANDIDATE_HEX_PATTERN)]


class PaletteCandidate(BaseModel):
    """Palette proposed by the AI collaborator."""
    model_config = ConfigDict(strict=True)

    colors: List[CandidateHex] = Field(
        ..., min_length=Config.AI_PALETTE_SIZE, max_length=Config.AI_PALETTE_SIZE
    )
    scheme: ColorScheme
    reasoning: str = ""

    @field_validator("scheme", mode="before")
    @classmethod
    def _scheme_from_string(cls, value):
        if isinstance(value, str):
            return ColorScheme(value)
        return value

    @field_validator("reasoning", mode="before")
    @classmethod
    def _reasoning_default(cls, value):
        return "" if value is None else value


class CandidateBatch(BaseModel):
    """Candidates accepted from one AI response, with the drop report."""
    candidates: List[PaletteCandidate] = Field(default_factory=list)
    dropped: int = 0
    reasons: List[str] = Field(default_factory=list)


class ScoredPalette(BaseModel):
    """Palette paired with its preference score."""
    palette: Palette
    score: int = Field(..., ge=0, le=100)
    reasoning: Optional[str] = None
