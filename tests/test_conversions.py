"""
Unit tests for color space conversions.

Covers hex parsing, channel rounding and the RGB/HSL transforms that every
other module builds on.
"""

import itertools

import pytest

from huecraft.errors import ColorChannelRange, InvalidColorFormat
from huecraft.schemas import HSL, RGB
from huecraft.services.colors.conversions import (
    create_color_from_hex, create_color_from_hsl, create_color_from_rgb,
    hex_to_rgb, hsl_to_hex, hsl_to_rgb, rgb_to_hex, rgb_to_hsl, round_half_up,
)


class TestHexParsing:
    """Test hex string parsing."""

    def test_hex_to_rgb_red(self):
        """Pure red parses to full red channel."""
        assert hex_to_rgb("#FF0000") == RGB(r=255, g=0, b=0)

    def test_hex_without_hash_and_lowercase(self):
        """Leading # is optional and digits are case-insensitive."""
        assert hex_to_rgb("ff5733") == RGB(r=255, g=87, b=51)

    def test_shorthand_expansion(self):
        """3-digit shorthand duplicates each digit."""
        assert hex_to_rgb("#F0A") == RGB(r=255, g=0, b=170)

    @pytest.mark.parametrize("bad", ["#FF00", "#GGGGGG", "", "#", "#FF00000", "FF00 00", "#FF0000\n"])
    def test_invalid_hex_format(self, bad):
        """Anything but 3 or 6 hex digits is rejected."""
        with pytest.raises(InvalidColorFormat):
            hex_to_rgb(bad)

    def test_invalid_format_is_value_error(self):
        """Format errors are also ValueErrors for generic callers."""
        with pytest.raises(ValueError):
            hex_to_rgb("nope")


class TestHexFormatting:
    """Test RGB to hex formatting."""

    def test_uppercase_output(self):
        """Hex output is uppercase with # prefix."""
        assert rgb_to_hex((171, 205, 239)) == "#ABCDEF"

    def test_channels_are_rounded(self):
        """Fractional channels round half up."""
        assert rgb_to_hex((254.5, 0.4, 127.5)) == "#FF0080"
        assert rgb_to_hex((76.5, 76.5, 76.5)) == "#4D4D4D"

    def test_channel_out_of_range(self):
        """Rounded channels outside [0, 255] raise ColorChannelRange."""
        with pytest.raises(ColorChannelRange):
            rgb_to_hex((256, 0, 0))
        with pytest.raises(ColorChannelRange):
            rgb_to_hex((0, -1, 0))

    def test_rgb_hex_roundtrip_is_lossless(self):
        """Integer RGB triples survive hex formatting and parsing exactly."""
        for r, g, b in itertools.product(range(0, 256, 15), repeat=3):
            assert hex_to_rgb(rgb_to_hex((r, g, b))).as_tuple() == (r, g, b)


class TestHSL:
    """Test RGB <-> HSL transforms."""

    def test_red_to_hsl(self):
        """Pure red is hue 0, full saturation, half lightness."""
        assert rgb_to_hsl(RGB(r=255, g=0, b=0)) == HSL(h=0, s=100, l=50)

    def test_achromatic(self):
        """Grays have hue 0 and saturation 0."""
        hsl = rgb_to_hsl((128, 128, 128))
        assert hsl.h == 0
        assert hsl.s == 0
        assert hsl.l == 50

    def test_primary_hues(self):
        """Green and blue land on their sectors."""
        assert rgb_to_hsl((0, 255, 0)).h == 120
        assert rgb_to_hsl((0, 0, 255)).h == 240
        assert rgb_to_hsl((255, 0, 255)).h == 300

    def test_hsl_to_rgb_basic(self):
        """Known HSL values map to known RGB."""
        assert hsl_to_rgb((0, 100, 50)) == RGB(r=255, g=0, b=0)
        assert hsl_to_rgb((120, 100, 25)) == RGB(r=0, g=128, b=0)
        assert hsl_to_rgb((0, 0, 100)) == RGB(r=255, g=255, b=255)

    def test_hsl_roundtrip_within_one_unit(self):
        """HSL -> RGB -> HSL stays within one unit per channel."""
        for h, s, l in itertools.product(range(0, 360, 15), (60, 80, 100), (40, 50, 60)):
            back = rgb_to_hsl(hsl_to_rgb((h, s, l)))
            hue_diff = abs(back.h - h) % 360
            assert min(hue_diff, 360 - hue_diff) <= 1, (h, s, l, back)
            assert abs(back.s - s) <= 1, (h, s, l, back)
            assert abs(back.l - l) <= 1, (h, s, l, back)


class TestColorConstructors:
    """Test composite Color constructors."""

    def test_from_hex_normalizes_shorthand(self):
        """Shorthand lowercase input becomes canonical uppercase hex."""
        color = create_color_from_hex("f00")
        assert color.hex == "#FF0000"
        assert color.rgb == RGB(r=255, g=0, b=0)
        assert color.hsl == HSL(h=0, s=100, l=50)
        assert color.locked is None

    def test_from_rgb(self):
        """RGB construction fills hex and hsl consistently."""
        color = create_color_from_rgb((51, 102, 204))
        assert color.hex == "#3366CC"
        assert color.hsl == rgb_to_hsl((51, 102, 204))

    def test_from_hsl_keeps_hsl(self):
        """HSL construction keeps the requested HSL values."""
        color = create_color_from_hsl((270, 100, 50))
        assert color.hsl == HSL(h=270, s=100, l=50)
        assert color.hex == hsl_to_hex((270, 100, 50))

    def test_from_hsl_wraps_hue(self):
        """Hue is wrapped into [0, 360)."""
        assert create_color_from_hsl((360, 50, 50)).hsl.h == 0

    def test_with_locked(self):
        """Locking returns a copy and leaves the original untouched."""
        color = create_color_from_hex("#123456")
        locked = color.with_locked()
        assert locked.locked is True
        assert color.locked is None
        assert locked.hex == color.hex

    def test_mismatched_hex_rejected(self):
        """A Color whose hex disagrees with its RGB cannot be built."""
        color = create_color_from_hex("#123456")
        with pytest.raises(ValueError):
            type(color)(hex="#654321", rgb=color.rgb, hsl=color.hsl)


def test_round_half_up():
    """Halves round away from even."""
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2
    assert round_half_up(-0.5) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
