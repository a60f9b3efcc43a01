"""
Unit tests for the color harmony engine

Tests hue arithmetic and each scheme generator against the color theory
rules they implement.
"""

import random

import pytest

from huecraft.errors import InvalidPaletteSize, UnknownScheme
from huecraft.schemas import ColorScheme
from huecraft.services.colors.conversions import create_color_from_hex, create_color_from_hsl
from huecraft.services.colors.harmony import (
    coerce_scheme, generate_analogous, generate_complementary, generate_monochromatic,
    generate_palette, generate_random, generate_random_color, generate_tetradic,
    generate_triadic, get_hue_distance, normalize_hue, rotate_hue,
)

BASE_HEXES = ["#FF0000", "#3366CC", "#1ABC9C", "#8E44AD", "#F1C40F", "#0A0A14"]


class TestHueRotation:
    """Test hue rotation mathematics."""

    def test_rotation_wraps(self):
        """Rotations normalize into [0, 360)."""
        assert rotate_hue(350, 20) == 10
        assert rotate_hue(10, -30) == 340
        assert rotate_hue(0, 360) == 0
        assert rotate_hue(180, 180) == 0

    def test_rotation_rounds_to_int(self):
        """Fractional rotations round to whole degrees."""
        assert rotate_hue(10, 7.5) == 18
        assert isinstance(rotate_hue(10, 7.5), int)

    def test_normalize_negative(self):
        """Negative hues wrap forward."""
        assert normalize_hue(-90) == 270

    def test_hue_distance_is_circular(self):
        """Distance takes the short way around the wheel."""
        assert get_hue_distance(350, 10) == 20
        assert get_hue_distance(0, 180) == 180
        assert get_hue_distance(90, 90) == 0


class TestComplementary:
    """Test complementary palettes."""

    @pytest.mark.parametrize("base_hex", BASE_HEXES)
    def test_opposite_hue(self, base_hex):
        """Second color is 180° away with unchanged saturation and lightness."""
        base = create_color_from_hex(base_hex)
        colors = generate_complementary(base)
        assert len(colors) == 2
        assert colors[0] == base
        assert colors[1].hsl.h == (base.hsl.h + 180) % 360
        assert colors[1].hsl.s == base.hsl.s
        assert colors[1].hsl.l == base.hsl.l

    def test_violet_complement_is_90(self, violet):
        """Base hue 270° complements to 90°."""
        assert generate_complementary(violet)[1].hsl.h == 90


class TestAnalogous:
    """Test analogous palettes."""

    @pytest.mark.parametrize("base_hex", BASE_HEXES)
    def test_five_colors_sorted_within_window(self, base_hex):
        """Five colors, ascending hue, all within 30° of the base, base present once."""
        base = create_color_from_hex(base_hex)
        colors = generate_analogous(base, 5)

        assert len(colors) == 5
        hues = [c.hsl.h for c in colors]
        assert hues == sorted(hues)
        assert all(get_hue_distance(h, base.hsl.h) <= 30 for h in hues)
        assert sum(1 for c in colors if c == base) == 1

    def test_three_color_offsets(self):
        """Three colors sit at -30°, base, +30°."""
        base = create_color_from_hsl((180, 50, 50))
        assert [c.hsl.h for c in generate_analogous(base, 3)] == [150, 180, 210]

    def test_single_color(self):
        """A one-color analogous palette is the base alone."""
        base = create_color_from_hsl((100, 50, 50))
        assert generate_analogous(base, 1) == [base]

    def test_zero_count_rejected(self, red):
        """Empty analogous palettes are rejected."""
        with pytest.raises(InvalidPaletteSize):
            generate_analogous(red, 0)


class TestTriadicAndTetradic:
    """Test evenly spaced schemes."""

    @pytest.mark.parametrize("base_hex", BASE_HEXES)
    def test_triadic_hues(self, base_hex):
        """Triadic hues are exactly h, h+120 and h+240."""
        base = create_color_from_hex(base_hex)
        h = base.hsl.h
        hues = {c.hsl.h for c in generate_triadic(base)}
        assert hues == {h, (h + 120) % 360, (h + 240) % 360}

    def test_tetradic_default_angle(self):
        """Tetradic forms a 30° rectangle by default."""
        base = create_color_from_hsl((10, 70, 40))
        assert [c.hsl.h for c in generate_tetradic(base)] == [10, 40, 190, 220]

    def test_tetradic_custom_angle(self):
        """Tetradic angle can be widened to a square."""
        base = create_color_from_hsl((0, 70, 40))
        assert [c.hsl.h for c in generate_tetradic(base, 90)] == [0, 90, 180, 270]


class TestMonochromatic:
    """Test monochromatic palettes."""

    @pytest.mark.parametrize("count", [2, 3, 5, 8])
    def test_lightness_ladder(self, count):
        """Shared hue and saturation, strictly increasing lightness 15..85."""
        base = create_color_from_hex("#3366CC")
        colors = generate_monochromatic(base, count)

        assert len(colors) == count
        assert {c.hsl.h for c in colors} == {base.hsl.h}
        assert {c.hsl.s for c in colors} == {base.hsl.s}
        lightness = [c.hsl.l for c in colors]
        assert all(a < b for a, b in zip(lightness, lightness[1:]))
        assert lightness[0] == 15
        assert lightness[-1] == 85

    def test_five_step_values(self):
        """Five steps round half up."""
        base = create_color_from_hsl((200, 50, 50))
        assert [c.hsl.l for c in generate_monochromatic(base, 5)] == [15, 33, 50, 68, 85]

    def test_single_shade_rejected(self, red):
        """A single shade cannot span the ladder."""
        with pytest.raises(InvalidPaletteSize):
            generate_monochromatic(red, 1)


class TestRandom:
    """Test random palettes."""

    def test_random_ranges(self):
        """Random colors stay within vivid saturation and lightness bands."""
        rng = random.Random(7)
        for _ in range(200):
            color = generate_random_color(rng)
            assert 0 <= color.hsl.h < 360
            assert 70 <= color.hsl.s <= 100
            assert 40 <= color.hsl.l <= 70

    def test_seeded_is_reproducible(self):
        """Same seed, same palette."""
        first = generate_random(5, random.Random(1))
        second = generate_random(5, random.Random(1))
        assert [c.hex for c in first] == [c.hex for c in second]

    def test_random_count(self):
        """Random honours the requested count."""
        assert len(generate_random(7)) == 7


class TestDispatch:
    """Test scheme dispatch."""

    @pytest.mark.parametrize("scheme,expected_len", [
        (ColorScheme.COMPLEMENTARY, 2),
        (ColorScheme.ANALOGOUS, 5),
        (ColorScheme.TRIADIC, 3),
        (ColorScheme.TETRADIC, 4),
        (ColorScheme.MONOCHROMATIC, 5),
        (ColorScheme.RANDOM, 5),
    ])
    def test_dispatch_lengths(self, red, scheme, expected_len):
        """Each scheme routes to its generator."""
        assert len(generate_palette(red, scheme, 5)) == expected_len

    def test_string_tags_accepted(self, red):
        """Scheme strings resolve to the enum."""
        assert generate_palette(red, "triadic") == generate_triadic(red)

    def test_unknown_scheme(self, red):
        """Unknown tags raise UnknownScheme."""
        with pytest.raises(UnknownScheme):
            generate_palette(red, "split-complementary")

    def test_coerce_scheme(self):
        """Enum members pass through, strings are looked up."""
        assert coerce_scheme(ColorScheme.RANDOM) is ColorScheme.RANDOM
        assert coerce_scheme("analogous") is ColorScheme.ANALOGOUS


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
