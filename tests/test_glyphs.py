"""Tests for glyphs module."""

import pytest
from ascii_bmp.errors import ConfigurationError
from ascii_bmp.glyphs import GLYPH_RAMPS, SUPPORTED_BIT_DEPTHS, map_to_glyph, ramp_for


class TestRamps:
    @pytest.mark.parametrize("depth, length", [(1, 2), (2, 4), (3, 8), (4, 16)])
    def test_ramp_lengths(self, depth, length):
        assert len(GLYPH_RAMPS[depth]) == length

    def test_supported_depths(self):
        assert SUPPORTED_BIT_DEPTHS == (1, 2, 3, 4)

    def test_ramps_cannot_be_modified(self):
        with pytest.raises(TypeError):
            GLYPH_RAMPS[5] = "ab"

    def test_unknown_depth(self):
        with pytest.raises(ConfigurationError):
            ramp_for(0)


class TestMapToGlyph:
    @pytest.mark.parametrize(
        "luminance, depth, glyph",
        [
            (0, 1, "#"),
            (127, 1, "#"),
            (128, 1, " "),
            (255, 1, " "),
            (63, 2, "#"),
            (64, 2, "6"),
            (128, 2, "+"),
            (192, 2, " "),
            (32, 3, "&"),
            (100, 3, "2"),
            (128, 4, "1"),
            (16, 4, "#"),
            (32, 4, "&"),
            (255, 4, " "),
        ],
    )
    def test_known_values(self, luminance, depth, glyph):
        assert map_to_glyph(luminance, depth) == glyph

    @pytest.mark.parametrize("depth", SUPPORTED_BIT_DEPTHS)
    def test_darkest_and_lightest(self, depth):
        ramp = GLYPH_RAMPS[depth]
        assert map_to_glyph(0, depth) == ramp[0]
        assert map_to_glyph(255, depth) == ramp[-1]

    @pytest.mark.parametrize("depth", SUPPORTED_BIT_DEPTHS)
    def test_bucket_never_decreases(self, depth):
        ramp = GLYPH_RAMPS[depth]
        # ramp positions only move toward the light end as luminance grows
        buckets = [ramp.index(map_to_glyph(v, depth)) for v in range(256)]
        assert buckets == sorted(buckets)

    @pytest.mark.parametrize("depth", SUPPORTED_BIT_DEPTHS)
    def test_invert_is_mirrored_luminance(self, depth):
        for v in range(256):
            assert map_to_glyph(v, depth, invert=True) == map_to_glyph(255 - v, depth)

    def test_invert_swaps_extremes(self):
        assert map_to_glyph(0, 4, invert=True) == " "
        assert map_to_glyph(255, 4, invert=True) == "#"

    @pytest.mark.parametrize("depth", [0, 5, -1])
    def test_unsupported_depth(self, depth):
        with pytest.raises(ConfigurationError):
            map_to_glyph(100, depth)

    @pytest.mark.parametrize("luminance", [-1, 256])
    def test_luminance_out_of_range(self, luminance):
        with pytest.raises(ValueError):
            map_to_glyph(luminance, 4)
