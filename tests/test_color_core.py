"""
Tests for the color math layer: OKLCH conversion, contrast, alpha sets.
"""

import pytest

from chuk_mcp_palette.constants import Foreground
from chuk_mcp_palette.core import (
    AlphaSet,
    choose_foreground,
    coerce_alpha_set,
    convert,
    css_color_to_hex,
    expand,
    foreground_hex,
    hex_components,
    hex_to_rgb,
    luminance,
    oklch_text,
    parse_oklch,
    rgb_to_hex,
)

# Golden values computed once from the fixed OKLCH → sRGB transform
GOLDEN_WHITE = "#FFFFFF"  # L=100 C=0
GOLDEN_GRAY_63 = "#898989"  # L=63 C=0
GOLDEN_GRAY_25 = "#222222"  # L=25 C=0


class TestConvert:
    """Tests for OKLCH → hex conversion."""

    def test_white_golden(self) -> None:
        """L=100 achromatic is white in both spaces."""
        color = convert(100, 0, 0)
        assert color.hex_srgb == GOLDEN_WHITE
        assert color.hex_p3 == GOLDEN_WHITE
        assert not color.clipped_srgb
        assert not color.clipped_p3

    def test_gray_goldens(self) -> None:
        """Mid and dark grays match the stored fixtures."""
        assert convert(63, 0, 0).hex_srgb == GOLDEN_GRAY_63
        assert convert(25, 0, 0).hex_srgb == GOLDEN_GRAY_25

    def test_black(self) -> None:
        """L=0 is black."""
        assert convert(0, 0, 0).hex_srgb == "#000000"

    def test_achromatic_same_in_both_spaces(self) -> None:
        """Grays don't depend on the primaries."""
        color = convert(63, 0, 0)
        assert color.hex_srgb == color.hex_p3

    def test_deterministic(self) -> None:
        """Same input, same output."""
        assert convert(69, 0.19, 145) == convert(69, 0.19, 145)

    def test_lightness_clamped(self) -> None:
        """Lightness outside 0-100 is clamped."""
        assert convert(140, 0, 0) == convert(100, 0, 0)
        assert convert(-5, 0, 0) == convert(0, 0, 0)

    def test_negative_chroma_reads_as_zero(self) -> None:
        """Negative chroma is treated as achromatic."""
        assert convert(63, -0.1, 200) == convert(63, 0, 200)

    def test_hue_wraps(self) -> None:
        """Hue angles wrap at 360."""
        assert convert(63, 0.1, 375) == convert(63, 0.1, 15)

    def test_out_of_gamut_is_flagged(self) -> None:
        """Very high chroma can't be shown in sRGB."""
        color = convert(63, 0.4, 145)
        assert color.clipped_srgb
        assert color.hex_srgb.startswith("#")
        assert len(color.hex_srgb) == 7

    def test_p3_clip_implies_srgb_clip(self) -> None:
        """P3 contains sRGB, so anything clipped in P3 is clipped in sRGB."""
        for lightness in (25, 50, 63, 82, 95):
            for chroma in (0.05, 0.15, 0.3, 0.4):
                for hue in (0, 90, 145, 255, 325):
                    color = convert(lightness, chroma, hue)
                    if color.clipped_p3:
                        assert color.clipped_srgb


class TestHexHelpers:
    """Tests for hex encoding helpers."""

    def test_rgb_to_hex_uppercase(self) -> None:
        """Channels are rounded and written uppercase."""
        assert rgb_to_hex(1, 0, 0.5) == "#FF0080"

    def test_rgb_to_hex_clamps(self) -> None:
        """Out-of-range channels are clamped."""
        assert rgb_to_hex(1.2, -0.3, 0) == "#FF0000"

    def test_hex_to_rgb(self) -> None:
        """Parse with or without the hash."""
        assert hex_to_rgb("#FF0000") == (1.0, 0.0, 0.0)
        assert hex_to_rgb("00ff00") == (0.0, 1.0, 0.0)

    def test_invalid_hex_reads_as_white(self) -> None:
        """Unparseable hex falls back to white."""
        assert hex_to_rgb("zzz") == (1.0, 1.0, 1.0)
        assert hex_to_rgb("") == (1.0, 1.0, 1.0)

    def test_components_list(self) -> None:
        """Components are a list for JSON."""
        assert hex_components("#000000") == [0.0, 0.0, 0.0]


class TestOklchText:
    """Tests for OKLCH text parsing and formatting."""

    def test_format(self) -> None:
        """Display text uses 0-1 lightness with three decimals."""
        assert oklch_text(63, 0.21, 255) == "oklch(0.630 0.210 255)"

    def test_format_fractional_hue(self) -> None:
        """Non-integral hues keep their fraction."""
        assert oklch_text(50, 0.1, 12.5) == "oklch(0.500 0.100 12.5)"

    def test_parse_percent(self) -> None:
        """Percent lightness."""
        assert parse_oklch("oklch(63% 0.21 255)") == (63.0, 0.21, 255.0)

    def test_parse_fraction(self) -> None:
        """Unitless lightness <= 1 is a fraction."""
        lightness, chroma, hue = parse_oklch("oklch(0.63 0.21 255)")
        assert lightness == pytest.approx(63.0)
        assert chroma == 0.21
        assert hue == 255.0

    def test_parse_invalid(self) -> None:
        """Non-OKLCH text gives None."""
        assert parse_oklch("rgb(1, 2, 3)") is None
        assert parse_oklch("") is None

    def test_css_color_to_hex(self) -> None:
        """Hex and OKLCH literals both resolve."""
        assert css_color_to_hex("#abcdef") == "#ABCDEF"
        assert css_color_to_hex("oklch(100% 0 0)") == GOLDEN_WHITE
        assert css_color_to_hex("oklch(0% 0 0)") == "#000000"
        assert css_color_to_hex("not a color") is None


class TestContrast:
    """Tests for the black/white foreground heuristic."""

    def test_luminance_extremes(self) -> None:
        """Black is 0, white is 1."""
        assert luminance("#000000") == 0.0
        assert luminance("#FFFFFF") == pytest.approx(1.0)

    def test_luminance_weights(self) -> None:
        """Green dominates, blue barely counts."""
        assert luminance("#00FF00") == pytest.approx(0.7152)
        assert luminance("#0000FF") == pytest.approx(0.0722)

    def test_white_background_gets_black(self) -> None:
        """Light backgrounds get black text."""
        assert choose_foreground("#FFFFFF", 75) is Foreground.BLACK

    def test_black_background_gets_white(self) -> None:
        """Dark backgrounds get white text."""
        assert choose_foreground("#000000", 75) is Foreground.WHITE

    def test_threshold_boundary(self) -> None:
        """Black only when luminance is above the threshold."""
        # Pure green sits at 71.52%
        assert choose_foreground("#00FF00", 72) is Foreground.WHITE
        assert choose_foreground("#00FF00", 71) is Foreground.BLACK

    def test_threshold_clamped(self) -> None:
        """Thresholds outside 0-100 are clamped."""
        assert choose_foreground("#000000", -20) is Foreground.WHITE
        assert choose_foreground("#808080", -20) is Foreground.BLACK

    def test_foreground_hex(self) -> None:
        """Hex convenience mirrors the decision."""
        assert foreground_hex("#FFFFFF") == "#000000"
        assert foreground_hex("#000000") == "#FFFFFF"

    def test_mid_gray(self) -> None:
        """The 500 gray (~54% luminance) takes white at the default threshold."""
        assert choose_foreground(GOLDEN_GRAY_63) is Foreground.WHITE


class TestAlphaExpand:
    """Tests for the alpha spec grammar."""

    def test_ranges_and_singles(self) -> None:
        """Ranges are inclusive."""
        alphas = expand("0-30,35,40,45,50,55,60,65,70-99")
        values = list(alphas)
        assert values[:31] == list(range(31))
        assert 32 not in alphas
        assert 35 in alphas
        assert values[-30:] == list(range(70, 100))
        assert len(alphas) == 31 + 7 + 30

    def test_empty(self) -> None:
        """Empty or None gives an empty set."""
        assert list(expand("")) == []
        assert list(expand(None)) == []
        assert not expand("")

    def test_malformed_tokens_skipped(self) -> None:
        """Garbage is skipped, valid tokens kept."""
        assert list(expand("5,abc,10")) == [5, 10]

    def test_out_of_range_skipped(self) -> None:
        """Values and ranges outside 0-100 are skipped."""
        assert list(expand("101,50,90-120,-5")) == [50]

    def test_reversed_range_skipped(self) -> None:
        """A > B is malformed."""
        assert list(expand("30-20,5")) == [5]

    def test_sorted_and_deduplicated(self) -> None:
        """Output ascends with no duplicates."""
        assert list(expand("50,10,10,5-6,6")) == [5, 6, 10, 50]

    def test_whitespace(self) -> None:
        """Whitespace around tokens is ignored."""
        assert list(expand(" 5 , 10 - 12 ")) == [5, 10, 11, 12]


class TestAlphaSet:
    """Tests for AlphaSet."""

    def test_to_spec_compacts_runs(self) -> None:
        """Runs of three or more become ranges."""
        assert expand("0-30,35,40,70-99").to_spec() == "0-30,35,40,70-99"

    def test_to_spec_pairs_stay_separate(self) -> None:
        """Two consecutive values are written as a pair."""
        assert AlphaSet.of([5, 6, 10]).to_spec() == "5,6,10"

    def test_to_spec_empty(self) -> None:
        """Empty set gives empty spec."""
        assert AlphaSet().to_spec() == ""

    def test_without(self) -> None:
        """Removing 100."""
        assert list(expand("10,50,100").without(100)) == [10, 50]

    def test_rejects_out_of_range(self) -> None:
        """Direct construction validates."""
        with pytest.raises(ValueError):
            AlphaSet.of([150])

    def test_hashable(self) -> None:
        """AlphaSets can be compared and hashed."""
        assert expand("1-3") == AlphaSet.of([3, 2, 1])
        assert len({expand("1-3"), AlphaSet.of([1, 2, 3])}) == 1

    def test_coerce(self) -> None:
        """Config coercion accepts several shapes."""
        assert list(coerce_alpha_set("5,10")) == [5, 10]
        assert list(coerce_alpha_set([10, 5, 200])) == [5, 10]
        assert list(coerce_alpha_set(60)) == [60]
        assert list(coerce_alpha_set(None)) == []
