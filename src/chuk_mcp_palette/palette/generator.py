"""
Palette Generator - builds the hue x shade color matrix.

Every color is a pure function of (lightness, chroma, hue angle), so the
same ramp always yields the same palette. Grayscale hues force chroma to
zero at every shade regardless of the ramp's configured chroma.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chuk_mcp_palette.core.oklch import convert, oklch_text
from chuk_mcp_palette.models.palette import Color, Hue, HueSet, Palette, Shade

logger = logging.getLogger(__name__)


def generate_color(hue: Hue, shade: Shade) -> Color:
    """
    Generate the color at one (hue, shade) cell.

    Args:
        hue: The hue family
        shade: The lightness step

    Returns:
        Color with display text, both hex encodings and clipping flags
    """
    chroma = 0.0 if hue.is_grayscale else shade.chroma
    converted = convert(shade.lightness, chroma, hue.hue_angle)
    return Color(
        shade_label=shade.label,
        lightness=shade.lightness,
        chroma=chroma,
        hue_angle=hue.hue_angle,
        oklch_text=oklch_text(shade.lightness, chroma, hue.hue_angle),
        hex_srgb=converted.hex_srgb,
        hex_p3=converted.hex_p3,
        clipped_srgb=converted.clipped_srgb,
        clipped_p3=converted.clipped_p3,
    )


def generate(hues: Sequence[Hue], shades: Sequence[Shade]) -> Palette:
    """
    Generate a palette from hues and shades.

    Output preserves hue order, then shade order within each hue.
    Empty inputs give an empty palette.

    Args:
        hues: Ordered hue list
        shades: Ordered shade list

    Returns:
        Palette with len(hues) x len(shades) colors
    """
    if not hues or not shades:
        return Palette()

    hue_sets = tuple(
        HueSet(
            label=hue.label,
            hue_angle=hue.hue_angle,
            is_grayscale=hue.is_grayscale,
            colors=tuple(generate_color(hue, shade) for shade in shades),
        )
        for hue in hues
    )
    palette = Palette(hue_sets=hue_sets)

    clipped = sum(1 for c in palette.colors if c.clipped_srgb)
    logger.debug(
        "Generated %d colors (%d hues x %d shades), %d clipped in sRGB",
        len(palette),
        len(hues),
        len(shades),
        clipped,
    )
    return palette


class PaletteGenerator:
    """
    Generates palettes, memoizing on the (hues, shades) inputs.

    Caching is an optimization only; generate() is pure.
    """

    def __init__(self, cache_size: int = 16):
        """
        Initialize the generator.

        Args:
            cache_size: Number of recent palettes to keep
        """
        self.cache_size = cache_size
        self._cache: dict[tuple[tuple[Hue, ...], tuple[Shade, ...]], Palette] = {}

    def generate(self, hues: Sequence[Hue], shades: Sequence[Shade]) -> Palette:
        """Generate (or reuse) the palette for these inputs."""
        cache_key = (tuple(hues), tuple(shades))
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        palette = generate(hues, shades)
        if self.cache_size > 0:
            if len(self._cache) >= self.cache_size:
                # Drop the oldest entry (dicts keep insertion order)
                self._cache.pop(next(iter(self._cache)))
            self._cache[cache_key] = palette
        return palette

    def clear_cache(self) -> None:
        """Clear the palette cache."""
        self._cache.clear()
