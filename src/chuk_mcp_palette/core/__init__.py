"""
Core color primitives - the math layer.

Everything else composes on these pure functions:
- convert: OKLCH to sRGB / Display P3 hex with gamut flags
- choose_foreground: black/white text decision for a background
- expand / AlphaSet: opacity variant sets from the textual grammar
"""

from chuk_mcp_palette.core.alpha import AlphaSet, coerce_alpha_set, expand
from chuk_mcp_palette.core.contrast import (
    BLACK_HEX,
    WHITE_HEX,
    choose_foreground,
    foreground_hex,
    luminance,
)
from chuk_mcp_palette.core.oklch import (
    ConvertedColor,
    convert,
    css_color_to_hex,
    hex_components,
    hex_to_rgb,
    oklch_text,
    parse_oklch,
    rgb_to_hex,
)

__all__ = [
    # Alpha
    "AlphaSet",
    "coerce_alpha_set",
    "expand",
    # Contrast
    "BLACK_HEX",
    "WHITE_HEX",
    "choose_foreground",
    "foreground_hex",
    "luminance",
    # OKLCH
    "ConvertedColor",
    "convert",
    "css_color_to_hex",
    "hex_components",
    "hex_to_rgb",
    "oklch_text",
    "parse_oklch",
    "rgb_to_hex",
]
