"""
Palette generation - the hue x shade color matrix.
"""

from chuk_mcp_palette.palette.generator import PaletteGenerator, generate, generate_color

__all__ = [
    "PaletteGenerator",
    "generate",
    "generate_color",
]
