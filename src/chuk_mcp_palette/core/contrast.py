"""
Foreground selection - black or white text on a background.

This is a deliberately simple heuristic: Rec. 709 luma weights applied to
the *gamma-encoded* channels, compared against a percentage threshold.
It is neither linearized relative luminance nor APCA, and exported token
files depend on its exact decisions, so it must not be swapped for a more
"correct" model without a format change.
"""

from __future__ import annotations

from chuk_mcp_palette.constants import Foreground
from chuk_mcp_palette.core.oklch import clamp, hex_to_rgb

BLACK_HEX = "#000000"
WHITE_HEX = "#FFFFFF"

DEFAULT_THRESHOLD = 75.0


def luminance(hex_color: str) -> float:
    """Weighted sum of gamma-encoded channels, 0-1."""
    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def choose_foreground(background_hex: str, threshold_percent: float = DEFAULT_THRESHOLD) -> Foreground:
    """
    Pick black or white text for a background.

    Args:
        background_hex: Background color as #RRGGBB
        threshold_percent: Luminance threshold 0-100 (clamped)

    Returns:
        Foreground.BLACK if luminance exceeds the threshold, else WHITE
    """
    threshold = clamp(threshold_percent, 0.0, 100.0) / 100
    if luminance(background_hex) > threshold:
        return Foreground.BLACK
    return Foreground.WHITE


def foreground_hex(background_hex: str, threshold_percent: float = DEFAULT_THRESHOLD) -> str:
    """Same decision as choose_foreground, as a hex color."""
    if choose_foreground(background_hex, threshold_percent) is Foreground.BLACK:
        return BLACK_HEX
    return WHITE_HEX
