"""
OKLCH color-space primitives - conversion, gamut test, gamma, hex.

Pure-Python math, no external color libraries. Lightness is expressed
0-100 throughout (the ramp editors think in percent), chroma is the raw
OKLab chroma and hue is degrees.

    OKLCH → OKLab → LMS → linear sRGB ─┬→ gamma → hex (sRGB)
                                        └→ linear P3 → gamma → hex (P3)

Both targets use the sRGB transfer function; Display P3 shares it.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import lru_cache

# Channels within this distance of [0, 1] are still considered in gamut;
# the matrices are only accurate to ~1e-10 and white must not read as clipped.
GAMUT_EPSILON = 0.0001

_OKLCH_PATTERN = re.compile(
    r"oklch\(\s*([\d.]+)(%?)\s+([\d.]+)\s+([\d.]+)\s*\)",
    re.IGNORECASE,
)
_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


@dataclass(frozen=True)
class ConvertedColor:
    """Result of converting one OKLCH triple to both display spaces."""

    hex_srgb: str
    hex_p3: str
    clipped_srgb: bool
    clipped_p3: bool


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


def oklch_to_linear_srgb(lightness: float, chroma: float, hue: float) -> tuple[float, float, float]:
    """
    Convert OKLCH to linear-light sRGB.

    Args:
        lightness: Lightness 0-100
        chroma: OKLab chroma (>= 0)
        hue: Hue angle in degrees

    Returns:
        (r, g, b) linear channels; may fall outside [0, 1]
    """
    L = lightness / 100
    a = chroma * math.cos(math.radians(hue))
    b = chroma * math.sin(math.radians(hue))

    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.291485548 * b

    l3 = l_ * l_ * l_
    m3 = m_ * m_ * m_
    s3 = s_ * s_ * s_

    return (
        +4.0767416621 * l3 - 3.3077115913 * m3 + 0.2309699292 * s3,
        -1.2684380046 * l3 + 2.6097574011 * m3 - 0.3413193965 * s3,
        -0.0041960863 * l3 - 0.7034186147 * m3 + 1.707614701 * s3,
    )


def linear_srgb_to_linear_p3(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Re-express linear sRGB in Display P3 primaries."""
    return (
        0.8224621 * r + 0.177538 * g,
        0.0331942 * r + 0.9668058 * g,
        0.0170826 * r + 0.0723974 * g + 0.91052 * b,
    )


def linear_to_gamma(c: float) -> float:
    """Apply the sRGB transfer function to one linear channel."""
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * math.pow(c, 1 / 2.4) - 0.055


def is_in_gamut(r: float, g: float, b: float) -> bool:
    """True if every linear channel lies within [0, 1] (with tolerance)."""
    return all(-GAMUT_EPSILON <= c <= 1 + GAMUT_EPSILON for c in (r, g, b))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format gamma-encoded channels as an uppercase #RRGGBB string."""

    def to_hex(n: float) -> str:
        # Round half up, matching how design tools round channel bytes
        return f"{math.floor(clamp(n) * 255 + 0.5):02X}"

    return f"#{to_hex(r)}{to_hex(g)}{to_hex(b)}"


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    """
    Parse #RRGGBB into gamma-encoded channels in [0, 1].

    Unparseable input reads as white.
    """
    match = _HEX_PATTERN.match(hex_color.strip()) if hex_color else None
    if not match:
        return (1.0, 1.0, 1.0)
    return tuple(int(part, 16) / 255 for part in match.groups())  # type: ignore[return-value]


def hex_components(hex_color: str) -> list[float]:
    """Channel components of a hex color, as a list for serialization."""
    return list(hex_to_rgb(hex_color))


def _encode(linear: tuple[float, float, float]) -> str:
    return rgb_to_hex(*(linear_to_gamma(c) for c in linear))


@lru_cache(maxsize=4096)
def convert(lightness: float, chroma: float, hue: float) -> ConvertedColor:
    """
    Convert an OKLCH triple to sRGB and Display P3 hex.

    Out-of-gamut colors are still encoded (channels clamped) but flagged
    as clipped. Inputs are normalized rather than rejected: lightness is
    clamped to 0-100, negative chroma reads as 0, hue wraps at 360.

    Args:
        lightness: Lightness 0-100
        chroma: OKLab chroma
        hue: Hue angle in degrees

    Returns:
        ConvertedColor with both hex values and clipping flags
    """
    lightness = clamp(lightness, 0.0, 100.0)
    chroma = max(0.0, chroma)
    hue = hue % 360

    srgb = oklch_to_linear_srgb(lightness, chroma, hue)
    p3 = linear_srgb_to_linear_p3(*srgb)

    return ConvertedColor(
        hex_srgb=_encode(srgb),
        hex_p3=_encode(p3),
        clipped_srgb=not is_in_gamut(*srgb),
        clipped_p3=not is_in_gamut(*p3),
    )


def parse_oklch(text: str) -> tuple[float, float, float] | None:
    """
    Parse an ``oklch(L C H)`` or ``oklch(L% C H)`` string.

    A unitless lightness <= 1 is read as a fraction.

    Returns:
        (lightness 0-100, chroma, hue) or None if the text doesn't match
    """
    if not text:
        return None
    match = _OKLCH_PATTERN.search(text)
    if not match:
        return None
    lightness = float(match.group(1))
    if match.group(2) != "%" and lightness <= 1:
        lightness *= 100
    return lightness, float(match.group(3)), float(match.group(4))


def css_color_to_hex(text: str, *, p3: bool = False) -> str | None:
    """
    Resolve a CSS color literal (hex or oklch) to a hex string.

    Args:
        text: ``#rrggbb`` or ``oklch(...)``
        p3: Encode for Display P3 instead of sRGB

    Returns:
        Uppercase hex, or None if the literal isn't understood
    """
    if not text:
        return None
    text = text.strip()
    if _HEX_PATTERN.match(text):
        return rgb_to_hex(*hex_to_rgb(text))
    parsed = parse_oklch(text)
    if parsed is None:
        return None
    converted = convert(*parsed)
    return converted.hex_p3 if p3 else converted.hex_srgb


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` when it is integral."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def oklch_text(lightness: float, chroma: float, hue: float) -> str:
    """Display string for a generated color: ``oklch(0.630 0.210 255)``."""
    return f"oklch({lightness / 100:.3f} {chroma:.3f} {format_number(hue)})"
