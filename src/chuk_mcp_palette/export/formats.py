"""
Plain palette exports for code: JSON, CSS custom properties, SCSS, Tailwind.

These carry no identifiers or modes - they're the developer-facing
counterpart to the Figma variables files.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from chuk_mcp_palette.constants import ErrorMessages, ExportFormat
from chuk_mcp_palette.models.palette import Color, Palette

FORMATS: tuple[str, ...] = ("json-srgb", "json-p3", "json-oklch", "css", "scss", "tailwind")


def _value(color: Color, fmt: str) -> str:
    if "oklch" in fmt:
        return color.oklch_text
    if "p3" in fmt:
        return color.hex_p3
    return color.hex_srgb


def export_json(
    palette: Palette,
    shades: Sequence[str],
    intents: Mapping[str, str],
    fmt: str = "json-srgb",
    name: str = "Palette",
) -> str:
    """Palette as JSON: hues with color lists, shade labels, intent ramps."""
    data = {
        "name": name,
        "hues": [
            {
                "name": hue_set.label,
                "hue": hue_set.hue_angle,
                "colors": [_value(c, fmt) for c in hue_set.colors],
            }
            for hue_set in palette.hue_sets
        ],
        "tones": list(shades),
        "tokens": {
            intent: [_value(c, fmt) for c in hue_set.colors]
            if (hue_set := palette.find_hue(hue)) is not None
            else []
            for intent, hue in intents.items()
        },
    }
    return json.dumps(data, indent=2)


def export_css(palette: Palette, intents: Mapping[str, str]) -> str:
    """CSS custom properties on :root, intents referencing the hue variables."""
    lines = [":root {"]
    for hue_set in palette.hue_sets:
        for c in hue_set.colors:
            lines.append(f"  --color-{hue_set.label}-{c.shade_label}: {c.hex_srgb};")

    lines.append("")
    lines.append("  /* Semantic tokens */")
    for intent, hue in intents.items():
        hue_set = palette.find_hue(hue)
        if hue_set is None:
            continue
        for c in hue_set.colors:
            lines.append(
                f"  --{intent}-{c.shade_label}: var(--color-{hue_set.label}-{c.shade_label});"
            )
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_scss(palette: Palette, intents: Mapping[str, str]) -> str:
    """SCSS variables, intents referencing the hue variables."""
    lines = ["// Color palette"]
    for hue_set in palette.hue_sets:
        for c in hue_set.colors:
            lines.append(f"${hue_set.label}-{c.shade_label}: {c.hex_srgb};")
        lines.append("")

    lines.append("// Semantic tokens")
    for intent, hue in intents.items():
        hue_set = palette.find_hue(hue)
        if hue_set is None:
            continue
        for c in hue_set.colors:
            lines.append(f"${intent}-{c.shade_label}: ${hue_set.label}-{c.shade_label};")
    return "\n".join(lines) + "\n"


def export_tailwind(palette: Palette) -> str:
    """A tailwind.config.js extending theme colors."""
    colors = {
        hue_set.label: {c.shade_label: c.hex_srgb for c in hue_set.colors}
        for hue_set in palette.hue_sets
    }
    # A JSON object is a valid JS literal, and json.dumps escapes any quotes in labels
    body = json.dumps(colors, indent=2).replace("\n", "\n      ")
    return (
        "module.exports = {\n"
        "  theme: {\n"
        "    extend: {\n"
        f"      colors: {body}\n"
        "    }\n"
        "  }\n"
        "}\n"
    )


def export_palette(
    palette: Palette,
    shades: Sequence[str],
    intents: Mapping[str, str],
    fmt: ExportFormat | str,
    name: str = "Palette",
) -> str:
    """
    Export a palette in a plain format.

    Args:
        palette: Generated palette
        shades: Shade labels in ramp order
        intents: Intent name -> hue label
        fmt: One of json-srgb, json-p3, json-oklch, css, scss, tailwind
        name: Palette name (JSON formats only)

    Returns:
        Export text

    Raises:
        ValueError: If the format is unknown
    """
    if fmt.startswith("json") and fmt in FORMATS:
        return export_json(palette, shades, intents, fmt, name)
    if fmt == "css":
        return export_css(palette, intents)
    if fmt == "scss":
        return export_scss(palette, intents)
    if fmt == "tailwind":
        return export_tailwind(palette)
    raise ValueError(ErrorMessages.UNKNOWN_FORMAT.format(fmt=fmt))
