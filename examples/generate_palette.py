#!/usr/bin/env python3
"""
Example: Generate a palette from a project.

This demonstrates the first stage of the pipeline: a parametric project
(hues x shades in OKLCH) becomes a matrix of sRGB and Display P3 colors.

Usage:
    python examples/generate_palette.py
    # Creates: examples/output/minimal.css, examples/output/minimal.json
"""

from pathlib import Path

from chuk_mcp_palette.core import choose_foreground, expand
from chuk_mcp_palette.export import export_palette
from chuk_mcp_palette.palette import generate
from chuk_mcp_palette.projects import ProjectLoader


def main() -> None:
    """Generate the minimal project's palette and export it."""
    examples_dir = Path(__file__).parent
    output_dir = examples_dir / "output"
    output_dir.mkdir(exist_ok=True)

    print("CHUK Palette Generator")
    print("=" * 40)

    loader = ProjectLoader()
    print("Available projects:")
    for meta in loader.list_projects():
        print(f"  {meta.name}: {meta.hue_count} hues x {meta.shade_count} shades")
    print()

    project = loader.get_project("minimal")
    if project is None:
        print("Failed to load project")
        return

    palette = generate(project.hues, project.shades)
    print(f"Generated {len(palette)} colors for '{project.name}'")
    print()

    for hue_set in palette.hue_sets:
        print(f"{hue_set.label} (hue {hue_set.hue_angle:g}):")
        for color in hue_set.colors:
            clipped = " (clipped)" if color.clipped_srgb else ""
            text = choose_foreground(color.hex_srgb).value
            print(
                f"  {color.shade_label:>5}  {color.oklch_text:<24} "
                f"{color.hex_srgb}  p3 {color.hex_p3}  text {text}{clipped}"
            )
        print()

    print("Alpha spec '0-30,35,40,70-99':")
    alphas = expand("0-30,35,40,70-99")
    print(f"  {len(alphas)} values, compacted back to '{alphas.to_spec()}'")
    print()

    shades = [s.label for s in project.shades]
    for fmt, extension in (("css", "css"), ("json-oklch", "json")):
        path = output_dir / f"{project.name}.{extension}"
        path.write_text(export_palette(palette, shades, project.theme.intents, fmt, project.name))
        print(f"Wrote {fmt}: {path}")


if __name__ == "__main__":
    main()
