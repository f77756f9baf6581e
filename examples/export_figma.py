#!/usr/bin/env python3
"""
Example: Export Figma variables and re-export over the result.

This demonstrates the full pipeline from project to design tokens:
1. Compile the palette and light/dark theme collections
2. Write one Figma variables file per collection mode
3. Change the project (insert a shade) and compile again against the
   previous files, so existing variables keep their identifiers

Usage:
    python examples/export_figma.py
    # Creates: examples/output/minimal-*.json
"""

from pathlib import Path

from chuk_mcp_palette.compiler import PaletteCompiler
from chuk_mcp_palette.export import FigmaExporter, count_tokens_in_text
from chuk_mcp_palette.models import PaletteProject
from chuk_mcp_palette.projects import ProjectLoader


def main() -> None:
    """Export the minimal project, then re-export a modified copy."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("CHUK Palette Figma Export")
    print("=" * 40)

    project = ProjectLoader().get_project("minimal")
    if project is None:
        print("Failed to load project")
        return

    compiler = PaletteCompiler()
    exporter = FigmaExporter()

    result = compiler.compile(project)
    written: dict[str, str] = {}
    for collection in (result.palette_collection, result.theme_collection):
        for mode, exported in exporter.export_all(collection).items():
            path = output_dir / f"{project.name}-{collection.name}-{mode}.json"
            path.write_text(exported.text)
            written[f"{collection.name}-{mode}"] = exported.text
            print(f"  {path.name}: {exported.token_count} variables")
    print()

    # Insert a shade between 500 and 1000
    data = project.to_yaml_dict()
    data["shades"].insert(2, {"label": "750", "lightness": 44, "chroma": 0.14})
    grown = PaletteProject.model_validate(data)

    print("Re-exporting with an extra shade (750)...")
    second = compiler.compile(
        grown,
        prior_palette=written["palette-palette"],
        prior_theme=written["theme-light"],
    )
    for collection in (second.palette_collection, second.theme_collection):
        summary = collection.action_summary()
        print(
            f"  {collection.name}: {summary['update']} updated, "
            f"{summary['rename']} renamed, {summary['create']} created"
        )
        exported = exporter.export(collection)
        print(f"    counted in file: {count_tokens_in_text(exported.text)}")

    print()
    print("Done! Import the JSON files into Figma's variables panel.")


if __name__ == "__main__":
    main()
