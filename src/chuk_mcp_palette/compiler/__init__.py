"""
Compilation pipeline - turns a palette project into token collections.

The pipeline:
    PaletteProject (YAML)
    → Palette (hue x shade colors)
    → TokenCollection (palette, theme light/dark)
    → reconciled against prior exports
    → Figma variables JSON
"""

# Paths and builder first (no circular dependencies)
from chuk_mcp_palette.compiler.builder import (
    PALETTE_COLLECTION,
    THEME_COLLECTION,
    TokenTreeBuilder,
    build_palette_collection,
    build_theme_collection,
)
from chuk_mcp_palette.compiler.paths import code_syntax, is_excluded, key_from_path, shade_path


def __getattr__(name: str):
    """Lazy imports for the pipeline to avoid circular dependencies."""
    if name in ("PaletteCompiler", "CompileResult", "compile_project"):
        from chuk_mcp_palette.compiler.pipeline import (
            CompileResult,
            PaletteCompiler,
            compile_project,
        )

        return {
            "PaletteCompiler": PaletteCompiler,
            "CompileResult": CompileResult,
            "compile_project": compile_project,
        }[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Pipeline (lazy loaded)
    "CompileResult",
    "PaletteCompiler",
    "compile_project",
    # Builder
    "PALETTE_COLLECTION",
    "THEME_COLLECTION",
    "TokenTreeBuilder",
    "build_palette_collection",
    "build_theme_collection",
    # Paths
    "code_syntax",
    "is_excluded",
    "key_from_path",
    "shade_path",
]
