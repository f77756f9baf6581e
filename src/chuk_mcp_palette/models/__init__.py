"""
Models for the palette system.

This module provides:
- Shade, Hue: Parametric palette inputs
- Color, HueSet, Palette: The generated color matrix
- ThemeConfig, PaletteProject: Immutable compile configuration
- Token, TokenCollection: The compiled token tree
- ParsedFile, FileOk, FileError: Previously exported files
"""

from chuk_mcp_palette.models.config import (
    AlphaConfig,
    GroundConfig,
    GroundTier,
    NamingConfig,
    OnGroundConfig,
    OnGroundSetting,
    PaletteProject,
    ProjectMetadata,
    ScopeSelection,
    StarkConfig,
    StarkShade,
    ThemeConfig,
)
from chuk_mcp_palette.models.palette import Color, Hue, HueSet, Palette, Shade
from chuk_mcp_palette.models.tokens import (
    Alias,
    ColorLiteral,
    FileError,
    FileOk,
    ParsedFile,
    ParseResult,
    StringValue,
    Token,
    TokenCollection,
    TokenKey,
    TokenValue,
)

__all__ = [
    # Palette
    "Color",
    "Hue",
    "HueSet",
    "Palette",
    "Shade",
    # Config
    "AlphaConfig",
    "GroundConfig",
    "GroundTier",
    "NamingConfig",
    "OnGroundConfig",
    "OnGroundSetting",
    "PaletteProject",
    "ProjectMetadata",
    "ScopeSelection",
    "StarkConfig",
    "StarkShade",
    "ThemeConfig",
    # Tokens
    "Alias",
    "ColorLiteral",
    "FileError",
    "FileOk",
    "ParsedFile",
    "ParseResult",
    "StringValue",
    "Token",
    "TokenCollection",
    "TokenKey",
    "TokenValue",
]
