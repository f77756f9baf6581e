"""
Exporters - Figma variables JSON and plain code formats.
"""

from chuk_mcp_palette.export.figma import (
    DEFAULT_SEED,
    ExportResult,
    FigmaExporter,
    count_tokens,
    count_tokens_in_text,
)
from chuk_mcp_palette.export.formats import FORMATS, export_palette

__all__ = [
    # Figma
    "DEFAULT_SEED",
    "ExportResult",
    "FigmaExporter",
    "count_tokens",
    "count_tokens_in_text",
    # Plain formats
    "FORMATS",
    "export_palette",
]
