"""
MCP tool implementations.

Tools are organized by domain:
- palette - Project discovery, color generation, foregrounds, alphas
- export - Figma variables files, code formats, file analysis
"""

from chuk_mcp_palette.tools.export import register_export_tools
from chuk_mcp_palette.tools.palette import register_palette_tools

__all__ = [
    "register_export_tools",
    "register_palette_tools",
]
