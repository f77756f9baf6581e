#!/usr/bin/env python3
"""
Async Palette MCP Server using chuk-mcp-server

This server provides MCP tools for generating OKLCH color palettes and
compiling them to design tokens. Palettes are described by YAML projects
you own and can customize.

The server provides tools for:
- Discovering and copying palette projects
- Generating the hue x shade color matrix (sRGB and Display P3)
- Compiling palette and light/dark theme collections to Figma variables
- Carrying variable identifiers over from previous exports
- Exporting CSS, SCSS, Tailwind and JSON
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_palette.compiler import PaletteCompiler
from chuk_mcp_palette.export import FigmaExporter
from chuk_mcp_palette.palette import PaletteGenerator
from chuk_mcp_palette.projects import ProjectLoader
from chuk_mcp_palette.tools import register_export_tools, register_palette_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-palette")

# Paths - ./palettes and ./output unless the entry point moved them
BASE_PATH = Path.cwd()
PALETTES_DIR = Path(os.environ.get("CHUK_PALETTE_PROJECTS_DIR", BASE_PATH / "palettes"))
OUTPUT_DIR = Path(os.environ.get("CHUK_PALETTE_OUTPUT_DIR", BASE_PATH / "output"))
LIBRARY_PATH = Path(__file__).parent / "projects" / "library"

# Create managers
project_loader = ProjectLoader(
    library_path=LIBRARY_PATH,
    project_path=PALETTES_DIR,
)
palette_generator = PaletteGenerator()
palette_compiler = PaletteCompiler(palette_generator)
figma_exporter = FigmaExporter()

# Register all tools
palette_tools = register_palette_tools(mcp, project_loader, palette_generator)
export_tools = register_export_tools(
    mcp, project_loader, palette_compiler, figma_exporter, OUTPUT_DIR
)

# Export tool functions for direct access
palette_list_projects = palette_tools["palette_list_projects"]
palette_describe_project = palette_tools["palette_describe_project"]
palette_copy_project = palette_tools["palette_copy_project"]
palette_generate = palette_tools["palette_generate"]
palette_pick_foreground = palette_tools["palette_pick_foreground"]
palette_expand_alphas = palette_tools["palette_expand_alphas"]

palette_export_figma = export_tools["palette_export_figma"]
palette_export_format = export_tools["palette_export_format"]
palette_analyze_file = export_tools["palette_analyze_file"]
palette_count_tokens = export_tools["palette_count_tokens"]

logger.info("CHUK Palette MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Palettes dir: {PALETTES_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
