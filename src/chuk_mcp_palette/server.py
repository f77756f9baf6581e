#!/usr/bin/env python3
"""
Entry point for the CHUK Palette MCP Server.

Serves the palette tools (project discovery, OKLCH generation, Figma
variables export with identifier carry-over) over stdio or http.
Project and output directories default to ./palettes and ./output and
can be moved with flags or the CHUK_PALETTE_* environment variables.
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PALETTES_DIR_ENV = "CHUK_PALETTE_PROJECTS_DIR"
OUTPUT_DIR_ENV = "CHUK_PALETTE_OUTPUT_DIR"


def build_parser() -> argparse.ArgumentParser:
    """Command line for the palette server."""
    parser = argparse.ArgumentParser(
        prog="chuk-mcp-palette",
        description=(
            "MCP server that generates OKLCH palettes and exports them as "
            "Figma variables, keeping variable ids stable across re-exports"
        ),
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--palettes-dir",
        default=None,
        help=f"Directory of user palette projects (default: ./palettes, or ${PALETTES_DIR_ENV})",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help=f"Directory for exported files (default: ./output, or ${OUTPUT_DIR_ENV})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log token building and file parsing decisions",
    )
    return parser


def apply_directories(args: argparse.Namespace) -> None:
    """Publish directory flags for the server module to pick up."""
    if args.palettes_dir:
        os.environ[PALETTES_DIR_ENV] = args.palettes_dir
    if args.output_dir:
        os.environ[OUTPUT_DIR_ENV] = args.output_dir


def main() -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    apply_directories(args)

    # Import after argument parsing so flags apply to server setup
    from chuk_mcp_palette.async_server import mcp

    if args.transport == "stdio":
        logger.info("Serving palette tools over stdio")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Serving palette tools on http port {args.port}")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
