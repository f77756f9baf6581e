"""
Palette tools - MCP tools for project discovery and color generation.

Tools for listing and describing palette projects, generating the color
matrix, picking foregrounds and expanding alpha specs.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_palette.constants import ErrorMessages, SuccessMessages
from chuk_mcp_palette.core import choose_foreground, css_color_to_hex, expand, luminance
from chuk_mcp_palette.palette import PaletteGenerator
from chuk_mcp_palette.projects import ProjectLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_palette_tools(
    mcp: ChukMCPServer,
    loader: ProjectLoader,
    generator: PaletteGenerator,
) -> dict[str, Any]:
    """
    Register palette tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The project loader
        generator: The palette generator

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def palette_list_projects() -> str:
        """
        List available palette projects.

        Returns all projects from the library and the project directory
        with basic metadata.

        Returns:
            JSON string with list of project summaries

        Example:
            palette_list_projects()
        """
        try:
            projects = loader.list_projects()

            return json.dumps(
                {
                    "status": "success",
                    "projects": [
                        {
                            "name": p.name,
                            "description": p.description,
                            "hues": p.hue_count,
                            "shades": p.shade_count,
                            "intents": p.intents,
                            "color_profile": p.color_profile.value,
                        }
                        for p in projects
                    ],
                    "count": len(projects),
                }
            )
        except Exception as e:
            logger.exception("Failed to list projects")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_list_projects"] = palette_list_projects

    @mcp.tool  # type: ignore[arg-type]
    async def palette_describe_project(name: str) -> str:
        """
        Get the full configuration of a palette project.

        Returns shades, hues and the theme configuration with alpha
        specs in their textual form.

        Args:
            name: Project name

        Returns:
            JSON string with project details

        Example:
            palette_describe_project(name="default")
        """
        try:
            project = loader.get_project(name)
            if project is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.PROJECT_NOT_FOUND.format(name=name)}
                )

            return json.dumps({"status": "success", "project": project.to_yaml_dict()})
        except Exception as e:
            logger.exception("Failed to describe project")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_describe_project"] = palette_describe_project

    @mcp.tool  # type: ignore[arg-type]
    async def palette_copy_project(name: str) -> str:
        """
        Copy a library project into the project directory for editing.

        Args:
            name: Library project name

        Returns:
            JSON string with the path of the copy

        Example:
            palette_copy_project(name="default")
        """
        try:
            path = loader.copy_to_project(name)
            if path is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.PROJECT_NOT_FOUND.format(name=name)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "message": f"Copied '{name}' to {path}",
                }
            )
        except Exception as e:
            logger.exception("Failed to copy project")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_copy_project"] = palette_copy_project

    @mcp.tool  # type: ignore[arg-type]
    async def palette_generate(
        project: str = "default",
        hue: str | None = None,
    ) -> str:
        """
        Generate the color matrix for a project.

        Every color comes with its OKLCH text, sRGB and Display P3 hex
        values, and whether each had to be clipped into gamut.

        Args:
            project: Project name
            hue: Only return this hue (optional)

        Returns:
            JSON string with hues and their colors

        Example:
            palette_generate(project="default", hue="blue")
        """
        try:
            proj = loader.get_project(project)
            if proj is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.PROJECT_NOT_FOUND.format(name=project),
                    }
                )

            palette = generator.generate(proj.hues, proj.shades)
            hue_sets = palette.hue_sets
            if hue is not None:
                hue_sets = tuple(h for h in hue_sets if h.label == hue)
                if not hue_sets:
                    return json.dumps({"status": "error", "message": f"Hue not found: {hue}"})

            return json.dumps(
                {
                    "status": "success",
                    "hues": [
                        {
                            "name": h.label,
                            "hue_angle": h.hue_angle,
                            "grayscale": h.is_grayscale,
                            "colors": [
                                {
                                    "shade": c.shade_label,
                                    "oklch": c.oklch_text,
                                    "hex": c.hex_srgb,
                                    "hex_p3": c.hex_p3,
                                    "clipped_srgb": c.clipped_srgb,
                                    "clipped_p3": c.clipped_p3,
                                }
                                for c in h.colors
                            ],
                        }
                        for h in hue_sets
                    ],
                    "message": SuccessMessages.PALETTE_GENERATED.format(
                        count=len(palette),
                        hues=len(proj.hues),
                        shades=len(proj.shades),
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to generate palette")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_generate"] = palette_generate

    @mcp.tool  # type: ignore[arg-type]
    async def palette_pick_foreground(
        background: str,
        threshold: float = 75.0,
    ) -> str:
        """
        Pick black or white text for a background color.

        Args:
            background: Hex (#RRGGBB) or oklch(...) color
            threshold: Luminance threshold in percent; above it, black wins

        Returns:
            JSON string with the foreground decision

        Example:
            palette_pick_foreground(background="#3B82F6")
        """
        try:
            hex_value = css_color_to_hex(background)
            if hex_value is None:
                return json.dumps(
                    {"status": "error", "message": f"Unrecognized color: {background}"}
                )

            foreground = choose_foreground(hex_value, threshold)
            return json.dumps(
                {
                    "status": "success",
                    "background": hex_value,
                    "luminance": round(luminance(hex_value), 4),
                    "foreground": foreground.value,
                }
            )
        except Exception as e:
            logger.exception("Failed to pick foreground")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_pick_foreground"] = palette_pick_foreground

    @mcp.tool  # type: ignore[arg-type]
    async def palette_expand_alphas(spec: str) -> str:
        """
        Expand an alpha spec into opacity values.

        The grammar is comma separated integers and inclusive ranges in
        0-100; tokens that don't fit are skipped.

        Args:
            spec: Alpha spec (e.g. "0-30,35,40,70-99")

        Returns:
            JSON string with the values and the compacted spec

        Example:
            palette_expand_alphas(spec="5,10,20-25")
        """
        try:
            alphas = expand(spec)
            return json.dumps(
                {
                    "status": "success",
                    "values": list(alphas),
                    "count": len(alphas),
                    "spec": alphas.to_spec(),
                }
            )
        except Exception as e:
            logger.exception("Failed to expand alphas")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_expand_alphas"] = palette_expand_alphas

    return tools
