"""
Export tools - MCP tools for Figma variables files and plain exports.

Tools for compiling a project to Figma variables JSON (reconciled
against a previous export), exporting code formats, and inspecting
previously exported files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_palette.compiler import PALETTE_COLLECTION, THEME_COLLECTION, PaletteCompiler
from chuk_mcp_palette.constants import ErrorMessages, SuccessMessages
from chuk_mcp_palette.export import FigmaExporter, count_tokens_in_text, export_palette
from chuk_mcp_palette.models.tokens import FileError
from chuk_mcp_palette.projects import ProjectLoader
from chuk_mcp_palette.reconcile import (
    create_hue_mapping,
    create_shade_source_map,
    parse_file,
    validate_source_mapping,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)

_EXTENSIONS = {"css": "css", "scss": "scss", "tailwind": "js"}


def register_export_tools(
    mcp: ChukMCPServer,
    loader: ProjectLoader,
    compiler: PaletteCompiler,
    exporter: FigmaExporter,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        loader: The project loader
        compiler: The palette compiler
        exporter: The Figma exporter
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def not_found(name: str) -> str:
        return json.dumps(
            {"status": "error", "message": ErrorMessages.PROJECT_NOT_FOUND.format(name=name)}
        )

    @mcp.tool  # type: ignore[arg-type]
    async def palette_export_figma(
        project: str = "default",
        collection: str = "theme",
        mode: str | None = None,
        prior_file: str | None = None,
        source_mapping: dict[str, str] | None = None,
        output_name: str | None = None,
        include_text: bool = False,
    ) -> str:
        """
        Compile a project to a Figma variables file.

        When a previously exported file of the same collection is given,
        variable identifiers are carried over so re-importing updates the
        existing variables instead of duplicating them.

        Args:
            project: Project name
            collection: "palette" or "theme"
            mode: Theme mode ("light" or "dark"); palette has one mode
            prior_file: Previously exported JSON of this collection (optional)
            source_mapping: New shade -> file shade or "new" (optional;
                defaults to matching shades by name)
            output_name: Output filename without extension (optional)
            include_text: Also return the JSON text in the response

        Returns:
            JSON string with file path, token count and action summary

        Example:
            palette_export_figma(project="default", collection="theme", mode="dark")
        """
        try:
            proj = loader.get_project(project)
            if proj is None:
                return not_found(project)
            if collection not in (PALETTE_COLLECTION, THEME_COLLECTION):
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.UNKNOWN_COLLECTION.format(collection=collection),
                    }
                )

            result = compiler.compile(
                proj,
                prior_palette=prior_file if collection == PALETTE_COLLECTION else None,
                prior_theme=prior_file if collection == THEME_COLLECTION else None,
                source_mapping=source_mapping,
            )
            tokens = result.collection(collection)
            exported = exporter.export(tokens, mode)

            filename = f"{output_name or f'{project}-{collection}-{exported.mode}'}.json"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)
            output_path.write_text(exported.text)

            prior = result.palette_prior if collection == PALETTE_COLLECTION else result.theme_prior
            response: dict[str, Any] = {
                "status": "success",
                "path": str(output_path),
                "collection": exported.collection,
                "mode": exported.mode,
                "token_count": exported.token_count,
                "actions": exported.actions,
                "message": SuccessMessages.COLLECTION_EXPORTED.format(
                    count=exported.token_count,
                    collection=exported.collection,
                    mode=exported.mode,
                ),
            }
            if isinstance(prior, FileError):
                response["warning"] = f"Prior file ignored: {prior.reason}"
            if include_text:
                response["text"] = exported.text
            return json.dumps(response)
        except Exception as e:
            logger.exception("Failed to export Figma variables")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_export_figma"] = palette_export_figma

    @mcp.tool  # type: ignore[arg-type]
    async def palette_export_format(
        project: str = "default",
        fmt: str = "css",
        output_name: str | None = None,
    ) -> str:
        """
        Export a project's palette in a code format.

        Args:
            project: Project name
            fmt: json-srgb, json-p3, json-oklch, css, scss or tailwind
            output_name: Output filename without extension (optional)

        Returns:
            JSON string with the file path and the exported text

        Example:
            palette_export_format(project="default", fmt="tailwind")
        """
        try:
            proj = loader.get_project(project)
            if proj is None:
                return not_found(project)

            palette = compiler.generator.generate(proj.hues, proj.shades)
            text = export_palette(
                palette,
                [s.label for s in proj.shades],
                proj.theme.intents,
                fmt,
                name=proj.name,
            )

            extension = _EXTENSIONS.get(fmt, "json")
            output_path = output_dir / f"{output_name or f'{project}-{fmt}'}.{extension}"
            output_dir.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text)

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "format": fmt,
                    "text": text,
                }
            )
        except Exception as e:
            logger.exception("Failed to export palette")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_export_format"] = palette_export_format

    @mcp.tool  # type: ignore[arg-type]
    async def palette_analyze_file(
        content: str,
        project: str = "default",
        kind: str | None = None,
    ) -> str:
        """
        Analyze a previously exported Figma variables file.

        Reports what the file holds and proposes the hue mapping and
        shade source mapping a re-export against the project would use.

        Args:
            content: JSON text of the exported file
            project: Project to map against
            kind: "palette" or "theme" (detected when omitted)

        Returns:
            JSON string with the file summary and proposed mappings

        Example:
            palette_analyze_file(content=existing_json, project="default")
        """
        try:
            proj = loader.get_project(project)
            if proj is None:
                return not_found(project)

            theme = proj.theme
            parsed = parse_file(
                content,
                kind=kind,
                marker=theme.naming.raw_marker,
                exclusion_prefix=theme.exclusion_prefix,
                intent_names=theme.intents.keys(),
                known_hues=[h.label for h in proj.hues],
            )
            if isinstance(parsed, FileError):
                return json.dumps({"status": "error", "message": parsed.reason})

            info = parsed.parsed
            shade_labels = [s.label for s in proj.shades]
            source_mapping = create_shade_source_map(info.shades, shade_labels)
            validation = validate_source_mapping(source_mapping, info.shades)

            return json.dumps(
                {
                    "status": "success",
                    "file": info.summary(),
                    "hue_mapping": create_hue_mapping(info.hues, [h.label for h in proj.hues]),
                    "source_mapping": source_mapping,
                    "mapping_issues": [str(issue) for issue in validation.issues],
                    "token_count": count_tokens_in_text(
                        content, theme.exclusion_prefix, theme.naming.raw_marker
                    ),
                    "message": SuccessMessages.FILE_ANALYZED.format(
                        hues=len(info.hues),
                        shades=len(info.shades),
                        identifiers=len(info.identifiers),
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to analyze file")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_analyze_file"] = palette_analyze_file

    @mcp.tool  # type: ignore[arg-type]
    async def palette_count_tokens(content: str) -> str:
        """
        Count the variables in an exported file.

        Args:
            content: JSON text of the exported file

        Returns:
            JSON string with the count (0 for malformed input)

        Example:
            palette_count_tokens(content=existing_json)
        """
        try:
            return json.dumps({"status": "success", "count": count_tokens_in_text(content)})
        except Exception as e:
            logger.exception("Failed to count tokens")
            return json.dumps({"status": "error", "message": str(e)})

    tools["palette_count_tokens"] = palette_count_tokens

    return tools
