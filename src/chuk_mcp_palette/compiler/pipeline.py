"""
Palette Compiler - compiles a PaletteProject to reconciled token collections.

This is the central compilation pipeline:
    PaletteProject → Palette → TokenCollections → (reconciled) → JSON

The compiler:
1. Generates the palette from the project's hues and shades
2. Builds the palette and theme collections
3. Reconciles each against a previously exported file, if given
4. Leaves serialization to the exporter

Everything is a pure function of the project and the prior files, so
compiling twice gives the same collections.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from chuk_mcp_palette.compiler.builder import (
    PALETTE_COLLECTION,
    THEME_COLLECTION,
    TokenTreeBuilder,
)
from chuk_mcp_palette.constants import LEGACY_SHADE_GROUP, ErrorMessages
from chuk_mcp_palette.models.config import PaletteProject
from chuk_mcp_palette.models.palette import Palette
from chuk_mcp_palette.models.tokens import FileOk, ParseResult, TokenCollection
from chuk_mcp_palette.palette.generator import PaletteGenerator
from chuk_mcp_palette.reconcile.parser import (
    create_hue_mapping,
    create_shade_source_map,
    parse_palette_file,
    parse_theme_file,
)
from chuk_mcp_palette.reconcile.reconciler import IdentifierReconciler

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Result of compiling a project."""

    palette: Palette
    palette_collection: TokenCollection
    theme_collection: TokenCollection
    palette_prior: ParseResult | None = None
    theme_prior: ParseResult | None = None

    def collection(self, name: str) -> TokenCollection:
        """
        Get a collection by name.

        Raises:
            ValueError: If the name isn't 'palette' or 'theme'
        """
        if name == PALETTE_COLLECTION:
            return self.palette_collection
        if name == THEME_COLLECTION:
            return self.theme_collection
        raise ValueError(ErrorMessages.UNKNOWN_COLLECTION.format(collection=name))


class PaletteCompiler:
    """
    Compiles a PaletteProject to token collections.

    The compiler orchestrates the full pipeline from the parametric
    project to reconciled, export-ready collections.
    """

    def __init__(
        self,
        generator: PaletteGenerator | None = None,
        reconciler: IdentifierReconciler | None = None,
    ):
        """
        Initialize the compiler.

        Args:
            generator: Palette generator (a caching one is created if omitted)
            reconciler: Identifier reconciler (permissive if omitted)
        """
        self.generator = generator or PaletteGenerator()
        self.reconciler = reconciler or IdentifierReconciler()

    def compile(
        self,
        project: PaletteProject,
        prior_palette: str | None = None,
        prior_theme: str | None = None,
        source_mapping: Mapping[str, str] | None = None,
    ) -> CompileResult:
        """
        Compile a project, reconciling against prior exports.

        Args:
            project: The project to compile
            prior_palette: Previously exported palette JSON, if any
            prior_theme: Previously exported theme JSON (either mode), if any
            source_mapping: New shade -> file shade or "new"; defaults to
                the identity mapping over shades the file has

        Returns:
            CompileResult with palette and both collections
        """
        theme = project.theme
        shade_labels = [s.label for s in project.shades]
        hue_labels = [h.label for h in project.hues]

        palette = self.generator.generate(project.hues, project.shades)
        builder = TokenTreeBuilder(palette, theme, shade_labels)
        palette_collection = builder.build_palette()
        theme_collection = builder.build_theme()

        palette_prior: ParseResult | None = None
        if prior_palette:
            palette_prior = parse_palette_file(prior_palette, theme.naming.raw_marker, hue_labels)
            palette_collection = self._reconcile(
                palette_collection, palette_prior, source_mapping, shade_labels, hue_labels
            )

        theme_prior: ParseResult | None = None
        if prior_theme:
            theme_prior = parse_theme_file(
                prior_theme,
                exclusion_prefix=theme.exclusion_prefix,
                intent_names=theme.intents.keys(),
                foreground_group=theme.naming.foreground_group,
                shade_groups=(theme.naming.shade_group_name, LEGACY_SHADE_GROUP),
            )
            theme_collection = self._reconcile(
                theme_collection, theme_prior, source_mapping, shade_labels, hue_labels
            )

        logger.info(
            "Compiled '%s': %d colors, %d palette tokens, %d theme tokens",
            project.name,
            len(palette),
            len(palette_collection),
            len(theme_collection),
        )
        return CompileResult(
            palette=palette,
            palette_collection=palette_collection,
            theme_collection=theme_collection,
            palette_prior=palette_prior,
            theme_prior=theme_prior,
        )

    def _reconcile(
        self,
        collection: TokenCollection,
        prior: ParseResult,
        source_mapping: Mapping[str, str] | None,
        shade_labels: list[str],
        hue_labels: list[str],
    ) -> TokenCollection:
        hue_mapping = None
        if isinstance(prior, FileOk):
            if source_mapping is None:
                source_mapping = create_shade_source_map(prior.parsed.shades, shade_labels)
            hue_mapping = create_hue_mapping(prior.parsed.hues, hue_labels)
        return self.reconciler.reconcile_collection(collection, prior, source_mapping, hue_mapping)


def compile_project(
    project: PaletteProject,
    prior_palette: str | None = None,
    prior_theme: str | None = None,
    source_mapping: Mapping[str, str] | None = None,
) -> CompileResult:
    """Convenience function to compile a project."""
    return PaletteCompiler().compile(project, prior_palette, prior_theme, source_mapping)
