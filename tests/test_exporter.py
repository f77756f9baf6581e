"""
Tests for the Figma variables exporter.
"""

import json

import pytest

from chuk_mcp_palette.compiler import TokenTreeBuilder
from chuk_mcp_palette.constants import TokenAction
from chuk_mcp_palette.export import FigmaExporter, count_tokens, count_tokens_in_text
from chuk_mcp_palette.models import PaletteProject, TokenCollection
from chuk_mcp_palette.palette import generate
from chuk_mcp_palette.reconcile import (
    create_shade_source_map,
    parse_palette_file,
    parse_theme_file,
    reconcile,
)


@pytest.fixture
def builder(small_project: PaletteProject) -> TokenTreeBuilder:
    """Builder over the small project."""
    return TokenTreeBuilder(generate(small_project.hues, small_project.shades), small_project.theme)


@pytest.fixture
def theme(builder: TokenTreeBuilder) -> TokenCollection:
    """Small theme collection."""
    return builder.build_theme()


@pytest.fixture
def palette_collection(builder: TokenTreeBuilder) -> TokenCollection:
    """Small palette collection."""
    return builder.build_palette()


class TestRender:
    """Tests for the JSON shape."""

    def test_deterministic(self, theme: TokenCollection) -> None:
        """Same collection, byte-identical text."""
        assert FigmaExporter().render(theme, "light") == FigmaExporter().render(theme, "light")

    def test_mode_name_extension(self, theme: TokenCollection) -> None:
        """The file declares its mode at the top level."""
        tree = FigmaExporter().to_dict(theme, "dark")
        assert tree["$extensions"] == {"com.figma.modeName": "dark"}

    def test_default_mode_is_first(self, theme: TokenCollection) -> None:
        """Without a mode the first declared one is used."""
        assert FigmaExporter().to_dict(theme)["$extensions"]["com.figma.modeName"] == "light"

    def test_root_nesting(self, theme: TokenCollection) -> None:
        """A variable that is also a group keeps its value under $root."""
        tree = FigmaExporter().to_dict(theme, "light")
        primary = tree["primary"]
        assert primary["$root"]["$value"] == "{primary.shade.500}"
        assert primary["10"]["$value"]["alpha"] == 0.1
        assert "500" in primary["shade"]
        assert primary["shade"]["500"]["$root"]["$value"] == "{--blue-500}"
        assert primary["shade"]["0"]["$value"] == "{--blue-0}"

    def test_literal_value(self, theme: TokenCollection) -> None:
        """Literals carry color space, components, alpha and hex."""
        value = FigmaExporter().to_dict(theme, "light")["white"]["$root"]["$value"]
        assert value == {
            "colorSpace": "srgb",
            "components": [1.0, 1.0, 1.0],
            "alpha": 1.0,
            "hex": "#FFFFFF",
        }

    def test_leaf_extensions(self, theme: TokenCollection) -> None:
        """Scopes, code syntax and identifier on every leaf."""
        leaf = FigmaExporter().to_dict(theme, "light")["on"]["primary"]["shade"]["500"]["60"]
        extensions = leaf["$extensions"]
        assert extensions["com.figma.scopes"] == ["ALL_SCOPES"]
        assert extensions["com.figma.codeSyntax"] == {"WEB": "on-primary-500/60"}
        assert extensions["com.figma.variableId"].startswith("VariableID:")

    def test_string_token(self, theme: TokenCollection) -> None:
        """mode_name is a string variable."""
        leaf = FigmaExporter().to_dict(theme, "dark")["mode_name"]
        assert leaf["$type"] == "string"
        assert leaf["$value"] == "dark"
        assert leaf["$extensions"]["com.figma.type"] == "string"

    def test_palette_collection(self, palette_collection: TokenCollection) -> None:
        """Primitives are flat top-level leaves."""
        tree = FigmaExporter().to_dict(palette_collection)
        assert tree["$extensions"]["com.figma.modeName"] == "palette"
        assert tree["--gray-0"]["$value"]["hex"] == "#FFFFFF"
        assert tree["--gray-0"]["$value"]["colorSpace"] == "srgb"

    def test_p3_color_space(self, small_project: PaletteProject) -> None:
        """The P3 profile tags literals as display-p3."""
        data = small_project.to_yaml_dict()
        data["theme"]["color_profile"] = "p3"
        project = PaletteProject.model_validate(data)
        collection = TokenTreeBuilder(
            generate(project.hues, project.shades), project.theme
        ).build_palette()
        tree = FigmaExporter().to_dict(collection)
        assert tree["--blue-500"]["$value"]["colorSpace"] == "display-p3"

    def test_unknown_mode(self, theme: TokenCollection) -> None:
        """Rendering an undeclared mode is an error."""
        with pytest.raises(ValueError, match="not declared"):
            FigmaExporter().render(theme, "sepia")

    def test_indent(self, theme: TokenCollection) -> None:
        """Indentation is configurable."""
        compact = FigmaExporter(indent=None).render(theme, "light")
        assert "\n" not in compact
        assert json.loads(compact) == FigmaExporter().to_dict(theme, "light")


class TestIdentifiers:
    """Tests for identifier assignment."""

    def test_generated_ids_stable(self, theme: TokenCollection) -> None:
        """Generated identifiers depend only on collection and name."""
        exporter = FigmaExporter()
        token = theme.find("primary/shade/500")
        assert exporter.variable_id(theme, token) == FigmaExporter().variable_id(theme, token)

    def test_generated_ids_unique(self, theme: TokenCollection) -> None:
        """No two variables share an identifier."""
        exporter = FigmaExporter()
        ids = [exporter.variable_id(theme, t) for t in theme.variables]
        assert len(set(ids)) == len(ids)

    def test_seed_changes_ids(self, theme: TokenCollection) -> None:
        """A different seed gives different identifiers."""
        token = theme.variables[0]
        assert FigmaExporter(seed="a").variable_id(theme, token) != FigmaExporter(
            seed="b"
        ).variable_id(theme, token)

    def test_no_new_ids(self, theme: TokenCollection) -> None:
        """New variables can be left for the design tool to number."""
        tree = FigmaExporter(assign_new_ids=False).to_dict(theme, "light")
        assert "com.figma.variableId" not in tree["black"]["$root"]["$extensions"]

    def test_carried_ids_written_verbatim(self, theme: TokenCollection) -> None:
        """Reconciled identifiers always win."""
        token = theme.find("black").resolved(TokenAction.UPDATE, "VariableID:12:34")
        collection = theme.with_variables(
            [token if t.path == ("black",) else t for t in theme.variables]
        )
        tree = FigmaExporter(assign_new_ids=False).to_dict(collection, "light")
        assert tree["black"]["$root"]["$extensions"]["com.figma.variableId"] == "VariableID:12:34"


class TestExport:
    """Tests for export results and counting."""

    def test_export_result(self, theme: TokenCollection) -> None:
        """Result reports count and actions."""
        result = FigmaExporter().export(theme, "light")
        assert result.collection == "theme"
        assert result.mode == "light"
        assert result.token_count == 59
        assert result.actions == {"create": 59, "rename": 0, "update": 0}

    def test_export_all(self, theme: TokenCollection) -> None:
        """One result per mode."""
        results = FigmaExporter().export_all(theme)
        assert list(results) == ["light", "dark"]
        assert results["light"].text != results["dark"].text

    def test_count_tokens(self, theme: TokenCollection) -> None:
        """Counting the collection and the text agree."""
        text = FigmaExporter().render(theme, "light")
        assert count_tokens(theme) == 59
        assert count_tokens_in_text(text) == 59

    def test_count_tokens_palette(self, palette_collection: TokenCollection) -> None:
        """Palette files count every primitive."""
        assert count_tokens_in_text(FigmaExporter().render(palette_collection)) == 6

    def test_count_malformed(self) -> None:
        """Malformed input counts as zero."""
        assert count_tokens_in_text("{oops") == 0
        assert count_tokens_in_text("[1]") == 0
        assert count_tokens_in_text("{}") == 0

    def test_count_skips_excluded(self) -> None:
        """Excluded groups and excluded-hue primitives are not counted."""
        leaf = {"$type": "color", "$value": {"hex": "#000000", "alpha": 1}}
        text = json.dumps(
            {
                "--blue-0": leaf,
                "--#draft-0": leaf,
                "#draft": {"shade": {"500": leaf}},
                "primary": {"shade": {"500": leaf, "#old": leaf}},
            }
        )
        assert count_tokens_in_text(text) == 2
        assert count_tokens_in_text(text, exclusion_prefix="") == 5


class TestRoundTrip:
    """Export, parse back, reconcile."""

    def test_theme_round_trip(self, small_project: PaletteProject, theme: TokenCollection) -> None:
        """Re-exporting over our own file updates everything in place."""
        exporter = FigmaExporter()
        text = exporter.render(theme, "light")
        parsed = parse_theme_file(text, intent_names=small_project.theme.intents.keys()).parsed

        mapping = create_shade_source_map(parsed.shades, [s.label for s in small_project.shades])
        reconciled = theme.with_variables(reconcile(theme.variables, parsed, mapping))

        assert all(t.action is TokenAction.UPDATE for t in reconciled.variables)
        assert exporter.render(reconciled, "light") == text

    def test_palette_round_trip(self, palette_collection: TokenCollection) -> None:
        """Same for the palette file."""
        exporter = FigmaExporter()
        text = exporter.render(palette_collection)
        parsed = parse_palette_file(text).parsed
        assert parsed.hues == ("gray", "blue")
        assert parsed.color_count == 6

        mapping = create_shade_source_map(parsed.shades, ["0", "500", "1000"])
        reconciled = reconcile(palette_collection.variables, parsed, mapping)
        assert all(t.action is TokenAction.UPDATE for t in reconciled)
        assert [t.source_id for t in reconciled] == [
            exporter.variable_id(palette_collection, t) for t in palette_collection.variables
        ]
