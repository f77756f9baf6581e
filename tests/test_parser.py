"""
Tests for the exported-file parser and the automatic mappings.
"""

import json

import pytest

from chuk_mcp_palette.models import FileError, FileOk, TokenKey
from chuk_mcp_palette.reconcile import (
    create_hue_mapping,
    create_shade_source_map,
    detect_kind,
    parse_file,
    parse_palette_file,
    parse_theme_file,
    shade_sort_key,
)


def leaf(variable_id: str | None = None, token_type: str = "color", value=None) -> dict:
    """A minimal exported leaf."""
    node = {
        "$type": token_type,
        "$value": value if value is not None else {"hex": "#000000", "alpha": 1},
    }
    if variable_id:
        node["$extensions"] = {"com.figma.variableId": variable_id}
    return node


@pytest.fixture
def flat_palette_text() -> str:
    """Current-format palette file with a nested alpha and a flat alpha."""
    return json.dumps(
        {
            "--gray-0": leaf("VariableID:g0"),
            "--gray-500": leaf("VariableID:g500"),
            "--blue-500": {"$root": leaf("VariableID:b500"), "10": leaf("VariableID:b500-10")},
            "--blue-500/20": leaf("VariableID:b500-20"),
            "$extensions": {"com.figma.modeName": "palette"},
        }
    )


@pytest.fixture
def theme_text() -> str:
    """Theme file mixing shade and legacy step groups."""
    return json.dumps(
        {
            "mode_name": leaf(token_type="string", value="light"),
            "primary": {
                "$root": leaf("VariableID:p"),
                "10": leaf("VariableID:p-10"),
                "shade": {
                    "500": {"$root": leaf("VariableID:p500"), "20": leaf("VariableID:p500-20")},
                    "0": leaf("VariableID:p0"),
                },
            },
            "on": {"primary": {"50": leaf(), "shade": {"500": leaf("VariableID:on-p500")}}},
            "gray": {"step": {"500": leaf("VariableID:g500")}},
            "stark": {"50": leaf(), "shade": {"1000": leaf()}},
            "#draft": {"shade": {"500": leaf("VariableID:draft")}},
        }
    )


class TestParsePaletteFile:
    """Tests for palette file parsing."""

    def test_flat_format(self, flat_palette_text: str) -> None:
        """Hues, shades and base colors from flat names."""
        result = parse_palette_file(flat_palette_text)
        assert isinstance(result, FileOk)
        parsed = result.parsed
        assert parsed.kind == "palette"
        assert parsed.hues == ("gray", "blue")
        assert parsed.shades == ("0", "500")
        assert parsed.color_count == 3
        assert parsed.mode_name == "palette"

    def test_alphas_both_forms(self, flat_palette_text: str) -> None:
        """Nested and flat alpha variants are both read."""
        parsed = parse_palette_file(flat_palette_text).parsed
        assert list(parsed.alphas["blue-500"]) == [10, 20]

    def test_identifiers(self, flat_palette_text: str) -> None:
        """Identifiers are keyed by hue, shade and alpha."""
        parsed = parse_palette_file(flat_palette_text).parsed
        assert parsed.identifier(TokenKey(("gray",), "500")) == "VariableID:g500"
        assert parsed.identifier(TokenKey(("blue",), "500")) == "VariableID:b500"
        assert parsed.identifier(TokenKey(("blue",), "500", 10)) == "VariableID:b500-10"
        assert parsed.identifier(TokenKey(("blue",), "500", 20)) == "VariableID:b500-20"
        assert parsed.identifier(TokenKey(("blue",), "0")) is None

    def test_legacy_nested_format(self) -> None:
        """hue/shade nesting from older exports."""
        text = json.dumps(
            {
                "gray": {"500": leaf("VariableID:a"), "0": leaf()},
                "blue": {"800": leaf("VariableID:b")},
            }
        )
        parsed = parse_palette_file(text).parsed
        assert parsed.hues == ("gray", "blue")
        assert parsed.shades == ("0", "500", "800")
        assert parsed.color_count == 3
        assert parsed.identifier(TokenKey(("blue",), "800")) == "VariableID:b"

    def test_custom_marker(self) -> None:
        """The primitive prefix is configurable."""
        text = json.dumps({"~gray-50": leaf("VariableID:x")})
        parsed = parse_palette_file(text, marker="~").parsed
        assert parsed.identifier(TokenKey(("gray",), "50")) == "VariableID:x"

    def test_unrecognized_keys_skipped(self) -> None:
        """Names that don't fit the pattern are ignored."""
        parsed = parse_palette_file(json.dumps({"--weird": leaf(), "--gray-5": leaf()})).parsed
        assert parsed.hues == ("gray",)

    def test_free_form_labels(self) -> None:
        """Hyphens and digits in hues and word shades are split at the last '-'."""
        text = json.dumps(
            {
                "--sky-blue-light": leaf("VariableID:sl"),
                "--gray2-500/20": leaf("VariableID:g2"),
            }
        )
        parsed = parse_palette_file(text).parsed
        assert parsed.hues == ("sky-blue", "gray2")
        assert set(parsed.shades) == {"light", "500"}
        assert parsed.identifier(TokenKey(("sky-blue",), "light")) == "VariableID:sl"
        assert parsed.identifier(TokenKey(("gray2",), "500", 20)) == "VariableID:g2"

    def test_known_hues_first(self) -> None:
        """Known hue labels are matched longest first, so shades may hold '-'."""
        text = json.dumps({"--blue-extra-light": leaf("VariableID:a"), "--blue-dark-500": leaf()})
        parsed = parse_palette_file(text, known_hues=["blue", "blue-dark"]).parsed
        assert parsed.identifier(TokenKey(("blue",), "extra-light")) == "VariableID:a"
        assert parsed.hues == ("blue", "blue-dark")

    def test_alpha_above_100_ignored(self) -> None:
        """Only 0-100 can be an opacity."""
        parsed = parse_palette_file(json.dumps({"--gray-5/150": leaf()})).parsed
        assert parsed.alphas == {}

    def test_invalid_json(self) -> None:
        """Malformed text is a FileError, not an exception."""
        result = parse_palette_file("{not json")
        assert isinstance(result, FileError)
        assert "Invalid JSON" in result.reason

    def test_not_an_object(self) -> None:
        """A top-level array is a FileError."""
        result = parse_palette_file("[1, 2, 3]")
        assert isinstance(result, FileError)
        assert "list" in result.reason

    def test_empty_object(self) -> None:
        """An empty object parses to nothing."""
        parsed = parse_palette_file("{}").parsed
        assert parsed.hues == ()
        assert parsed.color_count == 0


class TestParseThemeFile:
    """Tests for theme file parsing."""

    def test_intents_and_hues(self, theme_text: str) -> None:
        """Known intent names are intents; other shaded groups are hues."""
        parsed = parse_theme_file(theme_text).parsed
        assert parsed.kind == "theme"
        assert parsed.intents == {"primary": ("0", "500")}
        assert parsed.hues == ("gray",)
        assert parsed.shades == ("0", "500")

    def test_custom_intent_names(self, theme_text: str) -> None:
        """The caller can say which groups are intents."""
        parsed = parse_theme_file(theme_text, intent_names=["gray"]).parsed
        assert set(parsed.intents) == {"gray"}
        assert parsed.hues == ("primary",)

    def test_alphas(self, theme_text: str) -> None:
        """Direct digits are root alphas, digits under a shade are per-shade."""
        parsed = parse_theme_file(theme_text).parsed
        assert list(parsed.alphas["primary"]) == [10]
        assert list(parsed.alphas["primary/500"]) == [20]
        assert list(parsed.alphas["on-primary"]) == [50]
        assert list(parsed.alphas["stark"]) == [50]

    def test_excluded_groups(self, theme_text: str) -> None:
        """Excluded groups are reported and contribute nothing."""
        parsed = parse_theme_file(theme_text).parsed
        assert parsed.excluded_groups == ("#draft",)
        assert "VariableID:draft" not in parsed.identifiers.values()

    def test_identifiers_by_key(self, theme_text: str) -> None:
        """Every leaf's identifier is filed under its key."""
        parsed = parse_theme_file(theme_text).parsed
        assert parsed.identifier(TokenKey(("primary",))) == "VariableID:p"
        assert parsed.identifier(TokenKey(("primary",), None, 10)) == "VariableID:p-10"
        assert parsed.identifier(TokenKey(("primary",), "500")) == "VariableID:p500"
        assert parsed.identifier(TokenKey(("primary",), "500", 20)) == "VariableID:p500-20"
        assert parsed.identifier(TokenKey(("on", "primary"), "500")) == "VariableID:on-p500"

    def test_legacy_step_same_key(self, theme_text: str) -> None:
        """A step group gives the same key a shade group would."""
        parsed = parse_theme_file(theme_text).parsed
        assert parsed.identifier(TokenKey(("gray",), "500")) == "VariableID:g500"

    def test_color_count_and_mode(self, theme_text: str) -> None:
        """Color leaves are counted; mode_name is read."""
        parsed = parse_theme_file(theme_text).parsed
        assert parsed.color_count == 10
        assert parsed.mode_name == "light"

    def test_invalid(self) -> None:
        """Bad input is a FileError."""
        assert isinstance(parse_theme_file(""), FileError)
        assert isinstance(parse_theme_file('"text"'), FileError)

    def test_summary(self, theme_text: str) -> None:
        """Summary is JSON-friendly."""
        summary = parse_theme_file(theme_text).parsed.summary()
        assert summary["kind"] == "theme"
        assert summary["alphas"]["primary"] == "10"
        json.dumps(summary)


class TestDetectKind:
    """Tests for file kind detection."""

    def test_palette(self, flat_palette_text: str) -> None:
        """Marker-prefixed names mean a palette file."""
        assert detect_kind(flat_palette_text) == "palette"

    def test_theme(self, theme_text: str) -> None:
        """mode_name or shade groups mean a theme file."""
        assert detect_kind(theme_text) == "theme"
        assert detect_kind(json.dumps({"primary": {"step": {}}})) == "theme"

    def test_invalid(self) -> None:
        """Non-objects can't be classified."""
        assert detect_kind("nope") is None

    def test_parse_file_dispatch(self, theme_text: str, flat_palette_text: str) -> None:
        """parse_file picks the right parser."""
        assert parse_file(theme_text).parsed.kind == "theme"
        assert parse_file(flat_palette_text).parsed.kind == "palette"
        assert parse_file(theme_text, kind="palette").parsed.kind == "palette"
        assert isinstance(parse_file("nope"), FileError)


class TestMappings:
    """Tests for automatic hue and shade mappings."""

    def test_shade_sort_key(self) -> None:
        """Numeric labels sort numerically, others after."""
        labels = ["1000", "50", "x", "0", "500"]
        assert sorted(labels, key=shade_sort_key) == ["0", "50", "500", "1000", "x"]

    def test_hue_mapping_case_insensitive(self) -> None:
        """Case differences still match."""
        assert create_hue_mapping(["Blue"], ["blue"]) == {"Blue": "blue"}

    def test_hue_mapping_gray_grey(self) -> None:
        """gray and grey are the same hue."""
        assert create_hue_mapping(["grey"], ["gray", "blue"]) == {"grey": "gray"}
        assert create_hue_mapping(["gray"], ["grey"]) == {"gray": "grey"}

    def test_hue_mapping_unmatched(self) -> None:
        """Unmatched hues map to themselves."""
        assert create_hue_mapping(["mauve"], ["blue"]) == {"mauve": "mauve"}

    def test_shade_source_map(self) -> None:
        """Shades the file has map to themselves, others to new."""
        mapping = create_shade_source_map(["0", "500"], ["0", "250", "500"])
        assert mapping == {"0": "0", "250": "new", "500": "500"}
