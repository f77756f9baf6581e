"""
Exported-file parser - reads previously exported token files.

Parsing never raises: every failure comes back as a FileError, and a
FileError means "no prior file" to everything downstream.

Both generations of the file format are accepted:

    palette   --gray-500            flat (current)
              gray/500              nested (legacy)
    theme     primary/shade/500     shade group (current)
              primary/step/500      step group (legacy)

Identifiers are collected for every leaf under its TokenKey, so lookups
are independent of which generation wrote the file.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from chuk_mcp_palette.compiler.paths import ROOT_SEGMENT, is_excluded, key_from_path
from chuk_mcp_palette.constants import (
    EXT_VARIABLE_ID,
    LEGACY_SHADE_GROUP,
    NEW_SOURCE,
    ErrorMessages,
    Intent,
)
from chuk_mcp_palette.core.alpha import AlphaSet
from chuk_mcp_palette.models.tokens import FileError, FileOk, ParsedFile, ParseResult, TokenKey

logger = logging.getLogger(__name__)

# Groups that carry alphas only
_FIXED_GROUPS = ("stark", "black", "white")

_HUE_ALIASES = {"grey": "gray", "gray": "grey"}

# Shade label with an optional /alpha, after a known hue prefix
_SHADE_TAIL = re.compile(r"^(.+?)(?:/(\d+))?$")


def shade_sort_key(label: str) -> tuple[int, float, str]:
    """Sort numeric shade labels numerically, others after them by name."""
    try:
        return (0, float(label), label)
    except ValueError:
        return (1, 0.0, label)


def _load(text: str) -> dict[str, Any] | FileError:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        return FileError(ErrorMessages.INVALID_JSON.format(error=e))
    if not isinstance(data, dict):
        return FileError(ErrorMessages.NOT_AN_OBJECT.format(kind=type(data).__name__))
    return data


def _is_leaf(node: Any) -> bool:
    return isinstance(node, dict) and ("$type" in node or "$value" in node)


def _variable_id(node: Any) -> str | None:
    if not isinstance(node, dict):
        return None
    extensions = node.get("$extensions")
    if not isinstance(extensions, dict):
        return None
    value = extensions.get(EXT_VARIABLE_ID)
    return value if isinstance(value, str) and value else None


def _children(node: Any) -> Iterator[tuple[str, Any]]:
    """Non-metadata children of a group node."""
    if not isinstance(node, dict):
        return
    for key, value in node.items():
        if not key.startswith("$"):
            yield key, value


def _walk_leaves(node: Any, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], dict]]:
    """Yield (path, leaf) for every leaf, with ``$root`` kept as a segment."""
    if _is_leaf(node):
        yield path, node
        return
    if not isinstance(node, dict):
        return
    root = node.get(ROOT_SEGMENT)
    if _is_leaf(root):
        yield (*path, ROOT_SEGMENT), root
    for key, child in _children(node):
        yield from _walk_leaves(child, (*path, key))


def _digit_children(node: Any) -> list[int]:
    """Numeric children that can be opacities (0-100)."""
    return sorted(int(k) for k, _ in _children(node) if k.isdigit() and int(k) <= 100)


def _is_color(leaf: dict) -> bool:
    return leaf.get("$type") == "color"


# ---------------------------------------------------------------------------
# Palette files
# ---------------------------------------------------------------------------


def parse_palette_file(
    text: str,
    marker: str = "--",
    known_hues: Iterable[str] | None = None,
) -> ParseResult:
    """
    Parse a previously exported palette file.

    Hue and shade labels are free strings, so a flat name like
    ``--sky-blue-500`` is split at the last ``-``. Known hue labels are
    tried first, longest first, which also reads shade labels that
    contain a ``-``.

    Args:
        text: JSON text
        marker: Primitive name prefix (``--`` in ``--gray-500``)
        known_hues: Hue labels of the current palette, if any

    Returns:
        FileOk with hues, shades and identifiers, or FileError
    """
    data = _load(text)
    if isinstance(data, FileError):
        return data

    flat = re.compile(rf"^{re.escape(marker)}(.+)-([^-/]+?)(?:/(\d+))?$")
    known = sorted(known_hues or (), key=len, reverse=True)
    hues: list[str] = []
    shades: set[str] = set()
    alphas: dict[str, list[int]] = {}
    identifiers: dict[TokenKey, str] = {}
    color_count = 0

    def record(hue: str, shade: str, alpha: int | None, leaf: Any) -> None:
        nonlocal color_count
        if hue not in hues:
            hues.append(hue)
        shades.add(shade)
        if alpha is None:
            color_count += 1
        else:
            alphas.setdefault(f"{hue}-{shade}", []).append(alpha)
        variable_id = _variable_id(leaf)
        if variable_id:
            identifiers[TokenKey((hue,), shade, alpha)] = variable_id

    def record_node(hue: str, shade: str, node: Any) -> None:
        """A shade node: a leaf, or a group with $root and alpha children."""
        if _is_leaf(node):
            record(hue, shade, None, node)
            return
        if _is_leaf(node.get(ROOT_SEGMENT) if isinstance(node, dict) else None):
            record(hue, shade, None, node[ROOT_SEGMENT])
        for alpha, child in _children(node):
            if alpha.isdigit() and int(alpha) <= 100 and _is_leaf(child):
                record(hue, shade, int(alpha), child)

    def split(key: str) -> tuple[str, str, str | None] | None:
        """(hue, shade, alpha) of a flat primitive name."""
        rest = key[len(marker) :]
        for hue in known:
            if rest.startswith(f"{hue}-") and len(rest) > len(hue) + 1:
                match = _SHADE_TAIL.match(rest[len(hue) + 1 :])
                if match:
                    return hue, match.group(1), match.group(2)
        match = flat.match(key)
        return match.groups() if match else None

    for key, node in _children(data):
        if key.startswith(marker):
            parts = split(key)
            if parts is None:
                logger.debug("Skipping unrecognized palette key %r", key)
                continue
            hue, shade, alpha = parts
            if alpha is not None:
                if _is_leaf(node) and int(alpha) <= 100:
                    record(hue, shade, int(alpha), node)
            else:
                record_node(hue, shade, node)
        elif isinstance(node, dict) and not _is_leaf(node):
            # Legacy nested format: hue/shade
            for shade, child in _children(node):
                record_node(key, shade, child)

    parsed = ParsedFile(
        kind="palette",
        hues=tuple(hues),
        shades=tuple(sorted(shades, key=shade_sort_key)),
        alphas={group: AlphaSet.of(values) for group, values in alphas.items()},
        identifiers=identifiers,
        color_count=color_count,
        mode_name=_mode_name(data),
    )
    logger.debug("Parsed palette file: %s", parsed.summary())
    return FileOk(parsed)


# ---------------------------------------------------------------------------
# Theme files
# ---------------------------------------------------------------------------


def parse_theme_file(
    text: str,
    exclusion_prefix: str = "#",
    intent_names: Iterable[str] | None = None,
    foreground_group: str = "on",
    shade_groups: Sequence[str] = ("shade", LEGACY_SHADE_GROUP),
) -> ParseResult:
    """
    Parse a previously exported light/dark theme file.

    Numbers directly under a group are alphas; numbers under a shade
    group (``shade`` or legacy ``step``) are shades.

    Args:
        text: JSON text
        exclusion_prefix: Groups starting with this are reported, not read
        intent_names: Group names to classify as intents
        foreground_group: Group holding on-colors
        shade_groups: Segment names that introduce a shade

    Returns:
        FileOk with intents, hues, alphas and identifiers, or FileError
    """
    data = _load(text)
    if isinstance(data, FileError):
        return data

    intents_known = set(intent_names) if intent_names is not None else {i.value for i in Intent}
    intents: dict[str, tuple[str, ...]] = {}
    hues: list[str] = []
    all_shades: set[str] = set()
    excluded: list[str] = []
    alphas: dict[str, AlphaSet] = {}
    identifiers: dict[TokenKey, str] = {}
    color_count = 0

    for path, leaf in _walk_leaves(data):
        if is_excluded(path, exclusion_prefix):
            continue
        if _is_color(leaf):
            color_count += 1
        variable_id = _variable_id(leaf)
        if variable_id:
            identifiers[key_from_path(path, shade_groups)] = variable_id

    for key, node in _children(data):
        if exclusion_prefix and key.startswith(exclusion_prefix):
            excluded.append(key)
            continue
        if _is_leaf(node) or not isinstance(node, dict):
            continue

        if key == foreground_group:
            for on_key, on_node in _children(node):
                found = _digit_children(on_node)
                if found:
                    alphas[f"{foreground_group}-{on_key}"] = AlphaSet.of(found)
            continue

        direct = _digit_children(node)
        if direct:
            alphas[key] = AlphaSet.of(direct)
        if key in _FIXED_GROUPS:
            continue

        shades: list[str] = []
        for group in shade_groups:
            for shade, shade_node in _children(node.get(group)):
                if shade not in shades:
                    shades.append(shade)
                per_shade = _digit_children(shade_node)
                if per_shade:
                    alphas[f"{key}/{shade}"] = AlphaSet.of(per_shade)
        if not shades:
            continue

        shades.sort(key=shade_sort_key)
        all_shades.update(shades)
        if key in intents_known:
            intents[key] = tuple(shades)
        else:
            hues.append(key)

    parsed = ParsedFile(
        kind="theme",
        hues=tuple(hues),
        shades=tuple(sorted(all_shades, key=shade_sort_key)),
        intents=intents,
        excluded_groups=tuple(excluded),
        alphas=alphas,
        identifiers=identifiers,
        color_count=color_count,
        mode_name=_mode_name(data),
    )
    logger.debug("Parsed theme file: %s", parsed.summary())
    return FileOk(parsed)


def _mode_name(data: dict[str, Any]) -> str | None:
    """Mode name from the mode_name token or top-level extensions."""
    token = data.get("mode_name")
    if _is_leaf(token) and isinstance(token.get("$value"), str):
        return token["$value"]
    extensions = data.get("$extensions")
    if isinstance(extensions, dict):
        value = extensions.get("com.figma.modeName")
        if isinstance(value, str):
            return value
    return None


def detect_kind(text: str, marker: str = "--") -> str | None:
    """
    Guess whether a file is a palette or theme export.

    Returns:
        "palette", "theme", or None if the text isn't a JSON object
    """
    data = _load(text)
    if isinstance(data, FileError):
        return None
    keys = [k for k, _ in _children(data)]
    if any(k.startswith(marker) for k in keys):
        return "palette"
    if "mode_name" in keys or any(
        isinstance(data[k], dict) and any(g in data[k] for g in ("shade", LEGACY_SHADE_GROUP))
        for k in keys
    ):
        return "theme"
    return "palette"


def parse_file(
    text: str,
    kind: str | None = None,
    marker: str = "--",
    exclusion_prefix: str = "#",
    intent_names: Iterable[str] | None = None,
    known_hues: Iterable[str] | None = None,
) -> ParseResult:
    """Parse a file of either kind, detecting the kind when not given."""
    kind = kind or detect_kind(text, marker)
    if kind == "theme":
        return parse_theme_file(text, exclusion_prefix, intent_names)
    # Unknown kinds go to the palette parser, which produces the error
    return parse_palette_file(text, marker, known_hues)


# ---------------------------------------------------------------------------
# Automatic mappings
# ---------------------------------------------------------------------------


def create_hue_mapping(file_hues: Iterable[str], hues: Iterable[str]) -> dict[str, str]:
    """
    Map file hue names to palette hue labels.

    Matches case-insensitively and treats gray and grey as the same hue.
    Unmatched file hues map to themselves.
    """
    labels = list(hues)
    by_lower = {label.lower(): label for label in labels}
    mapping: dict[str, str] = {}
    for file_hue in file_hues:
        normalized = file_hue.lower()
        match = by_lower.get(normalized)
        if match is None and normalized in _HUE_ALIASES:
            match = by_lower.get(_HUE_ALIASES[normalized])
        mapping[file_hue] = match or file_hue
    return mapping


def create_shade_source_map(file_shades: Iterable[str], shades: Iterable[str]) -> dict[str, str]:
    """
    Identity source mapping: each shade maps to itself if the file has it.

    Shades the file doesn't have map to ``"new"``.
    """
    present = set(file_shades)
    return {shade: shade if shade in present else NEW_SOURCE for shade in shades}
