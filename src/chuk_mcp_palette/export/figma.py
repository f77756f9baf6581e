"""
Figma Exporter - serializes token collections to Figma variables JSON.

Output shape (one file per collection mode):

    {
      "mode_name": {"$type": "string", "$value": "light", ...},
      "primary": {
        "$root": {"$type": "color", "$value": "{primary.shade.500}", ...},
        "10": {"$type": "color", "$value": {"colorSpace": ..., "hex": ...}, ...},
        "shade": {"500": {...}}
      },
      "$extensions": {"com.figma.modeName": "light"}
    }

A path that is both a variable and a group (``primary`` and
``primary/10``) keeps its own value under ``$root``.

Serialization is deterministic: the same collection always produces
byte-identical text, including identifiers assigned to new variables.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from chuk_mcp_palette.compiler.paths import ROOT_SEGMENT
from chuk_mcp_palette.constants import (
    EXT_CODE_SYNTAX,
    EXT_MODE_NAME,
    EXT_SCOPES,
    EXT_TYPE,
    EXT_VARIABLE_ID,
    ErrorMessages,
)
from chuk_mcp_palette.models.tokens import Token, TokenCollection

logger = logging.getLogger(__name__)

DEFAULT_SEED = "chuk-mcp-palette"
VARIABLE_ID_PREFIX = "VariableID:"


@dataclass
class ExportResult:
    """Result of exporting one collection mode."""

    collection: str
    mode: str
    text: str
    token_count: int
    actions: dict[str, int] = field(default_factory=dict)


class _Node:
    """Intermediate tree node: an optional leaf plus ordered children."""

    __slots__ = ("leaf", "children")

    def __init__(self) -> None:
        self.leaf: dict[str, Any] | None = None
        self.children: dict[str, _Node] = {}

    def to_json(self) -> dict[str, Any]:
        if not self.children:
            return self.leaf or {}
        result: dict[str, Any] = {}
        if self.leaf is not None:
            result[ROOT_SEGMENT] = self.leaf
        for name, child in self.children.items():
            result[name] = child.to_json()
        return result


class FigmaExporter:
    """
    Renders collections as Figma variables JSON.

    Identifiers carried by reconciliation are written verbatim. Other
    tokens get a name-derived identifier so repeated exports of the same
    configuration stay byte identical; pass ``assign_new_ids=False`` to
    leave them out and let the design tool assign its own.
    """

    def __init__(self, assign_new_ids: bool = True, seed: str = DEFAULT_SEED, indent: int = 2):
        """
        Initialize the exporter.

        Args:
            assign_new_ids: Give new variables deterministic identifiers
            seed: Namespace seed for generated identifiers
            indent: JSON indentation
        """
        self.assign_new_ids = assign_new_ids
        self.seed = seed
        self.indent = indent
        self._namespace = uuid.uuid5(uuid.NAMESPACE_URL, seed)

    def variable_id(self, collection: TokenCollection, token: Token) -> str | None:
        """Identifier written for a token (carried, generated, or None)."""
        if token.source_id:
            return token.source_id
        if not self.assign_new_ids:
            return None
        generated = uuid.uuid5(self._namespace, f"{collection.name}/{token.name}")
        return f"{VARIABLE_ID_PREFIX}{generated}"

    def to_dict(self, collection: TokenCollection, mode: str | None = None) -> dict[str, Any]:
        """
        Build the JSON-ready tree for one mode.

        Raises:
            ValueError: If the mode isn't declared by the collection
        """
        mode = self._resolve_mode(collection, mode)
        root = _Node()

        for token in collection.variables:
            node = root
            for segment in token.path:
                node = node.children.setdefault(segment, _Node())
            node.leaf = self._leaf(collection, token, mode)

        tree = root.to_json()
        tree["$extensions"] = {EXT_MODE_NAME: mode}
        return tree

    def render(self, collection: TokenCollection, mode: str | None = None) -> str:
        """Serialize one mode of a collection to JSON text."""
        return json.dumps(self.to_dict(collection, mode), indent=self.indent, ensure_ascii=False)

    def export(self, collection: TokenCollection, mode: str | None = None) -> ExportResult:
        """
        Serialize one mode and report what the file holds.

        Args:
            collection: The (optionally reconciled) collection
            mode: Mode to render (defaults to the first declared mode)

        Returns:
            ExportResult with text, token count and action summary
        """
        mode = self._resolve_mode(collection, mode)
        text = self.render(collection, mode)
        result = ExportResult(
            collection=collection.name,
            mode=mode,
            text=text,
            token_count=count_tokens(collection),
            actions=collection.action_summary(),
        )
        logger.debug(
            "Exported %s/%s: %d tokens, %d bytes",
            collection.name,
            mode,
            result.token_count,
            len(text),
        )
        return result

    def export_all(self, collection: TokenCollection) -> dict[str, ExportResult]:
        """Export every mode of a collection, keyed by mode name."""
        return {mode: self.export(collection, mode) for mode in collection.modes}

    def _resolve_mode(self, collection: TokenCollection, mode: str | None) -> str:
        if mode is None:
            return collection.modes[0]
        if mode not in collection.modes:
            raise ValueError(ErrorMessages.UNKNOWN_MODE.format(mode=mode, collection=collection.name))
        return mode

    def _leaf(self, collection: TokenCollection, token: Token, mode: str) -> dict[str, Any]:
        extensions: dict[str, Any] = {}
        if token.token_type == "string":
            extensions[EXT_TYPE] = "string"
        extensions[EXT_SCOPES] = list(token.scopes)
        if token.code_syntax:
            extensions[EXT_CODE_SYNTAX] = {"WEB": token.code_syntax}
        variable_id = self.variable_id(collection, token)
        if variable_id:
            extensions[EXT_VARIABLE_ID] = variable_id

        return {
            "$type": token.token_type,
            "$value": token.value(mode).to_dict(),
            "$extensions": extensions,
        }


def count_tokens(collection: TokenCollection) -> int:
    """Number of variables an export of the collection holds."""
    return len(collection.variables)


def count_tokens_in_text(text: str, exclusion_prefix: str = "#", marker: str = "--") -> int:
    """
    Count variables in exported JSON text.

    Counts color and string leaves, including ``$root`` values. Groups
    starting with the exclusion prefix, or primitives whose hue does
    (``--#draft-500``), are not counted. Malformed input counts as zero.
    """

    def excluded(key: str) -> bool:
        if not exclusion_prefix:
            return False
        name = key[len(marker) :] if marker and key.startswith(marker) else key
        return name.startswith(exclusion_prefix)

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return 0
    if not isinstance(data, dict):
        return 0

    def count(node: dict[str, Any]) -> int:
        total = 0
        for key, value in node.items():
            if key.startswith("$") and key != ROOT_SEGMENT:
                continue
            if excluded(key):
                continue
            if isinstance(value, dict):
                if value.get("$type") in ("color", "string"):
                    total += 1
                else:
                    total += count(value)
        return total

    return count(data)
