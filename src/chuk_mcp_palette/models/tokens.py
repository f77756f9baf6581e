"""
Token models - the compiled, exportable representation.

Tokens are the stable, inspectable layer between the palette and the
exported file:
- Deterministic: same palette + config → same tokens in the same order
- Keyed: every token has a TokenKey (group, shade, alpha) that survives
  file-format changes, which is what reconciliation matches on
- Mode-aware: a token holds one value per mode of its collection
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

from chuk_mcp_palette.constants import TokenAction
from chuk_mcp_palette.core.alpha import AlphaSet
from chuk_mcp_palette.core.oklch import hex_components

TokenType = Literal["color", "string"]


@dataclass(frozen=True)
class ColorLiteral:
    """A literal color value with opacity."""

    hex: str
    alpha: float = 1.0
    color_space: str = "srgb"

    def to_dict(self) -> dict[str, Any]:
        """Figma variables color object."""
        return {
            "colorSpace": self.color_space,
            "components": hex_components(self.hex),
            "alpha": self.alpha,
            "hex": self.hex.upper(),
        }

    def with_alpha(self, alpha_percent: int) -> ColorLiteral:
        """Copy at an opacity percentage."""
        return replace(self, alpha=alpha_percent / 100)


@dataclass(frozen=True)
class Alias:
    """A reference to another variable, rendered as ``{a.b.c}``."""

    target: tuple[str, ...]

    def to_dict(self) -> str:
        """Alias string."""
        return "{" + ".".join(self.target) + "}"


@dataclass(frozen=True)
class StringValue:
    """A plain string variable (e.g. the mode name)."""

    text: str

    def to_dict(self) -> str:
        """The string itself."""
        return self.text


TokenValue = ColorLiteral | Alias | StringValue


@dataclass(frozen=True, order=True)
class TokenKey:
    """
    Format-independent identity of a token.

    ``group`` is the path without shade and alpha parts, so
    ``primary/shade/800/10`` and a legacy ``primary/step/800/10`` share
    the key (("primary",), "800", 10).
    """

    group: tuple[str, ...]
    shade: str | None = None
    alpha: int | None = None

    def with_shade(self, shade: str | None) -> TokenKey:
        """Copy with a different shade."""
        return replace(self, shade=shade)

    def with_group(self, group: tuple[str, ...]) -> TokenKey:
        """Copy with a different group."""
        return replace(self, group=group)

    def __str__(self) -> str:
        parts = list(self.group)
        if self.shade is not None:
            parts.append(f"[{self.shade}]")
        if self.alpha is not None:
            parts.append(f"@{self.alpha}")
        return "/".join(parts)


@dataclass(frozen=True)
class Token:
    """
    One variable in a collection.

    ``values`` maps mode name to value; single-mode collections use one
    entry. ``action`` and ``source_id`` are filled in by reconciliation.
    """

    path: tuple[str, ...]
    key: TokenKey
    values: dict[str, TokenValue] = field(compare=False)
    token_type: TokenType = "color"
    scopes: tuple[str, ...] = ("ALL_SCOPES",)
    code_syntax: str | None = None
    source_id: str | None = None
    action: TokenAction = TokenAction.CREATE

    def __post_init__(self) -> None:
        """Validate path."""
        if not self.path:
            raise ValueError("Token path must not be empty")
        if any(not segment for segment in self.path):
            raise ValueError(f"Token path has an empty segment: {self.path!r}")

    @property
    def name(self) -> str:
        """Slash-joined path, as the design tool shows it."""
        return "/".join(self.path)

    def value(self, mode: str) -> TokenValue:
        """Value for a mode."""
        return self.values[mode]

    def resolved(self, action: TokenAction, source_id: str | None) -> Token:
        """Copy with reconciliation results attached."""
        return replace(self, action=action, source_id=source_id)


@dataclass(frozen=True)
class TokenCollection:
    """
    A named collection of variables with its declared modes.

    No two variables may share a path.
    """

    name: str
    modes: tuple[str, ...]
    variables: tuple[Token, ...] = ()

    def __post_init__(self) -> None:
        """Enforce unique paths and declared modes."""
        if not self.modes:
            raise ValueError("A collection declares at least one mode")
        seen: set[tuple[str, ...]] = set()
        for token in self.variables:
            if token.path in seen:
                raise ValueError(f"Duplicate token path in '{self.name}': {token.name}")
            seen.add(token.path)
            missing = [m for m in self.modes if m not in token.values]
            if missing:
                raise ValueError(f"Token {token.name} has no value for mode(s) {missing}")

    def __len__(self) -> int:
        return len(self.variables)

    def find(self, path: tuple[str, ...] | str) -> Token | None:
        """Get a token by path tuple or slash-joined name."""
        if isinstance(path, str):
            path = tuple(path.split("/"))
        for token in self.variables:
            if token.path == path:
                return token
        return None

    def with_variables(self, variables: list[Token] | tuple[Token, ...]) -> TokenCollection:
        """Copy with a different variable list."""
        return replace(self, variables=tuple(variables))

    def action_summary(self) -> dict[str, int]:
        """Count tokens per reconciliation action."""
        summary = {action.value: 0 for action in TokenAction}
        for token in self.variables:
            summary[token.action.value] += 1
        return summary


@dataclass(frozen=True)
class ParsedFile:
    """
    What a previously exported file tells us.

    Produced once per uploaded file, read-only afterwards.
    """

    kind: Literal["palette", "theme"]
    hues: tuple[str, ...] = ()
    shades: tuple[str, ...] = ()
    intents: dict[str, tuple[str, ...]] = field(default_factory=dict)
    excluded_groups: tuple[str, ...] = ()
    alphas: dict[str, AlphaSet] = field(default_factory=dict)
    identifiers: dict[TokenKey, str] = field(default_factory=dict)
    color_count: int = 0
    mode_name: str | None = None

    def identifier(self, key: TokenKey) -> str | None:
        """Variable id stored under a key, if any."""
        return self.identifiers.get(key)

    def summary(self) -> dict[str, Any]:
        """Generate a summary for quick inspection."""
        return {
            "kind": self.kind,
            "hues": list(self.hues),
            "shades": list(self.shades),
            "intents": {name: list(shades) for name, shades in self.intents.items()},
            "excluded": list(self.excluded_groups),
            "alphas": {group: alphas.to_spec() for group, alphas in self.alphas.items()},
            "identifiers": len(self.identifiers),
            "color_count": self.color_count,
            "mode_name": self.mode_name,
        }


@dataclass(frozen=True)
class FileOk:
    """Successful parse."""

    parsed: ParsedFile


@dataclass(frozen=True)
class FileError:
    """Failed parse - the file is treated as absent."""

    reason: str


ParseResult = FileOk | FileError
