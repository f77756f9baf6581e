"""
Token path grammar.

Paths are tuples of segments; the design tool shows them slash-joined.
The grammar is an external contract:

    primary                      intent root (alias to default shade)
    primary/10                   intent root alpha - numbers directly under
                                 a group are opacities
    primary/shade/500            shade - numbers under the shade group are
                                 shades, never opacities
    primary/shade/800/10         per-shade alpha
    on/primary/shade/500/60      foreground of a shade, with alpha

Keeping shades one level down from alpha siblings is what lets editor
autocomplete rank ``primary/10`` ahead of ``primary/shade/100``.
"""

from __future__ import annotations

from collections.abc import Iterable

from chuk_mcp_palette.constants import LEGACY_SHADE_GROUP
from chuk_mcp_palette.models.config import NamingConfig
from chuk_mcp_palette.models.tokens import TokenKey

ROOT_SEGMENT = "$root"

# Numbers above this can't be opacities, so they are read as shades
_MAX_ALPHA = 100


def join(*parts: str | Iterable[str]) -> tuple[str, ...]:
    """Join segments and segment tuples into one path."""
    path: list[str] = []
    for part in parts:
        if isinstance(part, str):
            path.append(part)
        else:
            path.extend(part)
    return tuple(path)


def shade_path(group: tuple[str, ...], shade_group: str, shade: str) -> tuple[str, ...]:
    """Path of a shade token under a group (``primary/shade/500``)."""
    if shade_group:
        return (*group, shade_group, shade)
    return (*group, shade)


def key_from_path(
    path: Iterable[str],
    shade_groups: Iterable[str] = ("shade", LEGACY_SHADE_GROUP),
) -> TokenKey:
    """
    Derive the format-independent key of a theme path.

    Args:
        path: Path segments (``$root`` segments are ignored)
        shade_groups: Segment names that introduce a shade

    Returns:
        TokenKey with group, shade and alpha separated
    """
    segments = list(path)
    groups = set(shade_groups)
    group: list[str] = []
    shade: str | None = None
    alpha: int | None = None

    i = 0
    while i < len(segments):
        segment = segments[i]
        if segment == ROOT_SEGMENT:
            i += 1
            continue
        if segment in groups and i + 1 < len(segments):
            shade = segments[i + 1]
            i += 2
            continue
        if segment.isdigit() and group:
            number = int(segment)
            if number > _MAX_ALPHA and shade is None:
                # Legacy files nested shades directly under the group
                shade = segment
            elif alpha is None:
                alpha = number
            else:
                group.append(segment)
        else:
            group.append(segment)
        i += 1

    return TokenKey(group=tuple(group), shade=shade, alpha=alpha)


def code_syntax(path: Iterable[str], naming: NamingConfig) -> str:
    """
    Render the WEB code-syntax name of a theme path.

    ``primary/shade/500`` → ``primary-500``, ``on/primary/shade/500/60``
    → ``on-primary-500/60``, ``primary/10`` → ``primary/10``.
    """
    parts = list(path)
    modifier = naming.foreground_group
    syntax = naming.foreground_syntax
    shade_group = naming.shade_group_name
    result: list[str] = []

    i = 0
    while i < len(parts):
        part = parts[i]
        if part == modifier and naming.foreground_nested:
            result.append(syntax)
        elif part == shade_group and i + 1 < len(parts):
            i += 1
            result.append("-" + parts[i])
            if i + 1 < len(parts):
                i += 1
                result.append("/" + parts[i])
        elif part.isdigit() and int(part) <= _MAX_ALPHA and result:
            result.append("/" + part)
        elif not result:
            result.append(part)
        elif result[-1] == syntax:
            # The syntax prefix already ends with its separator
            result.append(part)
        else:
            result.append("-" + part)
        i += 1

    return "".join(result)


def is_excluded(path: Iterable[str], prefix: str) -> bool:
    """True if any group on the path starts with the exclusion prefix."""
    if not prefix:
        return False
    return any(segment.startswith(prefix) for segment in path)
