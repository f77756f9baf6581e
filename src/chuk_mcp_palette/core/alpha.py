"""
Alpha sets - opacity variants expressed as integer percentages.

The textual grammar ("0-30,35,40,70-99") only exists at the configuration
boundary. It is parsed once into an AlphaSet, which is what the rest of
the pipeline passes around.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_SINGLE = re.compile(r"^\d+$")
_RANGE = re.compile(r"^(\d+)\s*-\s*(\d+)$")

MIN_ALPHA = 0
MAX_ALPHA = 100


@dataclass(frozen=True)
class AlphaSet:
    """
    An ascending, deduplicated set of opacity percentages in [0, 100].

    Immutable and hashable; iterate it to get the values in order.
    """

    values: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Normalize to sorted unique values."""
        normalized = tuple(sorted(set(self.values)))
        for value in normalized:
            if not MIN_ALPHA <= value <= MAX_ALPHA:
                raise ValueError(f"Alpha must be 0-100, got {value}")
        object.__setattr__(self, "values", normalized)

    @classmethod
    def of(cls, values: Iterable[int]) -> AlphaSet:
        """Build from any iterable of ints."""
        return cls(tuple(values))

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def __bool__(self) -> bool:
        return bool(self.values)

    def without(self, *excluded: int) -> AlphaSet:
        """Copy with some values removed (e.g. 100, which equals the base token)."""
        return AlphaSet(tuple(v for v in self.values if v not in excluded))

    def to_spec(self) -> str:
        """
        Compact back into the textual grammar.

        Runs of three or more become ranges; pairs stay as two values.
        """
        if not self.values:
            return ""

        parts: list[str] = []
        start = prev = self.values[0]

        def flush(start: int, end: int) -> None:
            if start == end:
                parts.append(f"{start}")
            elif end == start + 1:
                parts.append(f"{start},{end}")
            else:
                parts.append(f"{start}-{end}")

        for value in self.values[1:]:
            if value != prev + 1:
                flush(start, prev)
                start = value
            prev = value
        flush(start, prev)

        return ",".join(parts)

    def __str__(self) -> str:
        return self.to_spec()


def expand(spec: str | None) -> AlphaSet:
    """
    Expand an alpha spec string into an AlphaSet.

    Tokens are comma separated; each is an integer or an inclusive
    ``A-B`` range with A <= B, all within 0-100. Tokens that don't fit
    the grammar are skipped, so ``"5,abc,10"`` gives {5, 10}.

    Args:
        spec: Alpha spec string (None or empty gives an empty set)

    Returns:
        AlphaSet of the union of all valid tokens
    """
    if not spec:
        return AlphaSet()

    result: set[int] = set()
    for raw in spec.split(","):
        token = raw.strip()
        if not token:
            continue
        if _SINGLE.match(token):
            value = int(token)
            if MIN_ALPHA <= value <= MAX_ALPHA:
                result.add(value)
            continue
        match = _RANGE.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if MIN_ALPHA <= start <= end <= MAX_ALPHA:
                result.update(range(start, end + 1))
    return AlphaSet(tuple(result))


def coerce_alpha_set(value: object) -> AlphaSet:
    """
    Coerce config input (spec string, list of ints, AlphaSet) to an AlphaSet.

    Used by the config models' validators; out-of-range list entries are
    dropped the same way malformed spec tokens are.
    """
    if value is None:
        return AlphaSet()
    if isinstance(value, AlphaSet):
        return value
    if isinstance(value, str):
        return expand(value)
    if isinstance(value, int):
        return expand(str(value))
    if isinstance(value, Iterable):
        return AlphaSet(
            tuple(
                int(v)
                for v in value
                if isinstance(v, int) and not isinstance(v, bool) and MIN_ALPHA <= v <= MAX_ALPHA
            )
        )
    raise TypeError(f"Cannot interpret {type(value).__name__} as an alpha set")
