"""
Identifier Reconciler - keeps variable identities stable across re-exports.

Given freshly compiled tokens and a previously exported file, each token
is classified so the design tool can tell what an import will do:

    Create   no prior variable (mapped to "new", or not mapped at all)
    Update   same name as before - identifier carried over
    Rename   the shade was fed from a differently-named file shade -
             that shade's identifier is carried over under the new name

Reconciliation never drops or merges tokens: the output has exactly one
token per input token, in input order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from chuk_mcp_palette.constants import NEW_SOURCE, ErrorMessages, TokenAction
from chuk_mcp_palette.models.tokens import (
    FileError,
    FileOk,
    ParsedFile,
    ParseResult,
    Token,
    TokenCollection,
    TokenKey,
)

logger = logging.getLogger(__name__)


class MappingError(ValueError):
    """Raised in strict mode when a source mapping is inconsistent."""


@dataclass
class MappingIssue:
    """A single problem found in a source mapping."""

    message: str
    source: str
    targets: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message


@dataclass
class MappingValidation:
    """Result of validating a source mapping against a parsed file."""

    issues: list[MappingIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no issues were found."""
        return not self.issues

    def summary(self) -> str:
        """Generate a summary string."""
        if self.is_valid:
            return "Source mapping is valid"
        return f"{len(self.issues)} mapping issue(s): " + "; ".join(map(str, self.issues))


def validate_source_mapping(
    source_mapping: Mapping[str, str],
    file_shades: Iterable[str],
) -> MappingValidation:
    """
    Check a source mapping for ambiguous or dangling sources.

    Two shades claiming the same file shade would carry one identifier
    into two variables; a source the file doesn't have can't carry one.

    Args:
        source_mapping: New shade label -> file shade label or "new"
        file_shades: Shades present in the previously exported file

    Returns:
        MappingValidation listing every issue
    """
    present = set(file_shades)
    claims: dict[str, list[str]] = {}
    result = MappingValidation()

    for target, source in source_mapping.items():
        if not source or source == NEW_SOURCE:
            continue
        claims.setdefault(source, []).append(target)
        if source not in present:
            result.issues.append(
                MappingIssue(
                    message=ErrorMessages.UNKNOWN_SOURCE.format(source=source, target=target),
                    source=source,
                    targets=[target],
                )
            )

    for source, targets in claims.items():
        if len(targets) > 1:
            result.issues.append(
                MappingIssue(
                    message=ErrorMessages.DUPLICATE_SOURCE.format(
                        source=source, targets=", ".join(targets)
                    ),
                    source=source,
                    targets=targets,
                )
            )

    return result


class IdentifierReconciler:
    """
    Classifies tokens against a previously exported file.

    By default the reconciler is permissive: a duplicated or dangling
    source is applied as given (a dangling one simply finds no
    identifier). With ``strict=True`` such mappings raise MappingError
    before any token is classified.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize the reconciler.

        Args:
            strict: Reject inconsistent source mappings
        """
        self.strict = strict

    def reconcile(
        self,
        tokens: Iterable[Token],
        parsed: ParseResult | ParsedFile | None,
        source_mapping: Mapping[str, str] | None = None,
        hue_mapping: Mapping[str, str] | None = None,
    ) -> list[Token]:
        """
        Attach actions and identifiers to tokens.

        Args:
            tokens: Freshly compiled tokens
            parsed: Prior file (FileOk/ParsedFile), or FileError/None for none
            source_mapping: New shade label -> file shade label or "new"
            hue_mapping: File hue name -> palette hue label

        Returns:
            One reconciled token per input token, in order

        Raises:
            MappingError: In strict mode, if the source mapping is invalid
        """
        tokens = list(tokens)
        prior = self._prior(parsed)
        if prior is None:
            return [t.resolved(TokenAction.CREATE, None) for t in tokens]

        mapping = dict(source_mapping or {})
        if self.strict:
            validation = validate_source_mapping(mapping, prior.shades)
            if not validation.is_valid:
                raise MappingError(ErrorMessages.MAPPING_INVALID.format(issues=validation.summary()))

        # Palette hue -> file hue, for looking up keys written under the file's names
        to_file_hue = {label: file_hue for file_hue, label in (hue_mapping or {}).items()}

        def file_key(key: TokenKey) -> TokenKey:
            if not to_file_hue or not key.group:
                return key
            last = key.group[-1]
            if last in to_file_hue:
                return key.with_group((*key.group[:-1], to_file_hue[last]))
            return key

        result = [self._classify(t, prior, mapping, file_key) for t in tokens]

        counts = {action: 0 for action in TokenAction}
        for token in result:
            counts[token.action] += 1
        logger.debug(
            "Reconciled %d tokens: %s",
            len(result),
            ", ".join(f"{a.value}={n}" for a, n in counts.items()),
        )
        return result

    def reconcile_collection(
        self,
        collection: TokenCollection,
        parsed: ParseResult | ParsedFile | None,
        source_mapping: Mapping[str, str] | None = None,
        hue_mapping: Mapping[str, str] | None = None,
    ) -> TokenCollection:
        """Reconcile every variable of a collection."""
        return collection.with_variables(
            self.reconcile(collection.variables, parsed, source_mapping, hue_mapping)
        )

    @staticmethod
    def _prior(parsed: ParseResult | ParsedFile | None) -> ParsedFile | None:
        if parsed is None:
            return None
        if isinstance(parsed, FileError):
            logger.info("Prior file unusable (%s); all tokens are new", parsed.reason)
            return None
        if isinstance(parsed, FileOk):
            return parsed.parsed
        return parsed

    @staticmethod
    def _classify(token: Token, prior: ParsedFile, mapping: dict[str, str], file_key) -> Token:
        key = token.key

        if key.shade is None:
            source_id = prior.identifier(file_key(key))
            if source_id is None:
                return token.resolved(TokenAction.CREATE, None)
            return token.resolved(TokenAction.UPDATE, source_id)

        source = mapping.get(key.shade)
        if not source or source == NEW_SOURCE:
            return token.resolved(TokenAction.CREATE, None)

        source_id = prior.identifier(file_key(key.with_shade(source)))
        action = TokenAction.UPDATE if source == key.shade else TokenAction.RENAME
        return token.resolved(action, source_id)


def reconcile(
    tokens: Iterable[Token],
    parsed: ParseResult | ParsedFile | None,
    source_mapping: Mapping[str, str] | None = None,
    hue_mapping: Mapping[str, str] | None = None,
) -> list[Token]:
    """Convenience function: permissive reconciliation."""
    return IdentifierReconciler().reconcile(tokens, parsed, source_mapping, hue_mapping)
