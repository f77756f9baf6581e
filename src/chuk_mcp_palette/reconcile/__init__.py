"""
Reconciliation - matching new tokens against a previously exported file.
"""

from chuk_mcp_palette.reconcile.parser import (
    create_hue_mapping,
    create_shade_source_map,
    detect_kind,
    parse_file,
    parse_palette_file,
    parse_theme_file,
    shade_sort_key,
)
from chuk_mcp_palette.reconcile.reconciler import (
    IdentifierReconciler,
    MappingError,
    MappingIssue,
    MappingValidation,
    reconcile,
    validate_source_mapping,
)

__all__ = [
    # Parser
    "create_hue_mapping",
    "create_shade_source_map",
    "detect_kind",
    "parse_file",
    "parse_palette_file",
    "parse_theme_file",
    "shade_sort_key",
    # Reconciler
    "IdentifierReconciler",
    "MappingError",
    "MappingIssue",
    "MappingValidation",
    "reconcile",
    "validate_source_mapping",
]
