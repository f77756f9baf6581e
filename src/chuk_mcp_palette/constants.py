"""
Constants and enums for the palette system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class Intent(str, Enum):
    """
    Semantic roles a hue can be bound to.

    Intent maps may also carry custom names; these are the built-in ones.
    """

    PRIMARY = "primary"  # Main brand/action color
    DANGER = "danger"  # Destructive actions, errors
    WARNING = "warning"  # Caution states
    SUCCESS = "success"  # Positive feedback
    NEUTRAL = "neutral"  # Neutral/gray semantic color


class Mode(str, Enum):
    """Theme modes."""

    LIGHT = "light"
    DARK = "dark"


class ColorProfile(str, Enum):
    """Target display space for exported hex values."""

    SRGB = "srgb"
    P3 = "p3"


class TokenAction(str, Enum):
    """What importing a token will do to the downstream design file."""

    CREATE = "create"
    RENAME = "rename"
    UPDATE = "update"


class Foreground(str, Enum):
    """Binary foreground decision."""

    BLACK = "black"
    WHITE = "white"


class GroundRef(str, Enum):
    """How a ground tier resolves its color."""

    PRIMITIVE = "primitive"  # Alias to a palette primitive ({--gray-0})
    THEME = "theme"  # Alias to the neutral intent ({neutral.shade.0})
    CUSTOM = "custom"  # Literal OKLCH / hex value


class OnGroundRef(str, Enum):
    """How the on-ground foreground resolves its color."""

    AUTO = "auto"  # Derived from the base ground with the contrast heuristic
    BLACK = "black"
    WHITE = "white"
    CUSTOM = "custom"
    PRIMITIVE = "primitive"


class ForegroundPosition(str, Enum):
    """Where the foreground modifier goes relative to the group name."""

    PREFIX = "prefix"  # on/primary, on-primary
    SUFFIX = "suffix"  # primary-on


class Scope(str, Enum):
    """Figma variable scopes applicable to color variables."""

    ALL_SCOPES = "ALL_SCOPES"
    ALL_FILLS = "ALL_FILLS"
    FRAME_FILL = "FRAME_FILL"
    SHAPE_FILL = "SHAPE_FILL"
    TEXT_FILL = "TEXT_FILL"
    STROKE_COLOR = "STROKE_COLOR"
    EFFECT_COLOR = "EFFECT_COLOR"


# Keyword that marks an unmapped ("fresh") token in a source mapping
NEW_SOURCE = "new"

# Mode name used by the single-mode palette collection
PALETTE_MODE = "palette"

# Legacy shade group name still found in older exported files
LEGACY_SHADE_GROUP = "step"

# Figma extension keys
EXT_SCOPES = "com.figma.scopes"
EXT_CODE_SYNTAX = "com.figma.codeSyntax"
EXT_VARIABLE_ID = "com.figma.variableId"
EXT_MODE_NAME = "com.figma.modeName"
EXT_TYPE = "com.figma.type"

ExportFormat = Literal["json-srgb", "json-p3", "json-oklch", "css", "scss", "tailwind"]

# Default shade ramp: (label, lightness 0-100, chroma)
DEFAULT_SHADES: list[tuple[str, float, float]] = [
    ("0", 100, 0.02),
    ("50", 95, 0.05),
    ("100", 89, 0.11),
    ("200", 82, 0.16),
    ("300", 76, 0.18),
    ("400", 69, 0.19),
    ("500", 63, 0.21),
    ("600", 56, 0.19),
    ("700", 50, 0.17),
    ("800", 43, 0.14),
    ("900", 35, 0.1),
    ("950", 29, 0.05),
    ("1000", 25, 0.02),
]

# Default hues: (label, hue angle, grayscale)
DEFAULT_HUES: list[tuple[str, float, bool]] = [
    ("gray", 0, True),
    ("red", 23, False),
    ("orange", 45, False),
    ("amber", 70, False),
    ("yellow", 95, False),
    ("lime", 125, False),
    ("green", 145, False),
    ("emerald", 165, False),
    ("teal", 180, False),
    ("cyan", 200, False),
    ("sky", 220, False),
    ("blue", 255, False),
    ("indigo", 275, False),
    ("violet", 290, False),
    ("purple", 305, False),
    ("fuchsia", 325, False),
    ("pink", 350, False),
    ("rose", 10, False),
]

DEFAULT_INTENTS: dict[str, str] = {
    Intent.PRIMARY.value: "blue",
    Intent.DANGER.value: "red",
    Intent.WARNING.value: "amber",
    Intent.SUCCESS.value: "green",
    Intent.NEUTRAL.value: "gray",
}

# Alpha specs (textual grammar, parsed eagerly by the config models)
WIDE_ALPHAS = "0-30,35,40,45,50,55,60,65,70-99"
FOREGROUND_ALPHAS = "5,10,15,20,25,30,40,50,60,70,80,90"
BLACK_WHITE_ALPHAS = "5,10,15,20,25,30,35,40,45,50,55,60,65,70,75,80,85,90,95"

DEFAULT_SEMANTIC_SHADE_ALPHAS: dict[str, str] = {
    "300": "60",
    "400": "10",
    "600": "60",
    "800": "5,10,15,20,30,40,50,60,70,80,85,90,95",
}

# Stark ramps per mode: (label, light value, dark value)
DEFAULT_STARK_SHADES: list[tuple[str, str, str]] = [
    ("0", "oklch(100% 0 0)", "oklch(0% 0 0)"),
    ("50", "oklch(97% 0 0)", "oklch(5% 0 0)"),
    ("100", "oklch(93% 0 0)", "oklch(10% 0 0)"),
    ("200", "oklch(85% 0 0)", "oklch(18% 0 0)"),
    ("300", "oklch(73% 0 0)", "oklch(28% 0 0)"),
    ("400", "oklch(55% 0 0)", "oklch(45% 0 0)"),
    ("500", "oklch(40% 0 0)", "oklch(60% 0 0)"),
    ("600", "oklch(30% 0 0)", "oklch(72% 0 0)"),
    ("700", "oklch(22% 0 0)", "oklch(82% 0 0)"),
    ("800", "oklch(15% 0 0)", "oklch(90% 0 0)"),
    ("900", "oklch(10% 0 0)", "oklch(95% 0 0)"),
    ("950", "oklch(5% 0 0)", "oklch(98% 0 0)"),
    ("1000", "oklch(0% 0 0)", "oklch(100% 0 0)"),
]


class ErrorMessages:
    """Standardized error messages."""

    PROJECT_NOT_FOUND = "Palette project '{name}' not found."
    PROJECT_EXISTS = "Palette project already exists in project directory: {name}"
    NO_PROJECT_PATH = "No project path configured"
    UNKNOWN_COLLECTION = "Unknown collection '{collection}'. Expected 'palette' or 'theme'."
    UNKNOWN_MODE = "Mode '{mode}' is not declared by collection '{collection}'."
    UNKNOWN_FORMAT = "Unknown export format '{fmt}'."
    INVALID_JSON = "Invalid JSON: {error}"
    NOT_AN_OBJECT = "Expected a JSON object at the top level, got {kind}."
    DUPLICATE_SOURCE = "Source '{source}' is claimed by more than one shade: {targets}"
    UNKNOWN_SOURCE = "Source '{source}' for shade '{target}' does not exist in the file."
    MAPPING_INVALID = "Source mapping is invalid: {issues}"


class SuccessMessages:
    """Standardized success messages."""

    PALETTE_GENERATED = "Generated {count} colors ({hues} hues x {shades} shades)."
    COLLECTION_EXPORTED = "Exported {count} variables for '{collection}' ({mode})."
    FILE_ANALYZED = "Analyzed file: {hues} hues, {shades} shades, {identifiers} identifiers."
