"""
Configuration models - everything the token compiler needs besides the palette.

Configuration is an explicit, immutable value: a change is a new
ThemeConfig passed to a fresh compile, never a mutation observed by a
running one. Textual alpha specs are accepted here and nowhere else;
validators turn them into AlphaSets on the way in.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_palette.constants import (
    BLACK_WHITE_ALPHAS,
    DEFAULT_INTENTS,
    DEFAULT_SEMANTIC_SHADE_ALPHAS,
    DEFAULT_SHADES,
    DEFAULT_HUES,
    DEFAULT_STARK_SHADES,
    FOREGROUND_ALPHAS,
    WIDE_ALPHAS,
    ColorProfile,
    ForegroundPosition,
    GroundRef,
    Mode,
    OnGroundRef,
    Scope,
)
from chuk_mcp_palette.core.alpha import AlphaSet, coerce_alpha_set
from chuk_mcp_palette.models.palette import Hue, Shade


def _coerce_alpha_map(value: Any) -> dict[str, AlphaSet]:
    """Per-shade alpha specs: keys become strings, values AlphaSets."""
    if not value:
        return {}
    return {str(shade): coerce_alpha_set(spec) for shade, spec in dict(value).items()}


class ScopeSelection(BaseModel):
    """
    Applicability of palette variables in the design tool.

    Either the ALL_SCOPES sentinel or a set of individual scopes - never
    both. Selecting the sentinel clears individual scopes and selecting an
    individual scope clears the sentinel.
    """

    scopes: tuple[Scope, ...] = ()

    model_config = {"frozen": True}

    @field_validator("scopes", mode="before")
    @classmethod
    def normalize(cls, v: Any) -> tuple[Any, ...]:
        """Deduplicate, and let the sentinel win over individual scopes."""
        if v is None:
            return ()
        if isinstance(v, (str, Scope)):
            v = [v]
        values = [Scope(s) for s in v]
        if Scope.ALL_SCOPES in values:
            return (Scope.ALL_SCOPES,)
        ordered: list[Scope] = []
        for scope in values:
            if scope not in ordered:
                ordered.append(scope)
        return tuple(ordered)

    @property
    def is_all(self) -> bool:
        """True if the sentinel is selected."""
        return self.scopes == (Scope.ALL_SCOPES,)

    def select(self, scope: Scope | str) -> ScopeSelection:
        """Return a new selection with a scope toggled on."""
        scope = Scope(scope)
        if scope is Scope.ALL_SCOPES:
            return ScopeSelection(scopes=(Scope.ALL_SCOPES,))
        current = () if self.is_all else self.scopes
        return ScopeSelection(scopes=(*current, scope))

    def deselect(self, scope: Scope | str) -> ScopeSelection:
        """Return a new selection with a scope toggled off."""
        scope = Scope(scope)
        return ScopeSelection(scopes=tuple(s for s in self.scopes if s is not scope))

    def as_list(self) -> list[str]:
        """Scope names for serialization."""
        return [s.value for s in self.scopes]


class NamingConfig(BaseModel):
    """Token naming conventions."""

    raw_marker: str = Field("--", description="Prefix for palette primitive names")
    elevation_names: tuple[str, str, str] = Field(
        ("ground", "ground1", "ground2"),
        description="Names of the base, raised and highest ground tiers",
    )
    foreground_position: ForegroundPosition = ForegroundPosition.PREFIX
    foreground_modifier: str = Field(
        "on/",
        description="Foreground modifier; a trailing '/' nests under a group",
    )
    foreground_syntax: str = Field("on-", description="Code syntax for the modifier")
    shade_group_name: str = Field("shade", description="Segment that nests shade tokens")

    model_config = {"frozen": True}

    @field_validator("elevation_names", mode="before")
    @classmethod
    def exactly_three(cls, v: Any) -> tuple[str, ...]:
        """There are always three elevation tiers."""
        names = tuple(str(n) for n in v)
        if len(names) != 3:
            raise ValueError(f"Expected exactly 3 elevation names, got {len(names)}")
        return names

    @property
    def foreground_nested(self) -> bool:
        """Whether on-colors live under a shared group (on/primary)."""
        return (
            self.foreground_position is ForegroundPosition.PREFIX
            and self.foreground_modifier.endswith("/")
        )

    @property
    def foreground_group(self) -> str:
        """Group segment for nested on-colors ('on')."""
        return self.foreground_modifier.rstrip("/")

    def foreground_path(self, name: str) -> tuple[str, ...]:
        """Path segments of the foreground group for a name."""
        if self.foreground_nested:
            return (self.foreground_group, name)
        if self.foreground_position is ForegroundPosition.SUFFIX:
            return (f"{name}{self.foreground_modifier}",)
        return (f"{self.foreground_modifier}{name}",)


class AlphaConfig(BaseModel):
    """Opacity variants per token group."""

    ground: AlphaSet = Field(default_factory=lambda: coerce_alpha_set(WIDE_ALPHAS))
    on_ground: AlphaSet = Field(default_factory=lambda: coerce_alpha_set(FOREGROUND_ALPHAS))
    stark: AlphaSet = Field(default_factory=lambda: coerce_alpha_set(WIDE_ALPHAS))
    on_stark: AlphaSet = Field(default_factory=lambda: coerce_alpha_set(FOREGROUND_ALPHAS))
    black_white: AlphaSet = Field(default_factory=lambda: coerce_alpha_set(BLACK_WHITE_ALPHAS))

    # Intents (primary, danger, ...)
    semantic_default: AlphaSet = Field(default_factory=lambda: coerce_alpha_set(WIDE_ALPHAS))
    on_semantic_default: AlphaSet = Field(
        default_factory=lambda: coerce_alpha_set(FOREGROUND_ALPHAS)
    )
    semantic_shades: dict[str, AlphaSet] = Field(
        default_factory=lambda: _coerce_alpha_map(DEFAULT_SEMANTIC_SHADE_ALPHAS)
    )
    on_semantic_shades: dict[str, AlphaSet] = Field(default_factory=dict)

    # Primitive hues (blue, gray, ...)
    primitive_default: AlphaSet = Field(default_factory=AlphaSet)
    on_primitive_default: AlphaSet = Field(default_factory=AlphaSet)
    primitive_shades: dict[str, AlphaSet] = Field(default_factory=dict)
    on_primitive_shades: dict[str, AlphaSet] = Field(default_factory=dict)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator(
        "ground",
        "on_ground",
        "stark",
        "on_stark",
        "black_white",
        "semantic_default",
        "on_semantic_default",
        "primitive_default",
        "on_primitive_default",
        mode="before",
    )
    @classmethod
    def parse_spec(cls, v: Any) -> AlphaSet:
        """Parse textual specs eagerly."""
        return coerce_alpha_set(v)

    @field_validator(
        "semantic_shades",
        "on_semantic_shades",
        "primitive_shades",
        "on_primitive_shades",
        mode="before",
    )
    @classmethod
    def parse_shade_specs(cls, v: Any) -> dict[str, AlphaSet]:
        """Parse per-shade specs eagerly."""
        return _coerce_alpha_map(v)

    def for_shade(self, table: dict[str, AlphaSet], shade: str) -> AlphaSet:
        """Alpha set for a shade in one of the per-shade tables (empty if absent)."""
        return table.get(shade, AlphaSet())

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert back to textual specs."""

        def table(t: dict[str, AlphaSet]) -> dict[str, str]:
            return {shade: alphas.to_spec() for shade, alphas in t.items() if alphas}

        return {
            "ground": self.ground.to_spec(),
            "on_ground": self.on_ground.to_spec(),
            "stark": self.stark.to_spec(),
            "on_stark": self.on_stark.to_spec(),
            "black_white": self.black_white.to_spec(),
            "semantic_default": self.semantic_default.to_spec(),
            "on_semantic_default": self.on_semantic_default.to_spec(),
            "semantic_shades": table(self.semantic_shades),
            "on_semantic_shades": table(self.on_semantic_shades),
            "primitive_default": self.primitive_default.to_spec(),
            "on_primitive_default": self.on_primitive_default.to_spec(),
            "primitive_shades": table(self.primitive_shades),
            "on_primitive_shades": table(self.on_primitive_shades),
        }


class GroundTier(BaseModel):
    """How one elevation tier resolves in one mode."""

    shade: str = Field(..., description="Gray shade label")
    ref: GroundRef = GroundRef.PRIMITIVE
    custom: str | None = Field(None, description="OKLCH or hex literal when ref is custom")

    model_config = {"frozen": True}

    @field_validator("shade", mode="before")
    @classmethod
    def coerce_shade(cls, v: object) -> str:
        """Shade labels are strings."""
        return str(v)


def _tiers(*shades: str) -> tuple[GroundTier, GroundTier, GroundTier]:
    return tuple(GroundTier(shade=s) for s in shades)  # type: ignore[return-value]


class GroundConfig(BaseModel):
    """
    Elevation tiers per mode.

    In dark mode higher elevation is lighter, so the defaults walk down
    the ramp (1000, 950, 900).
    """

    hue: str = Field("gray", description="Palette hue that primitive grounds reference")
    light: tuple[GroundTier, GroundTier, GroundTier] = Field(
        default_factory=lambda: _tiers("0", "0", "0")
    )
    dark: tuple[GroundTier, GroundTier, GroundTier] = Field(
        default_factory=lambda: _tiers("1000", "950", "900")
    )

    model_config = {"frozen": True}

    def tiers(self, mode: Mode) -> tuple[GroundTier, GroundTier, GroundTier]:
        """Tiers for a mode."""
        return self.light if mode is Mode.LIGHT else self.dark


class OnGroundSetting(BaseModel):
    """On-ground foreground for one mode."""

    ref_type: OnGroundRef = OnGroundRef.PRIMITIVE
    hue: str = "gray"
    shade: str | None = Field(None, description="Palette shade for primitive refs")
    custom: str | None = Field(None, description="OKLCH or hex literal for custom refs")

    model_config = {"frozen": True}

    @field_validator("shade", mode="before")
    @classmethod
    def coerce_shade(cls, v: object) -> str | None:
        """Shade labels are strings."""
        return None if v is None else str(v)


class OnGroundConfig(BaseModel):
    """The one on-color that is chosen rather than derived."""

    light: OnGroundSetting = Field(default_factory=lambda: OnGroundSetting(shade="1000"))
    dark: OnGroundSetting = Field(default_factory=lambda: OnGroundSetting(shade="0"))

    model_config = {"frozen": True}

    def for_mode(self, mode: Mode) -> OnGroundSetting:
        """Setting for a mode."""
        return self.light if mode is Mode.LIGHT else self.dark


class StarkShade(BaseModel):
    """One step of the stark ramp, with a literal per mode."""

    label: str
    light: str
    dark: str

    model_config = {"frozen": True}

    @field_validator("label", mode="before")
    @classmethod
    def coerce_label(cls, v: object) -> str:
        """Shade labels are strings."""
        return str(v)

    def value(self, mode: Mode) -> str:
        """Literal for a mode."""
        return self.light if mode is Mode.LIGHT else self.dark


class StarkConfig(BaseModel):
    """
    Maximum-contrast ramp: black in light mode, white in dark mode.

    On-stark is the inverse - it uses the other mode's literals.
    """

    shades: tuple[StarkShade, ...] = Field(
        default_factory=lambda: tuple(
            StarkShade(label=label, light=light, dark=dark)
            for label, light, dark in DEFAULT_STARK_SHADES
        )
    )
    default_light: str = "1000"
    default_dark: str = "1000"

    model_config = {"frozen": True}

    @field_validator("default_light", "default_dark", mode="before")
    @classmethod
    def coerce_default(cls, v: object) -> str:
        """Shade labels are strings."""
        return str(v)

    def default_shade(self, mode: Mode) -> str:
        """Default stark shade for a mode."""
        return self.default_light if mode is Mode.LIGHT else self.default_dark

    def find(self, label: str) -> StarkShade | None:
        """Get a stark shade by label."""
        for shade in self.shades:
            if shade.label == label:
                return shade
        return None


class ThemeConfig(BaseModel):
    """Semantic configuration for the theme collection."""

    intents: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_INTENTS),
        description="Intent name -> hue label, in output order",
    )
    default_shade: str = Field("500", description="Shade the intent/hue roots alias")
    color_profile: ColorProfile = ColorProfile.P3
    on_color_threshold: float = Field(75.0, description="Luminance threshold (percent)")
    exclusion_prefix: str = Field("#", description="Groups starting with this are dropped")
    reverse_in_dark: bool = Field(True, description="Mirror shade references in dark mode")
    naming: NamingConfig = Field(default_factory=NamingConfig)
    alphas: AlphaConfig = Field(default_factory=AlphaConfig)
    ground: GroundConfig = Field(default_factory=GroundConfig)
    on_ground: OnGroundConfig = Field(default_factory=OnGroundConfig)
    stark: StarkConfig = Field(default_factory=StarkConfig)
    palette_scopes: ScopeSelection = Field(
        default_factory=lambda: ScopeSelection(scopes=(Scope.ALL_SCOPES,))
    )

    model_config = {"frozen": True}

    @field_validator("default_shade", mode="before")
    @classmethod
    def coerce_default_shade(cls, v: object) -> str:
        """Shade labels are strings."""
        return str(v)

    @field_validator("on_color_threshold")
    @classmethod
    def clamp_threshold(cls, v: float) -> float:
        """Thresholds are clamped to 0-100."""
        return max(0.0, min(100.0, v))

    @field_validator("palette_scopes", mode="before")
    @classmethod
    def coerce_scopes(cls, v: Any) -> Any:
        """Accept a bare list of scope names."""
        if isinstance(v, (list, tuple)):
            return {"scopes": v}
        return v

    @property
    def use_p3(self) -> bool:
        """Whether hex values come from the P3 encoding."""
        return self.color_profile is ColorProfile.P3


class PaletteProject(BaseModel):
    """
    A complete, self-contained palette description.

    This is the unit the loader reads from YAML and the tools compile.
    """

    schema_version: str = Field("palette/v1", alias="schema")
    name: str = Field(..., description="Project name")
    description: str = Field("", description="Project description")
    shades: tuple[Shade, ...] = Field(
        default_factory=lambda: tuple(
            Shade(label=label, lightness=lightness, chroma=chroma)
            for label, lightness, chroma in DEFAULT_SHADES
        )
    )
    hues: tuple[Hue, ...] = Field(
        default_factory=lambda: tuple(
            Hue(label=label, hue_angle=angle, is_grayscale=gray)
            for label, angle, gray in DEFAULT_HUES
        )
    )
    theme: ThemeConfig = Field(default_factory=ThemeConfig)

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def unique_labels(self) -> PaletteProject:
        """Hue and shade labels name tokens, so they must be unique."""
        for kind, labels in (
            ("shade", [s.label for s in self.shades]),
            ("hue", [h.label for h in self.hues]),
        ):
            seen: set[str] = set()
            for label in labels:
                if label in seen:
                    raise ValueError(f"Duplicate {kind} label: {label}")
                seen.add(label)
        return self

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-serializable dictionary."""
        theme = self.theme
        return {
            "schema": self.schema_version,
            "name": self.name,
            "description": self.description,
            "shades": [
                {"label": s.label, "lightness": s.lightness, "chroma": s.chroma}
                for s in self.shades
            ],
            "hues": [
                {"label": h.label, "hue_angle": h.hue_angle, "is_grayscale": h.is_grayscale}
                for h in self.hues
            ],
            "theme": {
                "intents": dict(theme.intents),
                "default_shade": theme.default_shade,
                "color_profile": theme.color_profile.value,
                "on_color_threshold": theme.on_color_threshold,
                "exclusion_prefix": theme.exclusion_prefix,
                "reverse_in_dark": theme.reverse_in_dark,
                "naming": {
                    "raw_marker": theme.naming.raw_marker,
                    "elevation_names": list(theme.naming.elevation_names),
                    "foreground_position": theme.naming.foreground_position.value,
                    "foreground_modifier": theme.naming.foreground_modifier,
                    "foreground_syntax": theme.naming.foreground_syntax,
                    "shade_group_name": theme.naming.shade_group_name,
                },
                "alphas": theme.alphas.to_yaml_dict(),
                "ground": {
                    "hue": theme.ground.hue,
                    **{
                        mode.value: [
                            tier.model_dump(mode="json", exclude_none=True)
                            for tier in theme.ground.tiers(mode)
                        ]
                        for mode in Mode
                    },
                },
                "on_ground": {
                    mode.value: theme.on_ground.for_mode(mode).model_dump(
                        mode="json", exclude_none=True
                    )
                    for mode in Mode
                },
                "stark": {
                    "default_light": theme.stark.default_light,
                    "default_dark": theme.stark.default_dark,
                    "shades": [s.model_dump() for s in theme.stark.shades],
                },
                "palette_scopes": theme.palette_scopes.as_list(),
            },
        }


class ProjectMetadata(BaseModel):
    """Lightweight metadata for listing projects."""

    name: str
    description: str
    hue_count: int
    shade_count: int
    intents: dict[str, str]
    color_profile: ColorProfile

    model_config = {"frozen": True}

    @classmethod
    def from_project(cls, project: PaletteProject) -> ProjectMetadata:
        """Create metadata from a project."""
        return cls(
            name=project.name,
            description=project.description,
            hue_count=len(project.hues),
            shade_count=len(project.shades),
            intents=dict(project.theme.intents),
            color_profile=project.theme.color_profile,
        )
