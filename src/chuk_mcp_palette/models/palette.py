"""
Palette models - the parametric inputs and the generated color matrix.

Shades and hues are supplied by the caller and never mutated. A Palette
is recomputed from them on every pass.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class Shade(BaseModel):
    """
    A named lightness step (e.g. "500").

    The label is an opaque identifier; order in the ramp is what counts.
    """

    label: str = Field(..., description="Shade identifier (e.g. '500')")
    lightness: float = Field(..., description="OKLCH lightness 0-100")
    chroma: float = Field(0.0, description="OKLCH chroma (>= 0)")

    model_config = {"frozen": True}

    @field_validator("label", mode="before")
    @classmethod
    def coerce_label(cls, v: object) -> str:
        """YAML happily reads 500 as an int."""
        return str(v)

    @field_validator("lightness")
    @classmethod
    def clamp_lightness(cls, v: float) -> float:
        """Lightness outside 0-100 is clamped, not rejected."""
        return max(0.0, min(100.0, v))

    @field_validator("chroma")
    @classmethod
    def clamp_chroma(cls, v: float) -> float:
        """Negative chroma reads as 0."""
        return max(0.0, v)


class Hue(BaseModel):
    """A named color family."""

    label: str = Field(..., description="Hue name (e.g. 'blue')")
    hue_angle: float = Field(..., description="Hue angle in degrees")
    is_grayscale: bool = Field(False, description="Force chroma 0 at every shade")

    model_config = {"frozen": True}

    @field_validator("hue_angle")
    @classmethod
    def wrap_angle(cls, v: float) -> float:
        """Angles wrap at 360."""
        return v % 360


class Color(BaseModel):
    """One generated color; a pure function of (lightness, chroma, hue_angle)."""

    shade_label: str
    lightness: float
    chroma: float
    hue_angle: float
    oklch_text: str
    hex_srgb: str
    hex_p3: str
    clipped_srgb: bool = False
    clipped_p3: bool = False

    model_config = {"frozen": True}

    def hex_for(self, p3: bool) -> str:
        """Hex in the requested profile."""
        return self.hex_p3 if p3 else self.hex_srgb


class HueSet(BaseModel):
    """A hue with a generated color at every shade, in shade order."""

    label: str
    hue_angle: float
    is_grayscale: bool = False
    colors: tuple[Color, ...] = ()

    model_config = {"frozen": True}

    def color(self, shade_label: str) -> Color | None:
        """Get the color at a shade."""
        for color in self.colors:
            if color.shade_label == shade_label:
                return color
        return None


class Palette(BaseModel):
    """The hue x shade matrix, hue order then shade order."""

    hue_sets: tuple[HueSet, ...] = ()

    model_config = {"frozen": True}

    def __len__(self) -> int:
        """Number of colors (hues x shades)."""
        return sum(len(h.colors) for h in self.hue_sets)

    @property
    def colors(self) -> list[Color]:
        """All colors, flattened in palette order."""
        return [color for hue_set in self.hue_sets for color in hue_set.colors]

    @property
    def hue_labels(self) -> list[str]:
        """Hue names in order."""
        return [h.label for h in self.hue_sets]

    @property
    def shade_labels(self) -> list[str]:
        """Shade labels in order (taken from the first hue)."""
        if not self.hue_sets:
            return []
        return [c.shade_label for c in self.hue_sets[0].colors]

    def find_hue(self, label: str) -> HueSet | None:
        """Get a hue set by name."""
        for hue_set in self.hue_sets:
            if hue_set.label == label:
                return hue_set
        return None

    def color(self, hue_label: str, shade_label: str) -> Color | None:
        """Get one color by hue and shade."""
        hue_set = self.find_hue(hue_label)
        return hue_set.color(shade_label) if hue_set else None
