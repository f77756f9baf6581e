"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_palette.models import Hue, PaletteProject, Shade, ThemeConfig


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the bundled project library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_palette" / "projects" / "library"


@pytest.fixture
def shades() -> list[Shade]:
    """Three-step ramp."""
    return [
        Shade(label="0", lightness=100, chroma=0.02),
        Shade(label="500", lightness=63, chroma=0.21),
        Shade(label="1000", lightness=25, chroma=0.02),
    ]


@pytest.fixture
def hues() -> list[Hue]:
    """A grayscale hue and a chromatic one."""
    return [
        Hue(label="gray", hue_angle=0, is_grayscale=True),
        Hue(label="blue", hue_angle=255),
    ]


@pytest.fixture
def small_theme() -> ThemeConfig:
    """Theme config with short alpha lists so outputs stay readable."""
    return ThemeConfig.model_validate(
        {
            "intents": {"primary": "blue", "neutral": "gray"},
            "color_profile": "srgb",
            "alphas": {
                "ground": "10,50",
                "on_ground": "50",
                "stark": "50",
                "on_stark": "",
                "black_white": "10",
                "semantic_default": "10,100",
                "on_semantic_default": "50",
                "semantic_shades": {"500": "20"},
                "on_semantic_shades": {"500": "60"},
            },
            "ground": {
                "light": [{"shade": "0"}, {"shade": "0"}, {"shade": "0"}],
                "dark": [{"shade": "1000"}, {"shade": "1000"}, {"shade": "500"}],
            },
            "stark": {
                "shades": [
                    {"label": "500", "light": "oklch(40% 0 0)", "dark": "oklch(60% 0 0)"},
                    {"label": "1000", "light": "oklch(0% 0 0)", "dark": "oklch(100% 0 0)"},
                ],
            },
        }
    )


@pytest.fixture
def small_project(shades: list[Shade], hues: list[Hue], small_theme: ThemeConfig) -> PaletteProject:
    """Complete small project."""
    return PaletteProject(
        name="small",
        description="test project",
        shades=tuple(shades),
        hues=tuple(hues),
        theme=small_theme,
    )
