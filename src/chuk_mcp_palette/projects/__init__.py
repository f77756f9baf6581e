"""
Project system - YAML palette presets from the library and the user's directory.
"""

from chuk_mcp_palette.projects.loader import ProjectLoader

__all__ = [
    "ProjectLoader",
]
