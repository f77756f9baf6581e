"""
Project loader - discovers and loads palette projects.

Projects can come from:
1. Built-in library (shipped with package)
2. Project directory (user's palettes directory)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from chuk_mcp_palette.constants import ErrorMessages
from chuk_mcp_palette.models.config import PaletteProject, ProjectMetadata

logger = logging.getLogger(__name__)


class ProjectLoader:
    """
    Discovers and loads palette project definitions.

    Projects are loaded from YAML files in the library and project
    directories. Project files override library files with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the project loader.

        Args:
            library_path: Path to built-in project library
            project_path: Path to the user's project directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, PaletteProject] = {}

    def list_projects(self) -> list[ProjectMetadata]:
        """
        List all available projects.

        Returns projects from both library and project directory, with
        project files taking precedence.
        """
        projects: dict[str, ProjectMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                project = self._load_project_file(path)
                if project:
                    projects[project.name] = ProjectMetadata.from_project(project)

        return list(projects.values())

    def get_project(self, name: str) -> PaletteProject | None:
        """
        Get a project by name.

        Project files take precedence over library files.

        Args:
            name: Project name

        Returns:
            PaletteProject if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            path = directory / f"{name}.yaml"
            if path.exists():
                project = self._load_project_file(path)
                if project:
                    self._cache[name] = project
                    return project

        return None

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library project to the project directory for customization.

        Args:
            name: Project name

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError(ErrorMessages.NO_PROJECT_PATH)

        library_file = self.library_path / f"{name}.yaml"
        if not library_file.exists():
            return None

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / f"{name}.yaml"
        if dest_file.exists():
            raise ValueError(ErrorMessages.PROJECT_EXISTS.format(name=name))

        dest_file.write_text(library_file.read_text())

        self._cache.pop(name, None)

        return dest_file

    def save_project(self, project: PaletteProject, overwrite: bool = False) -> Path:
        """
        Write a project to the project directory.

        Args:
            project: Project to save
            overwrite: Replace an existing file of the same name

        Returns:
            Path to the written file
        """
        if not self.project_path:
            raise ValueError(ErrorMessages.NO_PROJECT_PATH)

        self.project_path.mkdir(parents=True, exist_ok=True)
        dest_file = self.project_path / f"{project.name}.yaml"
        if dest_file.exists() and not overwrite:
            raise ValueError(ErrorMessages.PROJECT_EXISTS.format(name=project.name))

        with open(dest_file, "w") as f:
            yaml.safe_dump(project.to_yaml_dict(), f, sort_keys=False, allow_unicode=True)

        self._cache[project.name] = project
        return dest_file

    def _load_project_file(self, path: Path) -> PaletteProject | None:
        """Load a project from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            if not isinstance(data, dict):
                logger.warning("Ignoring %s: not a mapping", path)
                return None
            data.setdefault("name", path.stem)
            return PaletteProject.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            logger.warning("Failed to load project %s: %s", path, e)
            return None

    def clear_cache(self) -> None:
        """Clear the project cache."""
        self._cache.clear()
