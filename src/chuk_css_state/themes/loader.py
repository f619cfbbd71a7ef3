"""
Theme loader - discovers and loads theme definitions.

Themes are YAML files named after the theme (``<name>.yaml``). They are
looked up along a search path: the project themes directory (if any)
first, then the built-in library shipped with the package. The first
file that loads cleanly wins, so a project can override a library theme
by reusing its name, and a broken override falls back to the library.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_css_state.models.theme import Theme, ThemeMetadata

logger = logging.getLogger(__name__)

THEME_SUFFIX = ".yaml"


class ThemeLoader:
    """
    Resolves theme names against the project and library directories.

    Parsed themes are cached by name until clear_cache() is called.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Args:
            library_path: Built-in theme directory (defaults to the packaged library)
            project_path: Project theme directory, searched before the library
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, Theme] = {}

    @property
    def search_path(self) -> list[Path]:
        """Theme directories in lookup order, highest precedence first."""
        if self.project_path is None:
            return [self.library_path]
        return [self.project_path, self.library_path]

    def _candidates(self, name: str) -> Iterator[Path]:
        for directory in self.search_path:
            path = directory / f"{name}{THEME_SUFFIX}"
            if path.is_file():
                yield path

    def _available_names(self) -> set[str]:
        return {
            path.stem
            for directory in self.search_path
            if directory.is_dir()
            for path in directory.glob(f"*{THEME_SUFFIX}")
        }

    def list_themes(self) -> list[ThemeMetadata]:
        """Metadata for every theme that loads, sorted by name."""
        themes = (self.get_theme(name) for name in self._available_names())
        return sorted(
            (ThemeMetadata.from_theme(theme) for theme in themes if theme is not None),
            key=lambda meta: meta.name,
        )

    def get_theme(self, name: str) -> Theme | None:
        """
        Resolve a theme by name.

        Args:
            name: Theme name (the file stem)

        Returns:
            The first theme on the search path that loads, or None
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        for path in self._candidates(name):
            theme = self._load_theme_file(path)
            if theme is not None:
                self._cache[name] = theme
                return theme
        return None

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library theme into the project directory to customize it.

        Args:
            name: Theme name

        Returns:
            Path of the new project file, or None if the library has no such theme

        Raises:
            ValueError: If no project path is configured or the project
                already has a theme with this name
        """
        if self.project_path is None:
            raise ValueError("No project path configured")

        source = self.library_path / f"{name}{THEME_SUFFIX}"
        if not source.is_file():
            return None

        target = self.project_path / source.name
        if target.exists():
            raise ValueError(f"Theme already exists in project: {name}")

        self.project_path.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        self._cache.pop(name, None)
        logger.info(f"Copied theme '{name}' to {target}")
        return target

    def clear_cache(self) -> None:
        """Forget parsed themes so the next lookup rereads the files."""
        self._cache.clear()

    def _load_theme_file(self, path: Path) -> Theme | None:
        """Load a theme from a YAML file, None if it can't be read or parsed."""
        try:
            data = yaml.safe_load(path.read_text())
            theme = self._parse_theme(data, default_name=path.stem)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            logger.debug(f"Skipping theme file {path}: {e}")
            return None

        logger.debug(f"Loaded theme '{theme.name}' from {path}")
        return theme

    def _parse_theme(self, data: Any, default_name: str) -> Theme:
        """Validate one YAML document as a Theme."""
        if not isinstance(data, dict):
            raise TypeError(f"Theme document must be a mapping, got {type(data).__name__}")
        return Theme.model_validate({"name": default_name, **data})
