"""Catalog loader for external translation files.

Catalog files hold one wire-format fragment in JSON or YAML. Files are read
and validated eagerly when asked for; nothing is loaded on demand.

Example:
    loader = CatalogLoader()

    # Load single file
    catalog = loader.load_file(Path("locales/ja.json"))

    # Load directory of catalog files, keyed by file stem
    catalogs = loader.load_directory(Path("locales/"))
    translator.merge(catalogs["ja"])
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import yaml

from ctxlate.catalog import Catalog
from ctxlate.exceptions import CatalogError, CatalogLoadError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class SupportsMerge(Protocol):
    """Anything a catalog can be merged into (store or translator)."""

    def merge(self, fragment: Catalog) -> None:
        ...


class CatalogLoader:
    """Loader for catalog files.

    Supports JSON and YAML formats.
    """

    def __init__(self) -> None:
        self._catalogs: dict[str, Catalog] = {}

    def load_file(self, path: Path) -> Catalog:
        """Load a catalog file.

        Args:
            path: Path to catalog file (JSON or YAML).

        Returns:
            Loaded Catalog.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If file format is unsupported.
            CatalogLoadError: If the file cannot be parsed.
            CatalogValidationError: If the content is not a valid catalog.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        suffix = path.suffix.lower()
        if suffix == ".json":
            data = self._load_json(path)
        elif suffix in (".yaml", ".yml"):
            data = self._load_yaml(path)
        else:
            raise ValueError(f"Unsupported catalog file format: {suffix}")

        # An empty YAML document is an empty catalog.
        catalog = Catalog.from_dict({} if data is None else data)
        self._catalogs[path.stem] = catalog
        logger.debug(f"Loaded catalog {path} ({len(catalog)} keys)")
        return catalog

    def load_directory(
        self,
        directory: Path,
        pattern: str = "*.json",
    ) -> dict[str, Catalog]:
        """Load all catalog files from a directory.

        Files that fail to load are skipped with a warning.

        Args:
            directory: Directory containing catalog files.
            pattern: Glob pattern for files.

        Returns:
            Dictionary of file stem to catalog.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        catalogs = {}
        for file_path in sorted(directory.glob(pattern)):
            try:
                catalogs[file_path.stem] = self.load_file(file_path)
            except (CatalogError, ValueError, OSError) as e:
                logger.warning(f"Skipping catalog {file_path}: {e}")

        return catalogs

    def _load_json(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(path, str(e)) from e

    def _load_yaml(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogLoadError(path, str(e)) from e

    def get_catalogs(self) -> dict[str, Catalog]:
        """Get all loaded catalogs."""
        return self._catalogs.copy()

    def get(self, name: str) -> Catalog | None:
        """Get a loaded catalog by file stem."""
        return self._catalogs.get(name)


def load_catalog(path: Path | str) -> Catalog:
    """Load a catalog from a file.

    Args:
        path: Path to catalog file.

    Returns:
        Loaded catalog.
    """
    return CatalogLoader().load_file(Path(path))


def load_into(target: SupportsMerge, path: Path | str) -> Catalog:
    """Load a catalog file and merge it into a store or translator.

    Args:
        target: Store or translator to merge into.
        path: Path to catalog file.

    Returns:
        The loaded catalog.
    """
    catalog = load_catalog(path)
    target.merge(catalog)
    return catalog
