"""Exceptions raised by ctxlate.

Resolution itself never raises; these errors only surface when catalog
data is loaded or merged.
"""

from __future__ import annotations

from pathlib import Path


class CtxlateError(Exception):
    """Base ctxlate error."""

    pass


class CatalogError(CtxlateError):
    """Base error for catalog data problems."""

    pass


class CatalogValidationError(CatalogError):
    """A catalog fragment failed validation.

    Attributes:
        errors: Every problem found in the fragment, in discovery order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Catalog validation failed: {'; '.join(errors)}")


class CatalogLoadError(CatalogError):
    """A catalog file could not be read or parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load catalog {self.path}: {reason}")
