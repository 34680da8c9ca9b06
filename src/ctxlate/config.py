"""Translator configuration.

Environment variables (default prefix ``CTXLATE_``):
    CTXLATE_CATALOG: Catalog file merged into the default translator.
    CTXLATE_AMBIENT: Initial ambient context, ``key=value,key=value``.
    CTXLATE_LOG_MISSING: Log keys that resolve by fallback (``true``/``1``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_TRUTHY = ("1", "true", "yes", "on")


def parse_pairs(value: str) -> dict[str, str]:
    """Parse ``key=value,key=value`` into a dict.

    Blank items are ignored and surrounding whitespace is stripped.

    Raises:
        ValueError: If an item has no ``=``.
    """
    pairs: dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, val = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got {item!r}")
        pairs[key.strip()] = val.strip()
    return pairs


@dataclass
class TranslatorConfig:
    """Configuration for a Translator.

    Attributes:
        catalog_path: Catalog file merged when the translator is created.
        ambient: Ambient context attributes set when the translator is created.
        log_missing: Log a debug record for every fallback resolution.
    """

    catalog_path: Path | None = None
    ambient: dict[str, str] = field(default_factory=dict)
    log_missing: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "catalog_path": str(self.catalog_path) if self.catalog_path else None,
            "ambient": dict(self.ambient),
            "log_missing": self.log_missing,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranslatorConfig":
        """Create from dictionary."""
        catalog_path = data.get("catalog_path")
        return cls(
            catalog_path=Path(catalog_path) if catalog_path else None,
            ambient=dict(data.get("ambient") or {}),
            log_missing=bool(data.get("log_missing", False)),
        )

    @classmethod
    def from_env(cls, prefix: str = "CTXLATE_") -> "TranslatorConfig":
        """Create configuration from environment variables.

        Args:
            prefix: Environment variable prefix.

        Returns:
            Configured instance.
        """
        config = cls()

        if val := os.environ.get(f"{prefix}CATALOG"):
            config.catalog_path = Path(val)

        if val := os.environ.get(f"{prefix}AMBIENT"):
            config.ambient = parse_pairs(val)

        if val := os.environ.get(f"{prefix}LOG_MISSING"):
            config.log_missing = val.strip().lower() in _TRUTHY

        return config
