"""Translation store: one catalog plus one ambient context.

Writers serialize on a lock and publish freshly built immutable values;
readers take the current snapshot without locking. A reader therefore sees
either the state before a merge or the state after it, never a partial
update.

Example:
    store = TranslationStore()
    store.merge({"values": {"Tree": "Tree(EN)"}})
    store.set_ambient("lang", "ja")
    catalog, ambient = store.snapshot()
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Mapping

from ctxlate.catalog import Catalog

logger = logging.getLogger(__name__)

_EMPTY_AMBIENT: Mapping[str, str] = MappingProxyType({})


class TranslationStore:
    """Owns a catalog and an ambient context.

    Both are replaced, never mutated in place, so a snapshot handed out to a
    reader stays valid for as long as the reader holds it.
    """

    def __init__(self, initial: Catalog | Mapping[str, Any] | None = None) -> None:
        """Initialize store.

        Args:
            initial: Optional catalog or wire-format fragment to merge.
        """
        self._lock = threading.RLock()
        self._state: tuple[Catalog, Mapping[str, str]] = (Catalog.empty(), _EMPTY_AMBIENT)
        if initial is not None:
            self.merge(initial)

    @property
    def catalog(self) -> Catalog:
        """Current catalog snapshot."""
        return self._state[0]

    @property
    def ambient(self) -> Mapping[str, str]:
        """Current ambient context (read-only)."""
        return self._state[1]

    def snapshot(self) -> tuple[Catalog, Mapping[str, str]]:
        """Return a consistent ``(catalog, ambient)`` pair."""
        return self._state

    def merge(self, fragment: Catalog | Mapping[str, Any]) -> None:
        """Merge a catalog fragment.

        Global keys are overwritten (last write wins); context overrides
        are appended.

        Args:
            fragment: A Catalog or a wire-format mapping.

        Raises:
            CatalogValidationError: If a wire-format fragment is malformed.
                The store is left unchanged.
        """
        incoming = fragment if isinstance(fragment, Catalog) else Catalog.from_dict(fragment)
        with self._lock:
            catalog, ambient = self._state
            self._state = (catalog.merged(incoming), ambient)
        logger.debug(
            f"Merged catalog fragment: {len(incoming)} keys, "
            f"{len(incoming.contexts)} context overrides"
        )

    def set_ambient(self, key: str, value: str) -> None:
        """Set one ambient context attribute."""
        with self._lock:
            catalog, ambient = self._state
            self._state = (catalog, MappingProxyType({**ambient, key: value}))

    def clear_ambient(self, key: str) -> None:
        """Remove one ambient context attribute. Absent keys are ignored."""
        with self._lock:
            catalog, ambient = self._state
            if key not in ambient:
                return
            remaining = {k: v for k, v in ambient.items() if k != key}
            self._state = (catalog, MappingProxyType(remaining))

    def reset_ambient(self) -> None:
        """Clear the ambient context, keeping the catalog."""
        with self._lock:
            self._state = (self._state[0], _EMPTY_AMBIENT)
        logger.debug("Ambient context reset")

    def reset_catalog(self) -> None:
        """Clear the catalog, keeping the ambient context."""
        with self._lock:
            self._state = (Catalog.empty(), self._state[1])
        logger.debug("Catalog reset")

    def reset(self) -> None:
        """Clear both the catalog and the ambient context."""
        with self._lock:
            self._state = (Catalog.empty(), _EMPTY_AMBIENT)
        logger.debug("Store reset")

    # resetData / resetContext aliases
    reset_data = reset_catalog
    reset_context = reset_ambient

    def __repr__(self) -> str:
        catalog, ambient = self._state
        return (
            f"TranslationStore(keys={len(catalog)}, "
            f"contexts={len(catalog.contexts)}, ambient={dict(ambient)!r})"
        )


def create_store(initial: Catalog | Mapping[str, Any] | None = None) -> TranslationStore:
    """Create an independent store.

    Args:
        initial: Optional catalog or fragment to merge.

    Returns:
        New TranslationStore.
    """
    return TranslationStore(initial)
