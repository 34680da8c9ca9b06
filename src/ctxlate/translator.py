"""Translation facade.

Resolves a key, or every string member of a mapping, into display text:

1. Look the key up in the values of the first context override matching
   the active context.
2. Otherwise look it up in the global values.
3. A plain template is formatted directly; a plural entry is narrowed to
   the first range admitting the count. An entry that yields no template
   (no count, or no matching range) counts as unresolved.
4. Unresolved keys fall back to the default text, or the key itself, with
   the count and placeholders still substituted.

Resolution never raises: the worst outcome is untranslated text.

Example:
    from ctxlate import Key, ResolveOptions, create_translator

    translator = create_translator({
        "values": {"Tree": "Tree(EN)"},
        "contexts": [{"matches": {"lang": "ja"}, "values": {"Tree": "木構造"}}],
    })
    translator.set_ambient("lang", "ja")
    translator.resolve(Key("Tree"))  # "木構造"

    translator.translate("Hello %{name}", placeholders={"name": "World"})
    # -> "Hello World"
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, ClassVar, Iterator, Mapping, MutableMapping

from ctxlate.catalog import Catalog
from ctxlate.config import TranslatorConfig
from ctxlate.context import resolve_context
from ctxlate.exceptions import CatalogError
from ctxlate.formatting import PlaceholderFormatter
from ctxlate.loader import load_into
from ctxlate.plurals import select_range
from ctxlate.store import TranslationStore

logger = logging.getLogger(__name__)

_MISSING = object()


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class Key:
    """A single source text key."""

    text: str


@dataclass(frozen=True)
class Batch:
    """A mapping whose string members are translated in place.

    If the mapping holds another mapping under ``"i18n"``, that inner
    mapping is the one translated.
    """

    members: MutableMapping[str, Any]


TranslateInput = Key | Batch


@dataclass(frozen=True)
class ResolveOptions:
    """Options for one resolution.

    Attributes:
        count: Count used for plural ranges and ``%n`` tokens.
        placeholders: Values for ``%{name}`` tokens.
        default_text: Fallback text used instead of the key when unresolved.
        context: Active context; defaults to the store's ambient context.
    """

    count: int | float | None = None
    placeholders: Mapping[str, Any] | None = None
    default_text: str | None = None
    context: Mapping[str, str] | None = None


# =============================================================================
# Translator
# =============================================================================


class Translator:
    """Resolves keys against a TranslationStore.

    Example:
        translator = Translator()
        translator.merge({"values": {"%n days": [[1, 1, "one day"], [2, None, "%n days"]]}})
        translator.translate("%n days", count=1)  # "one day"
        translator.translate("%n days", count=4)  # "4 days"
    """

    def __init__(
        self,
        store: TranslationStore | None = None,
        formatter: PlaceholderFormatter | None = None,
        config: TranslatorConfig | None = None,
    ) -> None:
        """Initialize translator.

        Args:
            store: Store to resolve against (default: a new empty store).
            formatter: Template formatter.
            config: Translator configuration. Its catalog file and ambient
                attributes are applied to the store immediately.
        """
        self._store = store if store is not None else TranslationStore()
        self._formatter = formatter or PlaceholderFormatter()
        self._config = config or TranslatorConfig()

        if self._config.catalog_path is not None:
            load_into(self._store, self._config.catalog_path)
        for key, value in self._config.ambient.items():
            self._store.set_ambient(key, value)

    @property
    def store(self) -> TranslationStore:
        """The underlying store."""
        return self._store

    @property
    def formatter(self) -> PlaceholderFormatter:
        """The template formatter."""
        return self._formatter

    @property
    def config(self) -> TranslatorConfig:
        """The translator configuration."""
        return self._config

    def resolve(
        self,
        input: TranslateInput,
        options: ResolveOptions | None = None,
    ) -> str | MutableMapping[str, Any]:
        """Resolve a key or a batch.

        Args:
            input: ``Key`` for one string, ``Batch`` for a mapping.
            options: Resolution options.

        Returns:
            Display text for a ``Key``; the translated mapping for a ``Batch``.
        """
        options = options or ResolveOptions()
        if isinstance(input, Batch):
            return self._resolve_batch(input.members, options)
        if isinstance(input, Key):
            return self._resolve_key(input.text, options)
        raise TypeError(f"Expected Key or Batch, got {type(input).__name__}")

    def translate(
        self,
        key: str,
        *,
        count: int | float | None = None,
        placeholders: Mapping[str, Any] | None = None,
        default: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> str:
        """Translate one key.

        Args:
            key: Source text key.
            count: Count for plural ranges and ``%n`` tokens.
            placeholders: Values for ``%{name}`` tokens.
            default: Fallback text when the key is unresolved.
            context: Override for the ambient context.

        Returns:
            Display text.
        """
        options = ResolveOptions(
            count=count,
            placeholders=placeholders,
            default_text=default,
            context=context,
        )
        return self._resolve_key(key, options)

    def translate_batch(
        self,
        members: MutableMapping[str, Any],
        *,
        count: int | float | None = None,
        placeholders: Mapping[str, Any] | None = None,
        context: Mapping[str, str] | None = None,
    ) -> MutableMapping[str, Any]:
        """Translate every string member of a mapping in place."""
        options = ResolveOptions(count=count, placeholders=placeholders, context=context)
        return self._resolve_batch(members, options)

    def has(
        self,
        key: str,
        context: Mapping[str, str] | None = None,
        count: int | float | None = None,
    ) -> bool:
        """Check whether a key resolves from the catalog rather than the literal.

        A plural entry only counts when one of its ranges admits ``count``.
        """
        catalog, ambient = self._store.snapshot()
        scoped = resolve_context(catalog, ambient if context is None else context)

        for values in (scoped, catalog.values):
            if values is None:
                continue
            template = values.get(key)
            if template is None:
                continue
            if isinstance(template, str) or select_range(template, count) is not None:
                return True
        return False

    def _resolve_batch(
        self,
        members: MutableMapping[str, Any],
        options: ResolveOptions,
    ) -> MutableMapping[str, Any]:
        inner = members.get("i18n")
        target = inner if isinstance(inner, MutableMapping) else members
        options = replace(options, default_text=None)

        for name, value in list(target.items()):
            if isinstance(value, str):
                target[name] = self._resolve_key(value, options)
        return target

    def _resolve_key(self, key: str, options: ResolveOptions) -> str:
        catalog, ambient = self._store.snapshot()
        context = ambient if options.context is None else options.context

        try:
            result = self._lookup(catalog, context, key, options)
        except Exception as e:
            logger.warning(f"Failed to resolve {key!r}: {e}")
            result = None

        if result is not None:
            return result

        if self._config.log_missing:
            logger.debug(f"No translation for {key!r} (context: {dict(context)!r})")

        literal = key if options.default_text is None else options.default_text
        try:
            return self._formatter.format(literal, options.count, options.placeholders)
        except Exception as e:
            logger.warning(f"Failed to format {key!r}: {e}")
            return literal

    def _lookup(
        self,
        catalog: Catalog,
        context: Mapping[str, str],
        key: str,
        options: ResolveOptions,
    ) -> str | None:
        scoped = resolve_context(catalog, context)

        for values in (scoped, catalog.values):
            if values is None:
                continue
            template = values.get(key)
            if template is None:
                continue
            if not isinstance(template, str):
                template = select_range(template, options.count)
                if template is None:
                    continue
            return self._formatter.format(template, options.count, options.placeholders)

        return None

    # -------------------------------------------------------------------------
    # Store mutation
    # -------------------------------------------------------------------------

    def merge(self, fragment: Catalog | Mapping[str, Any]) -> None:
        """Merge a catalog fragment into the store."""
        self._store.merge(fragment)

    def set_ambient(self, key: str, value: str) -> None:
        """Set an ambient context attribute."""
        self._store.set_ambient(key, value)

    def clear_ambient(self, key: str) -> None:
        """Remove an ambient context attribute."""
        self._store.clear_ambient(key)

    def reset_ambient(self) -> None:
        """Clear the ambient context."""
        self._store.reset_ambient()

    def reset_catalog(self) -> None:
        """Clear the catalog."""
        self._store.reset_catalog()

    def reset(self) -> None:
        """Clear catalog and ambient context."""
        self._store.reset()

    @contextmanager
    def ambient_context(self, **attrs: str) -> Iterator["Translator"]:
        """Temporarily set ambient attributes.

        Previous values, including absence, are restored on exit.

        Example:
            with translator.ambient_context(lang="ja"):
                translator.translate("Tree")
        """
        previous = {key: self._store.ambient.get(key, _MISSING) for key in attrs}
        for key, value in attrs.items():
            self._store.set_ambient(key, value)
        try:
            yield self
        finally:
            for key, value in previous.items():
                if value is _MISSING:
                    self._store.clear_ambient(key)
                else:
                    self._store.set_ambient(key, value)


# =============================================================================
# Default instance
# =============================================================================


class _DefaultTranslator:
    """Holder for the shared default translator."""

    _instance: ClassVar[Translator | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get(cls) -> Translator:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls._create()
        return cls._instance

    @classmethod
    def _create(cls) -> Translator:
        try:
            return Translator(config=TranslatorConfig.from_env())
        except (CatalogError, OSError, ValueError) as e:
            logger.warning(f"Ignoring CTXLATE_* configuration: {e}")
            return Translator()

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None


def get_translator() -> Translator:
    """Get the shared default translator, creating it on first use.

    The default translator is configured from ``CTXLATE_*`` environment
    variables. If that configuration cannot be parsed or its catalog
    cannot be loaded, a warning is logged and an unconfigured translator
    is used instead.
    """
    return _DefaultTranslator.get()


def reset_translator() -> None:
    """Discard the shared default translator (for testing)."""
    _DefaultTranslator.reset()


def create_translator(
    initial: Catalog | Mapping[str, Any] | None = None,
    config: TranslatorConfig | None = None,
) -> Translator:
    """Create a translator with its own independent store.

    Args:
        initial: Optional catalog or fragment to merge.
        config: Optional configuration.

    Returns:
        New Translator.
    """
    return Translator(store=TranslationStore(initial), config=config)


# =============================================================================
# Convenience Functions
# =============================================================================


def t(key: str, **kwargs: Any) -> str:
    """Shorthand for ``get_translator().translate``."""
    return get_translator().translate(key, **kwargs)


def resolve(
    input: TranslateInput,
    options: ResolveOptions | None = None,
) -> str | MutableMapping[str, Any]:
    """Resolve against the default translator."""
    return get_translator().resolve(input, options)


def merge(fragment: Catalog | Mapping[str, Any]) -> None:
    """Merge a fragment into the default translator."""
    get_translator().merge(fragment)


def set_ambient(key: str, value: str) -> None:
    """Set an ambient attribute on the default translator."""
    get_translator().set_ambient(key, value)


def clear_ambient(key: str) -> None:
    """Remove an ambient attribute from the default translator."""
    get_translator().clear_ambient(key)


def reset_ambient() -> None:
    """Clear the default translator's ambient context."""
    get_translator().reset_ambient()


def reset_catalog() -> None:
    """Clear the default translator's catalog."""
    get_translator().reset_catalog()


def reset() -> None:
    """Clear the default translator's catalog and ambient context."""
    get_translator().reset()


def ambient_context(**attrs: str):
    """Temporarily set ambient attributes on the default translator."""
    return get_translator().ambient_context(**attrs)
