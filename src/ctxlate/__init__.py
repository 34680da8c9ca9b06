"""ctxlate - context-aware message translation.

Resolves source text keys into display strings with:
- Context overrides selected by ambient attributes (e.g. the UI locale)
- Ordered count ranges for plural forms
- ``%n`` / ``-%n`` count tokens and ``%{name}`` placeholders
- Graceful fallback to the untranslated text

Example:
    import ctxlate

    ctxlate.merge({
        "values": {"Tree": "Tree(EN)"},
        "contexts": [{"matches": {"lang": "ja"}, "values": {"Tree": "木構造"}}],
    })
    ctxlate.set_ambient("lang", "ja")
    ctxlate.t("Tree")  # "木構造"

    # Independent translator with its own store
    translator = ctxlate.create_translator({"values": {"Hello %{name}": "Hi %{name}"}})
    translator.translate("Hello %{name}", placeholders={"name": "World"})  # "Hi World"
"""

from ctxlate.catalog import (
    Catalog,
    ContextOverride,
    Template,
    validate_fragment,
)
from ctxlate.config import TranslatorConfig
from ctxlate.context import predicate_matches, resolve_context
from ctxlate.exceptions import (
    CatalogError,
    CatalogLoadError,
    CatalogValidationError,
    CtxlateError,
)
from ctxlate.formatting import (
    PlaceholderFormatter,
    apply_count,
    apply_placeholders,
    format_count,
)
from ctxlate.loader import CatalogLoader, load_catalog, load_into
from ctxlate.plurals import PluralRange, select_range
from ctxlate.store import TranslationStore, create_store
from ctxlate.translator import (
    Batch,
    Key,
    ResolveOptions,
    TranslateInput,
    Translator,
    ambient_context,
    clear_ambient,
    create_translator,
    get_translator,
    merge,
    reset,
    reset_ambient,
    reset_catalog,
    reset_translator,
    resolve,
    set_ambient,
    t,
)

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("ctxlate")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Catalog
    "Catalog",
    "ContextOverride",
    "Template",
    "validate_fragment",
    # Plurals
    "PluralRange",
    "select_range",
    # Context
    "predicate_matches",
    "resolve_context",
    # Formatting
    "PlaceholderFormatter",
    "apply_count",
    "apply_placeholders",
    "format_count",
    # Store
    "TranslationStore",
    "create_store",
    # Translator
    "Batch",
    "Key",
    "ResolveOptions",
    "TranslateInput",
    "Translator",
    "create_translator",
    "get_translator",
    "reset_translator",
    # Default translator shortcuts
    "t",
    "resolve",
    "merge",
    "set_ambient",
    "clear_ambient",
    "reset_ambient",
    "reset_catalog",
    "reset",
    "ambient_context",
    # Loader
    "CatalogLoader",
    "load_catalog",
    "load_into",
    # Config
    "TranslatorConfig",
    # Exceptions
    "CtxlateError",
    "CatalogError",
    "CatalogValidationError",
    "CatalogLoadError",
]
