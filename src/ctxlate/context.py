"""Context override resolution."""

from __future__ import annotations

from typing import Mapping

from ctxlate.catalog import Catalog, Template


def predicate_matches(
    predicate: Mapping[str, str],
    active_context: Mapping[str, str],
) -> bool:
    """Check a predicate against the active context.

    Every predicate attribute must be present in ``active_context`` with an
    exactly equal value. The empty predicate matches any context.
    """
    for attr, value in predicate.items():
        if attr not in active_context or active_context[attr] != value:
            return False
    return True


def resolve_context(
    catalog: Catalog,
    active_context: Mapping[str, str],
) -> Mapping[str, Template] | None:
    """Find the values of the first override matching ``active_context``.

    Overrides are tried in insertion order.

    Args:
        catalog: Catalog whose overrides are searched.
        active_context: Active discriminator attributes.

    Returns:
        The matching override's values, or None.
    """
    for override in catalog.contexts:
        if predicate_matches(override.predicate, active_context):
            return override.values
    return None
