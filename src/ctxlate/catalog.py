"""Translation catalog data model.

A catalog holds a flat key to template mapping plus an ordered list of
context overrides. Catalogs are immutable values: merging produces a new
catalog, which lets a store publish updates as a single reference swap.

Wire format:
    {
        "values": {
            "Tree": "木構造",
            "%n commits": [[0, 0, "no commits"], [1, 1, "one commit"],
                           [2, null, "%n commits"]]
        },
        "contexts": [
            {"matches": {"lang": "ja"}, "values": {"Tree": "ツリー"}}
        ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from ctxlate.exceptions import CatalogValidationError
from ctxlate.formatting import find_malformed_placeholders
from ctxlate.plurals import PluralRange

Template = str | tuple[PluralRange, ...]

_TOP_LEVEL_MEMBERS = ("values", "contexts")
_CONTEXT_MEMBERS = ("matches", "values")


@dataclass(frozen=True)
class ContextOverride:
    """Values that apply while the active context satisfies ``predicate``.

    Plural entries may be given as ``PluralRange`` objects or as raw
    ``[min, max, template]`` triplets.

    Attributes:
        predicate: Attribute values that must all be present and equal.
        values: Key to template mapping scoped to this context.

    Raises:
        CatalogValidationError: If the predicate or any value is malformed.
    """

    predicate: Mapping[str, str] = field(default_factory=dict)
    values: Mapping[str, Template] = field(default_factory=dict)

    # Mapping fields are unhashable
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        errors = _validate_predicate(self.predicate, "matches")
        if errors:
            raise CatalogValidationError(errors)
        object.__setattr__(self, "predicate", MappingProxyType(dict(self.predicate or {})))
        object.__setattr__(self, "values", MappingProxyType(_coerce_values(self.values, "values")))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire form."""
        return {
            "matches": dict(self.predicate),
            "values": _values_to_wire(self.values),
        }


@dataclass(frozen=True)
class Catalog:
    """Immutable translation catalog.

    Values are checked the same way as ``from_dict`` checks the wire form,
    and raw ``[min, max, template]`` triplets become ``PluralRange`` objects.

    Attributes:
        values: Global key to template mapping.
        contexts: Context overrides in insertion order. Duplicates are kept.

    Raises:
        CatalogValidationError: If any value is malformed.
    """

    values: Mapping[str, Template] = field(default_factory=dict)
    contexts: tuple[ContextOverride, ...] = ()

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(_coerce_values(self.values, "values")))
        contexts = tuple(self.contexts)
        for index, override in enumerate(contexts):
            if not isinstance(override, ContextOverride):
                raise CatalogValidationError(
                    [f"contexts[{index}] must be a ContextOverride, got {type(override).__name__}"]
                )
        object.__setattr__(self, "contexts", contexts)

    def get(self, key: str) -> Template | None:
        """Get the global template for a key."""
        return self.values.get(key)

    def keys(self) -> list[str]:
        """Return all global keys."""
        return list(self.values.keys())

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def merged(self, other: "Catalog") -> "Catalog":
        """Merge with another catalog.

        Global values of ``other`` overwrite matching keys; its context
        overrides are appended after the existing ones.

        Args:
            other: Catalog to merge (takes precedence).

        Returns:
            New merged catalog.
        """
        return Catalog(
            values={**self.values, **other.values},
            contexts=self.contexts + other.contexts,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire form."""
        return {
            "values": _values_to_wire(self.values),
            "contexts": [override.to_dict() for override in self.contexts],
        }

    def to_json(self, path: Path) -> None:
        """Save to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def empty(cls) -> "Catalog":
        """Create an empty catalog."""
        return cls()

    @classmethod
    def from_dict(cls, fragment: Mapping[str, Any]) -> "Catalog":
        """Create from a wire-format fragment.

        Raises:
            CatalogValidationError: If the fragment is malformed.
        """
        errors = validate_fragment(fragment)
        if errors:
            raise CatalogValidationError(errors)

        contexts = tuple(
            ContextOverride(
                predicate=entry.get("matches") or {},
                values=_values_from_wire(entry.get("values") or {}),
            )
            for entry in fragment.get("contexts") or ()
        )
        return cls(
            values=_values_from_wire(fragment.get("values") or {}),
            contexts=contexts,
        )

    @classmethod
    def from_json(cls, path: Path) -> "Catalog":
        """Load from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)


def _values_from_wire(values: Mapping[str, Any]) -> dict[str, Template]:
    parsed: dict[str, Template] = {}
    for key, template in values.items():
        if isinstance(template, str):
            parsed[key] = template
        else:
            parsed[key] = tuple(PluralRange.from_sequence(t) for t in template)
    return parsed


def _values_to_wire(values: Mapping[str, Template]) -> dict[str, Any]:
    return {
        key: template if isinstance(template, str) else [r.to_list() for r in template]
        for key, template in values.items()
    }


def _coerce_values(values: Mapping[str, Any], where: str) -> dict[str, Template]:
    if not isinstance(values, Mapping):
        raise CatalogValidationError([f"{where} must be a mapping, got {type(values).__name__}"])

    wire: dict[Any, Any] = {}
    for key, template in values.items():
        if isinstance(template, (list, tuple)):
            template = [r.to_list() if isinstance(r, PluralRange) else r for r in template]
        wire[key] = template

    errors = _validate_values(wire, where)
    if errors:
        raise CatalogValidationError(errors)
    return _values_from_wire(wire)


# =============================================================================
# Validation
# =============================================================================


def validate_fragment(fragment: Any) -> list[str]:
    """Check a wire-format fragment.

    Args:
        fragment: Parsed fragment data.

    Returns:
        List of problems; empty when the fragment is valid.
    """
    if not isinstance(fragment, Mapping):
        return [f"fragment must be a mapping, got {type(fragment).__name__}"]

    errors = [
        f"unknown top-level member {member!r}"
        for member in fragment
        if member not in _TOP_LEVEL_MEMBERS
    ]

    values = fragment.get("values")
    if values is not None:
        errors.extend(_validate_values(values, "values"))

    contexts = fragment.get("contexts")
    if contexts is None:
        return errors
    if not isinstance(contexts, (list, tuple)):
        errors.append(f"contexts must be a list, got {type(contexts).__name__}")
        return errors

    for index, entry in enumerate(contexts):
        where = f"contexts[{index}]"
        if not isinstance(entry, Mapping):
            errors.append(f"{where} must be a mapping")
            continue
        errors.extend(
            f"{where}: unknown member {member!r}"
            for member in entry
            if member not in _CONTEXT_MEMBERS
        )
        errors.extend(_validate_predicate(entry.get("matches"), f"{where}.matches"))
        if entry.get("values") is not None:
            errors.extend(_validate_values(entry["values"], f"{where}.values"))

    return errors


def _validate_predicate(predicate: Any, where: str) -> list[str]:
    # A missing predicate is the empty, always-matching one.
    if predicate is None:
        return []
    if not isinstance(predicate, Mapping):
        return [f"{where} must be a mapping of attribute to value"]
    return [
        f"{where}[{attr!r}] must map a string to a string"
        for attr, value in predicate.items()
        if not isinstance(attr, str) or not isinstance(value, str)
    ]


def _validate_values(values: Any, where: str) -> list[str]:
    if not isinstance(values, Mapping):
        return [f"{where} must be a mapping, got {type(values).__name__}"]

    errors = []
    for key, template in values.items():
        if not isinstance(key, str):
            errors.append(f"{where}: key {key!r} is not a string")
            continue
        entry = f"{where}[{key!r}]"
        if isinstance(template, str):
            errors.extend(_validate_template(template, entry))
        elif isinstance(template, (list, tuple)):
            errors.extend(_validate_ranges(template, entry))
        else:
            errors.append(
                f"{entry} must be a string or a list of ranges, "
                f"got {type(template).__name__}"
            )
    return errors


def _validate_ranges(ranges: list | tuple, where: str) -> list[str]:
    if not ranges:
        return [f"{where} has an empty range list"]

    errors = []
    for index, triplet in enumerate(ranges):
        entry = f"{where}[{index}]"
        if not isinstance(triplet, (list, tuple)) or len(triplet) != 3:
            errors.append(f"{entry} must be a [min, max, template] triplet")
            continue
        low, high, template = triplet
        bounds_ok = True
        for name, bound in (("min", low), ("max", high)):
            if not _is_bound(bound):
                errors.append(f"{entry}: {name} must be a number or null, got {bound!r}")
                bounds_ok = False
        if bounds_ok and low is not None and high is not None and low > high:
            errors.append(f"{entry}: min {low!r} is greater than max {high!r}")
        if isinstance(template, str):
            errors.extend(_validate_template(template, entry))
        else:
            errors.append(f"{entry}: template must be a string")
    return errors


def _validate_template(template: str, where: str) -> list[str]:
    return [
        f"{where}: malformed placeholder {token!r}"
        for token in find_malformed_placeholders(template)
    ]


def _is_bound(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool)
