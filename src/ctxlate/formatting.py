"""Template formatting for resolved messages.

Templates carry two kinds of tokens:

- ``%n`` / ``-%n``: the numeric count and its negation.
- ``%{name}``: a named placeholder filled from the caller's mapping.

The count pass always runs first, and within it ``-%n`` is replaced before
``%n``: replacing ``%n`` first would consume the tail of every ``-%n`` and
leave a stray sign behind.

Example:
    from ctxlate.formatting import apply_count, apply_placeholders

    apply_count("%n/-%n", 5)      # "5/-5"
    apply_count("%n/-%n", -5)     # "-5/5"
    apply_placeholders("Hello %{name}", {"name": "World"})  # "Hello World"

Placeholder substitution is a single sequential pass per key. A value that
itself contains ``%{other}`` can be matched by a later key's pass; callers
that insert untrusted text must escape it first.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Mapping

COUNT_TOKEN = "%n"
NEGATED_COUNT_TOKEN = "-%n"

_PLACEHOLDER = re.compile(r"%\{([^{}]*)\}")


def format_count(number: int | float) -> str:
    """Render a count the way it appears in display text.

    Integral floats drop their fractional part and negative zero renders
    as ``0``.
    """
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def apply_count(template: str, count: int | float | None) -> str:
    """Substitute ``-%n`` and then ``%n`` with the count.

    Args:
        template: Template text.
        count: Count to insert; ``None`` leaves the template untouched.

    Returns:
        Template with count tokens replaced.
    """
    if count is None:
        return template
    result = template.replace(NEGATED_COUNT_TOKEN, format_count(-count))
    return result.replace(COUNT_TOKEN, format_count(count))


def apply_placeholders(
    template: str,
    placeholders: Mapping[str, Any] | None,
    stringify: Callable[[Any], str] = str,
) -> str:
    """Replace every ``%{key}`` for each key of ``placeholders``.

    Keys are applied in mapping order. Tokens whose key is absent from the
    mapping are left as they are.
    """
    if not placeholders:
        return template
    for key, value in placeholders.items():
        template = template.replace("%{" + str(key) + "}", stringify(value))
    return template


def find_placeholders(template: str) -> list[str]:
    """Return the names of well-formed ``%{name}`` tokens, in order."""
    return [name for name in _PLACEHOLDER.findall(template) if name]


def find_malformed_placeholders(template: str) -> list[str]:
    """Return snippets of placeholder tokens that are unbalanced or empty.

    Example:
        find_malformed_placeholders("Hi %{name")   # ["%{name"]
        find_malformed_placeholders("Hi %{}")      # ["%{}"]
    """
    malformed = []
    start = template.find("%{")
    while start != -1:
        match = _PLACEHOLDER.match(template, start)
        if match is None:
            end = template.find("}", start)
            stop = len(template) if end == -1 else end + 1
            malformed.append(template[start:stop][:32])
        elif not match.group(1):
            malformed.append(match.group(0))
        start = template.find("%{", start + 2)
    return malformed


class PlaceholderFormatter:
    """Formats resolved templates.

    Placeholder values pass through a per-type formatter registry before
    insertion; anything without a registered formatter is inserted with
    ``str()``.

    Example:
        formatter = PlaceholderFormatter()
        formatter.register_formatter(float, lambda v: f"{v:.2f}")
        formatter.format("%n files, %{ratio} done", 3, {"ratio": 0.5})
        # -> "3 files, 0.50 done"
    """

    def __init__(self) -> None:
        self._type_formatters: dict[type, Callable[[Any], str]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._type_formatters[datetime] = lambda d: d.isoformat()
        self._type_formatters[date] = lambda d: d.isoformat()
        self._type_formatters[Path] = str

    def register_formatter(
        self,
        type_: type,
        formatter: Callable[[Any], str],
    ) -> None:
        """Register a custom value formatter for an exact type.

        Args:
            type_: Type to format.
            formatter: Callable returning the display text.
        """
        self._type_formatters[type_] = formatter

    def stringify(self, value: Any) -> str:
        """Convert a placeholder value to display text."""
        formatter = self._type_formatters.get(type(value))
        if formatter is not None:
            return formatter(value)
        return str(value)

    def format(
        self,
        template: str,
        count: int | float | None = None,
        placeholders: Mapping[str, Any] | None = None,
    ) -> str:
        """Apply the count pass, then the placeholder pass.

        Args:
            template: Template text.
            count: Optional count for ``%n`` / ``-%n``.
            placeholders: Optional placeholder values.

        Returns:
            Formatted text.
        """
        text = apply_count(template, count)
        return apply_placeholders(text, placeholders, self.stringify)
