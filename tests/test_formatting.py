"""Tests for template formatting."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import pytest

from ctxlate.formatting import (
    PlaceholderFormatter,
    apply_count,
    apply_placeholders,
    find_malformed_placeholders,
    find_placeholders,
    format_count,
)


class TestFormatCount:
    """Test count rendering."""

    @pytest.mark.parametrize(
        "number, expected",
        [
            (5, "5"),
            (-5, "-5"),
            (0, "0"),
            (5.0, "5"),
            (-0.0, "0"),
            (1.5, "1.5"),
        ],
    )
    def test_format_count(self, number, expected):
        assert format_count(number) == expected


class TestApplyCount:
    """Test the %n / -%n pass."""

    def test_sign_token_before_plain_token(self):
        """Test -%n is replaced before %n."""
        assert apply_count("%n/-%n", 5) == "5/-5"
        assert apply_count("%n/-%n", -5) == "-5/5"

    def test_negated_only(self):
        assert apply_count("%n days ago", 3) == "3 days ago"
        assert apply_count("in -%n days", -3) == "in 3 days"

    def test_every_occurrence_replaced(self):
        assert apply_count("%n and %n, -%n and -%n", 2) == "2 and 2, -2 and -2"

    def test_no_count_leaves_template(self):
        assert apply_count("%n items", None) == "%n items"

    def test_zero_count(self):
        assert apply_count("-%n", 0) == "0"


class TestApplyPlaceholders:
    """Test the %{name} pass."""

    def test_simple_substitution(self):
        assert apply_placeholders("Hello %{name}", {"name": "World"}) == "Hello World"

    def test_all_occurrences_replaced(self):
        result = apply_placeholders("%{a}-%{a}-%{b}", {"a": "x", "b": "y"})
        assert result == "x-x-y"

    def test_missing_key_leaves_token(self):
        result = apply_placeholders("%{greeting} %{name}", {"name": "World"})
        assert result == "%{greeting} World"

    def test_non_string_values(self):
        assert apply_placeholders("%{n} files", {"n": 3}) == "3 files"

    def test_no_recursive_substitution_of_same_key(self):
        result = apply_placeholders("%{a}", {"a": "%{a}!"})
        assert result == "%{a}!"

    def test_later_key_matches_inserted_value(self):
        """Test the documented hazard: inserted tokens are seen by later keys."""
        result = apply_placeholders("%{a}", {"a": "%{b}", "b": "B"})
        assert result == "B"

    def test_empty_or_none_mapping(self):
        assert apply_placeholders("Hello %{name}", None) == "Hello %{name}"
        assert apply_placeholders("Hello %{name}", {}) == "Hello %{name}"


class TestPlaceholderScanning:
    """Test placeholder discovery helpers."""

    def test_find_placeholders(self):
        assert find_placeholders("%{a} and %{b} of %n") == ["a", "b"]

    def test_well_formed_template_has_no_malformed(self):
        assert find_malformed_placeholders("Hello %{name}, %n left") == []

    def test_unclosed_token(self):
        assert find_malformed_placeholders("Hello %{name") == ["%{name"]

    def test_empty_token(self):
        assert find_malformed_placeholders("Hello %{}") == ["%{}"]

    def test_nested_open_token(self):
        assert find_malformed_placeholders("%{a %{b}") == ["%{a %{b}"]

    def test_plain_percent_is_fine(self):
        assert find_malformed_placeholders("100% done {x}") == []


class TestPlaceholderFormatter:
    """Test PlaceholderFormatter."""

    def test_count_then_placeholders(self):
        formatter = PlaceholderFormatter()
        result = formatter.format("%n files in %{dir}", 3, {"dir": "src"})
        assert result == "3 files in src"

    def test_default_type_formatters(self):
        formatter = PlaceholderFormatter()
        assert formatter.stringify(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
        assert formatter.stringify(date(2024, 1, 2)) == "2024-01-02"
        assert formatter.stringify(Path("a/b")) == str(Path("a/b"))

    def test_register_formatter(self):
        formatter = PlaceholderFormatter()
        formatter.register_formatter(float, lambda v: f"{v:.2f}")
        assert formatter.format("%{ratio}", placeholders={"ratio": 0.5}) == "0.50"

    def test_count_token_inside_placeholder_value_not_replaced(self):
        """Test placeholder values are inserted after the count pass."""
        formatter = PlaceholderFormatter()
        assert formatter.format("%{v}", 2, {"v": "%n"}) == "%n"
