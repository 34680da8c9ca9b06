"""Tests for context override resolution."""

from __future__ import annotations

from ctxlate.catalog import Catalog
from ctxlate.context import predicate_matches, resolve_context


class TestPredicateMatches:
    """Test predicate_matches."""

    def test_all_keys_must_match(self):
        assert predicate_matches({"lang": "ja", "view": "tree"}, {"lang": "ja", "view": "tree"})
        assert not predicate_matches({"lang": "ja", "view": "tree"}, {"lang": "ja"})

    def test_extra_context_attributes_ignored(self):
        assert predicate_matches({"lang": "ja"}, {"lang": "ja", "view": "blame"})

    def test_case_sensitive(self):
        assert not predicate_matches({"lang": "ja"}, {"lang": "JA"})

    def test_empty_predicate_matches_anything(self):
        assert predicate_matches({}, {})
        assert predicate_matches({}, {"lang": "zh_TW"})


class TestResolveContext:
    """Test resolve_context."""

    def test_first_match_in_insertion_order(self):
        catalog = Catalog.from_dict(
            {
                "contexts": [
                    {"matches": {"lang": "de"}, "values": {"k": "de"}},
                    {"matches": {"lang": "ja"}, "values": {"k": "first ja"}},
                    {"matches": {"lang": "ja"}, "values": {"k": "second ja"}},
                ]
            }
        )
        values = resolve_context(catalog, {"lang": "ja"})
        assert values is not None
        assert values["k"] == "first ja"

    def test_no_match(self):
        catalog = Catalog.from_dict({"contexts": [{"matches": {"lang": "ja"}, "values": {}}]})
        assert resolve_context(catalog, {"lang": "en"}) is None
        assert resolve_context(catalog, {}) is None

    def test_no_overrides(self):
        assert resolve_context(Catalog.empty(), {"lang": "ja"}) is None

    def test_empty_predicate_is_catch_all(self):
        catalog = Catalog.from_dict(
            {
                "contexts": [
                    {"matches": {"lang": "ja"}, "values": {"k": "ja"}},
                    {"matches": {}, "values": {"k": "fallback"}},
                ]
            }
        )
        assert resolve_context(catalog, {"lang": "ja"})["k"] == "ja"
        assert resolve_context(catalog, {"lang": "fr"})["k"] == "fallback"
        assert resolve_context(catalog, {})["k"] == "fallback"
