"""Tests for suggestion extraction.

This module tests the field path resolver, the suggestion collector and the
two-pass matching strategy used to build autosuggest options.

Test coverage includes:
    - Nested path resolution across objects and arrays of objects
    - Terminal list values, nested lists and discarded object values
    - Case-insensitive multi-term word matching
    - Distinct vs all-matches mode and field priority
    - Label deduplication and promoted documents
    - The synonym fallback pass and its fresh recomputation
    - Cycle detection and depth bounding when flattening list values
"""

import copy
import logging
from unittest.mock import patch

import pytest

import searchshaper.suggestions as suggestions_module
from searchshaper.errors import CyclicDocumentError
from searchshaper.suggestions import (
    FieldPathResolver,
    SuggestionCollector,
    extract_suggestion,
    flatten,
    get_query_suggestions,
    get_suggestions,
    resolve_suggestions,
)


def labels(suggestions) -> list[str]:
    return [suggestion.label for suggestion in suggestions]


class TestFlatten:
    """Test suite for flatten and extract_suggestion."""

    def test_flattens_nested_lists_in_order(self) -> None:
        """Test that nested lists are flattened depth-first."""
        assert flatten(["a", ["b", ["c", "d"]], "e"]) == ["a", "b", "c", "d", "e"]

    def test_cyclic_list_raises(self) -> None:
        """Test that a list containing itself is a defined error."""
        values: list = ["a"]
        values.append(values)

        with pytest.raises(CyclicDocumentError):
            flatten(values)

    def test_repeated_sibling_list_is_not_a_cycle(self) -> None:
        """Test that the same list appearing twice side by side is allowed."""
        shared = ["x"]

        assert flatten([shared, shared]) == ["x", "x"]

    def test_depth_bound_drops_deep_values(self, caplog) -> None:
        """Test that lists nested beyond max_depth are dropped with a warning."""
        with caplog.at_level(logging.WARNING):
            result = flatten([1, [2, [3]]], max_depth=1)

        assert result == [1, 2]
        assert "nested deeper than 1 levels" in caplog.text

    def test_extract_suggestion(self) -> None:
        """Test the displayable part of terminal values."""
        assert extract_suggestion(["a", ["b"]]) == ["a", "b"]
        assert extract_suggestion({"nested": "object"}) is None
        assert extract_suggestion("plain") == "plain"
        assert extract_suggestion(42) == 42


class TestSuggestionCollector:
    """Test suite for SuggestionCollector."""

    def test_word_match_is_case_insensitive(self) -> None:
        """Test that terms and values are compared in lower case."""
        collector = SuggestionCollector("IPHONE")

        assert collector.is_word_match("My iPhone")
        assert not collector.is_word_match("Galaxy")

    def test_any_term_matches(self) -> None:
        """Test that one matching term of several is enough."""
        collector = SuggestionCollector("red phone")

        assert collector.is_word_match("Phone case")
        assert collector.is_word_match("Red cover")
        assert not collector.is_word_match("Blue cover")

    def test_empty_term_matches_everything(self) -> None:
        """Test that an empty search term accepts any value."""
        assert SuggestionCollector("").is_word_match("anything")
        assert SuggestionCollector(None).is_word_match("anything")

    def test_skip_word_match(self) -> None:
        """Test that skip_word_match accepts non-matching values."""
        collector = SuggestionCollector("iphone", skip_word_match=True)

        assert collector.is_word_match("ios")

    def test_populate_signals_stop_only_in_distinct_mode(self) -> None:
        """Test the return value of populate in both modes."""
        source = {"title": "iphone"}

        assert SuggestionCollector("iphone").populate("iphone", source) is True
        assert (
            SuggestionCollector("iphone", show_distinct_suggestions=False).populate(
                "iphone", source
            )
            is False
        )

    def test_duplicate_label_rejected(self) -> None:
        """Test that a used label is not accepted twice."""
        collector = SuggestionCollector("iphone")
        collector.populate("iphone", {"_id": "1"})

        assert collector.populate("iphone", {"_id": "2"}) is False
        assert labels(collector.suggestions) == ["iphone"]

    def test_promoted_bypasses_match_and_duplicate_checks(self) -> None:
        """Test that promoted sources are always accepted."""
        collector = SuggestionCollector("iphone")
        collector.populate("iphone", {"_id": "1"})
        collector.populate("iphone", {"_id": "2", "_promoted": True})
        collector.populate("galaxy", {"_id": "3", "_promoted": True})

        assert labels(collector.suggestions) == ["iphone", "iphone", "galaxy"]

    def test_suggestion_shape(self) -> None:
        """Test that label and value are the stringified value."""
        source = {"year": 2021}
        collector = SuggestionCollector("20")
        collector.populate(2021, source)

        suggestion = collector.suggestions[0]
        assert suggestion.label == "2021"
        assert suggestion.value == "2021"
        assert suggestion.source is source
        assert suggestion.to_dict() == {"label": "2021", "value": "2021", "source": source}


class TestFieldPathResolver:
    """Test suite for FieldPathResolver.parse_field."""

    def _resolve(self, document, field) -> list[str]:
        collector = SuggestionCollector("", show_distinct_suggestions=False)
        FieldPathResolver(collector).parse_field(document, field)
        return labels(collector.suggestions)

    def test_nested_array_of_objects(self) -> None:
        """Test resolution of a.b.c through an array of objects."""
        document = {"a": {"b": [{"c": "x"}, {"c": "y"}]}}

        assert self._resolve(document, "a.b.c") == ["x", "y"]

    def test_arrays_at_several_levels(self) -> None:
        """Test that every array element is followed at every segment."""
        document = {
            "authors": [
                {"books": [{"title": "one"}, {"title": "two"}]},
                {"books": {"title": "three"}},
            ]
        }

        assert self._resolve(document, "authors.books.title") == ["one", "two", "three"]

    def test_terminal_list_skips_objects_and_empty_values(self) -> None:
        """Test that only scalar list elements become candidates."""
        document = {"tags": ["a", None, {"x": 1}, ["b", ["c"]], ""]}

        assert self._resolve(document, "tags") == ["a", "b", "c"]

    def test_terminal_object_yields_nothing(self) -> None:
        """Test that objects at the terminal segment are discarded."""
        assert self._resolve({"meta": {"a": 1}}, "meta") == []

    @pytest.mark.parametrize(
        "document,field",
        [
            ({"a": "text"}, "a.b"),
            ({"count": 0}, "count"),
            ({"title": ""}, "title"),
            ({}, "title"),
            ("not a document", "title"),
            ({"title": "x"}, ""),
        ],
    )
    def test_unresolvable_paths_fail_silently(self, document, field) -> None:
        """Test that missing, falsy and non-object nodes yield no match."""
        collector = SuggestionCollector("")

        assert FieldPathResolver(collector).parse_field(document, field) is False
        assert collector.suggestions == []

    def test_source_defaults_to_document(self) -> None:
        """Test that nested matches report the top-level document."""
        document = {"a": {"b": "value"}}
        collector = SuggestionCollector("")
        FieldPathResolver(collector).parse_field(document, "a.b")

        assert collector.suggestions[0].source is document

    def test_distinct_mode_stops_inside_nested_arrays(self) -> None:
        """Test that distinct mode accepts one value across array elements."""
        document = {"variants": [{"name": "iphone red"}, {"name": "iphone blue"}]}
        collector = SuggestionCollector("iphone")

        assert FieldPathResolver(collector).parse_field(document, "variants.name") is True
        assert labels(collector.suggestions) == ["iphone red"]


class TestGetSuggestions:
    """Test suite for the two-pass get_suggestions strategy."""

    def test_distinct_mode_uses_first_matching_field(self) -> None:
        """Test that fields are tried in order and the first match wins."""
        documents = [{"title": "iphone 13", "brand": "iphone maker"}]

        assert labels(get_suggestions(["title", "brand"], documents, "iphone")) == [
            "iphone 13"
        ]
        assert labels(get_suggestions(["brand", "title"], documents, "iphone")) == [
            "iphone maker"
        ]

    def test_non_distinct_mode_collects_every_match(self) -> None:
        """Test that all fields and values contribute without distinct mode."""
        documents = [{"title": "iphone 13", "tags": ["iphone", "ios"], "brand": "apple"}]

        result = get_suggestions(["title", "tags", "brand"], documents, "iphone", False)

        assert labels(result) == ["iphone 13", "iphone"]

    def test_distinct_mode_skips_non_matching_first_field(self) -> None:
        """Test that a field without a match does not stop the search."""
        documents = [{"title": "Apple", "tags": ["ios", "iphone"]}]

        assert labels(get_suggestions(["title", "tags"], documents, "iphone")) == [
            "iphone"
        ]

    def test_duplicate_labels_across_documents(self) -> None:
        """Test that documents sharing a value produce one suggestion."""
        documents = [{"title": "iPhone 13"}, {"title": "iPhone 13"}]

        assert labels(get_suggestions(["title"], documents, "iphone")) == ["iPhone 13"]

    def test_promoted_duplicates_are_kept(self) -> None:
        """Test that promoted documents surface even with a used label."""
        documents = [{"title": "iPhone 13"}, {"title": "iPhone 13", "_promoted": True}]

        assert labels(get_suggestions(["title"], documents, "iphone")) == [
            "iPhone 13",
            "iPhone 13",
        ]

    def test_promoted_without_match(self) -> None:
        """Test that a promoted document needs no term match."""
        documents = [{"title": "iPhone 13"}, {"title": "Galaxy", "_promoted": True}]

        assert labels(get_suggestions(["title"], documents, "iphone")) == [
            "iPhone 13",
            "Galaxy",
        ]

    def test_synonym_fallback_recovers_all_documents(self, phone_documents) -> None:
        """Test that an undercounting first pass triggers a fresh second pass."""
        with patch.object(
            suggestions_module,
            "_traverse_suggestions",
            wraps=suggestions_module._traverse_suggestions,
        ) as traverse:
            result = get_suggestions(["title"], phone_documents, "iphone")

        assert traverse.call_count == 2
        assert labels(result) == [
            "iPhone 13",
            "iPhone SE",
            "Apple smartphone",
            "Apple flagship",
            "Apple mini",
        ]
        # Recomputed, not merged with the first pass
        assert len(set(labels(result))) == len(result)

    def test_no_fallback_when_first_pass_is_complete(self) -> None:
        """Test that a sufficient first pass is returned as is."""
        documents = [{"title": "iphone 13"}, {"title": "iphone se"}]
        with patch.object(
            suggestions_module,
            "_traverse_suggestions",
            wraps=suggestions_module._traverse_suggestions,
        ) as traverse:
            result = get_suggestions(["title"], documents, "iphone")

        assert traverse.call_count == 1
        assert labels(result) == ["iphone 13", "iphone se"]

    def test_fallback_respects_distinct_mode(self, phone_documents) -> None:
        """Test that the second pass still yields one suggestion per document."""
        result = get_suggestions(["title", "os"], phone_documents, "iphone")

        assert len(result) <= len(phone_documents)
        assert [s.source["_id"] for s in result] == ["1", "2", "3", "4", "5"]

    def test_distinct_cardinality(self) -> None:
        """Test that distinct mode never returns more than one per document."""
        documents = [
            {"title": "a1", "tags": ["a2", "a3"], "nested": [{"v": "a4"}, {"v": "a5"}]},
            {"title": "b1", "tags": ["a6"]},
            {"nested": [{"v": "a7"}, {"v": "a8"}]},
        ]

        result = get_suggestions(["title", "tags", "nested.v"], documents, "a")

        assert len(result) <= len(documents)
        assert labels(result) == ["a1", "a6", "a7"]

    def test_single_field_string(self) -> None:
        """Test that a bare field name is accepted."""
        assert labels(get_suggestions("title", [{"title": "x"}], "x")) == ["x"]

    @pytest.mark.parametrize("fields,documents", [(None, None), ([], []), (["t"], [])])
    def test_empty_inputs(self, fields, documents) -> None:
        """Test that empty inputs yield no suggestions."""
        assert get_suggestions(fields, documents, "x") == []

    def test_inputs_not_mutated(self, phone_documents) -> None:
        """Test that documents are left untouched."""
        snapshot = copy.deepcopy(phone_documents)

        get_suggestions(["title"], phone_documents, "iphone", False)

        assert phone_documents == snapshot

    def test_cyclic_document_raises(self) -> None:
        """Test that self-referencing list values surface as an error."""
        tags: list = ["iphone"]
        tags.append(tags)

        with pytest.raises(CyclicDocumentError):
            get_suggestions(["tags"], [{"tags": tags}], "iphone")

    def test_resolve_suggestions_alias(self) -> None:
        """Test that resolve_suggestions is the same operation."""
        assert resolve_suggestions is get_suggestions


class TestGetQuerySuggestions:
    """Test suite for query-suggestion index hits."""

    def test_reads_key_field_from_raw_hits(self) -> None:
        """Test that popular searches stored under key are suggested."""
        hits = [
            {"_id": "q1", "_source": {"key": "iphone case"}},
            {"_id": "q2", "_source": {"key": "iphone charger"}},
        ]

        result = get_query_suggestions(hits, "iphone")

        assert labels(result) == ["iphone case", "iphone charger"]
        assert result[0].source["_id"] == "q1"

    def test_no_hits(self) -> None:
        """Test that missing hits yield no suggestions."""
        assert get_query_suggestions(None, "iphone") == []
