"""Tests for the string and array filter groups."""

from __future__ import annotations

import pytest

from jsonblade.filters import ARRAY_FILTERS, STRING_FILTERS


def apply(name: str, value, *args):
    group = STRING_FILTERS if name in STRING_FILTERS else ARRAY_FILTERS
    return group[name](value, *args)


class TestStringFilters:
    @pytest.mark.parametrize(
        ("name", "value", "expected"),
        [
            ("upper", "hello", "HELLO"),
            ("upper", 3, "3"),
            ("lower", "HeLLo", "hello"),
            ("capitalize", "john doe", "John doe"),
            ("capitalize", "", ""),
            ("trim", "  padded \n", "padded"),
            ("slug", "Hello World & More!", "hello-world-more"),
            ("slug", "  --Already_slugged--  ", "already-slugged"),
        ],
    )
    def test_transforms(self, name: str, value, expected) -> None:
        assert apply(name, value) == expected

    @pytest.mark.parametrize("name", ["upper", "lower", "capitalize", "trim", "slug"])
    def test_none_passes_through(self, name: str) -> None:
        assert apply(name, None) is None

    def test_capitalize_leaves_rest_untouched(self) -> None:
        assert apply("capitalize", "jOHN") == "JOHN"

    def test_default_replaces_missing_and_empty(self) -> None:
        assert apply("default", None, "N/A") == "N/A"
        assert apply("default", "", "N/A") == "N/A"
        assert apply("default", None) == ""

    def test_default_keeps_falsy_values(self) -> None:
        assert apply("default", 0, "N/A") == 0
        assert apply("default", False, "N/A") is False


class TestJoinAndLength:
    def test_join_default_separator(self) -> None:
        assert apply("join", ["a", "b", "c"]) == "a,b,c"

    def test_join_custom_separator(self) -> None:
        assert apply("join", ["a", "b"], " - ") == "a - b"

    def test_join_stringifies_items(self) -> None:
        assert apply("join", [1, None, True, 2.0]) == "1,,true,2"

    def test_join_non_array(self) -> None:
        assert apply("join", "plain") == "plain"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [([1, 2, 3], 3), ("abcd", 4), ({"a": 1}, 1), (None, 0), (42, 0), ([], 0)],
    )
    def test_length(self, value, expected: int) -> None:
        assert apply("length", value) == expected


class TestElementAccess:
    def test_first_last(self) -> None:
        assert apply("first", [1, 2, 3]) == 1
        assert apply("last", [1, 2, 3]) == 3

    def test_first_last_of_empty(self) -> None:
        assert apply("first", []) is None
        assert apply("last", []) is None

    def test_first_last_of_string(self) -> None:
        assert apply("first", "abc") == "a"
        assert apply("last", "abc") == "c"

    def test_first_of_scalar(self) -> None:
        assert apply("first", 7) is None


class TestMapAndFilter:
    def test_map_projects_property(self, users) -> None:
        assert apply("map", users, "name") == ["Alice", "Bob", "Carol"]

    def test_map_missing_property(self) -> None:
        assert apply("map", [{"a": 1}, {}], "a") == [1, None]

    def test_map_non_object_items_pass_through(self) -> None:
        assert apply("map", [{"a": 1}, 5], "a") == [1, 5]

    def test_filter_by_numeric_string(self, users) -> None:
        assert apply("filter", users, "age", "25") == [users[0]]

    def test_filter_by_boolean_string(self, users) -> None:
        assert apply("filter", users, "active", "true") == [users[0], users[2]]
        assert apply("filter", users, "active", "false") == [users[1]]

    def test_filter_by_string(self, users) -> None:
        assert apply("filter", users, "name", "Bob") == [users[1]]

    def test_filter_scalars_by_value(self) -> None:
        assert apply("filter", ["a", "b", "a"], "a") == ["a", "a"]

    def test_filter_without_property_returns_input(self, users) -> None:
        assert apply("filter", users) == users

    def test_filter_non_array(self) -> None:
        assert apply("filter", "text", "a") == "text"


class TestOrdering:
    def test_reverse(self) -> None:
        original = [1, 2, 3]
        assert apply("reverse", original) == [3, 2, 1]
        assert original == [1, 2, 3]

    def test_reverse_string(self) -> None:
        assert apply("reverse", "abc") == "cba"

    def test_sort_is_lexical_by_default(self) -> None:
        assert apply("sort", [3, 1, 10]) == [1, 10, 3]

    def test_sort_puts_null_last(self) -> None:
        assert apply("sort", ["b", None, "a"]) == ["a", "b", None]

    def test_sort_by_property(self, users) -> None:
        assert [u["name"] for u in apply("sort", users, "age")] == ["Carol", "Alice", "Bob"]

    def test_sort_by_property_keeps_equal_items_in_order(self) -> None:
        items = [{"k": 1, "id": "a"}, {"k": 0, "id": "b"}, {"k": 1, "id": "c"}]
        assert [i["id"] for i in apply("sort", items, "k")] == ["b", "a", "c"]

    def test_unique_preserves_first_occurrence(self) -> None:
        assert apply("unique", [1, 2, 1, "1", 2]) == [1, 2, "1"]

    def test_unique_objects_compare_by_identity(self) -> None:
        shared = {"a": 1}
        assert apply("unique", [shared, shared, {"a": 1}]) == [shared, {"a": 1}]
