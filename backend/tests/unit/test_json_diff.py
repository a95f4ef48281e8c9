"""Unit tests for the structural JSON diff."""

import pytest

from funding_advisor.domain.json_diff import UNDEFINED, JsonChange, canonical_scalar, diff, flatten


class TestFlatten:
    def test_root_scalar(self):
        assert flatten(5) == {"$": "5"}

    def test_nested_paths(self):
        flat = flatten({"a": {"b": [1, {"c": "x"}]}})
        assert flat == {"$.a.b[0]": "1", "$.a.b[1].c": '"x"'}

    def test_empty_containers_are_leaves(self):
        assert flatten({"a": [], "b": {}}) == {"$.a": "[]", "$.b": "{}"}
        assert flatten([]) == {"$": "[]"}
        assert flatten({}) == {"$": "{}"}

    def test_null_and_undefined(self):
        assert flatten(None) == {"$": "null"}
        assert flatten(UNDEFINED) == {"$": "undefined"}

    def test_integral_float_renders_like_int(self):
        assert canonical_scalar(12.0) == "12"
        assert canonical_scalar(12.5) == "12.5"

    def test_non_ascii_kept(self):
        assert canonical_scalar("Hämeenlinna") == '"Hämeenlinna"'

    def test_booleans(self):
        assert canonical_scalar(True) == "true"
        assert canonical_scalar(False) == "false"


class TestDiff:
    @pytest.mark.parametrize(
        "value",
        [
            None,
            0,
            "text",
            [],
            {},
            [1, [2, [3]]],
            {"a": {"b": [None, True, 1.5, "x"]}, "c": []},
        ],
    )
    def test_identical_values_have_no_changes(self, value):
        assert diff(value, value) == []

    def test_number_vs_string_differs(self):
        assert diff({"a": 1}, {"a": "1"}) == [JsonChange(path="$.a", from_value="1", to_value='"1"')]

    def test_int_and_integral_float_are_equal(self):
        assert diff({"a": 1}, {"a": 1.0}) == []

    def test_scalar_change(self):
        before = {"search_summary": "a", "recommended_investors": []}
        after = {"search_summary": "b", "recommended_investors": []}
        assert diff(before, after) == [
            JsonChange(path="$.search_summary", from_value='"a"', to_value='"b"')
        ]

    def test_removed_path_renders_undefined(self):
        changes = diff({"a": 1, "b": 2}, {"a": 1})
        assert changes == [JsonChange(path="$.b", from_value="2", to_value="undefined")]

    def test_added_path_renders_undefined(self):
        changes = diff({"a": 1}, {"a": 1, "b": None})
        assert changes == [JsonChange(path="$.b", from_value="undefined", to_value="null")]

    def test_emptying_a_list(self):
        changes = diff({"xs": [1, 2]}, {"xs": []})
        paths = {c.path: (c.from_value, c.to_value) for c in changes}
        assert paths == {
            "$.xs[0]": ("1", "undefined"),
            "$.xs[1]": ("2", "undefined"),
            "$.xs": ("undefined", "[]"),
        }

    def test_before_paths_come_first(self):
        changes = diff({"a": 1}, {"z": 1, "a": 2})
        assert [c.path for c in changes] == ["$.a", "$.z"]

    def test_array_item_edit(self):
        before = {"recommended_investors": [{"name": "A"}, {"name": "B"}]}
        after = {"recommended_investors": [{"name": "A"}, {"name": "C"}]}
        assert diff(before, after) == [
            JsonChange(path="$.recommended_investors[1].name", from_value='"B"', to_value='"C"')
        ]
