"""Tests for outcome-tree serialization."""

import json

from markscope import Number, Scope, Slice, literal, parse, to_json, to_value
from markscope.testing import detect


class TestToValue:
    def test_element_tree(self) -> None:
        assert to_value(parse('<p class="x y">hi</p>')) == [
            {
                "tag": "p",
                "id": None,
                "classes": ["x", "y"],
                "style": None,
                "self_closing": False,
                "attributes": {"class": "x y"},
                "children": ["hi"],
            }
        ]

    def test_raw_leaf_is_text(self) -> None:
        assert to_value(parse("plain")) == ["plain"]

    def test_slice(self) -> None:
        assert to_value(Slice("abc", 1, 3)) == "bc"

    def test_number_outcome(self) -> None:
        assert to_value(detect(Number(), "7")) == {
            "kind": "integer",
            "value": 7,
            "children": [],
        }

    def test_nested_outcomes_in_properties(self) -> None:
        o = detect(Scope(literal("("), literal(")")), "(x)")
        value = to_value(o)
        assert value["start"] == {"word": "(", "children": []}
        assert value["end"] == {"word": ")", "children": []}

    def test_scalars_pass_through(self) -> None:
        assert to_value(None) is None
        assert to_value(True) is True
        assert to_value(1.5) == 1.5
        assert to_value((1, "a")) == [1, "a"]


class TestToJson:
    def test_matches_to_value(self) -> None:
        outcomes = parse("<div><span>a</span> b</div>")
        assert json.loads(to_json(outcomes)) == to_value(outcomes)

    def test_keeps_non_ascii(self) -> None:
        assert to_json(parse("héllo")) == '["héllo"]'

    def test_indent(self) -> None:
        assert to_json(parse("x"), indent=2) == '[\n  "x"\n]'
