"""Parse conformance tests for markscope.

Runs every case under tests/fixtures/ through the built-in HTML grammar
and compares the plain-value rendering of the outcome tree.

Run with: uv run pytest tests/test_conformance.py -v
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscope import parse, to_value
from markscope.testing import source_of

if TYPE_CHECKING:
    from conftest import ParseCase


def test_parse_tree(parse_case: ParseCase) -> None:
    assert to_value(parse(parse_case.input)) == parse_case.expect


def test_round_trip(parse_case: ParseCase) -> None:
    assert source_of(parse(parse_case.input)) == parse_case.input
