"""Conformance fixture loader for markscope.

Loads YAML fixtures from tests/fixtures/ and parametrizes any test that
asks for a ``parse_case`` argument with one case per fixture entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class ParseCase:
    """A single input/expected-tree case from a parse fixture."""

    fixture_name: str
    case_name: str
    input: str
    expect: list[Any]


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_parse_fixtures() -> list[ParseCase]:
    """Load every parse fixture file (may contain multiple documents)."""
    cases: list[ParseCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_parse_file(yaml_file))
    return cases


def _load_parse_file(path: Path) -> list[ParseCase]:
    cases: list[ParseCase] = []
    with path.open(encoding="utf-8") as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                cases.append(
                    ParseCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        input=case["input"],
                        expect=case["expect"],
                    )
                )
    return cases


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    if "parse_case" in metafunc.fixturenames:
        cases = load_parse_fixtures()
        ids = [f"{c.fixture_name}::{c.case_name}" for c in cases]
        metafunc.parametrize("parse_case", cases, ids=ids)
