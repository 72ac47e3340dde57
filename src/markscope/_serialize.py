"""Outcome trees → plain Python values and JSON.

| Value            | Python          |
|------------------|-----------------|
| raw leaf         | its text        |
| element outcome  | dict of properties plus "children" list |
| Slice            | str             |
| mapping          | dict            |
| list / tuple     | list            |
| str, number, bool, None | as-is    |
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from markscope._cursor import Slice
from markscope._types import Outcome


def to_value(value: Any) -> Any:
    """Convert an outcome list (or any Value) to JSON-compatible values."""
    match value:
        case Outcome(matcher=None):
            return value.text
        case Outcome(properties=properties, children=children):
            result = {key: to_value(v) for key, v in (properties or {}).items()}
            result["children"] = [to_value(child) for child in children or ()]
            return result
        case Slice():
            return str(value)
        case Mapping():
            return {str(key): to_value(v) for key, v in value.items()}
        case list() | tuple():
            return [to_value(v) for v in value]
        case _:
            return value


def to_json(outcomes: list[Outcome], *, indent: int | None = None) -> str:
    """Serialize an outcome list as a JSON array."""
    return json.dumps(to_value(outcomes), indent=indent, ensure_ascii=False)
