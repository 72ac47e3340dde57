"""Config types for data-driven grammar construction.

Config-driven grammar construction path:
  dict / YAML → parse_grammar_config() → GrammarConfig → Registry.load_grammar() → Grammar

Relationship to runtime types:

| Config type          | Runtime type            |
|----------------------|-------------------------|
| GrammarConfig        | Grammar                 |
| ElementConfig        | TagScope                |
| TypedConfig          | registered element      |
| AttributeRuleConfig  | AttributeRule           |
| LiteralConfig        | Word (literal mode)     |
| AlphabetConfig       | Word (alphabet mode)    |
| NumberConfig         | Number                  |
| LogicConfig          | AnyOf / AllOf / NoneOf  |
| NotConfig            | Not                     |

Example YAML::

    elements:
      - type: builtin
        type_url: markscope.html.v1.div
      - type: element
        name: "^note$"
        classes: [info]
        attributes:
          - key: level
            value: {type: number, kind: integer, positive: true}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

# ═══════════════════════════════════════════════════════════════════════════════
# Config types (frozen dataclasses)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered element with its configuration.

    - type_url identifies the registered element factory
    - config carries the factory-specific payload
    """

    type_url: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LiteralConfig:
    """Match an exact word."""

    word: str


@dataclass(frozen=True, slots=True)
class AlphabetConfig:
    """Match a run of characters from (or, inverted, outside) ``chars``."""

    chars: str
    inverted: bool = False


@dataclass(frozen=True, slots=True)
class NumberConfig:
    """Match a numeric literal."""

    kind: Literal["integer", "float"] | None = None
    positive: bool = False


@dataclass(frozen=True, slots=True)
class LogicConfig:
    """Combine child matchers: "any", "all", or "none"."""

    op: Literal["any", "all", "none"]
    matchers: tuple[ValueMatchConfig, ...]


@dataclass(frozen=True, slots=True)
class NotConfig:
    """Inverts the inner matcher."""

    matcher: ValueMatchConfig


type ValueMatchConfig = (
    LiteralConfig | AlphabetConfig | NumberConfig | LogicConfig | NotConfig
)


@dataclass(frozen=True, slots=True)
class AttributeRuleConfig:
    """A permitted attribute key with an optional value shape."""

    key: str
    value: ValueMatchConfig | None = None


@dataclass(frozen=True, slots=True)
class ElementConfig:
    """An inline element definition (compiles to a TagScope)."""

    name: str | None = None
    id: str | None = None
    classes: tuple[str, ...] | None = None
    allow_inner: bool = True
    standalone: bool = False
    allow_self_closing: bool = True
    attributes: tuple[AttributeRuleConfig, ...] | None = None


type ElementEntryConfig = ElementConfig | TypedConfig


@dataclass(frozen=True, slots=True)
class GrammarConfig:
    """Configuration for a Grammar: ordered element entries."""

    elements: tuple[ElementEntryConfig, ...]
    max_nesting: int | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_LOGIC_OPS = frozenset({"any", "all", "none"})
_NUMBER_KINDS = frozenset({"integer", "float"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def load_grammar_config(path: str | Path) -> GrammarConfig:
    """Read a YAML (or JSON) file and parse it into a GrammarConfig.

    Raises:
        ConfigParseError: If the file is not valid YAML or is malformed.
    """
    try:
        with Path(path).open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {path}: {e}"
        raise ConfigParseError(msg) from e
    return parse_grammar_config(data)


def parse_grammar_config(data: dict[str, Any]) -> GrammarConfig:
    """Parse a dict into a GrammarConfig.

    This is the main entry point for config loading.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_elements = data.get("elements")
    if raw_elements is None:
        msg = "missing required field 'elements'"
        raise ConfigParseError(msg)
    if not isinstance(raw_elements, list):
        msg = f"'elements' must be a list, got {type(raw_elements).__name__}"
        raise ConfigParseError(msg)

    elements = tuple(_parse_element(e) for e in raw_elements)

    max_nesting = data.get("max_nesting")
    if max_nesting is not None and (
        not isinstance(max_nesting, int) or isinstance(max_nesting, bool)
    ):
        msg = f"'max_nesting' must be an integer, got {type(max_nesting).__name__}"
        raise ConfigParseError(msg)

    return GrammarConfig(elements=elements, max_nesting=max_nesting)


def _parse_element(data: dict[str, Any]) -> ElementEntryConfig:
    """Parse an element entry dict.

    Uses 'type' discriminant: builtin or element.
    """
    if not isinstance(data, dict):
        msg = f"element must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    entry_type = data.get("type")
    if entry_type is None:
        msg = "element missing required field 'type'"
        raise ConfigParseError(msg)

    if entry_type == "builtin":
        return _parse_typed_config(data)
    if entry_type == "element":
        return ElementConfig(
            name=_optional(data, "name", str),
            id=_optional(data, "id", str),
            classes=_parse_classes(data.get("classes")),
            allow_inner=_flag(data, "allow_inner", default=True),
            standalone=_flag(data, "standalone", default=False),
            allow_self_closing=_flag(data, "allow_self_closing", default=True),
            attributes=_parse_attribute_rules(data.get("attributes")),
        )

    msg = f"unknown element type: {entry_type!r}"
    raise ConfigParseError(msg)


def _parse_classes(data: Any) -> tuple[str, ...] | None:
    if data is None:
        return None
    if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
        msg = "'classes' must be a list of strings"
        raise ConfigParseError(msg)
    return tuple(data)


def _parse_attribute_rules(data: Any) -> tuple[AttributeRuleConfig, ...] | None:
    if data is None:
        return None
    if not isinstance(data, list):
        msg = f"'attributes' must be a list, got {type(data).__name__}"
        raise ConfigParseError(msg)

    rules = []
    for rule in data:
        if not isinstance(rule, dict):
            msg = f"attribute rule must be a dict, got {type(rule).__name__}"
            raise ConfigParseError(msg)
        key = rule.get("key")
        if not isinstance(key, str) or not key:
            msg = "attribute rule requires a non-empty 'key' field"
            raise ConfigParseError(msg)
        value = _parse_value_match(rule["value"]) if "value" in rule else None
        rules.append(AttributeRuleConfig(key=key, value=value))
    return tuple(rules)


def _parse_value_match(data: dict[str, Any]) -> ValueMatchConfig:
    """Parse a value matcher dict.

    Uses 'type' discriminant: literal, alphabet, number, any, all, none, not.
    """
    if not isinstance(data, dict):
        msg = f"value matcher must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    match_type = data.get("type")
    if match_type is None:
        msg = "value matcher missing required field 'type'"
        raise ConfigParseError(msg)

    if match_type == "literal":
        return LiteralConfig(word=_required(data, "word", str))
    if match_type == "alphabet":
        return AlphabetConfig(
            chars=_required(data, "chars", str),
            inverted=_flag(data, "inverted", default=False),
        )
    if match_type == "number":
        kind = data.get("kind")
        if kind is not None and kind not in _NUMBER_KINDS:
            msg = f"number kind must be one of {sorted(_NUMBER_KINDS)}, got {kind!r}"
            raise ConfigParseError(msg)
        return NumberConfig(kind=kind, positive=_flag(data, "positive", default=False))
    if match_type in _LOGIC_OPS:
        children = data.get("matchers", [])
        if not isinstance(children, list):
            msg = f"'matchers' must be a list, got {type(children).__name__}"
            raise ConfigParseError(msg)
        return LogicConfig(
            op=match_type,
            matchers=tuple(_parse_value_match(c) for c in children),
        )
    if match_type == "not":
        if "matcher" not in data:
            msg = "not matcher missing required field 'matcher'"
            raise ConfigParseError(msg)
        return NotConfig(matcher=_parse_value_match(data["matcher"]))

    msg = f"unknown value matcher type: {match_type!r}"
    raise ConfigParseError(msg)


def _parse_typed_config(data: dict[str, Any]) -> TypedConfig:
    """Parse a builtin element reference."""
    if "type_url" not in data:
        msg = "builtin element missing required field 'type_url'"
        raise ConfigParseError(msg)

    type_url = data["type_url"]
    if not isinstance(type_url, str):
        msg = f"type_url must be a string, got {type(type_url).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(type_url=type_url, config=config)


def _required[T](data: dict[str, Any], key: str, kind: type[T]) -> T:
    if key not in data:
        msg = f"missing required field {key!r}"
        raise ConfigParseError(msg)
    value = data[key]
    if not isinstance(value, kind):
        msg = f"{key!r} must be a {kind.__name__}, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _optional[T](data: dict[str, Any], key: str, kind: type[T]) -> T | None:
    if data.get(key) is None:
        return None
    return _required(data, key, kind)


def _flag(data: dict[str, Any], key: str, *, default: bool) -> bool:
    if key not in data:
        return default
    return _required(data, key, bool)
