"""Type registry for config-driven grammar construction.

The registry turns a GrammarConfig (parsed from a dict or YAML file) into a
runtime Grammar without grammar-specific compile code:
- RegistryBuilder → .build() → Registry (immutable)
- Element factories are plain callables: (config: dict) → Matcher
- load_grammar() walks the config entries and constructs matchers

Example::

    builder = RegistryBuilder()
    markscope.html.register(builder)
    registry = builder.build()

    config = parse_grammar_config(yaml.safe_load(text))
    grammar = registry.load_grammar(config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from markscope._config import (
    AlphabetConfig,
    AttributeRuleConfig,
    ElementConfig,
    LiteralConfig,
    LogicConfig,
    NotConfig,
    NumberConfig,
    TypedConfig,
)
from markscope._leaf import Number, Word
from markscope._logic import AllOf, AnyOf, NoneOf, Not
from markscope._tag import AttributeRule
from markscope._tag_scope import TagScope
from markscope._tokenizer import MAX_NESTING_DEPTH, Grammar
from markscope._types import Detector, MatcherError

if TYPE_CHECKING:
    from collections.abc import Callable

    from markscope._config import ElementEntryConfig, GrammarConfig, ValueMatchConfig
    from markscope._types import Matcher

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_ELEMENTS = 256
MAX_PATTERN_LENGTH = 4096

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnknownTypeUrlError(MatcherError):
    """A type_url was not found in the registry."""

    def __init__(self, type_url: str, available: list[str]) -> None:
        self.type_url = type_url
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown element type_url: {type_url!r} (registered: {registered})"
        else:
            msg = f"unknown element type_url: {type_url!r} (no elements are registered)"
        super().__init__(msg)


class InvalidConfigError(MatcherError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyElementsError(MatcherError):
    """Grammar config lists too many elements (width-based limit)."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many elements: {count} exceeds maximum {max_}")


class PatternTooLongError(MatcherError):
    """A name pattern, word, or alphabet exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type ElementFactory = Callable[[dict[str, Any]], Matcher]


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register element factories with type URLs, then call build() to produce
    an immutable Registry. Registering a type URL twice keeps the last one.
    """

    def __init__(self) -> None:
        self._element_factories: dict[str, ElementFactory] = {}

    def element(self, type_url: str, factory: ElementFactory) -> RegistryBuilder:
        """Register an element factory with a type URL."""
        self._element_factories[type_url] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(
            _element_factories=MappingProxyType(dict(self._element_factories)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of element factories.

    Constructed via RegistryBuilder. Use load_grammar() to compile config
    into a runtime Grammar.
    """

    _element_factories: MappingProxyType[str, ElementFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_grammar(self, config: GrammarConfig) -> Grammar:
        """Load a Grammar from configuration.

        Entries keep their config order, which is their match priority.

        Raises:
            UnknownTypeUrlError: element type_url not registered
            InvalidConfigError: config payload malformed
            TooManyElementsError: too many elements
            PatternTooLongError: pattern exceeds length limit
            MatcherError: depth exceeded
        """
        if len(config.elements) > MAX_ELEMENTS:
            raise TooManyElementsError(len(config.elements), MAX_ELEMENTS)

        matchers = tuple(self._load_element(entry) for entry in config.elements)
        max_nesting = (
            MAX_NESTING_DEPTH if config.max_nesting is None else config.max_nesting
        )
        grammar = Grammar(matchers=matchers, max_nesting=max_nesting)
        logger.debug(
            "loaded grammar with %d elements (depth %d)", len(matchers), grammar.depth()
        )
        return grammar

    @property
    def element_count(self) -> int:
        """Number of registered element types."""
        return len(self._element_factories)

    def contains_element(self, type_url: str) -> bool:
        """Check if an element type URL is registered."""
        return type_url in self._element_factories

    def element_type_urls(self) -> list[str]:
        """Return all registered element type URLs (sorted)."""
        return sorted(self._element_factories.keys())

    # ── Private loading methods ────────────────────────────────────────────

    def _load_element(self, config: ElementEntryConfig) -> Matcher:
        match config:
            case TypedConfig(type_url=type_url, config=payload):
                return self._load_typed(type_url, payload)
            case ElementConfig():
                return _compile_element(config)
            case _:  # pragma: no cover
                msg = f"unknown element config type: {type(config).__name__}"
                raise InvalidConfigError(msg)

    def _load_typed(self, type_url: str, payload: dict[str, Any]) -> Matcher:
        factory = self._element_factories.get(type_url)
        if factory is None:
            raise UnknownTypeUrlError(type_url, list(self._element_factories.keys()))

        try:
            matcher = factory(payload)
        except Exception as e:
            raise InvalidConfigError(str(e)) from e

        if not isinstance(matcher, Detector):
            msg = f"factory for {type_url!r} returned {type(matcher).__name__}"
            raise InvalidConfigError(msg)
        return matcher


# ═══════════════════════════════════════════════════════════════════════════════
# Inline element compilation
# ═══════════════════════════════════════════════════════════════════════════════


def _check_pattern_length(value: str) -> None:
    if len(value) > MAX_PATTERN_LENGTH:
        raise PatternTooLongError(len(value), MAX_PATTERN_LENGTH)


def _compile_element(config: ElementConfig) -> TagScope:
    """Compile an inline element definition into a TagScope."""
    if config.name is not None:
        _check_pattern_length(config.name)

    attributes = None
    if config.attributes is not None:
        attributes = tuple(_compile_attribute_rule(r) for r in config.attributes)

    try:
        return TagScope(
            name=config.name,
            id=config.id,
            classes=config.classes,
            allow_inner=config.allow_inner,
            standalone=config.standalone,
            allow_self_closing=config.allow_self_closing,
            attributes=attributes,
        )
    except MatcherError as e:
        raise InvalidConfigError(str(e)) from e


def _compile_attribute_rule(config: AttributeRuleConfig) -> AttributeRule:
    value = None if config.value is None else _compile_value_match(config.value)
    return AttributeRule(key=config.key, value=value)


def _compile_value_match(config: ValueMatchConfig) -> Matcher:
    """Compile a value-shape config into a leaf or logical matcher."""
    match config:
        case LiteralConfig(word=word):
            _check_pattern_length(word)
            if not word:
                msg = "literal word must not be empty"
                raise InvalidConfigError(msg)
            return Word(word=word)
        case AlphabetConfig(chars=chars, inverted=inverted):
            _check_pattern_length(chars)
            if not chars:
                msg = "alphabet must not be empty"
                raise InvalidConfigError(msg)
            return Word(alphabet=frozenset(chars), inverted=inverted)
        case NumberConfig(kind=kind, positive=positive):
            return Number(kind=kind, positive=positive)
        case LogicConfig(op="any", matchers=children):
            return AnyOf(tuple(_compile_value_match(c) for c in children))
        case LogicConfig(op="all", matchers=children):
            return AllOf(tuple(_compile_value_match(c) for c in children))
        case LogicConfig(op="none", matchers=children):
            return NoneOf(tuple(_compile_value_match(c) for c in children))
        case NotConfig(matcher=inner):
            return Not(_compile_value_match(inner))
        case _:  # pragma: no cover
            msg = f"unknown value matcher config type: {type(config).__name__}"
            raise InvalidConfigError(msg)
