"""markscope — composable matchers for HTML-like markup.

All public types are exported from this module for flat imports:

    from markscope import Cursor, Tag, TagScope, parse
"""

__version__ = "0.1.0"

# Config types (see markscope._config)
from markscope._config import (
    AlphabetConfig,
    AttributeRuleConfig,
    ConfigParseError,
    ElementConfig,
    ElementEntryConfig,
    GrammarConfig,
    LiteralConfig,
    LogicConfig,
    NotConfig,
    NumberConfig,
    TypedConfig,
    ValueMatchConfig,
    load_grammar_config,
    parse_grammar_config,
)

# Cursor
from markscope._cursor import Consumed, Cursor, Slice

# Leaf matchers
from markscope._leaf import Number, Word, digits, identifier, literal, whitespace

# Logical combinators
from markscope._logic import AllOf, AnyOf, NoneOf, Not, all_of, any_of, matcher_depth

# Registry (see markscope._registry)
from markscope._registry import (
    MAX_ELEMENTS,
    MAX_PATTERN_LENGTH,
    InvalidConfigError,
    PatternTooLongError,
    Registry,
    RegistryBuilder,
    TooManyElementsError,
    UnknownTypeUrlError,
)

# Output
from markscope._serialize import to_json, to_value

# Structural matchers
from markscope._structural import Property, Scope

# Markup matchers
from markscope._tag import AttributeRule, Tag
from markscope._tag_scope import TagScope

# Tokenizer
from markscope._tokenizer import (
    MAX_DEPTH,
    MAX_NESTING_DEPTH,
    Grammar,
    consume_any,
    parse,
)

# Protocols
from markscope._types import Detector, Matcher, MatcherError, Outcome, Value

__all__ = [
    # Protocols
    "Detector",
    "Matcher",
    "MatcherError",
    "Outcome",
    "Value",
    # Cursor
    "Cursor",
    "Consumed",
    "Slice",
    # Leaf matchers
    "Word",
    "Number",
    "literal",
    "whitespace",
    "identifier",
    "digits",
    # Structural matchers
    "Scope",
    "Property",
    # Logical combinators
    "AnyOf",
    "AllOf",
    "NoneOf",
    "Not",
    "any_of",
    "all_of",
    "matcher_depth",
    # Markup matchers
    "Tag",
    "TagScope",
    "AttributeRule",
    # Tokenizer
    "Grammar",
    "consume_any",
    "parse",
    "MAX_DEPTH",
    "MAX_NESTING_DEPTH",
    # Output
    "to_value",
    "to_json",
    # Config types
    "GrammarConfig",
    "ElementConfig",
    "ElementEntryConfig",
    "TypedConfig",
    "AttributeRuleConfig",
    "LiteralConfig",
    "AlphabetConfig",
    "NumberConfig",
    "LogicConfig",
    "NotConfig",
    "ValueMatchConfig",
    "ConfigParseError",
    "parse_grammar_config",
    "load_grammar_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "UnknownTypeUrlError",
    "InvalidConfigError",
    "TooManyElementsError",
    "PatternTooLongError",
    "MAX_ELEMENTS",
    "MAX_PATTERN_LENGTH",
]
