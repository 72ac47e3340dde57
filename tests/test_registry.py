"""Tests for the markscope registry (markscope._registry).

Validates the builder → frozen registry → load_grammar pipeline.
"""

import pytest

from markscope import (
    MAX_DEPTH,
    MAX_ELEMENTS,
    MAX_PATTERN_LENGTH,
    InvalidConfigError,
    MatcherError,
    PatternTooLongError,
    Registry,
    RegistryBuilder,
    TagScope,
    TooManyElementsError,
    UnknownTypeUrlError,
    parse_grammar_config,
    to_value,
)
from markscope import html
from markscope.testing import leaf_texts, register


class TestRegistryBuilder:
    def test_builder_registers_and_freezes(self) -> None:
        builder = RegistryBuilder()
        builder.element("test.Div", lambda cfg: TagScope(name="^div$"))
        registry = builder.build()

        assert registry.element_count == 1
        assert registry.contains_element("test.Div")
        assert not registry.contains_element("test.Unknown")

    def test_register_helper(self) -> None:
        registry = register(RegistryBuilder()).build()
        assert registry.contains_element("markscope.test.v1.Literal")

    def test_introspection_type_urls(self) -> None:
        builder = RegistryBuilder()
        builder.element("b.Element", lambda cfg: TagScope())
        builder.element("a.Element", lambda cfg: TagScope())
        registry = builder.build()

        # Sorted alphabetically
        assert registry.element_type_urls() == ["a.Element", "b.Element"]

    def test_build_is_a_snapshot(self) -> None:
        builder = RegistryBuilder()
        registry = builder.build()
        builder.element("late.Element", lambda cfg: TagScope())
        assert registry.element_count == 0

    def test_empty_registry(self) -> None:
        assert Registry().element_count == 0


class TestLoadGrammar:
    def _make_registry(self) -> Registry:
        builder = RegistryBuilder()
        html.register(builder)
        register(builder)
        return builder.build()

    def test_builtin_elements(self) -> None:
        registry = self._make_registry()
        config = parse_grammar_config(
            {
                "elements": [
                    {"type": "builtin", "type_url": "markscope.html.v1.p"},
                    {"type": "builtin", "type_url": "markscope.html.v1.heading"},
                ]
            }
        )
        grammar = registry.load_grammar(config)
        outcomes = grammar.parse("<h2>a</h2><div>b</div>")
        assert outcomes[0].get("tag") == "h2"
        assert leaf_texts(outcomes) == ["a", "<div>b</div>"]

    def test_builtin_payload_narrows(self) -> None:
        registry = self._make_registry()
        config = parse_grammar_config(
            {
                "elements": [
                    {
                        "type": "builtin",
                        "type_url": "markscope.html.v1.div",
                        "config": {"classes": ["note"]},
                    }
                ]
            }
        )
        grammar = registry.load_grammar(config)
        outcomes = grammar.parse('<div>x</div><div class="note">y</div>')
        assert [o.raw for o in outcomes] == [True, False]

    def test_inline_element_with_attribute_rules(self) -> None:
        registry = self._make_registry()
        config = parse_grammar_config(
            {
                "elements": [
                    {
                        "type": "element",
                        "name": "^img$",
                        "standalone": True,
                        "attributes": [
                            {
                                "key": "width",
                                "value": {"type": "number", "kind": "integer", "positive": True},
                            }
                        ],
                    }
                ]
            }
        )
        grammar = registry.load_grammar(config)
        assert to_value(grammar.parse('<img width="10">'))[0]["attributes"] == {
            "width": "10"
        }
        assert leaf_texts(grammar.parse('<img width="x">')) == ['<img width="x">']

    def test_order_is_priority(self) -> None:
        registry = self._make_registry()
        config = parse_grammar_config(
            {
                "elements": [
                    {"type": "builtin", "type_url": "markscope.test.v1.Literal", "config": {"word": "<p>"}},
                    {"type": "builtin", "type_url": "markscope.html.v1.p"},
                ]
            }
        )
        outcomes = registry.load_grammar(config).parse("<p>x</p>")
        assert outcomes[0].get("word") == "<p>"

    def test_max_nesting_carried(self) -> None:
        registry = self._make_registry()
        config = parse_grammar_config({"elements": [], "max_nesting": 3})
        assert registry.load_grammar(config).max_nesting == 3


class TestLoadErrors:
    def _make_registry(self) -> Registry:
        return html.register(RegistryBuilder()).build()

    def test_unknown_type_url(self) -> None:
        config = parse_grammar_config(
            {"elements": [{"type": "builtin", "type_url": "markscope.html.v1.table"}]}
        )
        with pytest.raises(UnknownTypeUrlError, match="registered: markscope.html.v1.a") as exc:
            self._make_registry().load_grammar(config)
        assert exc.value.type_url == "markscope.html.v1.table"

    def test_unknown_type_url_empty_registry(self) -> None:
        config = parse_grammar_config({"elements": [{"type": "builtin", "type_url": "x"}]})
        with pytest.raises(UnknownTypeUrlError, match="no elements are registered"):
            Registry().load_grammar(config)

    def test_factory_rejects_payload(self) -> None:
        config = parse_grammar_config(
            {
                "elements": [
                    {"type": "builtin", "type_url": "markscope.html.v1.div", "config": {"colour": "red"}}
                ]
            }
        )
        with pytest.raises(InvalidConfigError, match="does not accept fields: colour"):
            self._make_registry().load_grammar(config)

    def test_factory_must_return_a_matcher(self) -> None:
        registry = RegistryBuilder().element("bad.Element", lambda cfg: "div").build()
        config = parse_grammar_config({"elements": [{"type": "builtin", "type_url": "bad.Element"}]})
        with pytest.raises(InvalidConfigError, match="returned str"):
            registry.load_grammar(config)

    def test_too_many_elements(self) -> None:
        config = parse_grammar_config(
            {"elements": [{"type": "element"}] * (MAX_ELEMENTS + 1)}
        )
        with pytest.raises(TooManyElementsError):
            self._make_registry().load_grammar(config)

    def test_max_elements_allowed(self) -> None:
        config = parse_grammar_config({"elements": [{"type": "element"}] * MAX_ELEMENTS})
        assert len(self._make_registry().load_grammar(config).matchers) == MAX_ELEMENTS

    def test_pattern_too_long(self) -> None:
        config = parse_grammar_config(
            {"elements": [{"type": "element", "name": "a" * (MAX_PATTERN_LENGTH + 1)}]}
        )
        with pytest.raises(PatternTooLongError):
            self._make_registry().load_grammar(config)

    def test_literal_too_long(self) -> None:
        value = {"type": "literal", "word": "a" * (MAX_PATTERN_LENGTH + 1)}
        config = parse_grammar_config(
            {"elements": [{"type": "element", "attributes": [{"key": "k", "value": value}]}]}
        )
        with pytest.raises(PatternTooLongError):
            self._make_registry().load_grammar(config)

    def test_invalid_name_pattern(self) -> None:
        config = parse_grammar_config({"elements": [{"type": "element", "name": "("}]})
        with pytest.raises(InvalidConfigError, match="invalid tag name pattern"):
            self._make_registry().load_grammar(config)

    def test_empty_literal(self) -> None:
        value = {"type": "literal", "word": ""}
        config = parse_grammar_config(
            {"elements": [{"type": "element", "attributes": [{"key": "k", "value": value}]}]}
        )
        with pytest.raises(InvalidConfigError, match="must not be empty"):
            self._make_registry().load_grammar(config)

    def test_depth_exceeded(self) -> None:
        value: dict = {"type": "literal", "word": "x"}
        for _ in range(MAX_DEPTH):
            value = {"type": "not", "matcher": value}
        config = parse_grammar_config(
            {"elements": [{"type": "element", "attributes": [{"key": "k", "value": value}]}]}
        )
        with pytest.raises(MatcherError, match="depth"):
            self._make_registry().load_grammar(config)

    def test_errors_are_matcher_errors(self) -> None:
        for error in (
            UnknownTypeUrlError,
            InvalidConfigError,
            TooManyElementsError,
            PatternTooLongError,
        ):
            assert issubclass(error, MatcherError)
