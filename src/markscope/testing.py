"""Test utilities for markscope.

Provides shortcuts for running matchers against plain strings and for
inspecting outcome trees. These exist to reduce boilerplate in tests and
examples; real callers work with Cursor and Grammar directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from markscope._cursor import Cursor
from markscope._leaf import Word

if TYPE_CHECKING:
    from markscope._cursor import Consumed
    from markscope._registry import RegistryBuilder
    from markscope._types import Matcher, Outcome


def detect(matcher: Matcher, text: str) -> Outcome | None:
    """Run ``matcher`` once at the start of ``text``.

    >>> from markscope import Number
    >>> from markscope.testing import detect
    >>> detect(Number(), "42px").get("value")
    42
    """
    return matcher.detect(Cursor(text))


def consume(matcher: Matcher, text: str) -> tuple[Consumed, str]:
    """Consume ``matcher`` at the start of ``text``.

    Returns the Consumed record and whatever input is left over.
    """
    cursor = Cursor(text)
    consumed = cursor.consume(matcher)
    return consumed, cursor.remaining


def source_of(outcomes: list[Outcome]) -> str:
    """Reassemble the input from the spans of a top-level outcome list."""
    return "".join("" if o.span is None else str(o.span) for o in outcomes)


def leaf_texts(outcomes: list[Outcome]) -> list[str]:
    """Texts of every raw leaf in the tree, in document order."""
    texts: list[str] = []
    stack = list(reversed(outcomes))
    while stack:
        outcome = stack.pop()
        if outcome.raw:
            texts.append(outcome.text)
        elif outcome.children:
            stack.extend(reversed(outcome.children))
    return texts


def register(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the test-domain literal element.

    Type URL: markscope.test.v1.Literal
    Config field: { "word": "text" }
    """
    return builder.element("markscope.test.v1.Literal", _literal_factory)


def _literal_factory(config: dict[str, Any]) -> Word:
    word = config.get("word")
    if not isinstance(word, str) or not word:
        msg = "Literal requires a non-empty 'word' field (string)"
        raise ValueError(msg)
    return Word(word=word)
