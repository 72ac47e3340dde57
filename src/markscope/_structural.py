"""Structural matchers: delimiter-balanced scopes and key/value properties.

Scope tracks nesting depth for repeated inner occurrences of its start
delimiter; Property extracts one ``key="value"`` or ``"key": "value"`` pair
and is built from Scope and the leaf matchers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from markscope._cursor import Slice
from markscope._leaf import identifier, literal, whitespace
from markscope._types import Outcome

if TYPE_CHECKING:
    from markscope._cursor import Cursor
    from markscope._types import Matcher

type PropertySyntax = Literal["attribute", "record", "any"]


@dataclass(frozen=True, slots=True)
class Scope:
    """Everything between a start match and its balancing end match.

    At each position the end matcher is tried first; failing that, the start
    matcher (an inner occurrence, one level deeper); failing both, one
    character is folded into the content. The scope closes when the depth
    returns to zero and fails if input runs out first.

    Plain scopes are purely structural. Characters listed in ``quotes``
    open a quoted run, closed by the same character, inside which the
    delimiters are not recognized.

    Reports the inner stretch as content and ``{"start": ..., "end": ...}``
    with the delimiter outcomes.
    """

    start: Matcher
    end: Matcher
    quotes: str = ""

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        opened = cursor.consume(self.start)
        if not opened.matched:
            return None

        inner_start = cursor.position
        depth = 1
        while not cursor.at_end:
            inner_end = cursor.position

            # Zero-width delimiter matches would never advance; ignore them.
            closed = cursor.consume(self.end)
            if closed.matched and closed.span:
                depth -= 1
                if depth == 0:
                    return Outcome(
                        self,
                        content=Slice(cursor.source, inner_start, inner_end),
                        properties={"start": opened.outcome, "end": closed.outcome},
                    )
                continue

            nested = cursor.consume(self.start)
            if nested.matched and nested.span:
                depth += 1
                continue

            char = cursor.peek()
            if char is not None and char in self.quotes:
                closing = cursor.find(char, 1)
                cursor.advance(closing + 1 if closing != -1 else 1)
            else:
                cursor.advance()

        return None


_WHITESPACE = whitespace()
_IDENTIFIER = identifier()
_EQUALS = literal("=")
_COLON = literal(":")
_QUOTED = Scope(literal('"'), literal('"'))


@dataclass(frozen=True, slots=True)
class Property:
    """A single key/value pair.

    - "attribute": ``key [ws] = [ws] "value"`` (markup attribute style)
    - "record": ``"key" [ws] : [ws] "value"`` (quoted key, record style)
    - "any": attribute style first, falling back to record style

    Leading whitespace is skipped. Reports ``{"key": ..., "value": ...}``.
    """

    syntax: PropertySyntax = "any"

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        match self.syntax:
            case "attribute":
                return self._detect_pair(cursor, _IDENTIFIER, _EQUALS)
            case "record":
                return self._detect_pair(cursor, _QUOTED, _COLON)
            case "any":
                for syntax in ("attribute", "record"):
                    found = cursor.consume(Property(syntax))
                    if found.matched:
                        return found.outcome
                return None
            case _:
                return None

    def _detect_pair(
        self, cursor: Cursor, key_matcher: Matcher, separator: Matcher
    ) -> Outcome | None:
        cursor.consume(_WHITESPACE)
        key = cursor.consume(key_matcher)
        if not key.matched or key.outcome is None:
            return None

        cursor.consume(_WHITESPACE)
        if not cursor.consume(separator).matched:
            return None

        cursor.consume(_WHITESPACE)
        value = cursor.consume(_QUOTED)
        if not value.matched or value.outcome is None:
            return None

        return Outcome(
            self,
            properties={"key": key.outcome.text, "value": value.outcome.text},
        )
