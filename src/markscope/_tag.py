"""Tag matcher — one ``<name attr="value">`` open, close, or self-close tag.

Tri-state constraints (None = either, True = must, False = must not):

| Field            | True requires                  |
|------------------|--------------------------------|
| has_attributes   | at least one attribute         |
| is_closing       | a leading ``/`` (``</name>``)  |
| is_self_closing  | a trailing ``/`` (``<name/>``) |
| is_opening       | no leading ``/``               |

A self-closing tag counts as opening. Closing tags never carry attributes
and are never self-closing. Constraints that contradict each other
(closing + opening, closing + self-closing) simply never match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from markscope._cursor import Cursor
from markscope._leaf import identifier, literal, whitespace
from markscope._structural import Property, Scope
from markscope._types import MatcherError, Outcome

if TYPE_CHECKING:
    from markscope._types import Matcher, Value

_WHITESPACE = whitespace()
_IDENTIFIER = identifier()
_ATTRIBUTE = Property("attribute")
# Quote-aware: a ">" inside an attribute value does not end the tag.
_BRACKETS = Scope(literal("<"), literal(">"), quotes='"')


@dataclass(frozen=True, slots=True)
class AttributeRule:
    """One permitted attribute key, with an optional value shape.

    When ``value`` is set it must consume the whole attribute value.
    """

    key: str
    value: Matcher | None = None

    def accepts(self, value: str) -> bool:
        if self.value is None:
            return True
        cursor = Cursor(value)
        return cursor.consume(self.value).matched and cursor.at_end


@dataclass(frozen=True, slots=True)
class Tag:
    """A single markup tag.

    ``name`` is a regular expression the whole tag name must match,
    compiled at construction via ``google-re2``. ``attributes``, when set,
    is an allow-list: every attribute must have a rule.

    Reports ``{"tag", "attributes", "closing", "self_closing", "opening"}``.

    Raises:
        MatcherError: If ``name`` is not valid RE2 syntax.
    """

    name: str | None = None
    has_attributes: bool | None = None
    is_closing: bool | None = None
    is_self_closing: bool | None = None
    is_opening: bool | None = None
    attributes: tuple[AttributeRule, ...] | None = None
    _pattern: re2.Pattern[str] | None = field(
        init=False, repr=False, compare=False, default=None
    )

    def __post_init__(self) -> None:
        if self.attributes is not None and not isinstance(self.attributes, tuple):
            object.__setattr__(self, "attributes", tuple(self.attributes))
        if self.name is None:
            return
        try:
            compiled = re2.compile(self.name)
        except re2.error as e:
            msg = f'invalid tag name pattern "{self.name}": {e}'
            raise MatcherError(msg) from e
        object.__setattr__(self, "_pattern", compiled)

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        if self.is_closing and (self.is_opening or self.is_self_closing):
            return None
        if not self._names_tag(cursor.fork()):
            return None

        bracket = cursor.consume(_BRACKETS)
        if bracket.outcome is None or bracket.outcome.content is None:
            return None
        inner = bracket.outcome.content.cursor()

        closing = inner.peek() == "/"
        if closing:
            if self.is_closing is False or self.is_opening:
                return None
            inner.advance()
        elif self.is_opening is False or self.is_closing:
            return None

        inner.consume(_WHITESPACE)
        name = inner.consume(_IDENTIFIER)
        if name.text is None:
            return None

        attributes: dict[str, Value] = {}
        while (found := inner.consume(_ATTRIBUTE)).outcome is not None:
            key = found.outcome.get("key")
            value = found.outcome.get("value")
            if not isinstance(key, str) or not isinstance(value, str):
                return None
            if key in attributes or not self._allows(key, value):
                return None
            attributes[key] = value

        if attributes:
            if self.has_attributes is False or closing:
                return None
        elif self.has_attributes:
            return None

        inner.consume(_WHITESPACE)
        self_closing = inner.peek() == "/"
        if self_closing:
            if self.is_self_closing is False or closing:
                return None
            inner.advance()
        elif self.is_self_closing:
            return None

        if not inner.at_end:
            return None

        return Outcome(
            self,
            properties={
                "tag": name.text,
                "attributes": attributes,
                "closing": closing,
                "self_closing": self_closing,
                "opening": not closing,
            },
        )

    def _names_tag(self, cursor: Cursor) -> bool:
        """Check ``<``, an optional ``/`` and the name, without finding the ``>``.

        Runs before the bracket scan, which walks to the end of the input
        on an unclosed ``<``.
        """
        if cursor.peek() != "<":
            return False
        cursor.advance()
        if cursor.peek() == "/":
            cursor.advance()
        cursor.consume(_WHITESPACE)
        name = cursor.consume(_IDENTIFIER)
        if name.text is None:
            return False
        return self._pattern is None or self._pattern.fullmatch(name.text) is not None

    def _allows(self, key: str, value: str) -> bool:
        if self.attributes is None:
            return True
        for rule in self.attributes:
            if rule.key == key:
                return rule.accepts(value)
        return False
