"""Leaf matchers: literal words, alphabet runs, and numeric literals.

Each matcher is a frozen dataclass, immutable after construction.
All matchers return None when the input at the cursor does not fit their
pattern. They advance the cursor they are handed; callers only ever hand
them a fork (see Cursor.consume).
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from markscope._types import Outcome

if TYPE_CHECKING:
    from markscope._cursor import Cursor

WHITESPACE = frozenset(" \n\t\r")
IDENTIFIER = frozenset(string.ascii_letters + string.digits + "_-")
DIGITS = frozenset(string.digits)

type NumberKind = Literal["integer", "float"]


@dataclass(frozen=True, slots=True)
class Word:
    """A literal word, or a run of characters drawn from an alphabet.

    Exactly one of ``word`` and ``alphabet`` should be set; a Word with
    both or neither never matches.

    Literal mode consumes ``word`` exactly and reports it as the ``word``
    property. Alphabet mode greedily consumes characters in ``alphabet``
    (or, when ``inverted``, characters not in it) and reports the run as
    content. A zero-length run is a non-match.
    """

    word: str | None = None
    alphabet: frozenset[str] | None = None
    inverted: bool = False

    def __post_init__(self) -> None:
        if self.alphabet is not None and not isinstance(self.alphabet, frozenset):
            object.__setattr__(self, "alphabet", frozenset(self.alphabet))

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        match (self.word, self.alphabet):
            case (str() as word, None):
                if not cursor.startswith(word):
                    return None
                cursor.advance(len(word))
                return Outcome(self, properties={"word": word})
            case (None, frozenset() as alphabet):
                start = cursor.position
                while (char := cursor.peek()) is not None:
                    if (char in alphabet) == self.inverted:
                        break
                    cursor.advance()
                if cursor.position == start:
                    return None
                return Outcome(self, content=cursor.since(start))
            case _:
                return None


@dataclass(frozen=True, slots=True)
class Number:
    """A decimal numeric literal with an optional leading minus sign.

    ``kind`` pins the grammar: "integer" stops at a decimal point, "float"
    accepts at most one. Left unset, the kind is inferred from whether a
    point was seen; a second point ends the literal without failing.
    ``positive`` rejects a leading sign outright.

    Reports ``{"kind": ..., "value": ...}``. At least one digit is required.
    """

    kind: NumberKind | None = None
    positive: bool = False

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        start = cursor.position
        negative = cursor.peek() == "-"
        if negative:
            if self.positive:
                return None
            cursor.advance()

        value = 0
        seen_digit = False
        seen_point = False
        while (char := cursor.peek()) is not None:
            if char in DIGITS:
                value = value * 10 + ord(char) - ord("0")
                seen_digit = True
            elif char == "." and self.kind != "integer" and not seen_point:
                seen_point = True
            else:
                break
            cursor.advance()

        if not seen_digit:
            return None

        kind: NumberKind = self.kind or ("float" if seen_point else "integer")
        number: int | float
        if kind == "integer":
            number = -value if negative else value
        else:
            # Saturates to inf on huge literals.
            number = float(str(cursor.since(start)))
        return Outcome(self, properties={"kind": kind, "value": number})


def literal(word: str) -> Word:
    """Match ``word`` exactly."""
    return Word(word=word)


def whitespace() -> Word:
    """Match a run of spaces, tabs, and line breaks."""
    return Word(alphabet=WHITESPACE)


def identifier() -> Word:
    """Match a run of ASCII letters, digits, ``_`` and ``-``."""
    return Word(alphabet=IDENTIFIER)


def digits() -> Word:
    """Match a run of ASCII digits."""
    return Word(alphabet=DIGITS)
