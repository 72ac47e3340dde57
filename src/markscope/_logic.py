"""Logical combinators — Boolean composition over sub-matchers.

AnyOf, AllOf, NoneOf and Not compose matchers. Every sub-matcher is tried
against its own fork of the same starting position; only AnyOf ever moves
the cursor, and only by its winning branch.

The Matcher union type is pattern-matchable via match/case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from markscope._leaf import Number, Word
from markscope._structural import Property, Scope
from markscope._tag import Tag
from markscope._tag_scope import TagScope
from markscope._types import Outcome

if TYPE_CHECKING:
    from markscope._cursor import Cursor
    from markscope._types import Matcher


@dataclass(frozen=True, slots=True)
class AnyOf:
    """First sub-matcher to match wins (logical OR).

    Sub-matchers are tried in order. Empty AnyOf never matches.
    """

    matchers: tuple[Matcher, ...]

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        for matcher in self.matchers:
            fork = cursor.fork()
            outcome = matcher.detect(fork)
            if outcome is not None:
                cursor.commit(fork)
                return outcome
        return None


@dataclass(frozen=True, slots=True)
class AllOf:
    """Every sub-matcher must match from the same position (logical AND).

    A simultaneous constraint, not a sequence: nothing is consumed, and the
    sub-outcomes are reported as children. Empty AllOf matches (vacuous
    truth).
    """

    matchers: tuple[Matcher, ...]

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        children: list[Outcome] = []
        for matcher in self.matchers:
            outcome = matcher.detect(cursor.fork())
            if outcome is None:
                return None
            children.append(outcome)
        return Outcome(self, children=children)


@dataclass(frozen=True, slots=True)
class NoneOf:
    """Matches, without consuming, when no sub-matcher matches."""

    matchers: tuple[Matcher, ...]

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        for matcher in self.matchers:
            if matcher.detect(cursor.fork()) is not None:
                return None
        return Outcome(self)


@dataclass(frozen=True, slots=True)
class Not:
    """Matches, without consuming, when the inner matcher fails."""

    matcher: Matcher

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        if self.matcher.detect(cursor.fork()) is not None:
            return None
        return Outcome(self)


def any_of(matchers: list[Matcher]) -> Matcher:
    """Compose matchers with OR semantics.

    - Single -> unwrapped (no wrapping overhead)
    - Otherwise -> AnyOf(matchers)
    """
    if len(matchers) == 1:
        return matchers[0]
    return AnyOf(tuple(matchers))


def all_of(matchers: list[Matcher]) -> Matcher:
    """Compose matchers with AND semantics.

    Symmetric with any_of. A single matcher is returned as-is, so the
    result then consumes like that matcher does.
    """
    if len(matchers) == 1:
        return matchers[0]
    return AllOf(tuple(matchers))


def matcher_depth(m: Matcher) -> int:
    """Calculate the nesting depth of a matcher tree."""
    match m:
        case Word() | Number() | Property():
            return 1
        case Scope(start=start, end=end):
            return 1 + max(matcher_depth(start), matcher_depth(end))
        case AnyOf(matchers=ms) | AllOf(matchers=ms) | NoneOf(matchers=ms):
            return 1 + max((matcher_depth(sub) for sub in ms), default=0)
        case Not(matcher=inner):
            return 1 + matcher_depth(inner)
        case Tag(attributes=rules):
            return 1 + _rules_depth(rules)
        case TagScope(attributes=rules):
            # The scope wraps a start Tag, which carries the rules.
            return 2 + _rules_depth(rules)
        case _:  # pragma: no cover
            return 0


def _rules_depth(rules: tuple | None) -> int:
    if not rules:
        return 0
    return max(
        (matcher_depth(rule.value) for rule in rules if rule.value is not None),
        default=0,
    )
