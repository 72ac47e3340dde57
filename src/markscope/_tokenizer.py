"""Grammar and whole-document tokenizer.

consume_any() drives an ordered list of matchers over the input:
- Matchers are tried in order at each position (first-match-wins)
- Text no matcher recognizes is buffered and flushed as raw leaves
- Element bodies are re-tokenized into the element's children
- The parse never fails; anything unrecognized degrades to raw text

Nested bodies are expanded from an explicit work-list, so input nesting
depth never turns into Python call-stack depth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from markscope._cursor import Cursor, Slice
from markscope._logic import matcher_depth
from markscope._types import MatcherError, Outcome

if TYPE_CHECKING:
    from collections.abc import Sequence

    from markscope._types import Matcher

logger = logging.getLogger(__name__)

MAX_DEPTH = 32
MAX_NESTING_DEPTH = 256


@dataclass(frozen=True, slots=True)
class Grammar:
    """An ordered list of top-level matchers (priority = list order).

    Depth validation runs automatically at construction time.
    If a matcher tree exceeds MAX_DEPTH (32), MatcherError is raised.

    Bodies nested deeper than ``max_nesting`` are kept as a single raw
    leaf instead of being expanded.
    """

    matchers: tuple[Matcher, ...]
    max_nesting: int = MAX_NESTING_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.matchers, tuple):
            object.__setattr__(self, "matchers", tuple(self.matchers))
        self.validate()

    def parse(self, text: str) -> list[Outcome]:
        """Tokenize ``text`` into an ordered list of outcomes."""
        return consume_any(Cursor(text), self.matchers, max_nesting=self.max_nesting)

    def validate(self) -> None:
        """Validate matcher depth and nesting limit.

        Raises:
            MatcherError: If depth exceeds MAX_DEPTH or max_nesting < 0.
        """
        d = self.depth()
        if d > MAX_DEPTH:
            msg = f"matcher depth {d} exceeds maximum allowed depth {MAX_DEPTH}"
            raise MatcherError(msg)
        if self.max_nesting < 0:
            msg = f"max_nesting must be non-negative, got {self.max_nesting}"
            raise MatcherError(msg)

    def depth(self) -> int:
        """Calculate the deepest matcher tree in this grammar."""
        return max((matcher_depth(m) for m in self.matchers), default=0)


def consume_any(
    cursor: Cursor,
    matchers: Sequence[Matcher],
    *,
    max_nesting: int = MAX_NESTING_DEPTH,
) -> list[Outcome]:
    """Tokenize everything left in ``cursor``.

    Returns raw-text leaves interleaved with matcher outcomes, each element
    carrying its re-tokenized body as children. The cursor is exhausted
    afterwards.
    """
    root = _scan(cursor, matchers)
    pending: list[tuple[list[Outcome], int]] = [(root, 1)]
    while pending:
        level, depth = pending.pop()
        for index, outcome in enumerate(level):
            if outcome.raw or outcome.content is None:
                continue
            # Content filling the whole span is a leaf, not a body.
            if outcome.span is not None and len(outcome.content) >= len(outcome.span):
                level[index] = replace(outcome, children=[])
                continue
            if depth > max_nesting:
                logger.debug(
                    "nesting depth %d exceeds %d, keeping body at %d..%d raw",
                    depth,
                    max_nesting,
                    outcome.content.start,
                    outcome.content.end,
                )
                children = [Outcome.raw_text(outcome.content)] if outcome.content else []
            else:
                children = _scan(outcome.content.cursor(), matchers)
                pending.append((children, depth + 1))
            level[index] = replace(outcome, children=children)
    return root


def _scan(cursor: Cursor, matchers: Sequence[Matcher]) -> list[Outcome]:
    """One level of tokenizing: no body expansion."""
    results: list[Outcome] = []
    buffer_start = cursor.position
    while not cursor.at_end:
        hit = _first_match(cursor, matchers)
        if hit is None:
            cursor.advance()
            continue

        fork, outcome = hit
        if cursor.position > buffer_start:
            results.append(
                Outcome.raw_text(Slice(cursor.source, buffer_start, cursor.position))
            )
        span = cursor.commit(fork)
        logger.debug(
            "%s matched at %d..%d", type(outcome.matcher).__name__, span.start, span.end
        )
        results.append(replace(outcome, span=span))
        buffer_start = cursor.position

    if cursor.position > buffer_start:
        results.append(Outcome.raw_text(Slice(cursor.source, buffer_start, cursor.position)))
    return results


def _first_match(
    cursor: Cursor, matchers: Sequence[Matcher]
) -> tuple[Cursor, Outcome] | None:
    """First matcher to match here, with the fork holding its consumption.

    Zero-width matches do not count: every committed match must advance.
    """
    for matcher in matchers:
        fork = cursor.fork()
        outcome = matcher.detect(fork)
        if outcome is not None and fork.position > cursor.position:
            return fork, outcome
    return None


def parse(text: str, grammar: Grammar | None = None) -> list[Outcome]:
    """Parse ``text`` with ``grammar``, defaulting to the built-in HTML elements."""
    if grammar is None:
        from markscope.html import html_grammar

        grammar = html_grammar()
    return grammar.parse(text)
