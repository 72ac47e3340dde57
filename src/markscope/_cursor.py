"""Cursor — speculative consumption over an immutable input buffer.

A Cursor is an offset into a string, bounded to a [start, end) window.
Forking is O(1) and a fork shares no mutable state with its parent, so
every speculative attempt runs on its own independent position:

    fork = cursor.fork()
    outcome = matcher.detect(fork)
    if outcome is not None:
        cursor.commit(fork)

``Cursor.consume()`` wraps exactly that sequence and is the single commit
point for all backtracking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from markscope._types import Matcher, Outcome


@dataclass(frozen=True, slots=True)
class Slice:
    """An immutable stretch of the backing input.

    ``str(slice)`` is its text. Slices of the same buffer can be turned back
    into a Cursor to re-scan the stretch in place.
    """

    source: str
    start: int
    end: int

    def __str__(self) -> str:
        return self.source[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def cursor(self) -> Cursor:
        """A fresh cursor bounded to this slice."""
        return Cursor(self.source, self.start, self.end)


@dataclass(frozen=True, slots=True)
class Consumed:
    """Result of Cursor.consume(): flag, consumed stretch, and outcome.

    On failure ``matched`` is False and both other fields are None.
    """

    matched: bool
    span: Slice | None = None
    outcome: Outcome | None = None

    @property
    def text(self) -> str | None:
        """The consumed characters, or None when nothing matched."""
        return None if self.span is None else str(self.span)


NO_MATCH = Consumed(matched=False)


class Cursor:
    """Mutable read position over an immutable string."""

    __slots__ = ("_end", "_pos", "_source")

    def __init__(self, source: str, start: int = 0, end: int | None = None) -> None:
        if end is None:
            end = len(source)
        if not 0 <= start <= end <= len(source):
            msg = f"invalid cursor bounds [{start}, {end}) for input of length {len(source)}"
            raise ValueError(msg)
        self._source = source
        self._pos = start
        self._end = end

    def __repr__(self) -> str:
        return f"Cursor({self.remaining!r})"

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> int:
        return self._pos

    @property
    def end(self) -> int:
        return self._end

    @property
    def at_end(self) -> bool:
        return self._pos >= self._end

    @property
    def remaining(self) -> str:
        """Unconsumed text (copies; meant for debugging and tests)."""
        return self._source[self._pos : self._end]

    def peek(self) -> str | None:
        """The next character, or None when exhausted."""
        if self._pos >= self._end:
            return None
        return self._source[self._pos]

    def startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos, self._end)

    def find(self, char: str, offset: int = 0) -> int:
        """Offset of the next ``char`` at or after ``offset``, or -1."""
        index = self._source.find(char, self._pos + offset, self._end)
        return -1 if index == -1 else index - self._pos

    def advance(self, count: int = 1) -> Slice:
        """Move forward by up to ``count`` characters, returning what was passed."""
        start = self._pos
        self._pos = min(self._pos + count, self._end)
        return Slice(self._source, start, self._pos)

    def since(self, start: int) -> Slice:
        """The stretch from ``start`` up to the current position."""
        return Slice(self._source, start, self._pos)

    def rest(self) -> Slice:
        """The unconsumed stretch, without consuming it."""
        return Slice(self._source, self._pos, self._end)

    def fork(self) -> Cursor:
        """An independent cursor at the same position and bounds."""
        return Cursor(self._source, self._pos, self._end)

    def commit(self, fork: Cursor) -> Slice:
        """Drain the characters a fork of this cursor has consumed.

        Raises:
            ValueError: If ``fork`` was not forked from this cursor's buffer
                and window, or lies behind the current position.
        """
        if (
            fork._source is not self._source
            or fork._end != self._end
            or fork._pos < self._pos
        ):
            msg = "can only commit a fork of this cursor that has moved forward"
            raise ValueError(msg)
        start = self._pos
        self._pos = fork._pos
        return Slice(self._source, start, self._pos)

    def consume(self, matcher: Matcher) -> Consumed:
        """Try ``matcher`` on a fork; commit it only on success.

        On failure this cursor is left untouched.
        """
        fork = self.fork()
        outcome = matcher.detect(fork)
        if outcome is None:
            return NO_MATCH
        return Consumed(matched=True, span=self.commit(fork), outcome=outcome)
