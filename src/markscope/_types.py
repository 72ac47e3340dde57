"""Core protocols and type aliases for markscope.

The type system mirrors the matcher architecture:
- Value is the tagged union every extracted piece of data lives in
- Outcome is what a successful detection returns
- Detector is the single matching port every matcher kind implements
- Matcher is the closed union of concrete matcher kinds
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from markscope._cursor import Cursor, Slice
    from markscope._leaf import Number, Word
    from markscope._logic import AllOf, AnyOf, NoneOf, Not
    from markscope._structural import Property, Scope
    from markscope._tag import Tag
    from markscope._tag_scope import TagScope


class MatcherError(Exception):
    """Errors from matcher construction and validation.

    Never raised while matching: a failed detection is always ``None``.
    """


# None maps to the absent value; Slice is an unconsumed stretch of input.
type Value = (
    None
    | str
    | bool
    | int
    | float
    | dict[str, Value]
    | list[Value]
    | Outcome
    | Slice
)

# Closed set of matcher kinds. Adding a kind means touching every
# match/case walk over this union (matcher_depth, the registry loader).
type Matcher = (
    Word | Number | Scope | Property | AnyOf | AllOf | NoneOf | Not | Tag | TagScope
)


@runtime_checkable
class Detector(Protocol):
    """Attempt a match at the cursor's current position.

    Implementations advance the cursor they are handed and return an
    Outcome, or return None for "no match". They are only ever handed a
    fork, so leaving the cursor half-advanced on failure is harmless.
    """

    def detect(self, cursor: Cursor, /) -> Outcome | None: ...


@dataclass(frozen=True, slots=True)
class Outcome:
    """The result of one successful detection.

    ``matcher`` is the matcher that produced it, or None for a raw-text
    leaf synthesized by the tokenizer. Content and children are filled by
    different matcher kinds and need not both be present. ``span`` is the
    stretch of input the tokenizer committed for this node.
    """

    matcher: Matcher | None
    content: Slice | None = None
    properties: Mapping[str, Value] | None = None
    children: list[Outcome] | None = None
    span: Slice | None = None

    def __post_init__(self) -> None:
        if self.properties is not None and not isinstance(
            self.properties, MappingProxyType
        ):
            object.__setattr__(
                self, "properties", MappingProxyType(dict(self.properties))
            )

    @classmethod
    def raw_text(cls, text: Slice) -> Outcome:
        """A raw leaf wrapping literal text no matcher recognized."""
        return cls(matcher=None, content=text, span=text)

    @property
    def raw(self) -> bool:
        return self.matcher is None

    @property
    def text(self) -> str:
        """Content as a string (empty when there is none)."""
        return "" if self.content is None else str(self.content)

    def get(self, key: str) -> Value:
        """Look up a property, returning None when absent."""
        if self.properties is None:
            return None
        return self.properties.get(key)
