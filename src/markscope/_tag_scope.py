"""TagScope — a complete element: start tag, raw body, matching end tag.

The body is captured as a raw Slice and left for the tokenizer to expand,
so element bodies are re-tokenized rather than stored opaquely. Nesting of
the element's own name is balanced by a Scope whose delimiters are Tags
pinned to the exact name found in the start tag.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from markscope._leaf import whitespace
from markscope._structural import Scope
from markscope._tag import AttributeRule, Tag
from markscope._types import Outcome

if TYPE_CHECKING:
    from markscope._cursor import Cursor

_WHITESPACE = whitespace()


@dataclass(frozen=True, slots=True)
class TagScope:
    """An element recognizer.

    - ``name``: tag name pattern (RE2, whole-name match); None = any
    - ``id``: required ``id`` attribute value
    - ``classes``: classes that must all be present in ``class``
    - ``allow_inner``: when False, the body must be empty
    - ``standalone``: void element, no end tag (``<img src="a.png">``)
    - ``allow_self_closing``: accept the ``<name/>`` form
    - ``attributes``: attribute allow-list for the start tag

    Leading whitespace is skipped. Reports ``{"tag", "id", "classes",
    "style", "self_closing", "attributes"}``; ``classes`` is the
    whitespace-split ``class`` attribute.

    Raises:
        MatcherError: If ``name`` is not valid RE2 syntax.
    """

    name: str | None = None
    id: str | None = None
    classes: tuple[str, ...] | None = None
    allow_inner: bool = True
    standalone: bool = False
    allow_self_closing: bool = True
    attributes: tuple[AttributeRule, ...] | None = None
    _start: Tag = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.classes is not None and not isinstance(self.classes, tuple):
            object.__setattr__(self, "classes", tuple(self.classes))
        if self.attributes is not None and not isinstance(self.attributes, tuple):
            object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(
            self,
            "_start",
            Tag(name=self.name, is_closing=False, attributes=self.attributes),
        )

    def detect(self, cursor: Cursor, /) -> Outcome | None:
        cursor.consume(_WHITESPACE)

        # Peek at the start tag; it is only committed on the standalone path,
        # the body path re-reads it as the scope's opening delimiter.
        peek = cursor.fork()
        start = peek.consume(self._start).outcome
        if start is None:
            return None

        tag_name = start.get("tag")
        attributes = start.get("attributes")
        self_closing = start.get("self_closing") is True
        if not isinstance(tag_name, str) or not isinstance(attributes, dict):
            return None
        if self_closing and not self.allow_self_closing:
            return None

        class_attr = attributes.get("class")
        classes = class_attr.split() if isinstance(class_attr, str) else []
        element_id = attributes.get("id")
        if self.id is not None and self.id != element_id:
            return None
        if self.classes is not None and not all(c in classes for c in self.classes):
            return None

        properties = {
            "tag": tag_name,
            "id": element_id,
            "classes": classes,
            "style": attributes.get("style"),
            "self_closing": self_closing,
            "attributes": attributes,
        }

        if self_closing or self.standalone:
            cursor.commit(peek)
            return Outcome(self, properties=properties)

        body = cursor.consume(_body_scope(tag_name)).outcome
        if body is None or body.content is None:
            return None
        if not self.allow_inner and len(body.content) > 0:
            return None

        return Outcome(self, content=body.content, properties=properties)


@functools.lru_cache(maxsize=256)
def _body_scope(tag_name: str) -> Scope:
    """Scope balancing ``<tag_name ...>`` against ``</tag_name>``.

    Identifier runs hold no regex metacharacters, so the name doubles as
    its own exact pattern. Self-closing inner tags do not open a level.
    """
    return Scope(
        start=Tag(name=tag_name, is_closing=False, is_self_closing=False),
        end=Tag(name=tag_name, is_closing=True),
    )
