"""Built-in HTML element recognizers.

Each factory returns a TagScope for one element family. ``id`` and
``classes`` narrow the element further; everything else is fixed.

| Factory       | Name pattern  | Shape                              |
|---------------|---------------|------------------------------------|
| div()         | ``^div$``     | container                          |
| span()        | ``^span$``    | container, inner content allowed   |
| paragraph()   | ``^p$``       | container                          |
| heading()     | ``^h[1-6]$``  | container                          |
| link()        | ``^a$``       | container                          |
| image()       | ``^img$``     | standalone, self-closing allowed   |
"""

from __future__ import annotations

import functools
from collections.abc import Sequence

from markscope._tag_scope import TagScope
from markscope._tokenizer import Grammar


def div(*, id: str | None = None, classes: Sequence[str] | None = None) -> TagScope:
    return _container("^div$", id, classes)


def span(*, id: str | None = None, classes: Sequence[str] | None = None) -> TagScope:
    return _container("^span$", id, classes)


def paragraph(
    *, id: str | None = None, classes: Sequence[str] | None = None
) -> TagScope:
    return _container("^p$", id, classes)


def heading(*, id: str | None = None, classes: Sequence[str] | None = None) -> TagScope:
    """``<h1>`` through ``<h6>``; the level is the reported tag name."""
    return _container("^h[1-6]$", id, classes)


def link(*, id: str | None = None, classes: Sequence[str] | None = None) -> TagScope:
    return _container("^a$", id, classes)


def image(*, id: str | None = None, classes: Sequence[str] | None = None) -> TagScope:
    """A void element: ``<img src="a.png">`` and ``<img src="a.png"/>``."""
    return TagScope(
        name="^img$",
        id=id,
        classes=_classes(classes),
        standalone=True,
        allow_self_closing=True,
    )


def html_elements() -> list[TagScope]:
    """The built-in elements in match priority order."""
    return [div(), span(), paragraph(), heading(), link(), image()]


@functools.cache
def html_grammar() -> Grammar:
    """Grammar over the built-in elements (shared, immutable)."""
    return Grammar(matchers=tuple(html_elements()))


def _container(
    name: str, id: str | None, classes: Sequence[str] | None
) -> TagScope:
    return TagScope(
        name=name,
        id=id,
        classes=_classes(classes),
        allow_inner=True,
        standalone=False,
    )


def _classes(classes: Sequence[str] | None) -> tuple[str, ...] | None:
    return None if classes is None else tuple(classes)
