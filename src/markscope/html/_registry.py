"""HTML element registration for the markscope registry.

Registers the built-in elements so they can be referenced from config via
type_url lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from markscope.html._elements import div, heading, image, link, paragraph, span

if TYPE_CHECKING:
    from collections.abc import Callable

    from markscope._registry import RegistryBuilder
    from markscope._tag_scope import TagScope

_ELEMENTS: dict[str, Callable[..., TagScope]] = {
    "div": div,
    "span": span,
    "p": paragraph,
    "heading": heading,
    "a": link,
    "img": image,
}


def register(builder: RegistryBuilder) -> RegistryBuilder:
    """Register all built-in HTML elements.

    Type URLs follow the markscope namespace convention:
    - markscope.html.v1.div
    - markscope.html.v1.span
    - markscope.html.v1.p
    - markscope.html.v1.heading
    - markscope.html.v1.a
    - markscope.html.v1.img

    Config fields (all optional): { "id": "...", "classes": ["..."] }
    """
    for name, element in _ELEMENTS.items():
        builder.element(f"markscope.html.v1.{name}", _factory(name, element))
    return builder


def _factory(
    name: str, element: Callable[..., TagScope]
) -> Callable[[dict[str, Any]], TagScope]:
    def build(config: dict[str, Any]) -> TagScope:
        unknown = sorted(set(config) - {"id", "classes"})
        if unknown:
            msg = f"{name} element does not accept fields: {', '.join(unknown)}"
            raise ValueError(msg)

        element_id = config.get("id")
        if element_id is not None and not isinstance(element_id, str):
            msg = f"{name} element 'id' must be a string"
            raise ValueError(msg)

        classes = config.get("classes")
        if classes is not None and (
            not isinstance(classes, list)
            or not all(isinstance(c, str) for c in classes)
        ):
            msg = f"{name} element 'classes' must be a list of strings"
            raise ValueError(msg)

        return element(id=element_id, classes=classes)

    return build
