"""markscope.html — built-in HTML element recognizers.

Provides element factories for the supported tag families, the default
grammar built from them, and registry registration for config-driven
construction.
"""

from markscope.html._elements import (
    div,
    heading,
    html_elements,
    html_grammar,
    image,
    link,
    paragraph,
    span,
)
from markscope.html._registry import register

__all__ = [
    # Elements
    "div",
    "span",
    "paragraph",
    "heading",
    "link",
    "image",
    # Grammar
    "html_elements",
    "html_grammar",
    # Registry
    "register",
]
