"""Selective tree building for markup token streams.

Key Components:
    SelectiveTreeBuilder: Locates matches and builds their filtered subtrees
    Element: A matched tag with its filtered children
    TextNode: A trimmed, non-empty text run
    render: Attribute-free debug rendering of a node
"""

from .builder import SelectiveTreeBuilder, TagNames, as_tag_set
from .nodes import Element, Node, TextNode, render

__all__ = [
    "Element",
    "Node",
    "SelectiveTreeBuilder",
    "TagNames",
    "TextNode",
    "as_tag_set",
    "render",
]
