"""Node model for extracted subtrees.

An extraction produces ``Element`` nodes for matched tags and ``TextNode``
leaves for the trimmed text runs inside them. Everything else in the source
is discarded.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from selective_markup_filter.shared.positions import TokenPosition


@dataclass(frozen=True)
class TextNode:
    """A retained run of text, stripped of surrounding whitespace."""

    content: str

    def __post_init__(self) -> None:
        """Reject empty or whitespace-only content."""
        if not self.content or self.content != self.content.strip():
            raise ValueError("Text node content must be non-empty and trimmed")

    def __str__(self) -> str:
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "content": self.content}


@dataclass(eq=False)
class Element:
    """A matched tag and its filtered children, in document order."""

    name: str
    children: List["Node"] = field(default_factory=list)
    attributes: Dict[str, str] = field(default_factory=dict)
    self_closing: bool = False
    position: Optional[TokenPosition] = None

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        if self.self_closing and self.children:
            raise ValueError("Self-closing element cannot have children")

    def __eq__(self, other: object) -> bool:
        # Structural equality; position is informational
        if not isinstance(other, Element):
            return NotImplemented
        return (
            self.name == other.name
            and self.attributes == other.attributes
            and self.self_closing == other.self_closing
            and self.children == other.children
        )

    def __str__(self) -> str:
        return render(self)

    @property
    def text_content(self) -> str:
        """All retained text below this element, joined by single spaces."""
        return " ".join(
            node.content for node in self.iter() if isinstance(node, TextNode)
        )

    def iter(self) -> Iterator["Node"]:
        """Traverse depth-first, yielding self then descendants in document order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Element):
                stack.extend(reversed(node.children))

    def find_all(self, name: str) -> List["Element"]:
        """All descendant elements (self included) with the given name."""
        return [
            node for node in self.iter()
            if isinstance(node, Element) and node.name == name
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        result: Dict[str, Any] = {
            "type": "element",
            "name": self.name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }
        if self.self_closing:
            result["self_closing"] = True
        if self.position is not None:
            result["position"] = self.position.to_dict()
        return result


Node = Union[Element, TextNode]


def render(node: Node, self_closing_marker: bool = False) -> str:
    """Render a node as attribute-free markup for debugging and tests.

    Elements render as ``<name>`` + children + ``</name>``; text renders as its
    content without escaping. With ``self_closing_marker`` a self-closing
    element renders as ``<name/>``. The output is not meant for round-tripping.

    Examples:
        >>> render(Element("p", [TextNode("Foo"), Element("a", self_closing=True)]))
        '<p>Foo<a></a></p>'
        >>> render(Element("a", self_closing=True), self_closing_marker=True)
        '<a/>'
    """
    parts: List[str] = []
    _render_into(node, parts, self_closing_marker)
    return "".join(parts)


def _render_into(node: Node, parts: List[str], self_closing_marker: bool) -> None:
    # Explicit stack: trees may be as deep as the configured depth limit
    pending: List[Union[Node, str]] = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, TextNode):
            parts.append(item.content)
        elif self_closing_marker and item.self_closing:
            parts.append(f"<{item.name}/>")
        else:
            parts.append(f"<{item.name}>")
            pending.append(f"</{item.name}>")
            pending.extend(reversed(item.children))
