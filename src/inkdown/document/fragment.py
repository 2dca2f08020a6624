"""Document fragment model: text leaves, elements, points and selections.

The editor's live content is held as an explicit tree rather than a browser
DOM, so every editing operation can run (and be tested) without a rendering
surface. Parsing uses selectolax's lexbor backend; serialisation follows the
browser ``innerHTML`` rules so that a fragment round-trips through the
client unchanged.

Points use DOM range semantics: inside a text leaf the offset is a
character index, inside an element it is a child index.
"""

# Pattern: Functional Core (tree value type + pure helpers)

from __future__ import annotations

import html as html_module
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from selectolax.lexbor import LexborHTMLParser

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Parse in body context: the HTML parser drops leading whitespace before <body>.
_BODY_TEMPLATE = "<!DOCTYPE html><html><head></head><body>{}</body></html>"

# Elements serialised without a closing tag (HTML void elements)
VOID_TAGS = frozenset(
    (
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    )
)

# Elements that start a new visual line in a contenteditable surface
BLOCK_TAGS = frozenset(
    (
        "address",
        "article",
        "aside",
        "blockquote",
        "dd",
        "div",
        "dl",
        "dt",
        "figcaption",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    )
)


@dataclass(eq=False)
class TextNode:
    """A text leaf: literal character data, no children."""

    text: str = ""
    parent: ElementNode | None = field(default=None, repr=False)

    def text_content(self) -> str:
        return self.text

    def clone(self) -> TextNode:
        return TextNode(self.text)

    def serialize(self) -> str:
        escaped = html_module.escape(self.text, quote=False)
        return escaped.replace("\xa0", "&nbsp;")


@dataclass(eq=False)
class ElementNode:
    """An element: tag name, ordered attributes, ordered children."""

    tag: str
    attrs: list[tuple[str, str | None]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    parent: ElementNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    # -- child management -------------------------------------------------

    def index_of(self, child: Node) -> int:
        """Position of *child* among this element's children (by identity)."""
        for i, candidate in enumerate(self.children):
            if candidate is child:
                return i
        msg = f"{child!r} is not a child of <{self.tag}>"
        raise ValueError(msg)

    def insert_child(self, index: int, child: Node) -> Node:
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.insert(index, child)
        return child

    def append_child(self, child: Node) -> Node:
        return self.insert_child(len(self.children), child)

    def remove_child(self, child: Node) -> Node:
        del self.children[self.index_of(child)]
        child.parent = None
        return child

    def replace_child(self, old: Node, new_nodes: list[Node]) -> None:
        """Splice *new_nodes* into the position held by *old*."""
        index = self.index_of(old)
        self.remove_child(old)
        for offset, node in enumerate(new_nodes):
            self.insert_child(index + offset, node)

    # -- reading ------------------------------------------------------------

    def get(self, name: str) -> str | None:
        for attr_name, value in self.attrs:
            if attr_name == name:
                return value
        return None

    def text_content(self) -> str:
        return "".join(child.text_content() for child in self.children)

    def clone(self) -> ElementNode:
        """Deep copy of this element and its subtree (detached)."""
        return ElementNode(
            self.tag,
            list(self.attrs),
            [child.clone() for child in self.children],
        )

    def shallow_clone(self) -> ElementNode:
        return ElementNode(self.tag, list(self.attrs))

    # -- serialisation ------------------------------------------------------

    def inner_html(self) -> str:
        return "".join(child.serialize() for child in self.children)

    def serialize(self) -> str:
        attrs = "".join(
            f' {name}="{html_module.escape(value or "", quote=True)}"'
            for name, value in self.attrs
        )
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"


class Fragment(ElementNode):
    """Root container of an editing session's content.

    Serialises to its inner HTML only; it has no tag of its own.
    """

    def __init__(self, children: list[Node] | None = None) -> None:
        super().__init__(tag="#fragment", children=list(children or []))

    def __repr__(self) -> str:
        return f"Fragment({self.serialize()!r})"

    def serialize(self) -> str:
        return self.inner_html()

    def clone(self) -> Fragment:
        return Fragment([child.clone() for child in self.children])

    def shallow_clone(self) -> Fragment:
        return Fragment()


Node = TextNode | ElementNode


@dataclass(frozen=True, eq=False)
class Point:
    """A boundary point: ``(node, offset)`` with DOM range semantics."""

    node: Node
    offset: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.node is other.node and self.offset == other.offset

    def __hash__(self) -> int:
        return hash((id(self.node), self.offset))


@dataclass(frozen=True)
class Selection:
    """A pair of points; collapsed when both coincide."""

    start: Point
    end: Point

    @classmethod
    def caret(cls, point: Point) -> Selection:
        return cls(point, point)

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _convert(node: Any) -> Node | None:
    """Convert a selectolax node into a fragment node (None for comments)."""
    tag = node.tag
    if tag == "-text":
        return TextNode(node.text_content or "")
    if not tag or tag.startswith(("_", "-")):
        return None

    element = ElementNode(
        tag,
        [(name, value) for name, value in node.attributes.items()],
    )
    child = node.child
    while child is not None:
        converted = _convert(child)
        if converted is not None:
            element.append_child(converted)
        child = child.next
    return element


def parse_nodes(markup: str) -> list[Node]:
    """Parse a markup string into a list of detached top-level nodes."""
    if not markup:
        return []

    tree = LexborHTMLParser(_BODY_TEMPLATE.format(markup))
    body = tree.body
    if body is None:
        return [TextNode(markup)]

    nodes: list[Node] = []
    child = body.child
    while child is not None:
        converted = _convert(child)
        if converted is not None:
            nodes.append(converted)
        child = child.next
    return nodes


def parse_fragment(markup: str) -> Fragment:
    """Parse a markup string into a new Fragment."""
    return Fragment(parse_nodes(markup))


# ---------------------------------------------------------------------------
# Traversal and addressing
# ---------------------------------------------------------------------------


def iter_text_nodes(node: Node) -> Iterator[TextNode]:
    """Yield text leaves under *node* in document order."""
    if isinstance(node, TextNode):
        yield node
        return
    for child in list(node.children):
        yield from iter_text_nodes(child)


def root_of(node: Node) -> ElementNode:
    current: Node = node
    while current.parent is not None:
        current = current.parent
    if isinstance(current, TextNode):
        msg = "Detached text node has no root element"
        raise ValueError(msg)
    return current


def ancestors(node: Node) -> list[ElementNode]:
    """Ancestors of *node* from its parent up to the root."""
    chain: list[ElementNode] = []
    current = node.parent
    while current is not None:
        chain.append(current)
        current = current.parent
    return chain


def path_of(node: Node) -> tuple[int, ...]:
    """Child-index path from the root to *node*."""
    path: list[int] = []
    current = node
    while current.parent is not None:
        path.append(current.parent.index_of(current))
        current = current.parent
    return tuple(reversed(path))


def point_key(point: Point) -> tuple[int, ...]:
    """Sort key placing points in document order.

    A point inside an element at child index ``i`` sorts before anything
    inside that child, because the shorter tuple is a prefix.
    """
    return (*path_of(point.node), point.offset)


def point_is_valid(fragment: ElementNode, point: Point) -> bool:
    """True when *point* lies inside *fragment* with an in-range offset."""
    node = point.node
    if node is not fragment and fragment not in ancestors(node):
        return False
    limit = len(node.text) if isinstance(node, TextNode) else len(node.children)
    return 0 <= point.offset <= limit


def locate(
    fragment: ElementNode, path: list[int] | tuple[int, ...], offset: int
) -> Point | None:
    """Resolve a child-index path plus offset into a Point.

    Returns None when the path does not exist or the offset is out of
    range, so callers can treat a stale browser selection as "no selection".
    """
    node: Node = fragment
    for index in path:
        if isinstance(node, TextNode) or not 0 <= index < len(node.children):
            logger.debug("Path %s does not exist in fragment", list(path))
            return None
        node = node.children[index]

    point = Point(node, offset)
    if not point_is_valid(fragment, point):
        logger.debug("Offset %d out of range at path %s", offset, list(path))
        return None
    return point


def ordered(selection: Selection) -> Selection:
    """Return *selection* with its points in document order."""
    if point_key(selection.end) < point_key(selection.start):
        return Selection(selection.end, selection.start)
    return selection


def merge_text_leaves(root: ElementNode, point: Point | None = None) -> Point | None:
    """Merge adjacent text leaves and drop empty ones, in place.

    Mirrors DOM ``Node.normalize()``, which the browser effectively applies
    whenever serialised markup is assigned to ``innerHTML``. *point* is
    remapped onto the merged tree so it still addresses the same position.

    Returns:
        The remapped point, or None if *point* was None.
    """
    mapped = point

    def visit(element: ElementNode) -> None:
        nonlocal mapped
        old_children = list(element.children)
        kept: list[Node] = []
        run: TextNode | None = None

        for index, child in enumerate(old_children):
            if point is not None and point.node is element and point.offset == index:
                if run is not None and isinstance(child, TextNode):
                    mapped = Point(run, len(run.text))
                else:
                    mapped = Point(element, len(kept))

            if isinstance(child, TextNode):
                if point is not None and point.node is child:
                    if run is not None:
                        mapped = Point(run, len(run.text) + point.offset)
                    elif child.text:
                        mapped = point
                    else:
                        mapped = Point(element, len(kept))
                if not child.text:
                    child.parent = None
                    continue
                if run is None:
                    run = child
                    kept.append(child)
                else:
                    run.text += child.text
                    child.parent = None
                continue

            run = None
            kept.append(child)
            visit(child)

        if (
            point is not None
            and point.node is element
            and point.offset == len(old_children)
        ):
            mapped = Point(element, len(kept))
        element.children = kept

    visit(root)
    return mapped
