"""Symbol wrapper: surround a selection (or the cursor) with a delimiter pair.

Operations mutate the fragment in place and return it together with the
new cursor position. A missing or foreign selection is a no-op: the
fragment comes back unchanged and the cursor is None.

Range deletion follows DOM ``Range.deleteContents``: the tree is split
along both boundary paths up to the deepest element containing both
points, so partially selected containers keep their unselected halves,
and the whole nodes between the two boundaries are removed.
"""

# Pattern: Functional Core (explicit fragment + selection in, fragment + cursor out)

from __future__ import annotations

import logging

from inkdown.document.delimiters import InlineStyle, delimiter_for
from inkdown.document.fragment import (
    BLOCK_TAGS,
    VOID_TAGS,
    ElementNode,
    Fragment,
    Node,
    Point,
    Selection,
    TextNode,
    ancestors,
    ordered,
    path_of,
    point_is_valid,
    point_key,
)

logger = logging.getLogger(__name__)

EditResult = tuple[Fragment, Point | None]


def _checked(fragment: Fragment, selection: Selection | None) -> Selection | None:
    """Return the selection in document order, or None if unusable."""
    if selection is None:
        logger.debug("No active selection; nothing to do")
        return None
    if not (
        point_is_valid(fragment, selection.start)
        and point_is_valid(fragment, selection.end)
    ):
        logger.debug("Selection is not inside the fragment; ignoring")
        return None
    return ordered(selection)


# ---------------------------------------------------------------------------
# Plain-text flattening of a selection
# ---------------------------------------------------------------------------


def _text_portion(leaf: TextNode, selection: Selection) -> str:
    """The part of *leaf*'s text that falls inside *selection*."""
    path = path_of(leaf)
    low, high = 0, len(leaf.text)

    if selection.start.node is leaf:
        low = selection.start.offset
    elif point_key(selection.start) > (*path, 0):
        return ""

    if selection.end.node is leaf:
        high = selection.end.offset
    elif point_key(selection.end) < (*path, len(leaf.text)):
        return ""

    return leaf.text[low:high]


def _br_selected(br: ElementNode, selection: Selection) -> bool:
    path = path_of(br)
    after = (*path[:-1], path[-1] + 1)
    return point_key(selection.start) <= path and after <= point_key(selection.end)


def selected_lines(fragment: Fragment, selection: Selection) -> list[str]:
    """Flatten the selected content into plain-text lines.

    Line boundaries are block elements, ``<br>`` and literal newlines in a
    text leaf. Inline elements contribute their text only.
    """
    selection = ordered(selection)
    lines: list[str] = []
    buffer: list[str] = []
    line_open = False

    def flush() -> None:
        nonlocal line_open
        lines.append("".join(buffer))
        buffer.clear()
        line_open = False

    def visit(node: Node) -> None:
        nonlocal line_open
        if isinstance(node, TextNode):
            portion = _text_portion(node, selection)
            if not portion:
                return
            for i, part in enumerate(portion.split("\n")):
                if i:
                    flush()
                buffer.append(part)
            line_open = True
            return

        if node.tag == "br":
            if _br_selected(node, selection):
                flush()
            return

        is_block = node.tag in BLOCK_TAGS
        if is_block and line_open:
            flush()
        for child in node.children:
            visit(child)
        if is_block and line_open:
            flush()

    for child in fragment.children:
        visit(child)
    if line_open:
        flush()
    return lines


# ---------------------------------------------------------------------------
# Tree surgery
# ---------------------------------------------------------------------------


def _containers(node: Node) -> list[ElementNode]:
    """Elements containing *node*, innermost first (an element contains itself)."""
    own = [node] if isinstance(node, ElementNode) else []
    return own + ancestors(node)


def _common_container(first: Node, second: Node) -> ElementNode:
    """Deepest element containing both nodes."""
    second_ids = {id(node) for node in _containers(second)}
    for candidate in _containers(first):
        if id(candidate) in second_ids:
            return candidate
    msg = "Nodes do not share a root"
    raise ValueError(msg)


def _split_node(node: Node, offset: int) -> Node:
    """Cut *node* at *offset*, returning the detached second half."""
    if isinstance(node, TextNode):
        tail = TextNode(node.text[offset:])
        node.text = node.text[:offset]
        return tail

    tail_element = node.shallow_clone()
    for child in node.children[offset:]:
        tail_element.append_child(child)
    return tail_element


def _split_up_to(container: ElementNode, point: Point) -> int:
    """Split the tree so *point* becomes a child boundary of *container*.

    Returns the child index in *container* the point now corresponds to.
    No empty halves are created: a point at the very start or end of a
    node maps to the boundary before or after it.
    """
    node, offset = point.node, point.offset
    while node is not container:
        parent = node.parent
        if parent is None:
            msg = "Point is not inside the container"
            raise ValueError(msg)
        index = parent.index_of(node)
        size = len(node.text) if isinstance(node, TextNode) else len(node.children)
        if offset <= 0:
            boundary = index
        elif offset >= size:
            boundary = index + 1
        else:
            parent.insert_child(index + 1, _split_node(node, offset))
            boundary = index + 1
        node, offset = parent, boundary
    return offset


def _delete_contents(selection: Selection) -> tuple[ElementNode, int]:
    """Remove the selected content; return where it used to be."""
    container = _common_container(selection.start.node, selection.end.node)

    # End first: splitting there never moves the start point.
    end_index = _split_up_to(container, selection.end)
    end_marker = (
        container.children[end_index] if end_index < len(container.children) else None
    )
    start_index = _split_up_to(container, selection.start)
    end_index = (
        container.index_of(end_marker)
        if end_marker is not None
        else len(container.children)
    )

    for node in container.children[start_index:end_index]:
        container.remove_child(node)
    return container, start_index


def _insert_leaf(point: Point, text: str) -> TextNode:
    """Insert *text* as a new text leaf at a collapsed point."""
    leaf = TextNode(text)
    node, offset = point.node, point.offset

    if isinstance(node, TextNode) or node.tag in VOID_TAGS:
        parent = node.parent
        if parent is None:
            msg = "Cannot insert next to a detached node"
            raise ValueError(msg)
        index = parent.index_of(node)
        size = len(node.text) if isinstance(node, TextNode) else 0
        if offset <= 0 and size:
            parent.insert_child(index, leaf)
        elif offset >= size:
            parent.insert_child(index + 1, leaf)
        else:
            parent.insert_child(index + 1, _split_node(node, offset))
            parent.insert_child(index + 1, leaf)
        return leaf

    node.insert_child(offset, leaf)
    return leaf


def _replace_selection(selection: Selection, text: str) -> TextNode:
    """Delete the selection (if not collapsed) and insert *text* there."""
    point = selection.start
    if not selection.collapsed:
        container, index = _delete_contents(selection)
        point = Point(container, index)
    return _insert_leaf(point, text)


def _is_blank(node: Node) -> bool:
    if isinstance(node, TextNode):
        return not node.text
    if node.tag in VOID_TAGS:
        return False
    return all(_is_blank(child) for child in node.children)


def _is_blank_paragraph(node: Node) -> bool:
    return isinstance(node, ElementNode) and node.tag == "p" and _is_blank(node)


def _block_insertion_point(
    container: ElementNode, index: int
) -> tuple[ElementNode, int]:
    """Move a block insertion point out of any enclosing <p>.

    A <p> cannot hold <div> children: the HTML parser closes the paragraph
    at the first <div>, so blocks inserted there would not survive the
    round trip through the browser. The paragraph is split at the point
    and the blocks go between its halves; a half left blank is removed.
    """
    paragraph = next(
        (node for node in reversed(_containers(container)) if node.tag == "p"), None
    )
    if paragraph is None or paragraph.parent is None:
        return container, index

    target = paragraph.parent
    boundary = _split_up_to(target, Point(container, index))
    if boundary < len(target.children) and _is_blank_paragraph(
        target.children[boundary]
    ):
        target.remove_child(target.children[boundary])
    if boundary > 0 and _is_blank_paragraph(target.children[boundary - 1]):
        target.remove_child(target.children[boundary - 1])
        boundary -= 1
    return target, boundary


def _line_block(line: str, delimiter: str) -> ElementNode:
    """One ``<div>`` per line; blank lines pass through unwrapped."""
    block = ElementNode("div")
    if not line:
        block.append_child(ElementNode("br"))
    elif not line.strip():
        block.append_child(TextNode(line))
    else:
        core = line.strip()
        lead = line[: len(line) - len(line.lstrip())]
        trail = line[len(line.rstrip()) :]
        block.append_child(TextNode(f"{lead}{delimiter}{core}{delimiter}{trail}"))
    return block


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def insert_at_cursor(
    fragment: Fragment, selection: Selection | None, text: str
) -> EditResult:
    """Replace the selection (or insert at the cursor) with a text leaf.

    Returns:
        ``(fragment, cursor)`` where the cursor sits right after the
        inserted leaf, or ``(fragment, None)`` when nothing happened.
    """
    checked = _checked(fragment, selection)
    if checked is None or not text:
        return fragment, None

    leaf = _replace_selection(checked, text)
    return fragment, Point(leaf, len(leaf.text))


def wrap(
    fragment: Fragment, selection: Selection | None, delimiter: str
) -> EditResult:
    """Wrap the selection with *delimiter* on both sides.

    - Collapsed selection: insert an empty pair, cursor between the markers.
    - Single-line selection: replace it with ``delimiter + text + delimiter``
      (plain-text flattened), cursor after the inserted span.
    - Multi-line selection: replace it with one ``<div>`` per line, each
      line's non-whitespace text wrapped on its own; cursor after the last
      inserted block.

    Returns:
        ``(fragment, cursor)``; ``(fragment, None)`` for a no-op.
    """
    checked = _checked(fragment, selection)
    if checked is None:
        return fragment, None

    lines = [] if checked.collapsed else selected_lines(fragment, checked)

    if not lines:
        # Collapsed, or a selection holding no text (an image, say)
        leaf = _replace_selection(checked, delimiter * 2)
        return fragment, Point(leaf, len(delimiter))

    if len(lines) == 1:
        leaf = _replace_selection(checked, f"{delimiter}{lines[0]}{delimiter}")
        return fragment, Point(leaf, len(leaf.text))

    container, index = _block_insertion_point(*_delete_contents(checked))
    for offset, line in enumerate(lines):
        container.insert_child(index + offset, _line_block(line, delimiter))
    logger.debug("Wrapped %d lines with %r", len(lines), delimiter)
    return fragment, Point(container, index + len(lines))


def wrap_style(
    fragment: Fragment, selection: Selection | None, style: InlineStyle | str
) -> EditResult:
    """Wrap the selection with the delimiter for *style* (bold, italic, ...)."""
    return wrap(fragment, selection, delimiter_for(style))
