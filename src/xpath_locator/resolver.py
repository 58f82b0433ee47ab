"""Offset -> element path resolution and sibling indexing."""

import logging
from collections.abc import Collection, Sequence

from .models import ElementNode, ElementPath, TagKind, TagOccurrence
from .scanner import scan_tags

logger = logging.getLogger(__name__)


class AncestryStack:
    """Stack of currently open elements, replayed from a tag stream.

    Recovery rules for malformed markup:
    - a closing tag pops only when it names the element on top of the stack;
      any other closer is ignored
    - elements that are never closed stay open until the end of the document
    """

    def __init__(self):
        self._nodes: list[ElementNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def top(self) -> ElementNode | None:
        return self._nodes[-1] if self._nodes else None

    def push(self, node: ElementNode) -> None:
        self._nodes.append(node)

    def close(self, tag: TagOccurrence) -> ElementNode | None:
        """Pop the top element if ``tag`` closes it, otherwise do nothing"""
        top = self.top
        if top is None or top.name != tag.name:
            return None
        top.end_offset = tag.end_offset
        return self._nodes.pop()

    def snapshot(self) -> ElementPath:
        return list(self._nodes)


def find_element_path(tags: Sequence[TagOccurrence], offset: int) -> ElementPath:
    """Return the path from the root to the deepest element enclosing ``offset``.

    A tag whose markup contains the offset wins, the later one when several
    do. Otherwise the offset sits in element content and the open ancestors at
    that point form the path. An empty list means nothing encloses it.
    """
    stack = AncestryStack()
    cursor_path: ElementPath | None = None
    ancestry: ElementPath | None = None

    for tag in tags:
        if ancestry is None and tag.end_offset >= offset:
            ancestry = stack.snapshot()

        if tag.kind is TagKind.CLOSE:
            stack.close(tag)
        elif tag.kind is TagKind.SELF_CLOSING:
            if tag.contains(offset):
                cursor_path = stack.snapshot() + [ElementNode.from_tag(tag)]
        else:
            node = ElementNode.from_tag(tag)
            if tag.contains(offset):
                cursor_path = stack.snapshot() + [node]
            stack.push(node)

    if cursor_path:
        return cursor_path

    if ancestry is None:
        ancestry = stack.snapshot()

    # Deepest open ancestor that starts before the offset
    for depth in range(len(ancestry) - 1, -1, -1):
        if ancestry[depth].start_offset <= offset:
            return ancestry[: depth + 1]

    return []


def compute_sibling_index(
    text: str,
    element_path: Sequence[ElementNode],
    target_index: int,
    skip_elements: Collection[str] | None = None,
) -> int:
    """1-based position of a path entry among same-named siblings.

    Only direct children of the entry's parent are counted, and elements
    named in ``skip_elements`` never count. The root is always 1, as is any
    target that cannot be found inside its parent's span.
    """
    if target_index == 0:
        return 1

    skip_elements = skip_elements or ()
    target = element_path[target_index]
    parent = element_path[target_index - 1]
    parent_end = parent.end_offset if parent.end_offset > 0 else len(text)

    nested = AncestryStack()
    count = 0
    for tag in scan_tags(text, parent.start_offset, parent_end):
        if tag.offset == parent.start_offset:
            continue

        if tag.kind is TagKind.CLOSE:
            nested.close(tag)
            continue

        is_direct_child = len(nested) == 0
        if is_direct_child and tag.name == target.name and tag.name not in skip_elements:
            count += 1
            if tag.offset == target.start_offset:
                return count

        if tag.kind is TagKind.OPEN:
            nested.push(ElementNode.from_tag(tag))

    logger.debug("Element <%s> at %d not found under <%s>", target.name, target.start_offset, parent.name)
    return 1
