"""Reverse lookup: path string -> element location."""

import logging
import re
from collections.abc import Sequence

from .models import ElementNode, Location, ParsedSegment, TagKind, TagOccurrence
from .resolver import AncestryStack
from .scanner import DEFAULT_NAME_ATTRIBUTES, find_name_attribute

logger = logging.getLogger(__name__)

# Tag[@name='value'] or Tag[@name="value"], quotes escaped by doubling
NAMED_STEP = re.compile(
    r"""^([^\[]+)\[\s*@name\s*=\s*(?:'((?:[^']|'')+)'|"((?:[^"]|"")+)")\s*\]$""",
    re.IGNORECASE,
)
INDEXED_STEP = re.compile(r"^([^\[]+)\[(\d+)\]$")


def parse_step(step: str) -> ParsedSegment:
    match = NAMED_STEP.match(step)
    if match:
        tag, single_quoted, double_quoted = match.groups()
        if single_quoted is not None:
            return ParsedSegment(tag=tag, name=single_quoted.replace("''", "'"))
        return ParsedSegment(tag=tag, name=double_quoted.replace('""', '"'))

    match = INDEXED_STEP.match(step)
    if match:
        return ParsedSegment(tag=match.group(1), index=int(match.group(2)))

    return ParsedSegment(tag=step)


def parse_path(xpath: str) -> list[ParsedSegment]:
    """Split a slash-separated path into locator steps.

    The leading slash is optional and empty steps are dropped, so an empty
    or all-slash string yields an empty list.
    """
    body = xpath.strip()
    if body.startswith("/"):
        body = body[1:]
    return [parse_step(step) for step in body.split("/") if step]


def _step_matches(
    segment: ParsedSegment,
    node: ElementNode,
    sibling_index: int,
    name_attributes: Sequence[str],
) -> bool:
    if segment.name is not None:
        return find_name_attribute(node.attributes, name_attributes) == segment.name
    if segment.index is not None:
        return sibling_index == segment.index
    return sibling_index == 1


def find_element_by_path(
    tags: Sequence[TagOccurrence],
    parsed: Sequence[ParsedSegment],
    name_attributes: Sequence[str] = DEFAULT_NAME_ATTRIBUTES,
) -> Location | None:
    """Locate the start tag of the element identified by ``parsed``.

    Each step only considers direct children of the element matched by the
    previous step. When a matched element closes before the whole path has
    matched, the search carries on among its following siblings.
    """
    if not parsed:
        return None

    stack = AncestryStack()
    matched: list[ElementNode] = []
    # Same-tag children seen so far under the current parent, per step
    sibling_counts = [0] * len(parsed)

    for tag in tags:
        if tag.kind is TagKind.CLOSE:
            closed = stack.close(tag)
            if closed is not None and matched and closed is matched[-1]:
                matched.pop()
            continue

        node = ElementNode.from_tag(tag)
        level = len(matched)
        segment = parsed[level]
        parent = matched[-1] if matched else None

        if stack.top is parent and tag.name == segment.tag:
            sibling_counts[level] += 1
            if _step_matches(segment, node, sibling_counts[level], name_attributes):
                if level + 1 == len(parsed):
                    return Location(line=tag.line, column=tag.column, offset=tag.offset)
                if tag.kind is TagKind.OPEN:
                    matched.append(node)
                    sibling_counts[level + 1] = 0

        if tag.kind is TagKind.OPEN:
            stack.push(node)

    logger.debug("No element matches path with %d steps", len(parsed))
    return None
