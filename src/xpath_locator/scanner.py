"""Tolerant tag tokenizer for XML-like text.

This is not an XML parser. It only recognizes things that look like tags and
never validates structure. Comments, CDATA sections, processing instructions
and doctype declarations are not special-cased, so markup inside them may be
reported as tags.
"""

import logging
import re
from collections.abc import Sequence

from .models import TagKind, TagOccurrence

logger = logging.getLogger(__name__)

# Whitespace around the closing slash is consumed by a single run. The
# attribute region opens with a non-name character and may not contain '<'
# or '>', so a failed attempt costs at most the distance to the next '<'.
# The self-closing slash is detected on the captured region afterwards.
TAG_PATTERN = re.compile(r"<\s*(?:(/)\s*)?([A-Za-z_][\w:.\-]*)((?:[^\w:.\-<>][^<>]*)?)>")

# The value part is optional so a bare name is consumed whole in one match
# instead of being retried from every position inside it.
ATTRIBUTE_PATTERN = re.compile(
    r"""([A-Za-z_][\w:.\-]*)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]*)))?"""
)


def parse_attributes(attr_string: str) -> dict[str, str]:
    """Parse the attribute region of a tag into a name -> value mapping.

    Quoted and bare values are accepted. A later duplicate overwrites an
    earlier one. Fragments that do not look like ``name=value`` are ignored.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(attr_string):
        name, double_quoted, single_quoted, bare = match.groups()
        if double_quoted is None and single_quoted is None and bare is None:
            # No '=' followed the name
            continue
        if double_quoted is not None:
            value = double_quoted
        elif single_quoted is not None:
            value = single_quoted
        else:
            value = bare
        attributes[name] = value
    return attributes


DEFAULT_NAME_ATTRIBUTES = ("name",)


def find_name_attribute(attributes: dict[str, str], name_attributes: Sequence[str]) -> str | None:
    """Value of the first listed attribute that is present and not blank"""
    for attr_name in name_attributes:
        value = attributes.get(attr_name)
        if value and value.strip():
            return value
    return None


def _split_self_closing(region: str) -> tuple[str, bool]:
    """Strip a trailing '/' from the attribute region, if present"""
    stripped = region.rstrip()
    if stripped.endswith("/"):
        return stripped[:-1].strip(), True
    return stripped.strip(), False


def scan_tags(text: str, start: int = 0, end: int | None = None) -> list[TagOccurrence]:
    """Return every tag in ``text[start:end]`` in document order.

    Offsets, lines and columns are reported relative to the whole of ``text``
    so results from a windowed scan can be compared with a full scan.
    """
    if end is None:
        end = len(text)

    tags: list[TagOccurrence] = []
    line = text.count("\n", 0, start)
    line_start = text.rfind("\n", 0, start) + 1

    for match in TAG_PATTERN.finditer(text, start, end):
        offset = match.start()

        # Advance past every newline strictly before this tag
        newline = text.find("\n", line_start, offset)
        while newline != -1:
            line += 1
            line_start = newline + 1
            newline = text.find("\n", line_start, offset)

        closing_slash, name, region = match.groups()
        attr_string, trailing_slash = _split_self_closing(region)

        if closing_slash:
            kind = TagKind.CLOSE
        elif trailing_slash:
            kind = TagKind.SELF_CLOSING
        else:
            kind = TagKind.OPEN

        tags.append(
            TagOccurrence(
                name=name,
                attributes=parse_attributes(attr_string),
                offset=offset,
                line=line,
                column=offset - line_start,
                raw_text=match.group(0),
                kind=kind,
            )
        )

    logger.debug("Scanned %d tags in range [%d, %d)", len(tags), start, end)
    return tags
