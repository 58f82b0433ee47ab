from dataclasses import dataclass, field
from enum import Enum


class TagKind(Enum):
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self_closing"


@dataclass
class TagOccurrence:
    """A single tag found by the scanner, in document order"""

    name: str
    attributes: dict[str, str]
    offset: int
    line: int  # 0-based
    column: int  # 0-based
    raw_text: str
    kind: TagKind

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.raw_text)

    def contains(self, offset: int) -> bool:
        """True when offset lies within the tag markup, both ends inclusive"""
        return self.offset <= offset <= self.end_offset


@dataclass
class ElementNode:
    """An element reconstructed from an open or self-closing tag"""

    name: str
    attributes: dict[str, str]
    start_offset: int
    start_line: int
    start_column: int
    end_offset: int = -1  # -1 until the closing tag is seen

    @classmethod
    def from_tag(cls, tag: TagOccurrence) -> "ElementNode":
        node = cls(
            name=tag.name,
            attributes=tag.attributes,
            start_offset=tag.offset,
            start_line=tag.line,
            start_column=tag.column,
        )
        if tag.kind is TagKind.SELF_CLOSING:
            node.end_offset = tag.end_offset
        return node


ElementPath = list[ElementNode]


@dataclass
class PathSegment:
    """One rendered step of an element path"""

    tag: str
    index: int = 1
    name_attr: str | None = None


@dataclass
class ParsedSegment:
    """A locator step parsed back from a path string"""

    tag: str
    index: int | None = None
    name: str | None = None


@dataclass
class Location:
    """Start of a matched element's start tag"""

    line: int
    column: int
    offset: int


@dataclass
class SkipRule:
    file_pattern: str
    elements_to_skip: set[str] = field(default_factory=set)
