import json
import logging
from collections.abc import Collection, Iterable, Sequence
from enum import Enum

from .formatter import FormatOptions, PathFormat, format_path
from .lookup import find_element_by_path, parse_path
from .models import ElementPath, Location, PathSegment
from .resolver import compute_sibling_index, find_element_path
from .scanner import DEFAULT_NAME_ATTRIBUTES, find_name_attribute, scan_tags

logger = logging.getLogger(__name__)


class MulticursorFormat(str, Enum):
    LINES = "lines"
    JSON = "json"


class XPathEngine:
    """Computes element paths for positions in one document snapshot.

    The text is re-scanned for every query; nothing derived from it is kept
    between calls.
    """

    def __init__(
        self,
        text: str,
        name_attributes: Sequence[str] = DEFAULT_NAME_ATTRIBUTES,
        skip_elements: Collection[str] | None = None,
    ):
        self.text = text
        self.name_attributes = list(name_attributes)
        self.skip_elements = frozenset(skip_elements or ())

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self.text):
            raise ValueError(f"Offset {offset} outside document of length {len(self.text)}")

    def offset_at(self, line: int, column: int) -> int:
        """Convert a 0-based line/column pair to an offset, clamped to the line"""
        line_start = 0
        for _ in range(line):
            newline = self.text.find("\n", line_start)
            if newline == -1:
                return len(self.text)
            line_start = newline + 1
        line_end = self.text.find("\n", line_start)
        if line_end == -1:
            line_end = len(self.text)
        return min(line_start + max(column, 0), line_end)

    def position_at(self, offset: int) -> tuple[int, int]:
        """0-based line/column for an offset"""
        self._check_offset(offset)
        line = self.text.count("\n", 0, offset)
        return line, offset - (self.text.rfind("\n", 0, offset) + 1)

    def element_path_at(self, offset: int) -> ElementPath:
        self._check_offset(offset)
        path = find_element_path(scan_tags(self.text), offset)
        logger.debug("Element path at %d: %s", offset, " > ".join(node.name for node in path))
        return path

    def compute_segments(self, element_path: ElementPath) -> list[PathSegment]:
        """Turn an element path into segments, dropping skipped elements"""
        segments = []
        for i, element in enumerate(element_path):
            if element.name in self.skip_elements:
                continue
            index = compute_sibling_index(self.text, element_path, i, self.skip_elements)
            name_attr = find_name_attribute(element.attributes, self.name_attributes)
            segments.append(PathSegment(tag=element.name, index=index, name_attr=name_attr))
        return segments

    def compute_path(
        self,
        offset: int,
        path_format: PathFormat = PathFormat.FULL,
        options: FormatOptions | None = None,
    ) -> str | None:
        """Formatted path of the element enclosing ``offset``, or None"""
        element_path = self.element_path_at(offset)
        if not element_path:
            logger.debug("No element encloses offset %d", offset)
            return None

        segments = self.compute_segments(element_path)
        logger.debug("Computed %d segments", len(segments))
        return format_path(segments, path_format, options)

    def compute_paths(
        self,
        offsets: Iterable[int],
        path_format: PathFormat = PathFormat.FULL,
        options: FormatOptions | None = None,
    ) -> list[str]:
        """One path per cursor, skipping cursors that resolve to nothing"""
        results = []
        for offset in offsets:
            xpath = self.compute_path(offset, path_format, options)
            if xpath:
                results.append(xpath)
        return results

    def locate(self, xpath: str) -> Location | None:
        parsed = parse_path(xpath)
        if not parsed:
            return None
        return find_element_by_path(scan_tags(self.text), parsed, self.name_attributes)


def join_results(results: Sequence[str], multicursor_format: MulticursorFormat = MulticursorFormat.LINES) -> str:
    """Combine per-cursor results into a single output string"""
    if len(results) == 1:
        return results[0]
    if MulticursorFormat(multicursor_format) is MulticursorFormat.JSON:
        return json.dumps(list(results), indent=2)
    return "\n".join(results)
