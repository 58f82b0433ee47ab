"""
XPath Locator - element paths for positions in XML-like text

This package provides:
- A tolerant tag scanner and attribute extractor
- Offset -> element path resolution with sibling indexes
- Path rendering in several notations
- Reverse lookup of a path string to a document location
"""

__version__ = "0.1.0"

from .engine import MulticursorFormat, XPathEngine, join_results
from .formatter import FormatOptions, PathFormat, format_path
from .lookup import find_element_by_path, parse_path
from .models import ElementNode, Location, ParsedSegment, PathSegment, SkipRule, TagKind, TagOccurrence
from .resolver import compute_sibling_index, find_element_path
from .scanner import find_name_attribute, parse_attributes, scan_tags

__all__ = [
    "XPathEngine",
    "MulticursorFormat",
    "join_results",
    "PathFormat",
    "FormatOptions",
    "format_path",
    "parse_path",
    "find_element_by_path",
    "ElementNode",
    "Location",
    "ParsedSegment",
    "PathSegment",
    "SkipRule",
    "TagKind",
    "TagOccurrence",
    "compute_sibling_index",
    "find_element_path",
    "find_name_attribute",
    "parse_attributes",
    "scan_tags",
]
