from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .models import PathSegment


class PathFormat(str, Enum):
    """Built-in path notations"""

    FULL = "full"
    COMPACT = "compact"
    NAMES_ONLY = "names-only"
    NAMED_FULL = "named-full"
    NAMED_COMPACT = "named-compact"
    BREADCRUMB = "breadcrumb"
    CUSTOM = "custom"


@dataclass
class FormatOptions:
    custom_templates: list[str] = field(default_factory=list)
    # Render a segment's name attribute in place of its tag where one exists
    name_only: bool = False


BREADCRUMB_SEPARATOR = " > "


def escape_xpath_string(value: str) -> str:
    return value.replace("'", "''")


def _full_step(seg: PathSegment) -> str:
    return f"/{seg.tag}[{seg.index}]"


def _compact_step(seg: PathSegment) -> str:
    return f"/{seg.tag}[{seg.index}]" if seg.index > 1 else f"/{seg.tag}"


def _named_step(seg: PathSegment, fallback, name_only: bool) -> str:
    if seg.name_attr:
        if name_only:
            return f"/{seg.name_attr}"
        return f"/{seg.tag}[@name='{escape_xpath_string(seg.name_attr)}']"
    return fallback(seg)


def _breadcrumb_step(seg: PathSegment, name_only: bool) -> str:
    if seg.name_attr:
        return seg.name_attr if name_only else f"{seg.tag} ({seg.name_attr})"
    return seg.tag


def apply_template(seg: PathSegment, template: str) -> str:
    """Substitute ${tag}, ${index} and ${name} for one segment"""
    return (
        template.replace("${tag}", seg.tag)
        .replace("${index}", str(seg.index))
        .replace("${name}", seg.name_attr or "")
    )


def format_path(
    segments: Sequence[PathSegment],
    path_format: PathFormat,
    options: FormatOptions | None = None,
) -> str | None:
    """Render segments in the requested notation.

    Returns None only for the custom notation when no template is configured.
    """
    options = options or FormatOptions()
    path_format = PathFormat(path_format)

    if path_format is PathFormat.FULL:
        return "".join(_full_step(seg) for seg in segments)
    if path_format is PathFormat.COMPACT:
        return "".join(_compact_step(seg) for seg in segments)
    if path_format is PathFormat.NAMES_ONLY:
        return "".join(f"/{seg.tag}" for seg in segments)
    if path_format is PathFormat.NAMED_FULL:
        return "".join(_named_step(seg, _full_step, options.name_only) for seg in segments)
    if path_format is PathFormat.NAMED_COMPACT:
        return "".join(_named_step(seg, _compact_step, options.name_only) for seg in segments)
    if path_format is PathFormat.BREADCRUMB:
        return BREADCRUMB_SEPARATOR.join(_breadcrumb_step(seg, options.name_only) for seg in segments)

    if not options.custom_templates:
        return None
    template = options.custom_templates[0]
    return "".join(apply_template(seg, template) for seg in segments)
