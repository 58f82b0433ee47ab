from pathlib import Path

from xpath_locator.models import Location, SkipRule

from .models import LookupResult, SkipRuleConfig


def skip_rule_config_to_skip_rule(rule: SkipRuleConfig) -> SkipRule:
    """Convert a validated Pydantic skip rule to the core dataclass"""
    return SkipRule(file_pattern=rule.file_pattern, elements_to_skip=set(rule.elements_to_skip))


def location_to_lookup_result(file_path: Path, xpath: str, location: Location | None) -> LookupResult:
    """Convert an internal location to an external Pydantic result (1-based line/column)"""
    if location is None:
        return LookupResult(file_path=str(file_path), xpath=xpath, found=False)
    return LookupResult(
        file_path=str(file_path),
        xpath=xpath,
        found=True,
        line=location.line + 1,
        column=location.column + 1,
        offset=location.offset,
    )
