"""Glob matching of element skip rules against a document path."""

from fnmatch import fnmatchcase
from pathlib import PurePath

from xpath_locator.models import SkipRule


def _pattern_matches(file_path: str, pattern: str) -> bool:
    path = PurePath(file_path)
    if fnmatchcase(path.as_posix(), pattern):
        return True
    # A leading **/ also matches a path with no directory part
    if pattern.startswith("**/"):
        return fnmatchcase(path.name, pattern[3:])
    return False


def match_skip_rules(file_path: str, rules: list[SkipRule]) -> list[SkipRule]:
    """Rules whose file pattern matches ``file_path``"""
    return [rule for rule in rules if _pattern_matches(file_path, rule.file_pattern)]


def resolve_skip_elements(file_path: str, rules: list[SkipRule], enabled: bool) -> set[str]:
    """Merge the elements of every applicable rule into one skip-set"""
    if not enabled or not rules:
        return set()

    skip_set: set[str] = set()
    for rule in match_skip_rules(file_path, rules):
        skip_set.update(rule.elements_to_skip)
    return skip_set
