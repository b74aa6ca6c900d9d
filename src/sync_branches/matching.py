"""Glob matching of branch names against source/target patterns."""

from collections.abc import Iterable
from fnmatch import fnmatchcase


def matches_pattern(branch: str, pattern: str) -> bool:
    """Check a branch name against a shell-style glob.

    Matching is case-sensitive and "*" also matches "/", so "release/*"
    matches "release/1.0/hotfix".
    """
    return fnmatchcase(branch, pattern)


def match_branches(names: Iterable[str], pattern: str) -> list[str]:
    """Return the names matching pattern, preserving input order."""
    return [name for name in names if matches_pattern(name, pattern)]
