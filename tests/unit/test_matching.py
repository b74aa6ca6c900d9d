"""Tests for branch pattern matching."""

import pytest

from sync_branches.matching import match_branches, matches_pattern

BRANCHES = ["main", "release/1.0", "release/2.0", "Release/3.0", "dev", "release/1.0/hotfix"]


def test_exact_name_matches_only_itself() -> None:
    assert match_branches(BRANCHES, "main") == ["main"]


def test_star_matches_across_slashes_and_preserves_order() -> None:
    assert match_branches(BRANCHES, "release/*") == [
        "release/1.0",
        "release/2.0",
        "release/1.0/hotfix",
    ]


def test_matching_is_case_sensitive() -> None:
    assert match_branches(BRANCHES, "Release/*") == ["Release/3.0"]


def test_question_mark_and_character_class() -> None:
    assert match_branches(BRANCHES, "release/[12].?") == ["release/1.0", "release/2.0"]


def test_no_match_returns_empty_list() -> None:
    assert match_branches(BRANCHES, "feature/*") == []


def test_matching_twice_gives_same_result() -> None:
    once = match_branches(BRANCHES, "*e*")
    assert match_branches(once, "*e*") == once


@pytest.mark.parametrize(
    ("branch", "pattern", "expected"),
    [
        ("release/1.0", "release/*", True),
        ("main", "release/*", False),
        ("dev", "d?v", True),
        ("MAIN", "main", False),
    ],
)
def test_matches_pattern(branch: str, pattern: str, expected: bool) -> None:
    assert matches_pattern(branch, pattern) is expected
