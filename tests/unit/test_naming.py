"""Tests for intermediate branch naming."""

from sync_branches.naming import intermediate_branch_name, sanitize_branch_component


def test_sanitize_replaces_every_slash() -> None:
    assert sanitize_branch_component("feature/a/b") == "feature-a-b"


def test_sanitize_leaves_plain_names_alone() -> None:
    assert sanitize_branch_component("main") == "main"


def test_intermediate_branch_name_for_nested_source() -> None:
    assert intermediate_branch_name("release/1.0", "main") == "merge/release-1.0_to_main"


def test_intermediate_branch_name_sanitizes_both_sides() -> None:
    assert intermediate_branch_name("a/b", "c/d/e") == "merge/a-b_to_c-d-e"


def test_intermediate_branch_name_is_deterministic() -> None:
    first = intermediate_branch_name("dev", "stage/eu")
    second = intermediate_branch_name("dev", "stage/eu")
    assert first == second == "merge/dev_to_stage-eu"
