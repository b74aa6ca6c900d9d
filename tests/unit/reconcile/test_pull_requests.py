"""Tests for sync PR lookup."""

import logging

import pytest

from sync_branches.gateway.github.fake import FakeGitHub
from sync_branches.reconcile.pull_requests import find_sync_pr, to_pr_update
from tests.fakes.context import TEST_REPO, make_pr


def test_find_sync_pr_requires_exact_head_and_base() -> None:
    github = FakeGitHub(
        prs=[make_pr(1, head="dev-old", base="main"), make_pr(2, head="dev", base="main")]
    )

    pr = find_sync_pr(github, TEST_REPO, head="dev", base="main")

    assert pr is not None
    assert pr.number == 2


def test_find_sync_pr_returns_none_without_match() -> None:
    github = FakeGitHub(prs=[make_pr(1, head="dev", base="release")])

    assert find_sync_pr(github, TEST_REPO, head="dev", base="main") is None


def test_duplicate_prs_warn_and_use_first(caplog: pytest.LogCaptureFixture) -> None:
    github = FakeGitHub(
        prs=[make_pr(7, head="dev", base="main"), make_pr(9, head="dev", base="main")]
    )

    with caplog.at_level(logging.WARNING, logger="sync_branches"):
        pr = find_sync_pr(github, TEST_REPO, head="dev", base="main")

    assert pr is not None
    assert pr.number == 7
    assert "#7, #9" in caplog.text


def test_to_pr_update_uses_refs_reported_by_github() -> None:
    pr = make_pr(3, head="merge/dev_to_main", base="main")

    update = to_pr_update(pr, source="dev", target="main")

    assert update.to_json_dict() == {
        "sourceBranch": "dev",
        "targetBranch": "main",
        "headBranch": "merge/dev_to_main",
        "baseBranch": "main",
        "url": "https://github.com/owner/repo/pull/3",
    }
