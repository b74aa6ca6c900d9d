"""Tests for reconciliation after a push to a source branch."""

import pytest

from sync_branches.conflicts import ConflictLabels
from sync_branches.errors import BranchNotFoundError, TargetBranchNotFoundError
from sync_branches.gateway.github.fake import FakeGitHub
from sync_branches.gateway.github.types import MergeOutcome
from sync_branches.gateway.time.fake import FakeTime
from sync_branches.reconcile.source_push import handle_push_to_source
from sync_branches.reconcile.types import PRUpdate
from tests.fakes.context import create_test_context, make_pr

MERGED = MergeOutcome(status="merged", status_code=201, message="merge commit created")
CONFLICT = MergeOutcome(status="failed", status_code=409, message="Merge conflict")
LABELS = ConflictLabels(source="source-conflict", target="target-conflict")


def test_creates_intermediate_branch_and_pr() -> None:
    github = FakeGitHub(branches={"release/1.0": "rel-sha", "main": "main-sha"})
    ctx = create_test_context(
        github=github,
        pushed_branch="release/1.0",
        source_pattern="release/*",
        target_pattern="main",
        use_intermediate_branch=True,
    )

    update = handle_push_to_source(ctx, "main")

    assert github.created_branches == [("merge/release-1.0_to_main", "rel-sha")]
    assert github.merge_calls == [
        ("merge/release-1.0_to_main", "release/1.0"),
        ("merge/release-1.0_to_main", "main"),
    ]
    head, base, title, body, _ = github.created_prs[0]
    assert (head, base) == ("merge/release-1.0_to_main", "main")
    assert title == "chore: Merge release/1.0 into main"
    assert "via `merge/release-1.0_to_main`" in body
    assert github.pr_state_updates == []
    assert update == PRUpdate(
        source_branch="release/1.0",
        target_branch="main",
        head_branch="merge/release-1.0_to_main",
        base_branch="main",
        url="https://github.com/owner/repo/pull/1",
    )


def test_direct_mode_opens_pr_from_pushed_branch() -> None:
    github = FakeGitHub(branches={"dev": "dev-sha", "main": "main-sha"})
    ctx = create_test_context(github=github)

    update = handle_push_to_source(ctx, "main")

    assert [(head, base) for head, base, *_ in github.created_prs] == [("dev", "main")]
    assert github.created_branches == []
    assert github.merge_calls == []
    assert update is not None
    assert update.head_branch == "dev"


def test_new_pr_is_created_with_pr_token() -> None:
    github = FakeGitHub(branches={"dev": "dev-sha", "main": "main-sha"})
    ctx = create_test_context(github=github, pr_github=github.with_token("pat"))

    handle_push_to_source(ctx, "main")

    assert github.created_prs[0][4] == "pat"


def test_custom_templates_render_pr_text() -> None:
    github = FakeGitHub(branches={"dev": "dev-sha", "main": "main-sha"})
    ctx = create_test_context(
        github=github,
        pr_title_template="sync {{{ source_pattern }}}: {{{ original_source }}}",
        pr_body_template="into {{{ target }}}",
    )

    handle_push_to_source(ctx, "main")

    _, _, title, body, _ = github.created_prs[0]
    assert title == "sync dev: dev"
    assert body == "into main"


def test_existing_pr_with_same_token_is_left_alone() -> None:
    head = "merge/dev_to_main"
    github = FakeGitHub(
        branches={"dev": "d", "main": "m", head: "i"},
        prs=[make_pr(5, head=head, base="main")],
        merge_outcomes={(head, "main"): MERGED},
    )
    ctx = create_test_context(github=github, use_intermediate_branch=True)

    update = handle_push_to_source(ctx, "main")

    assert update is None
    assert github.created_prs == []
    assert github.pr_state_updates == []
    assert github.branches[head] == "merge-main-into-merge/dev_to_main"


def test_existing_pr_is_kicked_when_new_commits_merged() -> None:
    head = "merge/dev_to_main"
    github = FakeGitHub(
        branches={"dev": "d", "main": "m", head: "i"},
        prs=[make_pr(5, head=head, base="main")],
        merge_outcomes={(head, "dev"): MERGED},
    )
    time = FakeTime()
    ctx = create_test_context(
        github=github,
        pr_github=github.with_token("pat"),
        use_intermediate_branch=True,
        time=time,
    )

    update = handle_push_to_source(ctx, "main")

    assert github.pr_state_updates == [(5, "closed", "pat"), (5, "open", "pat")]
    assert time.sleep_calls == [5.0]
    assert update is not None
    assert update.url == "https://github.com/owner/repo/pull/5"


def test_existing_pr_not_kicked_without_new_commits() -> None:
    head = "merge/dev_to_main"
    github = FakeGitHub(
        branches={"dev": "d", "main": "m", head: "i"},
        prs=[make_pr(5, head=head, base="main")],
    )
    ctx = create_test_context(
        github=github, pr_github=github.with_token("pat"), use_intermediate_branch=True
    )

    assert handle_push_to_source(ctx, "main") is None
    assert github.pr_state_updates == []


def test_source_conflict_still_merges_target_and_reports() -> None:
    head = "merge/dev_to_main"
    github = FakeGitHub(
        branches={"dev": "d", "main": "m", head: "i"},
        merge_outcomes={(head, "dev"): CONFLICT},
    )
    ctx = create_test_context(
        github=github, use_intermediate_branch=True, conflict_labels=LABELS
    )

    update = handle_push_to_source(ctx, "main")

    assert github.merge_calls == [(head, "dev"), (head, "main")]
    assert update is not None
    assert github.added_labels == [(1, "source-conflict")]
    assert len(github.comments) == 1
    assert "Failed to merge `dev` into `merge/dev_to_main`" in github.comments[0][1]


def test_resolved_side_loses_label_while_other_side_conflicts() -> None:
    head = "merge/dev_to_main"
    github = FakeGitHub(
        branches={"dev": "d", "main": "m", head: "i"},
        prs=[
            make_pr(
                5,
                head=head,
                base="main",
                labels=frozenset({"source-conflict", "target-conflict"}),
            )
        ],
        merge_outcomes={(head, "main"): CONFLICT},
    )
    ctx = create_test_context(
        github=github, use_intermediate_branch=True, conflict_labels=LABELS
    )

    handle_push_to_source(ctx, "main")

    assert github.removed_labels == [(5, "source-conflict")]
    assert github.added_labels == []
    assert "Failed to merge `main`" in github.comments[0][1]


def test_direct_mode_reports_conflict_from_mergeability() -> None:
    github = FakeGitHub(
        branches={"dev": "d", "main": "m"},
        prs=[make_pr(5, head="dev", base="main")],
        mergeable={5: False},
    )
    ctx = create_test_context(github=github, conflict_labels=LABELS)

    assert handle_push_to_source(ctx, "main") is None
    assert github.added_labels == [(5, "target-conflict")]
    assert "`dev` has conflicts with `main`" in github.comments[0][1]


def test_new_pr_is_not_kicked_even_when_merge_created_commit() -> None:
    head = "merge/release-1.0_to_main"
    github = FakeGitHub(
        branches={"release/1.0": "rel-sha", "main": "main-sha"},
        merge_outcomes={(head, "main"): MERGED},
    )
    time = FakeTime()
    ctx = create_test_context(
        github=github,
        pr_github=github.with_token("pat"),
        pushed_branch="release/1.0",
        source_pattern="release/*",
        target_pattern="main",
        use_intermediate_branch=True,
        time=time,
    )

    update = handle_push_to_source(ctx, "main")

    assert github.created_branches == [(head, "rel-sha")]
    assert github.branches[head] == "merge-main-into-merge/release-1.0_to_main"
    assert [(h, b, token) for h, b, _, _, token in github.created_prs] == [(head, "main", "pat")]
    assert github.pr_state_updates == []
    assert time.sleep_calls == []
    assert update is not None
    assert update.head_branch == head
    assert update.source_branch == "release/1.0"


def test_missing_target_branch_raises() -> None:
    github = FakeGitHub(branches={"dev": "d"})
    ctx = create_test_context(github=github)

    with pytest.raises(TargetBranchNotFoundError, match="Could not find target branch: main"):
        handle_push_to_source(ctx, "main")


def test_deleted_pushed_branch_raises() -> None:
    github = FakeGitHub(branches={"main": "m"})
    ctx = create_test_context(github=github, use_intermediate_branch=True)

    with pytest.raises(BranchNotFoundError):
        handle_push_to_source(ctx, "main")

    assert github.created_branches == []


def test_pr_with_other_head_is_not_reused() -> None:
    github = FakeGitHub(
        branches={"dev": "d", "main": "m"},
        prs=[make_pr(3, head="other", base="main")],
    )
    ctx = create_test_context(github=github)

    update = handle_push_to_source(ctx, "main")

    assert update is not None
    assert update.url == "https://github.com/owner/repo/pull/4"
    assert len(github.created_prs) == 1
