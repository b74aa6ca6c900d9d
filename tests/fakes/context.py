"""Factory functions for creating test contexts."""

from sync_branches.conflicts import ConflictLabels
from sync_branches.context import PushContext
from sync_branches.gateway.github.fake import FakeGitHub
from sync_branches.gateway.github.types import GitHubRepoId, PullRequestInfo
from sync_branches.gateway.time.fake import FakeTime
from sync_branches.templates import DEFAULT_PR_BODY_TEMPLATE, DEFAULT_PR_TITLE_TEMPLATE

TEST_REPO = GitHubRepoId(owner="owner", name="repo")


def create_test_context(
    *,
    github: FakeGitHub | None = None,
    pr_github: FakeGitHub | None = None,
    pushed_branch: str = "dev",
    source_pattern: str = "dev",
    target_pattern: str = "main",
    use_intermediate_branch: bool = False,
    pr_title_template: str = DEFAULT_PR_TITLE_TEMPLATE,
    pr_body_template: str = DEFAULT_PR_BODY_TEMPLATE,
    conflict_labels: ConflictLabels | None = None,
    time: FakeTime | None = None,
) -> PushContext:
    """Create a PushContext backed by fakes.

    Args:
        github: Inspection gateway. If None, creates an empty FakeGitHub.
        pr_github: PR creation gateway. If None, reuses github (same credential).
            Pass github.with_token("pat") for a distinct credential on the same remote.
        conflict_labels: If None, labels are disabled.
    """
    resolved_github = github if github is not None else FakeGitHub()
    return PushContext(
        repo=TEST_REPO,
        pushed_branch=pushed_branch,
        source_pattern=source_pattern,
        target_pattern=target_pattern,
        use_intermediate_branch=use_intermediate_branch,
        pr_title_template=pr_title_template,
        pr_body_template=pr_body_template,
        conflict_labels=conflict_labels if conflict_labels is not None else ConflictLabels(),
        github=resolved_github,
        pr_github=pr_github if pr_github is not None else resolved_github,
        time=time if time is not None else FakeTime(),
    )


def make_pr(
    number: int,
    *,
    head: str,
    base: str,
    labels: frozenset[str] = frozenset(),
) -> PullRequestInfo:
    return PullRequestInfo(
        number=number,
        head_ref=head,
        base_ref=base,
        html_url=f"https://github.com/owner/repo/pull/{number}",
        labels=labels,
    )
