"""Immutable context for a single sync-branches run.

Created once at the CLI entry point and passed to every reconciliation step.
"""

from dataclasses import dataclass

from sync_branches.config import SyncConfig
from sync_branches.conflicts import ConflictLabels
from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.real import RealGitHub
from sync_branches.gateway.github.types import GitHubRepoId
from sync_branches.gateway.http.real import RealHttpClient
from sync_branches.gateway.time.abc import Time
from sync_branches.gateway.time.real import RealTime


@dataclass(frozen=True)
class PushContext:
    """Everything a reconciliation pass needs to know about the triggering push.

    github inspects PRs, creates intermediate branches, and merges; pr_github
    creates and kicks PRs. They are the same gateway when no separate PR
    token was supplied.
    """

    repo: GitHubRepoId
    pushed_branch: str
    source_pattern: str
    target_pattern: str
    use_intermediate_branch: bool
    pr_title_template: str
    pr_body_template: str
    conflict_labels: ConflictLabels
    github: GitHub
    pr_github: GitHub
    time: Time

    @property
    def can_kick(self) -> bool:
        """Whether a close+reopen with pr_github would trigger workflows.

        Compares the underlying tokens, not the gateway objects.
        """
        return self.github.token != self.pr_github.token


def create_context(
    config: SyncConfig, *, repo: GitHubRepoId, pushed_branch: str
) -> PushContext:
    """Create the production context with real GitHub gateways."""
    github = RealGitHub(RealHttpClient(token=config.github_token, base_url=config.api_url))
    if config.has_separate_pr_token:
        pr_github: GitHub = RealGitHub(
            RealHttpClient(token=config.pr_create_token, base_url=config.api_url)
        )
    else:
        pr_github = github

    return PushContext(
        repo=repo,
        pushed_branch=pushed_branch,
        source_pattern=config.source_pattern,
        target_pattern=config.target_pattern,
        use_intermediate_branch=config.use_intermediate_branch,
        pr_title_template=config.pr_title_template,
        pr_body_template=config.pr_body_template,
        conflict_labels=ConflictLabels(
            source=config.source_conflict_label, target=config.target_conflict_label
        ),
        github=github,
        pr_github=pr_github,
        time=RealTime(),
    )
