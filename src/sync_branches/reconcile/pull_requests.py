"""Lookup of existing sync PRs."""

import logging

from sync_branches.errors import AmbiguousPRError
from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.types import GitHubRepoId, PullRequestInfo
from sync_branches.reconcile.types import PRUpdate

logger = logging.getLogger(__name__)


def find_sync_pr(
    github: GitHub, repo: GitHubRepoId, *, head: str, base: str
) -> PullRequestInfo | None:
    """Find the open PR from head into base.

    The listing may be broader than requested, so results are filtered to exact
    head/base matches. Duplicates are logged and the first one returned is used.
    """
    pulls = github.list_open_pull_requests(repo, base=base, head=head)
    matching = [pr for pr in pulls if pr.head_ref == head and pr.base_ref == base]
    if not matching:
        return None
    if len(matching) > 1:
        error = AmbiguousPRError(head=head, base=base, numbers=[pr.number for pr in matching])
        logger.warning("%s", error)
    return matching[0]


def to_pr_update(pr: PullRequestInfo, *, source: str, target: str) -> PRUpdate:
    return PRUpdate(
        source_branch=source,
        target_branch=target,
        head_branch=pr.head_ref,
        base_branch=pr.base_ref,
        url=pr.html_url,
    )
