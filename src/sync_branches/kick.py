"""Close-and-reopen cycle that re-triggers workflows on a PR.

GitHub does not run workflows for events caused by GITHUB_TOKEN. Closing and
reopening a PR with a personal access token fires pull_request events that do
run workflows, so this is only useful when the PR token differs from
GITHUB_TOKEN.
"""

import logging

from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.types import GitHubRepoId
from sync_branches.gateway.time.abc import Time

logger = logging.getLogger(__name__)

KICK_DELAY_SECONDS = 5.0


def kick_pull_request(github: GitHub, time: Time, repo: GitHubRepoId, number: int) -> None:
    """Close, wait, then reopen a PR.

    Errors from either state change propagate to the caller.
    """
    logger.debug("Closing #%d", number)
    github.update_pull_request_state(repo, number, "closed")
    logger.debug("Closed #%d", number)

    time.sleep(KICK_DELAY_SECONDS)

    logger.debug("Reopening #%d", number)
    github.update_pull_request_state(repo, number, "open")
    logger.debug("Reopened #%d", number)
