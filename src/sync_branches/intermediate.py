"""Creation and updating of intermediate merge branches."""

import logging

from sync_branches.errors import BranchCreationError, MergeConflictError
from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.types import GitHubRepoId
from sync_branches.gateway.http.abc import GitHubApiError

logger = logging.getLogger(__name__)


def ensure_branch(github: GitHub, repo: GitHubRepoId, name: str, fallback_sha: str) -> bool:
    """Make sure a branch exists, creating it at fallback_sha if it does not.

    Returns:
        True if the branch was created, False if it already existed

    Raises:
        BranchCreationError: If the branch is missing and cannot be created
    """
    existing = github.get_branch(repo, name)
    if existing is not None:
        logger.info("Found branch %s at %s", name, existing.commit_sha)
        return False

    logger.debug("Branch %s not found. Will try to create it.", name)
    try:
        created = github.create_branch(repo, name, fallback_sha)
    except GitHubApiError as e:
        # Lost a race with another run creating the same branch
        if e.status_code == 422 and "already exists" in e.message.lower():
            logger.info("Branch %s was created concurrently", name)
            return False
        raise BranchCreationError(name, reason=str(e)) from e

    logger.info("Created branch %s at %s", name, created.commit_sha)
    return True


def merge_into(github: GitHub, repo: GitHubRepoId, *, base: str, head: str) -> bool:
    """Merge head into base on the remote.

    Returns:
        True if a merge commit was created (the PR needs a kick),
        False if head was already merged into base

    Raises:
        MergeConflictError: For conflicts, permission errors, and unexpected responses
    """
    logger.debug("Will attempt to merge %s into %s", head, base)
    outcome = github.merge(repo, base=base, head=head)

    if outcome.status == "merged":
        logger.info("Merged %s into %s", head, base)
        return True
    if outcome.status == "up_to_date":
        logger.info("%s is already merged to %s", head, base)
        return False

    raise MergeConflictError(
        base=base, head=head, status_code=outcome.status_code, message=outcome.message
    )
