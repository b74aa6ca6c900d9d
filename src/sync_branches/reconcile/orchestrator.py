"""Top-level sequencing of a sync-branches run."""

import logging
from collections.abc import Callable

from sync_branches.context import PushContext
from sync_branches.errors import SyncBranchesError
from sync_branches.gateway.http.abc import GitHubApiError
from sync_branches.matching import match_branches, matches_pattern
from sync_branches.reconcile.source_push import handle_push_to_source
from sync_branches.reconcile.target_push import handle_push_to_target
from sync_branches.reconcile.types import PRUpdate, SyncFailure, SyncPhase, SyncResult

logger = logging.getLogger(__name__)


def sync_pull_requests(ctx: PushContext) -> SyncResult:
    """Create/update sync PRs for every branch paired with the pushed branch.

    A push to a source branch reconciles one PR per matching target; a push to
    a target branch reconciles one PR per matching source. Both happen when the
    pushed branch matches both patterns. Iterations run one after another and
    any exception aborts only its own iteration.

    Raises:
        GitHubApiError: If the repository's branches cannot be listed
    """
    branch_names = [branch.name for branch in ctx.github.list_branches(ctx.repo)]
    updates: list[PRUpdate] = []
    failures: list[SyncFailure] = []

    if matches_pattern(ctx.pushed_branch, ctx.source_pattern):
        logger.debug(
            "Matched source pattern: pushed_branch=%s source_pattern=%s",
            ctx.pushed_branch,
            ctx.source_pattern,
        )
        targets = match_branches(branch_names, ctx.target_pattern)
        logger.debug("Will open/update sync PRs targeting: %s", targets)
        _run_phase(
            "push_to_source",
            targets,
            lambda target: handle_push_to_source(ctx, target),
            updates=updates,
            failures=failures,
        )

    if matches_pattern(ctx.pushed_branch, ctx.target_pattern):
        logger.debug(
            "Matched target pattern: pushed_branch=%s target_pattern=%s",
            ctx.pushed_branch,
            ctx.target_pattern,
        )
        sources = match_branches(branch_names, ctx.source_pattern)
        logger.debug("Will update sync PRs with sources: %s", sources)
        _run_phase(
            "push_to_target",
            sources,
            lambda source: handle_push_to_target(ctx, source),
            updates=updates,
            failures=failures,
        )

    return SyncResult(updates=updates, failures=failures)


def _run_phase(
    phase: SyncPhase,
    branches: list[str],
    handle: Callable[[str], PRUpdate | None],
    *,
    updates: list[PRUpdate],
    failures: list[SyncFailure],
) -> None:
    for branch in branches:
        try:
            update = handle(branch)
        except (SyncBranchesError, GitHubApiError) as e:
            status_code = e.status_code if isinstance(e, GitHubApiError) else None
            if status_code is not None:
                logger.error("status: %d", status_code)
            logger.error("%s", e)
            failures.append(
                SyncFailure(phase=phase, branch=branch, message=str(e), status_code=status_code)
            )
            continue
        except Exception as e:
            # Malformed API responses and other unexpected failures
            logger.exception("Unexpected error while syncing %s", branch)
            failures.append(
                SyncFailure(phase=phase, branch=branch, message=f"{type(e).__name__}: {e}")
            )
            continue
        if update is not None:
            updates.append(update)
