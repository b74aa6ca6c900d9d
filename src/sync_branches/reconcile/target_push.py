"""Reconciliation when a TARGET branch was pushed.

Only relevant with intermediate branches: the new target commits are merged
into merge/<source>_to_<target> so the existing sync PR stays current.
Creating the PR is left to the source-push flow.
"""

import logging

from sync_branches.conflicts import ConflictSummary, report_conflicts, target_conflict_note
from sync_branches.context import PushContext
from sync_branches.errors import MergeConflictError
from sync_branches.intermediate import merge_into
from sync_branches.kick import kick_pull_request
from sync_branches.naming import intermediate_branch_name
from sync_branches.reconcile.pull_requests import find_sync_pr, to_pr_update
from sync_branches.reconcile.types import PRUpdate

logger = logging.getLogger(__name__)


def handle_push_to_target(ctx: PushContext, source_branch: str) -> PRUpdate | None:
    """Bring the sync PR from source_branch into the pushed branch up to date.

    Returns:
        PRUpdate if the PR was kicked, otherwise None
    """
    pushed = ctx.pushed_branch
    if not ctx.use_intermediate_branch:
        logger.info("Update not required for %s => %s", source_branch, pushed)
        return None

    logger.info("Update %s => %s", source_branch, pushed)
    head = intermediate_branch_name(source_branch, pushed)

    existing_pr = find_sync_pr(ctx.github, ctx.repo, head=head, base=pushed)
    if existing_pr is None:
        logger.info("A PR from %s to %s doesn't exist. Skipping update.", head, pushed)
        return None

    # A failed merge never counts as a new commit
    try:
        needs_kick = merge_into(ctx.github, ctx.repo, base=head, head=pushed)
        conflicted = False
    except MergeConflictError as e:
        logger.warning(
            "%s. Maybe close the PR, delete %s, and try again? %s", e, head, existing_pr.html_url
        )
        needs_kick = False
        conflicted = True

    conflicts = ConflictSummary(
        source_conflict=None,
        target_conflict=conflicted,
        target_note=target_conflict_note(target=pushed, head=head) if conflicted else "",
    )
    report_conflicts(ctx.github, ctx.repo, existing_pr, conflicts, labels=ctx.conflict_labels)

    if needs_kick and ctx.can_kick:
        kick_pull_request(ctx.pr_github, ctx.time, ctx.repo, existing_pr.number)
        logger.info("Successfully updated PR: %s", existing_pr.html_url)
        return to_pr_update(existing_pr, source=source_branch, target=pushed)

    logger.debug("Skipping close+reopen.")
    return None
