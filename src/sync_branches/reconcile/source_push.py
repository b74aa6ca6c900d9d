"""Reconciliation when a SOURCE branch was pushed.

One call per matching target branch: make sure the intermediate branch (if any)
has both sides merged in, then create the sync PR or update the existing one.
"""

import logging
from dataclasses import dataclass

from sync_branches.conflicts import (
    ConflictSummary,
    conflict_from_mergeability,
    direct_conflict_note,
    report_conflicts,
    source_conflict_note,
    target_conflict_note,
)
from sync_branches.context import PushContext
from sync_branches.errors import BranchNotFoundError, MergeConflictError, TargetBranchNotFoundError
from sync_branches.intermediate import ensure_branch, merge_into
from sync_branches.kick import kick_pull_request
from sync_branches.naming import intermediate_branch_name
from sync_branches.reconcile.pull_requests import find_sync_pr, to_pr_update
from sync_branches.reconcile.types import PRUpdate
from sync_branches.templates import render_pr_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntermediateBranchUpdate:
    """Outcome of folding source and target into the intermediate branch."""

    needs_kick: bool
    conflicts: ConflictSummary


def handle_push_to_source(ctx: PushContext, target_branch: str) -> PRUpdate | None:
    """Create or update the sync PR from the pushed branch into target_branch.

    Returns:
        PRUpdate if a PR was created or kicked, None if an existing PR was left as is

    Raises:
        TargetBranchNotFoundError: If target_branch does not exist
        BranchNotFoundError: If the pushed branch no longer exists
        BranchCreationError: If the intermediate branch cannot be created
    """
    pushed = ctx.pushed_branch
    logger.info("Opening/Updating sync PR: %s => %s", pushed, target_branch)

    if ctx.github.get_branch(ctx.repo, target_branch) is None:
        raise TargetBranchNotFoundError(target_branch)

    if ctx.use_intermediate_branch:
        head = intermediate_branch_name(pushed, target_branch)
        update = update_intermediate_branch(ctx, head=head, target_branch=target_branch)
        needs_kick = update.needs_kick
        conflicts = update.conflicts
    else:
        head = pushed
        needs_kick = False
        conflicts = ConflictSummary(source_conflict=None, target_conflict=None)

    existing_pr = find_sync_pr(ctx.github, ctx.repo, head=head, base=target_branch)
    if existing_pr is not None:
        logger.info("A PR from %s to %s already exists.", head, target_branch)
        if not ctx.use_intermediate_branch:
            conflicts = _direct_conflicts(ctx, existing_pr.number, target_branch)
        report_conflicts(
            ctx.github, ctx.repo, existing_pr, conflicts, labels=ctx.conflict_labels
        )

        if needs_kick and ctx.can_kick:
            kick_pull_request(ctx.pr_github, ctx.time, ctx.repo, existing_pr.number)
            logger.info("Successfully updated PR: %s", existing_pr.html_url)
            return to_pr_update(existing_pr, source=pushed, target=target_branch)

        logger.debug("Skipping close+reopen.")
        return None

    title, body = render_pr_text(
        title_template=ctx.pr_title_template,
        body_template=ctx.pr_body_template,
        source_pattern=ctx.source_pattern,
        original_source=pushed,
        source=head,
        target=target_branch,
        use_intermediate_branch=ctx.use_intermediate_branch,
    )

    logger.debug("Create new pull request")
    new_pr = ctx.pr_github.create_pull_request(
        ctx.repo, title=title, body=body, head=head, base=target_branch
    )
    logger.debug("Created new pull request #%d", new_pr.number)

    report_conflicts(ctx.github, ctx.repo, new_pr, conflicts, labels=ctx.conflict_labels)

    logger.info("Successfully created PR: %s", new_pr.html_url)
    return to_pr_update(new_pr, source=pushed, target=target_branch)


def update_intermediate_branch(
    ctx: PushContext, *, head: str, target_branch: str
) -> IntermediateBranchUpdate:
    """Create the intermediate branch if needed and merge both sides into it.

    The two merges are independent: a failure on one side is recorded as a
    conflict and does not prevent the other merge.
    """
    pushed = ctx.pushed_branch
    pushed_info = ctx.github.get_branch(ctx.repo, pushed)
    if pushed_info is None:
        raise BranchNotFoundError(pushed)

    ensure_branch(ctx.github, ctx.repo, head, pushed_info.commit_sha)

    # No-op right after creation; picks up new source commits otherwise
    try:
        source_merged = merge_into(ctx.github, ctx.repo, base=head, head=pushed)
        source_conflict = False
    except MergeConflictError as e:
        logger.warning("%s", e)
        source_merged = False
        source_conflict = True

    try:
        target_merged = merge_into(ctx.github, ctx.repo, base=head, head=target_branch)
        target_conflict = False
    except MergeConflictError as e:
        logger.warning("%s", e)
        target_merged = False
        target_conflict = True

    return IntermediateBranchUpdate(
        needs_kick=source_merged or target_merged,
        conflicts=ConflictSummary(
            source_conflict=source_conflict,
            target_conflict=target_conflict,
            source_note=source_conflict_note(source=pushed, head=head) if source_conflict else "",
            target_note=(
                target_conflict_note(target=target_branch, head=head) if target_conflict else ""
            ),
        ),
    )


def _direct_conflicts(ctx: PushContext, number: int, target_branch: str) -> ConflictSummary:
    """Without an intermediate branch only the source/target conflict is known, via GitHub."""
    conflicted = conflict_from_mergeability(ctx.github, ctx.repo, number)
    return ConflictSummary(
        source_conflict=None,
        target_conflict=conflicted,
        target_note=(
            direct_conflict_note(source=ctx.pushed_branch, target=target_branch)
            if conflicted
            else ""
        ),
    )
