"""Conflict reporting on sync PRs via labels and a comment.

Reporting is best-effort: every failure is logged as a warning and returned
to the caller, never raised.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sync_branches.errors import LabelOrCommentError
from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.types import GitHubRepoId, PullRequestInfo
from sync_branches.templates import render_conflict_comment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConflictLabels:
    """Label names for each conflict dimension. An empty name disables that label."""

    source: str = ""
    target: str = ""


@dataclass(frozen=True)
class ConflictSummary:
    """Conflict state derived from this pass's merge attempts.

    For each dimension: True = conflicted, False = clean,
    None = not evaluated this pass (its label is left untouched).
    The notes describe the conflicted dimensions for the PR comment.
    """

    source_conflict: bool | None
    target_conflict: bool | None
    source_note: str = ""
    target_note: str = ""


def source_conflict_note(*, source: str, head: str) -> str:
    return (
        f"Failed to merge `{source}` into `{head}`. Possibly a conflict? "
        f"It may help to delete branch `{head}` and re-run your `sync-branches` job "
        "in order to start fresh."
    )


def target_conflict_note(*, target: str, head: str) -> str:
    return (
        f"Failed to merge `{target}` into `{head}`. Possibly a conflict? "
        "Check the status of this PR below."
    )


def direct_conflict_note(*, source: str, target: str) -> str:
    return f"`{source}` has conflicts with `{target}`. Resolve them on `{source}`."


def conflict_from_mergeability(
    github: GitHub, repo: GitHubRepoId, number: int
) -> bool | None:
    """Read a PR's conflict state from GitHub's mergeable flag.

    Returns:
        True if GitHub reports conflicts, False if mergeable,
        None if GitHub is still computing it or the lookup failed
    """
    try:
        pr = github.get_pull_request(repo, number)
    except Exception as e:
        logger.warning("Could not read mergeability of PR #%d: %s", number, e)
        return None
    if pr.mergeable is None:
        return None
    return not pr.mergeable


def report_conflicts(
    github: GitHub,
    repo: GitHubRepoId,
    pr: PullRequestInfo,
    summary: ConflictSummary,
    *,
    labels: ConflictLabels,
) -> list[LabelOrCommentError]:
    """Sync conflict labels with summary and post a comment listing any conflicts.

    Returns:
        The failures encountered (already logged); callers may ignore them
    """
    errors: list[LabelOrCommentError] = []
    notes: list[str] = []

    dimensions = (
        (summary.source_conflict, summary.source_note, labels.source),
        (summary.target_conflict, summary.target_note, labels.target),
    )
    for conflicted, note, label in dimensions:
        if conflicted is None:
            continue
        if conflicted and note:
            notes.append(note)
        error = _sync_label(github, repo, pr, label, present=conflicted)
        if error is not None:
            errors.append(error)

    error = _post_notes(github, repo, pr.number, notes)
    if error is not None:
        errors.append(error)
    return errors


def _sync_label(
    github: GitHub, repo: GitHubRepoId, pr: PullRequestInfo, label: str, *, present: bool
) -> LabelOrCommentError | None:
    if not label:
        return None
    if present and label not in pr.labels:
        return _best_effort(
            lambda: github.add_label(repo, pr.number, label),
            operation=f"add label '{label}'",
            pr_number=pr.number,
        )
    if not present and label in pr.labels:
        return _best_effort(
            lambda: github.remove_label(repo, pr.number, label),
            operation=f"remove label '{label}'",
            pr_number=pr.number,
        )
    return None


def _post_notes(
    github: GitHub, repo: GitHubRepoId, number: int, notes: list[str]
) -> LabelOrCommentError | None:
    if not notes:
        logger.debug("Skip commenting. Nothing to do.")
        return None

    body = render_conflict_comment(notes)
    logger.debug("Constructed comment from %s: %s", notes, body)
    return _best_effort(
        lambda: github.create_comment(repo, number, body),
        operation="create comment",
        pr_number=number,
    )


def _best_effort(
    action: Callable[[], None], *, operation: str, pr_number: int
) -> LabelOrCommentError | None:
    try:
        action()
    except Exception as e:
        error = LabelOrCommentError(operation=operation, pr_number=pr_number, message=str(e))
        logger.warning("%s", error)
        return error
    return None
