"""Type definitions for GitHub operations."""

from dataclasses import dataclass
from typing import Literal

PRStateUpdate = Literal["open", "closed"]

# merged: a new merge commit was created (HTTP 201)
# up_to_date: head is already an ancestor of base (HTTP 204)
# failed: conflict, permission problem, or any other response
MergeStatus = Literal["merged", "up_to_date", "failed"]


@dataclass(frozen=True)
class GitHubRepoId:
    """Repository identity: owner/name."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class BranchInfo:
    """A remote branch and the commit it points at."""

    name: str
    commit_sha: str


@dataclass(frozen=True)
class PullRequestInfo:
    """The subset of a GitHub pull request used for reconciliation."""

    number: int
    head_ref: str
    base_ref: str
    html_url: str
    labels: frozenset[str]
    # Only populated by single-PR fetches; None when GitHub is still computing it
    mergeable: bool | None = None


@dataclass(frozen=True)
class MergeOutcome:
    """Result of asking GitHub to merge one branch into another."""

    status: MergeStatus
    status_code: int | None
    message: str
    commit_sha: str | None = None
