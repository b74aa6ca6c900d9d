"""Result types for reconciliation passes."""

from dataclasses import dataclass
from typing import Literal

SyncPhase = Literal["push_to_source", "push_to_target"]


@dataclass(frozen=True)
class PRUpdate:
    """A sync PR that was created or kicked during this run.

    head_branch and base_branch come from the PR as GitHub reports it.
    """

    source_branch: str
    target_branch: str
    head_branch: str
    base_branch: str
    url: str

    def to_json_dict(self) -> dict[str, str]:
        """Serialize with the key names of the syncedPRs output."""
        return {
            "sourceBranch": self.source_branch,
            "targetBranch": self.target_branch,
            "headBranch": self.head_branch,
            "baseBranch": self.base_branch,
            "url": self.url,
        }


@dataclass(frozen=True)
class SyncFailure:
    """An iteration that was aborted by an error."""

    phase: SyncPhase
    branch: str
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class SyncResult:
    """Outcome of a full run: updates in iteration order plus any failures."""

    updates: list[PRUpdate]
    failures: list[SyncFailure]

    @property
    def success(self) -> bool:
        return not self.failures
