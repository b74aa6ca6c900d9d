"""Abstract base class for the GitHub operations used by sync-branches."""

from abc import ABC, abstractmethod

from sync_branches.gateway.github.types import (
    BranchInfo,
    GitHubRepoId,
    MergeOutcome,
    PRStateUpdate,
    PullRequestInfo,
)


class GitHub(ABC):
    """Abstract interface for GitHub branch, pull request, and issue operations.

    All implementations (real and fake) must implement this interface. Each
    instance acts with a single credential, exposed through `token`.

    Unless noted otherwise, failed requests raise GitHubApiError.
    """

    @property
    @abstractmethod
    def token(self) -> str:
        """Credential this gateway authenticates with."""
        ...

    # --- Branch operations ---

    @abstractmethod
    def list_branches(self, repo: GitHubRepoId) -> list[BranchInfo]:
        """List every branch in the repository, in the order GitHub returns them."""
        ...

    @abstractmethod
    def get_branch(self, repo: GitHubRepoId, branch: str) -> BranchInfo | None:
        """Get a branch by name.

        Returns:
            BranchInfo, or None if the branch does not exist
        """
        ...

    @abstractmethod
    def create_branch(self, repo: GitHubRepoId, branch: str, sha: str) -> BranchInfo:
        """Create refs/heads/<branch> pointing at sha."""
        ...

    @abstractmethod
    def merge(self, repo: GitHubRepoId, *, base: str, head: str) -> MergeOutcome:
        """Merge head into base on the remote.

        Never raises for API failures; they are reported as a "failed" outcome
        carrying the HTTP status (None if no response was received).
        """
        ...

    # --- Pull request operations ---

    @abstractmethod
    def list_open_pull_requests(
        self, repo: GitHubRepoId, *, base: str, head: str
    ) -> list[PullRequestInfo]:
        """List open PRs filtered by base and head branch.

        GitHub may return PRs whose refs do not exactly match the filter;
        callers must check head_ref/base_ref themselves.
        """
        ...

    @abstractmethod
    def get_pull_request(self, repo: GitHubRepoId, number: int) -> PullRequestInfo:
        """Fetch a single PR, including its mergeable flag."""
        ...

    @abstractmethod
    def create_pull_request(
        self, repo: GitHubRepoId, *, title: str, body: str, head: str, base: str
    ) -> PullRequestInfo:
        """Open a new PR from head into base."""
        ...

    @abstractmethod
    def update_pull_request_state(
        self, repo: GitHubRepoId, number: int, state: PRStateUpdate
    ) -> None:
        """Close or reopen a PR."""
        ...

    # --- Issue operations (PRs are issues for comments and labels) ---

    @abstractmethod
    def create_comment(self, repo: GitHubRepoId, number: int, body: str) -> None: ...

    @abstractmethod
    def add_label(self, repo: GitHubRepoId, number: int, label: str) -> None: ...

    @abstractmethod
    def remove_label(self, repo: GitHubRepoId, number: int, label: str) -> None: ...
