"""Fake GitHub operations for testing."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.types import (
    BranchInfo,
    GitHubRepoId,
    MergeOutcome,
    PRStateUpdate,
    PullRequestInfo,
)
from sync_branches.gateway.http.abc import GitHubApiError

_UP_TO_DATE = MergeOutcome(status="up_to_date", status_code=204, message="already merged")


@dataclass
class _FakeRemote:
    """Repository state shared by every FakeGitHub view of the same remote."""

    branches: dict[str, str]
    prs: list[PullRequestInfo]
    merge_outcomes: dict[tuple[str, str], MergeOutcome]
    mergeable: dict[int, bool | None]
    create_branch_errors: dict[str, GitHubApiError]
    failing_operations: dict[str, GitHubApiError]
    next_pr_number: int

    # Mutation tracking
    created_branches: list[tuple[str, str]] = field(default_factory=list)
    merge_calls: list[tuple[str, str]] = field(default_factory=list)
    created_prs: list[tuple[str, str, str, str, str]] = field(default_factory=list)
    pr_state_updates: list[tuple[int, PRStateUpdate, str]] = field(default_factory=list)
    comments: list[tuple[int, str]] = field(default_factory=list)
    added_labels: list[tuple[int, str]] = field(default_factory=list)
    removed_labels: list[tuple[int, str]] = field(default_factory=list)


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults. Use with_token() to get a
    second view of the same remote acting with a different credential.

    Merges default to "up_to_date"; a "merged" outcome moves base to a new
    synthetic commit. failing_operations maps an operation name to the error it
    raises: "list_branches", "list_open_pull_requests", "create_pull_request",
    "update_pull_request_state", "create_comment", "add_label" or "remove_label".
    """

    def __init__(
        self,
        *,
        token: str = "github-token",
        branches: dict[str, str] | None = None,
        prs: list[PullRequestInfo] | None = None,
        merge_outcomes: dict[tuple[str, str], MergeOutcome] | None = None,
        mergeable: dict[int, bool | None] | None = None,
        create_branch_errors: dict[str, GitHubApiError] | None = None,
        failing_operations: dict[str, GitHubApiError] | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            token: Credential reported by this view
            branches: Mapping of branch name -> commit sha
            prs: Open pull requests, in the order list calls return them
            merge_outcomes: Mapping of (base, head) -> outcome of merging head into base
            mergeable: Mapping of PR number -> mergeable flag for get_pull_request()
            create_branch_errors: Mapping of branch name -> error raised by create_branch()
            failing_operations: Mapping of operation name -> error it raises
        """
        existing_prs = list(prs or [])
        self._token = token
        self._remote = _FakeRemote(
            branches=dict(branches or {}),
            prs=existing_prs,
            merge_outcomes=dict(merge_outcomes or {}),
            mergeable=dict(mergeable or {}),
            create_branch_errors=dict(create_branch_errors or {}),
            failing_operations=dict(failing_operations or {}),
            next_pr_number=max((pr.number for pr in existing_prs), default=0) + 1,
        )

    def with_token(self, token: str) -> "FakeGitHub":
        """Return a view of the same remote that authenticates with another token."""
        view = FakeGitHub.__new__(FakeGitHub)
        view._token = token
        view._remote = self._remote
        return view

    @property
    def token(self) -> str:
        return self._token

    # --- Branch operations ---

    def list_branches(self, repo: GitHubRepoId) -> list[BranchInfo]:
        self._maybe_fail("list_branches")
        return [BranchInfo(name=n, commit_sha=sha) for n, sha in self._remote.branches.items()]

    def get_branch(self, repo: GitHubRepoId, branch: str) -> BranchInfo | None:
        sha = self._remote.branches.get(branch)
        if sha is None:
            return None
        return BranchInfo(name=branch, commit_sha=sha)

    def create_branch(self, repo: GitHubRepoId, branch: str, sha: str) -> BranchInfo:
        error = self._remote.create_branch_errors.get(branch)
        if error is not None:
            raise error
        if branch in self._remote.branches:
            raise GitHubApiError(
                method="POST",
                endpoint=f"repos/{repo}/git/refs",
                status_code=422,
                message="Reference already exists",
            )
        self._remote.branches[branch] = sha
        self._remote.created_branches.append((branch, sha))
        return BranchInfo(name=branch, commit_sha=sha)

    def merge(self, repo: GitHubRepoId, *, base: str, head: str) -> MergeOutcome:
        self._remote.merge_calls.append((base, head))
        if base not in self._remote.branches or head not in self._remote.branches:
            return MergeOutcome(status="failed", status_code=404, message="Branch not found")

        outcome = self._remote.merge_outcomes.get((base, head), _UP_TO_DATE)
        if outcome.status == "merged":
            sha = outcome.commit_sha or f"merge-{head}-into-{base}"
            self._remote.branches[base] = sha
            return replace(outcome, commit_sha=sha)
        return outcome

    # --- Pull request operations ---

    def list_open_pull_requests(
        self, repo: GitHubRepoId, *, base: str, head: str
    ) -> list[PullRequestInfo]:
        self._maybe_fail("list_open_pull_requests")
        # Like an unqualified head filter on GitHub, only base narrows the listing
        return [pr for pr in self._remote.prs if pr.base_ref == base]

    def get_pull_request(self, repo: GitHubRepoId, number: int) -> PullRequestInfo:
        for pr in self._remote.prs:
            if pr.number == number:
                return replace(pr, mergeable=self._remote.mergeable.get(number))
        raise GitHubApiError(
            method="GET",
            endpoint=f"repos/{repo}/pulls/{number}",
            status_code=404,
            message="Not Found",
        )

    def create_pull_request(
        self, repo: GitHubRepoId, *, title: str, body: str, head: str, base: str
    ) -> PullRequestInfo:
        self._maybe_fail("create_pull_request")
        number = self._remote.next_pr_number
        self._remote.next_pr_number += 1
        pr = PullRequestInfo(
            number=number,
            head_ref=head,
            base_ref=base,
            html_url=f"https://github.com/{repo}/pull/{number}",
            labels=frozenset(),
        )
        self._remote.prs.append(pr)
        self._remote.created_prs.append((head, base, title, body, self._token))
        return pr

    def update_pull_request_state(
        self, repo: GitHubRepoId, number: int, state: PRStateUpdate
    ) -> None:
        self._maybe_fail("update_pull_request_state")
        self._remote.pr_state_updates.append((number, state, self._token))

    # --- Issue operations ---

    def create_comment(self, repo: GitHubRepoId, number: int, body: str) -> None:
        self._maybe_fail("create_comment")
        self._remote.comments.append((number, body))

    def add_label(self, repo: GitHubRepoId, number: int, label: str) -> None:
        self._maybe_fail("add_label")
        self._replace_labels(number, lambda labels: labels | {label})
        self._remote.added_labels.append((number, label))

    def remove_label(self, repo: GitHubRepoId, number: int, label: str) -> None:
        self._maybe_fail("remove_label")
        self._replace_labels(number, lambda labels: labels - {label})
        self._remote.removed_labels.append((number, label))

    # --- Read-only access to mutation tracking ---

    @property
    def branches(self) -> dict[str, str]:
        return dict(self._remote.branches)

    @property
    def prs(self) -> list[PullRequestInfo]:
        return list(self._remote.prs)

    @property
    def created_branches(self) -> list[tuple[str, str]]:
        """(branch, sha) for each branch created."""
        return list(self._remote.created_branches)

    @property
    def merge_calls(self) -> list[tuple[str, str]]:
        """(base, head) for each merge attempted."""
        return list(self._remote.merge_calls)

    @property
    def created_prs(self) -> list[tuple[str, str, str, str, str]]:
        """(head, base, title, body, token) for each PR created."""
        return list(self._remote.created_prs)

    @property
    def pr_state_updates(self) -> list[tuple[int, PRStateUpdate, str]]:
        """(number, state, token) for each PR state change."""
        return list(self._remote.pr_state_updates)

    @property
    def comments(self) -> list[tuple[int, str]]:
        return list(self._remote.comments)

    @property
    def added_labels(self) -> list[tuple[int, str]]:
        return list(self._remote.added_labels)

    @property
    def removed_labels(self) -> list[tuple[int, str]]:
        return list(self._remote.removed_labels)

    def _maybe_fail(self, operation: str) -> None:
        error = self._remote.failing_operations.get(operation)
        if error is not None:
            raise error

    def _replace_labels(
        self, number: int, update: Callable[[frozenset[str]], frozenset[str]]
    ) -> None:
        for index, pr in enumerate(self._remote.prs):
            if pr.number == number:
                self._remote.prs[index] = replace(pr, labels=frozenset(update(pr.labels)))
