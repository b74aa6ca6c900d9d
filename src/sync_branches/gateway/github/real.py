"""Production implementation of GitHub operations over the REST API."""

from typing import Any
from urllib.parse import quote

from sync_branches.gateway.github.abc import GitHub
from sync_branches.gateway.github.types import (
    BranchInfo,
    GitHubRepoId,
    MergeOutcome,
    PRStateUpdate,
    PullRequestInfo,
)
from sync_branches.gateway.http.abc import GitHubApiError, HttpClient

PAGE_SIZE = 100


class RealGitHub(GitHub):
    """GitHub gateway that issues REST calls through an HttpClient.

    The HttpClient carries the credential, so one RealGitHub exists per token.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def token(self) -> str:
        return self._http.token

    # --- Branch operations ---

    def list_branches(self, repo: GitHubRepoId) -> list[BranchInfo]:
        branches: list[BranchInfo] = []
        page = 1
        while True:
            response = self._http.get(
                f"repos/{repo}/branches", params={"per_page": PAGE_SIZE, "page": page}
            )
            items = response.body or []
            branches.extend(_parse_branch(item) for item in items)
            if len(items) < PAGE_SIZE:
                return branches
            page += 1

    def get_branch(self, repo: GitHubRepoId, branch: str) -> BranchInfo | None:
        try:
            response = self._http.get(f"repos/{repo}/branches/{_quote_ref(branch)}")
        except GitHubApiError as e:
            if e.status_code == 404:
                return None
            raise
        return _parse_branch(response.body)

    def create_branch(self, repo: GitHubRepoId, branch: str, sha: str) -> BranchInfo:
        response = self._http.post(
            f"repos/{repo}/git/refs", data={"ref": f"refs/heads/{branch}", "sha": sha}
        )
        return BranchInfo(name=branch, commit_sha=response.body["object"]["sha"])

    def merge(self, repo: GitHubRepoId, *, base: str, head: str) -> MergeOutcome:
        """Merge head into base.

        Status codes: https://docs.github.com/en/rest/branches/branches#merge-a-branch
        201 created a merge commit, 204 means nothing to merge, 409 is a conflict.
        """
        try:
            response = self._http.post(f"repos/{repo}/merges", data={"base": base, "head": head})
        except GitHubApiError as e:
            return MergeOutcome(status="failed", status_code=e.status_code, message=e.message)

        if response.status_code == 201:
            sha = response.body.get("sha") if isinstance(response.body, dict) else None
            return MergeOutcome(
                status="merged", status_code=201, message="merge commit created", commit_sha=sha
            )
        if response.status_code == 204:
            return MergeOutcome(status="up_to_date", status_code=204, message="already merged")
        return MergeOutcome(
            status="failed",
            status_code=response.status_code,
            message=f"unexpected response status {response.status_code}",
        )

    # --- Pull request operations ---

    def list_open_pull_requests(
        self, repo: GitHubRepoId, *, base: str, head: str
    ) -> list[PullRequestInfo]:
        # GitHub only filters by head when it is qualified as owner:branch
        response = self._http.get(
            f"repos/{repo}/pulls",
            params={
                "state": "open",
                "base": base,
                "head": f"{repo.owner}:{head}",
                "per_page": PAGE_SIZE,
            },
        )
        return [_parse_pull_request(item) for item in response.body or []]

    def get_pull_request(self, repo: GitHubRepoId, number: int) -> PullRequestInfo:
        response = self._http.get(f"repos/{repo}/pulls/{number}")
        return _parse_pull_request(response.body)

    def create_pull_request(
        self, repo: GitHubRepoId, *, title: str, body: str, head: str, base: str
    ) -> PullRequestInfo:
        response = self._http.post(
            f"repos/{repo}/pulls",
            data={"title": title, "body": body, "head": head, "base": base},
        )
        return _parse_pull_request(response.body)

    def update_pull_request_state(
        self, repo: GitHubRepoId, number: int, state: PRStateUpdate
    ) -> None:
        self._http.patch(f"repos/{repo}/pulls/{number}", data={"state": state})

    # --- Issue operations ---

    def create_comment(self, repo: GitHubRepoId, number: int, body: str) -> None:
        self._http.post(f"repos/{repo}/issues/{number}/comments", data={"body": body})

    def add_label(self, repo: GitHubRepoId, number: int, label: str) -> None:
        self._http.post(f"repos/{repo}/issues/{number}/labels", data={"labels": [label]})

    def remove_label(self, repo: GitHubRepoId, number: int, label: str) -> None:
        self._http.delete(f"repos/{repo}/issues/{number}/labels/{quote(label, safe='')}")


def _quote_ref(branch: str) -> str:
    """Escape a branch name for use in a URL path, keeping its slashes."""
    return quote(branch, safe="/")


def _parse_branch(data: dict[str, Any]) -> BranchInfo:
    return BranchInfo(name=data["name"], commit_sha=data["commit"]["sha"])


def _parse_pull_request(data: dict[str, Any]) -> PullRequestInfo:
    labels = frozenset(label["name"] for label in data.get("labels") or [])
    return PullRequestInfo(
        number=data["number"],
        head_ref=data["head"]["ref"],
        base_ref=data["base"]["ref"],
        html_url=data["html_url"],
        labels=labels,
        mergeable=data.get("mergeable"),
    )
