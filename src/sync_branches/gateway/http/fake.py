"""Fake HTTP client for testing."""

from dataclasses import dataclass
from typing import Any

from sync_branches.gateway.http.abc import GitHubApiError, HttpClient, HttpResponse


@dataclass(frozen=True)
class RecordedRequest:
    """A request made through FakeHttpClient."""

    method: str
    endpoint: str
    params: dict[str, Any] | None
    data: dict[str, Any] | None


class FakeHttpClient(HttpClient):
    """In-memory HttpClient that returns configured responses.

    Responses are keyed by (method, endpoint). Unconfigured GETs return an empty
    list with status 200; other unconfigured requests return an empty 200 body.
    """

    def __init__(self, *, token: str = "fake-token") -> None:
        self._token = token
        self._responses: dict[tuple[str, str], list[HttpResponse | GitHubApiError]] = {}
        self.requests: list[RecordedRequest] = []

    @property
    def token(self) -> str:
        return self._token

    def set_response(
        self,
        endpoint: str,
        *,
        response: Any,
        method: str = "GET",
        status_code: int = 200,
    ) -> None:
        """Queue a successful response. The last queued response repeats."""
        self._queue(method, endpoint, HttpResponse(status_code=status_code, body=response))

    def set_error(
        self,
        endpoint: str,
        *,
        status_code: int | None,
        message: str = "error",
        method: str = "GET",
    ) -> None:
        """Queue a GitHubApiError for the given request."""
        error = GitHubApiError(
            method=method, endpoint=endpoint, status_code=status_code, message=message
        )
        self._queue(method, endpoint, error)

    def get(self, endpoint: str, *, params: dict[str, Any] | None = None) -> HttpResponse:
        return self._respond("GET", endpoint, params=params, data=None)

    def post(self, endpoint: str, *, data: dict[str, Any]) -> HttpResponse:
        return self._respond("POST", endpoint, params=None, data=data)

    def patch(self, endpoint: str, *, data: dict[str, Any]) -> HttpResponse:
        return self._respond("PATCH", endpoint, params=None, data=data)

    def delete(self, endpoint: str) -> HttpResponse:
        return self._respond("DELETE", endpoint, params=None, data=None)

    def _queue(self, method: str, endpoint: str, item: HttpResponse | GitHubApiError) -> None:
        self._responses.setdefault((method, endpoint), []).append(item)

    def _respond(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None,
        data: dict[str, Any] | None,
    ) -> HttpResponse:
        self.requests.append(
            RecordedRequest(method=method, endpoint=endpoint, params=params, data=data)
        )
        queued = self._responses.get((method, endpoint))
        if not queued:
            return HttpResponse(status_code=200, body=[] if method == "GET" else None)

        item = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(item, GitHubApiError):
            raise item
        return item
