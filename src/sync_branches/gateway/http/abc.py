"""Abstract HTTP client for direct GitHub REST API calls."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class GitHubApiError(Exception):
    """A GitHub REST API request failed.

    status_code is None when no response was received (network failure, timeout).
    """

    def __init__(
        self, *, method: str, endpoint: str, status_code: int | None, message: str
    ) -> None:
        status = status_code if status_code is not None else "no response"
        super().__init__(f"{method} {endpoint} failed ({status}): {message}")
        self.method = method
        self.endpoint = endpoint
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class HttpResponse:
    """Successful (2xx) response. body is None for empty responses such as 204."""

    status_code: int
    body: Any


class HttpClient(ABC):
    """Abstract interface for authenticated GitHub REST API requests.

    Endpoints are relative to the API base URL (e.g. "repos/owner/repo/branches").
    Implementations raise GitHubApiError for any non-2xx response.
    """

    @property
    @abstractmethod
    def token(self) -> str:
        """Credential used to authenticate requests."""
        ...

    @abstractmethod
    def get(self, endpoint: str, *, params: dict[str, Any] | None = None) -> HttpResponse: ...

    @abstractmethod
    def post(self, endpoint: str, *, data: dict[str, Any]) -> HttpResponse: ...

    @abstractmethod
    def patch(self, endpoint: str, *, data: dict[str, Any]) -> HttpResponse: ...

    @abstractmethod
    def delete(self, endpoint: str) -> HttpResponse: ...
