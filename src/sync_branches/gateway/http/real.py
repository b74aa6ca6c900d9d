"""Production HTTP client using httpx."""

from typing import Any

import httpx

from sync_branches.gateway.http.abc import GitHubApiError, HttpClient, HttpResponse

DEFAULT_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT_SECONDS = 30.0


class RealHttpClient(HttpClient):
    """HttpClient backed by a synchronous httpx.Client."""

    def __init__(self, *, token: str, base_url: str = DEFAULT_API_URL) -> None:
        self._token = token
        self._client = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": "sync-branches",
            },
            timeout=DEFAULT_TIMEOUT_SECONDS,
        )

    @property
    def token(self) -> str:
        return self._token

    def get(self, endpoint: str, *, params: dict[str, Any] | None = None) -> HttpResponse:
        return self._request("GET", endpoint, params=params, data=None)

    def post(self, endpoint: str, *, data: dict[str, Any]) -> HttpResponse:
        return self._request("POST", endpoint, params=None, data=data)

    def patch(self, endpoint: str, *, data: dict[str, Any]) -> HttpResponse:
        return self._request("PATCH", endpoint, params=None, data=data)

    def delete(self, endpoint: str) -> HttpResponse:
        return self._request("DELETE", endpoint, params=None, data=None)

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None,
        data: dict[str, Any] | None,
    ) -> HttpResponse:
        try:
            response = self._client.request(method, endpoint.lstrip("/"), params=params, json=data)
        except httpx.HTTPError as e:
            raise GitHubApiError(
                method=method, endpoint=endpoint, status_code=None, message=str(e)
            ) from e

        if not response.is_success:
            raise GitHubApiError(
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                message=_error_message(response),
            )

        body = response.json() if response.content else None
        return HttpResponse(status_code=response.status_code, body=body)


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's error message, falling back to the raw body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return response.text
