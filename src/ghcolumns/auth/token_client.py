"""HTTP client factory for token-authenticated GitHub requests."""

from __future__ import annotations

import httpx

from ghcolumns.errors import InvalidArgumentError

from .auth_info import AuthInfo

# Classic Projects endpoints still require the inertia preview media type.
PROJECTS_ACCEPT: str = "application/vnd.github.inertia-preview+json"
USER_AGENT: str = "ghcolumns"


class TokenClient:
    """Build httpx clients carrying the bearer token and Projects headers."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "token":
            raise InvalidArgumentError("TokenClient requires AuthInfo(kind='token')")
        self._auth_info = auth_info

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._auth_info.token}",
            "Accept": PROJECTS_ACCEPT,
            "User-Agent": USER_AGENT,
        }

    def build_http_client(self, base_url: str, timeout: float) -> httpx.Client:
        """
        Build a synchronous httpx client.

        Raises:
            InvalidArgumentError: if base_url or timeout is invalid.
        """
        if not isinstance(base_url, str) or not base_url.strip():
            raise InvalidArgumentError("base_url must be a non-empty string")
        if timeout <= 0:
            raise InvalidArgumentError("timeout must be positive", details={"timeout": timeout})

        return httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=self.headers(),
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )
