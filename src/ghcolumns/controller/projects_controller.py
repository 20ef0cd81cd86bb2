"""GitHub Projects API controller (internal use only)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, TypeVar

import httpx

from ghcolumns.auth import AuthInfo, TokenClient
from ghcolumns.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    RateLimitError,
    ValidationError,
    map_http_error,
)
from ghcolumns.models import ColumnPage, Position, Project, ProjectColumn
from ghcolumns.util.ids import project_id_from_url
from ghcolumns.util.time import parse_github_timestamp

from .endpoints import (
    COLUMN_MOVES_PATH,
    COLUMN_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT_SEC,
    MAX_PER_PAGE,
    ORG_PROJECTS_PATH,
    PROJECT_COLUMNS_PATH,
    PROJECT_PATH,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GitHubProjectsController:
    """
    Projects API controller (internal only).

    Notes:
        - The httpx client is NOT exposed.
        - Column ids cross this boundary as strings; GitHub's integers are
          converted here and nowhere else.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        base_url: str = DEFAULT_BASE_URL,
        per_page: int = DEFAULT_PER_PAGE,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self._per_page = _validate_per_page(per_page)
        self._retry_policy = _RetryPolicy()

        client = TokenClient(auth_info)
        self._http = client.build_http_client(base_url, timeout)

    @classmethod
    def from_client(
        cls,
        http_client: httpx.Client,
        *,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> "GitHubProjectsController":
        """Create controller from a pre-built httpx client (useful for tests)."""
        obj = cls.__new__(cls)
        obj._per_page = _validate_per_page(per_page)
        obj._retry_policy = _RetryPolicy()
        obj._http = http_client
        return obj

    @property
    def per_page(self) -> int:
        return self._per_page

    def close(self) -> None:
        self._http.close()

    # ----------------------------
    # Public API
    # ----------------------------
    def get_project(self, project_id: str) -> Project:
        data = self._request_json("GET", PROJECT_PATH.format(project_id=project_id))
        return _project_dict_to_project(data, project_id)

    def create_project(self, org: str, name: str, body: Optional[str] = None) -> Project:
        """Create an organization project. Sent once; never retried after a timeout."""
        payload: dict[str, Any] = {"name": name}
        if body:
            payload["body"] = body
        data = self._request_json(
            "POST",
            ORG_PROJECTS_PATH.format(org=org),
            idempotent=False,
            json=payload,
        )
        return _project_dict_to_project(data)

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", PROJECT_PATH.format(project_id=project_id))

    def list_columns_page(
        self,
        project_id: str,
        page_token: Optional[str] = None,
    ) -> ColumnPage:
        """
        Fetch one page of columns.

        page_token is the `next` URL of the previous page's Link header;
        None starts from the first page.
        """
        if page_token:
            response = self._request("GET", page_token)
        else:
            response = self._request(
                "GET",
                PROJECT_COLUMNS_PATH.format(project_id=project_id),
                params={"per_page": self._per_page},
            )

        payload = _json_body(response)
        if not isinstance(payload, list):
            raise ApiError(
                "Unexpected column listing payload",
                details={"project_id": project_id, "type": type(payload).__name__},
            )

        next_link = response.links.get("next", {}).get("url")
        return ColumnPage(
            columns=[_column_dict_to_column(c) for c in payload if isinstance(c, dict)],
            next_page_token=next_link or None,
        )

    def iter_column_pages(self, project_id: str) -> Iterator[ColumnPage]:
        """Yield pages lazily, front to back. Not restartable."""
        page_token: Optional[str] = None
        while True:
            page = self.list_columns_page(project_id, page_token)
            yield page
            if not page.next_page_token:
                return
            page_token = page.next_page_token

    def list_columns(self, project_id: str) -> list[ProjectColumn]:
        all_columns: list[ProjectColumn] = []
        for page in self.iter_column_pages(project_id):
            all_columns.extend(page.columns)
        return all_columns

    def get_column(self, column_id: str) -> ProjectColumn:
        data = self._request_json("GET", COLUMN_PATH.format(column_id=column_id))
        return _column_dict_to_column(data)

    def create_column(self, project_id: str, name: str) -> ProjectColumn:
        """Create a column (appended last). Sent once; never retried after a timeout."""
        data = self._request_json(
            "POST",
            PROJECT_COLUMNS_PATH.format(project_id=project_id),
            idempotent=False,
            json={"name": name},
        )
        return _column_dict_to_column(data)

    def rename_column(self, column_id: str, new_name: str) -> ProjectColumn:
        data = self._request_json(
            "PATCH",
            COLUMN_PATH.format(column_id=column_id),
            json={"name": new_name},
        )
        return _column_dict_to_column(data)

    def move_column(self, column_id: str, position: Position | str) -> None:
        """
        Move a column to first, last, or after:<column_id>.

        A string position is validated before any request is sent.
        """
        if isinstance(position, str):
            position = Position.parse(position)
        self._request(
            "POST",
            COLUMN_MOVES_PATH.format(column_id=column_id),
            json={"position": position.to_wire()},
        )

    def delete_column(self, column_id: str) -> None:
        self._request("DELETE", COLUMN_PATH.format(column_id=column_id))

    # ----------------------------
    # Internals
    # ----------------------------
    def _request_json(
        self,
        method: str,
        url: str,
        *,
        idempotent: bool = True,
        **kwargs: Any,
    ) -> dict[str, Any]:
        payload = _json_body(self._request(method, url, idempotent=idempotent, **kwargs))
        if not isinstance(payload, dict):
            raise ApiError(
                "Unexpected response payload",
                details={"method": method, "url": url},
            )
        return payload

    def _request(
        self,
        method: str,
        url: str,
        *,
        idempotent: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        def send() -> httpx.Response:
            logger.debug("%s %s", method, url)
            response = self._http.request(method, url, **kwargs)
            response.raise_for_status()
            return response

        return self._execute(send, idempotent=idempotent)

    def _execute(self, func: Callable[[], T], *, idempotent: bool = True) -> T:
        """
        Run func with retry/backoff.

        Non-idempotent requests (creates) are retried only on rate limits,
        which GitHub rejects before acting; a timeout or 5xx may hide a
        request that already took effect.
        """
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                retry = self._should_retry(mapped, idempotent=idempotent)
                if retry and attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "Retrying after %s (attempt %d/%d, sleeping %.1fs)",
                        mapped.__class__.__name__,
                        attempt + 1,
                        self._retry_policy.max_retries,
                        delay,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception, *, idempotent: bool = True) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if not idempotent:
            return False
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, httpx.HTTPStatusError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (httpx.TransportError, OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("GitHub API error", cause=exc)


def _validate_per_page(per_page: int) -> int:
    if not isinstance(per_page, int) or isinstance(per_page, bool):
        raise InvalidArgumentError("per_page must be an int", details={"per_page": per_page})
    if not 1 <= per_page <= MAX_PER_PAGE:
        raise InvalidArgumentError(
            f"per_page must be between 1 and {MAX_PER_PAGE}",
            details={"per_page": per_page},
        )
    return per_page


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            "Invalid JSON in GitHub response",
            details={"status_code": response.status_code},
            cause=exc,
        ) from exc


def _project_dict_to_project(data: dict[str, Any], project_id: str = "") -> Project:
    raw_id = data.get("id")
    body = data.get("body")
    return Project(
        project_id=str(raw_id) if isinstance(raw_id, (int, str)) and str(raw_id) else project_id,
        name=data.get("name") or "",
        state=data.get("state"),
        body=body if isinstance(body, str) else None,
    )


def _column_dict_to_column(data: dict[str, Any]) -> ProjectColumn:
    raw_id = data.get("id")
    column_id = str(raw_id) if isinstance(raw_id, (int, str)) and str(raw_id) else None
    name = data.get("name", "")

    project_id = None
    if isinstance(data.get("project_url"), str):
        try:
            project_id = project_id_from_url(data["project_url"])
        except ValidationError:
            project_id = None

    return ProjectColumn(
        local_id=column_id or "",
        column_id=column_id,
        name=name if isinstance(name, str) else "",
        project_id=project_id,
        created_at=parse_github_timestamp(data.get("created_at")),
        updated_at=parse_github_timestamp(data.get("updated_at")),
    )


def _http_error_to_info(exc: httpx.HTTPStatusError) -> HttpErrorInfo:
    response = exc.response
    status_code = response.status_code
    reason: Optional[str] = response.reason_phrase or None

    message = None
    details: dict[str, Any] = {
        "method": exc.request.method,
        "url": str(exc.request.url),
    }

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        message = payload.get("message") or None
        errors = payload.get("errors") or []
        if isinstance(errors, list) and errors:
            details["errors"] = errors
        if isinstance(payload.get("documentation_url"), str):
            details["documentation_url"] = payload["documentation_url"]

    remaining = response.headers.get("x-ratelimit-remaining")
    if remaining == "0":
        reason = "rate limit exceeded"
        details["rate_limit_reset"] = response.headers.get("x-ratelimit-reset")
    elif isinstance(message, str) and "rate limit" in message.lower():
        reason = message

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason,
        message=message,
        details=details,
    )
