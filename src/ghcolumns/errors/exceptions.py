"""Exception hierarchy and HTTP error mapping for ghcolumns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GhColumnsError(Exception):
    """
    Base exception for ghcolumns.

    Attributes:
        details: Optional structured information (e.g., HTTP status, column_id).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ValidationError(GhColumnsError):
    """Raised when input is malformed; always before any remote call."""


class LocalValidationError(ValidationError):
    """Raised when ProjectColumnsLocal strict validation fails."""


class InvalidStateError(GhColumnsError):
    """Raised when the library is used in an invalid state (e.g., open not called)."""


class NotFoundError(GhColumnsError):
    """Raised when a project or column is not found (HTTP 404)."""


class TransportError(GhColumnsError):
    """Raised for remote failures not classified as NotFoundError."""


class AuthError(TransportError):
    """Raised when the token is missing or rejected (HTTP 401)."""


class PermissionError(TransportError):
    """Raised when access is denied (HTTP 403 non rate-limit)."""


class InvalidArgumentError(TransportError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class ConflictError(TransportError):
    """Raised on HTTP 409/412/422, e.g. a move anchor that no longer exists."""


class RateLimitError(TransportError):
    """Raised when rate-limited (HTTP 429, or 403 with a rate-limit reason)."""


class NetworkError(TransportError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(TransportError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to ghcolumns exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_RATE_LIMIT_KEYWORDS: tuple[str, ...] = (
    "rate limit",
    "ratelimit",
    "abuse",
    "secondary rate",
)


def _is_rate_limit_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key in reason.lower() for key in _RATE_LIMIT_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GhColumnsError:
    """
    Map an HTTP error to a ghcolumns exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError (default), but RateLimitError if rate-limit related
        - 404 -> NotFoundError
        - 409/412/422 -> ConflictError
        - 429 -> RateLimitError
        - 5xx -> ApiError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_rate_limit_reason(info.reason):
            return RateLimitError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412, 422):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)
    if 500 <= info.status_code <= 599:
        return ApiError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
