"""Public error exports for ghcolumns."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    GhColumnsError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    LocalValidationError,
    NetworkError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    TransportError,
    ValidationError,
    map_http_error,
)

__all__ = [
    "GhColumnsError",
    "ValidationError",
    "LocalValidationError",
    "InvalidStateError",
    "NotFoundError",
    "TransportError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
