"""ghcolumns public API."""

from __future__ import annotations

from ghcolumns.auth import AuthInfo, TokenClient
from ghcolumns.errors import (
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
from ghcolumns.local import ProjectColumnsLocal
from ghcolumns.locate import PositionLocator
from ghcolumns.manager import ProjectColumnsManager
from ghcolumns.models import (
    DesiredColumn,
    LocatedColumn,
    OperationResult,
    Position,
    ProjectColumn,
    ReconcileResult,
)
from ghcolumns.plan import Action, PlanOperation, ReconcilePlan
from ghcolumns.reconciler import ListReconciler

__all__ = [
    # High-level
    "ProjectColumnsManager",
    "ListReconciler",
    "PositionLocator",
    "ProjectColumnsLocal",
    # Auth
    "AuthInfo",
    "TokenClient",
    # Plan / Models
    "Action",
    "PlanOperation",
    "ReconcilePlan",
    "Position",
    "ProjectColumn",
    "DesiredColumn",
    "LocatedColumn",
    "OperationResult",
    "ReconcileResult",
    # Errors
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
