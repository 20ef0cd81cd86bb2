"""Public model exports for ghcolumns."""

from __future__ import annotations

from .column import ColumnPage, DesiredColumn, LocatedColumn, Project, ProjectColumn
from .position import Position, PositionKind
from .results import OperationResult, OperationStatus, ReconcileResult, ReconcileStatus

__all__ = [
    "ProjectColumn",
    "DesiredColumn",
    "Project",
    "ColumnPage",
    "LocatedColumn",
    "Position",
    "PositionKind",
    "OperationStatus",
    "ReconcileStatus",
    "OperationResult",
    "ReconcileResult",
]
