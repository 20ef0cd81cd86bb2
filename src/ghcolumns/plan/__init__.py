"""Public plan exports for ghcolumns."""

from __future__ import annotations

from .actions import Action
from .operation import PlanOperation
from .reconcile_plan import ReconcilePlan

__all__ = [
    "Action",
    "PlanOperation",
    "ReconcilePlan",
]
