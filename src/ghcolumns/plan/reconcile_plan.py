"""ReconcilePlan model."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

from .operation import PlanOperation


@dataclass(slots=True)
class ReconcilePlan:
    """A plan that can be reviewed and then applied in seq order."""

    plan_id: str
    project_id: str
    created_at: datetime
    operations: list[PlanOperation]

    def is_empty(self) -> bool:
        return not self.operations

    def count_by_action(self) -> dict[str, int]:
        return dict(Counter(op.action.value for op in self.operations))
