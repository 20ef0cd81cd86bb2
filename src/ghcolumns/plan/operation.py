"""Plan operation model (explicit fields; no args dict)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ghcolumns.models import Position

from .actions import Action


@dataclass(slots=True)
class PlanOperation:
    """
    A single operation within a ReconcilePlan.

    target_local_id / result_local_id and the anchor of an `after` position
    are local ids. They are resolved to GitHub column ids at apply time, so a
    MOVE may reference a column created earlier in the same plan.
    """

    op_id: str
    seq: int
    action: Action

    target_local_id: Optional[str] = None
    result_local_id: Optional[str] = None

    name: Optional[str] = None
    position: Optional[Position] = None

    def validate_required_fields(self) -> None:
        """Validate required fields according to action. Raises ValueError."""
        if self.action is Action.CREATE:
            _require(self.name, "name")
            _require(self.result_local_id, "result_local_id")
            return

        if self.action is Action.RENAME:
            _require(self.target_local_id, "target_local_id")
            _require(self.name, "name")
            return

        if self.action is Action.MOVE:
            _require(self.target_local_id, "target_local_id")
            _require(self.position, "position")
            return

        if self.action is Action.DELETE:
            _require(self.target_local_id, "target_local_id")
            return

        raise ValueError(f"Unsupported action: {self.action}")


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {field_name}")
