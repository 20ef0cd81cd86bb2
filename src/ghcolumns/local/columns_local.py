"""ProjectColumnsLocal: in-memory state + operation planning (no external I/O)."""

from __future__ import annotations

import copy
from typing import Optional

from ghcolumns.models import Position, ProjectColumn
from ghcolumns.plan import Action, PlanOperation, ReconcilePlan
from ghcolumns.util.ids import new_local_id, new_op_id, new_plan_id
from ghcolumns.util.time import now_utc

from .snapshot import ColumnSnapshot
from .validators import (
    validate_anchor,
    validate_exists,
    validate_name,
    validate_not_tombstoned,
)


class ProjectColumnsLocal:
    """
    Local, in-memory view of one project's columns + planned operations.

    Every recorded operation is also applied to a virtual ordered state, so
    later decisions (e.g. whether a column already sits at its anchor) see
    the effect of earlier ones.
    """

    def __init__(self, project_id: str, snapshot: ColumnSnapshot) -> None:
        self.project_id = project_id
        self._base_snapshot = snapshot.clone()
        self._snapshot = snapshot.clone()
        self._ops: list[PlanOperation] = []
        self._tombstoned: set[str] = set()

    @classmethod
    def from_columns(
        cls,
        project_id: str,
        columns: list[ProjectColumn],
    ) -> ProjectColumnsLocal:
        snap = ColumnSnapshot.from_columns(columns)
        return cls(project_id=project_id, snapshot=snap)

    # ----------------------------
    # Read APIs
    # ----------------------------
    def get(self, local_id: str) -> ProjectColumn:
        validate_exists(self._snapshot, local_id, "Column")
        return self._snapshot.get(local_id)

    def find_by_column_id(self, column_id: str) -> Optional[ProjectColumn]:
        """Return the live column with this GitHub id, or None."""
        if not self._snapshot.has(column_id) or column_id in self._tombstoned:
            return None
        info = self._snapshot.get(column_id)
        if info.column_id == column_id:
            return info
        return None

    def list_columns(self) -> list[ProjectColumn]:
        """Live columns in (virtual) board order."""
        return self._snapshot.ordered()

    def find_by_name(self, name: str) -> list[ProjectColumn]:
        """Names are not unique on GitHub; returns every live match in order."""
        return [info for info in self._snapshot.ordered() if info.name == name]

    def position_of(self, local_id: str) -> Position:
        validate_exists(self._snapshot, local_id, "Column")
        validate_not_tombstoned(self._tombstoned, local_id, "Column")
        return self._snapshot.position_of(local_id)

    def is_placed(self, local_id: str, position: Position) -> bool:
        return self._snapshot.is_placed(local_id, position)

    def list_ops(self) -> list[PlanOperation]:
        return list(self._ops)

    # ----------------------------
    # Operation planning APIs
    # ----------------------------
    def clear_ops(self) -> None:
        """Clear pending operations and reset virtual state to the base snapshot."""
        self._ops.clear()
        self._tombstoned.clear()
        self._snapshot = self._base_snapshot.clone()

    def create_column(self, name: str) -> str:
        validate_name(name)

        new_id = new_local_id()
        info = ProjectColumn(
            local_id=new_id,
            name=name,
            column_id=None,
            project_id=self.project_id,
        )
        self._snapshot.add_column(info)

        self._record(
            Action.CREATE,
            name=name,
            result_local_id=new_id,
        )
        return new_id

    def rename(self, target_local_id: str, new_name: str) -> None:
        validate_exists(self._snapshot, target_local_id, "Target")
        validate_not_tombstoned(self._tombstoned, target_local_id, "Target")
        validate_name(new_name)

        self._snapshot.rename(target_local_id, new_name)

        self._record(Action.RENAME, target_local_id=target_local_id, name=new_name)

    def move(self, target_local_id: str, position: Position) -> None:
        validate_exists(self._snapshot, target_local_id, "Target")
        validate_not_tombstoned(self._tombstoned, target_local_id, "Target")
        validate_anchor(self._snapshot, self._tombstoned, target_local_id, position)

        self._snapshot.place(target_local_id, position)

        self._record(Action.MOVE, target_local_id=target_local_id, position=position)

    def delete(self, target_local_id: str) -> None:
        validate_exists(self._snapshot, target_local_id, "Target")
        validate_not_tombstoned(self._tombstoned, target_local_id, "Target")

        self._tombstoned.add(target_local_id)
        self._snapshot.remove_column(target_local_id)

        self._record(Action.DELETE, target_local_id=target_local_id)

    # ----------------------------
    # Plan building
    # ----------------------------
    def build_plan(self) -> ReconcilePlan:
        """Build a ReconcilePlan from current pending operations (seq order)."""
        ops_copy: list[PlanOperation] = copy.deepcopy(self._ops)

        return ReconcilePlan(
            plan_id=new_plan_id(),
            project_id=self.project_id,
            created_at=now_utc(),
            operations=sorted(ops_copy, key=lambda o: o.seq),
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _next_seq(self) -> int:
        return len(self._ops)

    def _record(self, action: Action, **fields) -> None:
        op = PlanOperation(
            op_id=new_op_id(),
            seq=self._next_seq(),
            action=action,
            **fields,
        )
        op.validate_required_fields()
        self._ops.append(op)
