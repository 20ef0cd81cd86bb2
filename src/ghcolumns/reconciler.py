"""ListReconciler: make a project's columns match a declared order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence, Union

from ghcolumns.errors import ValidationError
from ghcolumns.local import ProjectColumnsLocal
from ghcolumns.models import DesiredColumn, Position, ReconcileResult
from ghcolumns.plan import ReconcilePlan

if TYPE_CHECKING:
    from ghcolumns.manager import ProjectColumnsManager

logger = logging.getLogger(__name__)

DesiredLike = Union[DesiredColumn, tuple]


class ListReconciler:
    """
    Diff a desired column list against the live project and apply the result.

    Each desired slot is anchored relative to the slot before it: slot 0 is
    `first`, the final slot is `last`, every other slot is `after` the column
    placed just before it. Unclaimed columns are deleted at the end.

    Moves of existing columns are skipped when the project's current order,
    with every earlier staged operation applied to it, already puts the
    column at its anchor. Newly created columns are always moved.
    """

    def __init__(self, manager: ProjectColumnsManager) -> None:
        self._manager = manager

    def plan(self, project_id: str, desired: Sequence[DesiredLike]) -> ReconcilePlan:
        """
        Build the plan without applying it.

        Raises:
            ValidationError: malformed desired list (before any remote call).
            NotFoundError: the project no longer exists.
        """
        slots = normalize_desired(desired)
        local = self._manager.open(project_id)
        try:
            stage_desired(local, slots)
            plan = local.build_plan()
        finally:
            local.clear_ops()

        logger.debug(
            "Planned %d operations for project %s: %s",
            len(plan.operations),
            project_id,
            plan.count_by_action(),
        )
        return plan

    def reconcile(self, project_id: str, desired: Sequence[DesiredLike]) -> ReconcileResult:
        """Plan and apply; result.mutation_count is the number of calls made."""
        plan = self.plan(project_id, desired)
        result = self._manager.apply_plan(plan)
        logger.info(
            "Reconciled project %s: %s, %d mutations",
            project_id,
            result.status,
            result.mutation_count,
        )
        return result


def normalize_desired(desired: Sequence[DesiredLike]) -> list[DesiredColumn]:
    """
    Coerce (name, column_id) tuples to DesiredColumn and validate the list.

    Raises:
        ValidationError: empty names or duplicate column ids.
    """
    if isinstance(desired, (str, bytes)):
        raise ValidationError("desired must be a sequence of columns")

    slots: list[DesiredColumn] = []
    seen: set[str] = set()

    for index, item in enumerate(desired):
        slot = _coerce_slot(item, index)
        if slot.column_id is not None:
            if slot.column_id in seen:
                raise ValidationError(
                    "Duplicate column_id in desired columns",
                    details={"column_id": slot.column_id, "index": index},
                )
            seen.add(slot.column_id)
        slots.append(slot)

    return slots


def stage_desired(local: ProjectColumnsLocal, desired: list[DesiredColumn]) -> None:
    """Record the operations that turn local's current order into desired."""
    claimed: set[str] = set()
    last_placed: Optional[str] = None

    for index, slot in enumerate(desired):
        anchor = anchor_for(index, len(desired), last_placed)
        existing = local.find_by_column_id(slot.column_id) if slot.column_id else None

        if existing is None:
            local_id = local.create_column(slot.name)
            local.move(local_id, anchor)
        else:
            local_id = existing.local_id
            if existing.name != slot.name:
                local.rename(local_id, slot.name)
            if not local.is_placed(local_id, anchor):
                local.move(local_id, anchor)

        claimed.add(local_id)
        last_placed = local_id

    for info in local.list_columns():
        if info.local_id not in claimed:
            local.delete(info.local_id)


def anchor_for(index: int, total: int, last_placed: Optional[str]) -> Position:
    if index == 0:
        return Position.first()
    if index == total - 1:
        return Position.last()
    return Position.after(last_placed)  # type: ignore[arg-type]


def _coerce_slot(item: DesiredLike, index: int) -> DesiredColumn:
    if isinstance(item, DesiredColumn):
        name, column_id = item.name, item.column_id
    elif isinstance(item, tuple) and len(item) in (1, 2):
        name = item[0]
        column_id = item[1] if len(item) == 2 else None
    else:
        raise ValidationError(
            "desired entries must be DesiredColumn or (name, column_id)",
            details={"index": index},
        )

    if not isinstance(name, str) or not name.strip():
        raise ValidationError(
            "Column name must be a non-empty string",
            details={"index": index},
        )
    if column_id is not None:
        column_id = str(column_id).strip()
        if not column_id:
            raise ValidationError("column_id must not be blank", details={"index": index})

    return DesiredColumn(name=name, column_id=column_id)
