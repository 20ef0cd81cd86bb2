"""ProjectColumnsManager: orchestrates local planning and GitHub apply."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ghcolumns.auth import AuthInfo
from ghcolumns.controller import GitHubProjectsController
from ghcolumns.controller.endpoints import (
    DEFAULT_BASE_URL,
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT_SEC,
)
from ghcolumns.errors import (
    AuthError,
    GhColumnsError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    PermissionError,
    ValidationError,
)
from ghcolumns.local import ProjectColumnsLocal
from ghcolumns.locate import PositionLocator
from ghcolumns.models import (
    LocatedColumn,
    OperationResult,
    Position,
    Project,
    ProjectColumn,
    ReconcileResult,
)
from ghcolumns.plan import Action, PlanOperation, ReconcilePlan
from ghcolumns.reconciler import DesiredLike, ListReconciler

logger = logging.getLogger(__name__)

PositionLike = Union[Position, str]


@dataclass(frozen=True)
class _ApplyContext:
    id_map: dict[str, str]


class ProjectColumnsManager:
    """High-level manager for a project's columns: Plan -> Apply."""

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        base_url: str = DEFAULT_BASE_URL,
        per_page: int = DEFAULT_PER_PAGE,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self._controller = GitHubProjectsController(
            auth_info,
            base_url=base_url,
            per_page=per_page,
            timeout=timeout,
        )
        self._local: Optional[ProjectColumnsLocal] = None
        self._project_id: Optional[str] = None

    @classmethod
    def from_controller(cls, controller: GitHubProjectsController) -> "ProjectColumnsManager":
        """Create manager with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._controller = controller
        obj._local = None
        obj._project_id = None
        return obj

    @property
    def local(self) -> ProjectColumnsLocal:
        """Return the current local view. Requires open() first."""
        if self._local is None:
            raise InvalidStateError("Local is not initialized. Call open() first.")
        return self._local

    @property
    def locator(self) -> PositionLocator:
        return PositionLocator(self._controller)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._controller.close()

    def __enter__(self) -> ProjectColumnsManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open(self, project_id: str) -> ProjectColumnsLocal:
        """
        Load every column of project_id (all pages) and build the local view.

        Raises:
            InvalidStateError: if pending ops exist (must apply/clear first).
            NotFoundError: if the project no longer exists.
        """
        if self._local is not None and self._local.list_ops():
            raise InvalidStateError("Pending operations exist. Apply/clear first.")

        self._controller.get_project(project_id)
        columns = self._controller.list_columns(project_id)
        logger.debug("Opened project %s with %d columns", project_id, len(columns))

        local = ProjectColumnsLocal.from_columns(project_id, columns)
        self._local = local
        self._project_id = project_id
        return local

    def refresh_snapshot(self) -> None:
        """Reload the current project snapshot. Requires open() first."""
        if self._project_id is None:
            raise InvalidStateError("No project opened. Call open() first.")
        if self._local is not None and self._local.list_ops():
            raise InvalidStateError("Pending operations exist. Apply/clear first.")
        self.open(self._project_id)

    def build_plan(self) -> ReconcilePlan:
        """Build a ReconcilePlan from current local pending operations."""
        return self.local.build_plan()

    def sync(self, *, execute: bool = False) -> ReconcilePlan | ReconcileResult:
        """
        Convenience API.

        - execute=False: build and return ReconcilePlan
        - execute=True: build, apply, and return ReconcileResult
        """
        plan = self.build_plan()
        if not execute:
            return plan
        return self.apply_plan(plan)

    def apply_plan(self, plan: ReconcilePlan) -> ReconcileResult:
        """
        Apply ReconcilePlan to GitHub, in seq order.

        Policy:
            - Stop at the first non-fatal error: return ReconcileResult.failed
              (no raise, no rollback of what was already applied).
            - Raise for fatal errors: Auth/Permission/InvalidArgument/
              InvalidState/Validation.
            - After apply attempt: clear local ops and try to refresh snapshot.
        """
        if self._project_id is None or self._local is None:
            raise InvalidStateError("No project opened. Call open() first.")
        if plan.project_id != self._project_id:
            raise InvalidStateError("Plan project_id does not match current opened project.")

        operations = sorted(plan.operations, key=lambda o: o.seq)
        _check_unique_op_ids(operations)

        logger.info(
            "Applying plan %s to project %s: %s",
            plan.plan_id,
            plan.project_id,
            plan.count_by_action() or "no changes",
        )

        ctx = _ApplyContext(id_map={})
        results: list[OperationResult] = []
        stopped_op_id: Optional[str] = None

        for op in operations:
            try:
                op.validate_required_fields()
            except ValueError as exc:
                raise InvalidArgumentError(
                    "Invalid operation: missing required fields",
                    details={"op_id": op.op_id, "action": op.action.value},
                    cause=exc,
                ) from exc

            try:
                self._apply_one(op, ctx)
                results.append(_success_result(op, ctx))
            except GhColumnsError as exc:
                if _is_fatal(exc):
                    raise
                logger.warning(
                    "Operation %s (%s) failed: %s %s",
                    op.op_id,
                    op.action.value,
                    exc.__class__.__name__,
                    exc,
                )
                results.append(_failed_result(op, exc))
                stopped_op_id = op.op_id
                break

        status = "failed" if stopped_op_id is not None else "success"
        summary = _summarize_results(results)

        # Clear pending ops regardless of success/failure.
        self._local.clear_ops()

        # Always attempt refresh snapshot (do not raise on refresh failure).
        snapshot_refreshed = True
        try:
            self.open(plan.project_id)
        except GhColumnsError as exc:
            logger.warning("Snapshot refresh failed for project %s: %s", plan.project_id, exc)
            snapshot_refreshed = False
            summary["refresh_failed"] = summary.get("refresh_failed", 0) + 1

        return ReconcileResult(
            status=status,  # type: ignore[arg-type]
            stopped_op_id=stopped_op_id,
            results=results,
            id_map=dict(ctx.id_map),
            summary=summary,
            snapshot_refreshed=snapshot_refreshed,
        )

    # ----------------------------
    # Reconciliation
    # ----------------------------
    def plan_reconcile(
        self,
        project_id: str,
        desired: Sequence[DesiredLike],
    ) -> ReconcilePlan:
        """Dry run: the plan reconcile() would apply. Performs no mutations."""
        return ListReconciler(self).plan(project_id, desired)

    def reconcile(
        self,
        project_id: str,
        desired: Sequence[DesiredLike],
    ) -> ReconcileResult:
        """Make the project's columns match desired, in order."""
        return ListReconciler(self).reconcile(project_id, desired)

    # ----------------------------
    # Project lifecycle
    # ----------------------------
    def create_project(self, org: str, name: str, body: Optional[str] = None) -> Project:
        """Create an organization project; its columns start empty."""
        _require_name(name, "Project")
        if not isinstance(org, str) or not org.strip():
            raise ValidationError("Organization must be a non-empty string")

        project = self._controller.create_project(org, name, body)
        logger.info("Created project %s (%r) in org %s", project.project_id, name, org)
        return project

    def read_project(self, project_id: str) -> Optional[Project]:
        """Read a project, or None if it is gone."""
        try:
            return self._controller.get_project(project_id)
        except NotFoundError:
            logger.info("Project %s not found; treating as deleted", project_id)
            return None

    def delete_project(self, project_id: str) -> None:
        self._controller.delete_project(project_id)
        logger.info("Deleted project %s", project_id)

    # ----------------------------
    # Single-column lifecycle
    # ----------------------------
    def locate(self, project_id: str, column_id: str) -> Position:
        """Current position of column_id. Raises NotFoundError."""
        return self.locator.locate(project_id, column_id)

    def read_columns(self, project_id: str) -> Optional[list[ProjectColumn]]:
        """All columns in board order, or None if the project is gone."""
        try:
            return self._controller.list_columns(project_id)
        except NotFoundError:
            logger.info("Project %s not found; treating as deleted", project_id)
            return None

    def read_column(self, project_id: str, column_id: str) -> Optional[LocatedColumn]:
        """Read name and position back, or None if the column (or project) is gone."""
        try:
            column, position = self.locator.find(project_id, column_id)
        except NotFoundError:
            logger.info(
                "Column %s not found in project %s; treating as deleted",
                column_id,
                project_id,
            )
            return None
        return LocatedColumn(column=column, position=position)

    def create_column(
        self,
        project_id: str,
        name: str,
        position: Optional[PositionLike] = None,
    ) -> LocatedColumn:
        """Create a column, move it when a position is given, and read it back."""
        _require_name(name)
        target = _coerce_position(position)

        info = self._controller.create_column(project_id, name)
        if not info.column_id:
            raise InvalidStateError("GitHub did not return an id for the created column")
        logger.info("Created column %s (%r) in project %s", info.column_id, name, project_id)

        if target is not None:
            self._controller.move_column(info.column_id, target)

        return self._read_back(project_id, info.column_id)

    def update_column(
        self,
        project_id: str,
        column_id: str,
        name: str,
        position: Optional[PositionLike] = None,
    ) -> LocatedColumn:
        """Rename a column, then move it when a position is given."""
        _require_name(name)
        target = _coerce_position(position)

        self._controller.rename_column(column_id, name)
        if target is not None:
            self._controller.move_column(column_id, target)

        return self._read_back(project_id, column_id)

    def delete_column(self, column_id: str) -> None:
        self._controller.delete_column(column_id)
        logger.info("Deleted column %s", column_id)

    def import_column(self, column_id: str) -> LocatedColumn:
        """
        Adopt an existing column by id alone.

        The project id comes from the column's project_url.
        """
        info = self._controller.get_column(column_id)
        if not info.project_id:
            raise InvalidStateError(
                "Column has no project_url; cannot determine its project",
                details={"column_id": column_id},
            )
        return self._read_back(info.project_id, column_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _read_back(self, project_id: str, column_id: str) -> LocatedColumn:
        located = self.read_column(project_id, column_id)
        if located is None:
            raise NotFoundError(
                "Column disappeared before it could be read back",
                details={"project_id": project_id, "column_id": column_id},
            )
        return located

    def _apply_one(self, op: PlanOperation, ctx: _ApplyContext) -> None:
        """Apply one operation. Raises ghcolumns errors on failure."""
        if op.action is Action.CREATE:
            info = self._controller.create_column(self._project_id, op.name)  # type: ignore[arg-type]
            _store_created_id(ctx, op.result_local_id, info.column_id)
            logger.info("Created column %s (%r)", info.column_id, op.name)
            return

        if op.action is Action.RENAME:
            column_id = self._resolve_column_id(op.target_local_id, ctx)
            self._controller.rename_column(column_id, op.name)  # type: ignore[arg-type]
            logger.info("Renamed column %s to %r", column_id, op.name)
            return

        if op.action is Action.MOVE:
            column_id = self._resolve_column_id(op.target_local_id, ctx)
            position = self._resolve_position(op.position, ctx)  # type: ignore[arg-type]
            self._controller.move_column(column_id, position)
            logger.info("Moved column %s to %s", column_id, position)
            return

        if op.action is Action.DELETE:
            column_id = self._resolve_column_id(op.target_local_id, ctx)
            self._controller.delete_column(column_id)
            logger.info("Deleted column %s", column_id)
            return

        raise InvalidArgumentError("Unsupported action", details={"action": op.action})

    def _resolve_position(self, position: Position, ctx: _ApplyContext) -> Position:
        if not position.is_after:
            return position
        return position.with_anchor(self._resolve_column_id(position.anchor, ctx))

    def _resolve_column_id(self, local_id: Optional[str], ctx: _ApplyContext) -> str:
        if not local_id:
            raise InvalidStateError("local_id is missing")

        if local_id in ctx.id_map:
            return ctx.id_map[local_id]

        info = self.local.get(local_id)
        if info.column_id:
            return info.column_id

        raise InvalidStateError(
            "Unresolved local_id (GitHub column_id not known yet)",
            details={"local_id": local_id},
        )


def _coerce_position(position: Optional[PositionLike]) -> Optional[Position]:
    if position is None or isinstance(position, Position):
        return position
    return Position.parse(position)


def _require_name(name: str, what: str = "Column") -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{what} name must be a non-empty string")


def _store_created_id(ctx: _ApplyContext, result_local_id: Optional[str], column_id: str | None) -> None:
    if not result_local_id:
        raise InvalidStateError("result_local_id is missing for CREATE operation")
    if not column_id:
        raise InvalidStateError("GitHub did not return column_id for created column")
    ctx.id_map[result_local_id] = column_id


def _check_unique_op_ids(operations: list[PlanOperation]) -> None:
    seen: set[str] = set()
    for op in operations:
        if op.op_id in seen:
            raise InvalidArgumentError("Duplicate op_id in plan", details={"op_id": op.op_id})
        seen.add(op.op_id)


def _is_fatal(exc: GhColumnsError) -> bool:
    return isinstance(
        exc,
        (
            AuthError,
            PermissionError,
            InvalidArgumentError,
            InvalidStateError,
            ValidationError,
        ),
    )


def _success_result(op: PlanOperation, ctx: _ApplyContext) -> OperationResult:
    result_column_id = None
    if op.result_local_id and op.result_local_id in ctx.id_map:
        result_column_id = ctx.id_map[op.result_local_id]

    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        action=op.action.value,
        status="success",
        result_local_id=op.result_local_id,
        result_column_id=result_column_id,
    )


def _failed_result(op: PlanOperation, exc: GhColumnsError) -> OperationResult:
    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        action=op.action.value,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details={**exc.details, "target_local_id": op.target_local_id},
    )


def _summarize_results(results: list[OperationResult]) -> dict[str, int]:
    summary: dict[str, int] = {"success": 0, "failed": 0, "skipped": 0}
    for r in results:
        summary[r.status] = summary.get(r.status, 0) + 1
    return summary
