"""Strict validation helpers for ProjectColumnsLocal."""

from __future__ import annotations

from ghcolumns.errors import LocalValidationError
from ghcolumns.models import Position

from .snapshot import ColumnSnapshot


def validate_exists(snapshot: ColumnSnapshot, local_id: str, what: str) -> None:
    if not snapshot.has(local_id):
        raise LocalValidationError(f"{what} does not exist: {local_id}")


def validate_not_tombstoned(
    tombstoned: set[str],
    target_local_id: str,
    what: str,
) -> None:
    if target_local_id in tombstoned:
        raise LocalValidationError(f"{what} is already scheduled for deletion: "
                                   f"{target_local_id}")


def validate_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise LocalValidationError("Column name must be a non-empty string")


def validate_anchor(
    snapshot: ColumnSnapshot,
    tombstoned: set[str],
    target_local_id: str,
    position: Position,
) -> None:
    """Reject after:X when X is unknown, deleted, or the target itself."""
    if not position.is_after:
        return

    anchor = position.anchor or ""
    if anchor == target_local_id:
        raise LocalValidationError("MOVE anchor cannot be the column itself")

    validate_exists(snapshot, anchor, "Anchor")
    validate_not_tombstoned(tombstoned, anchor, "Anchor")
