"""Ordered local snapshot of one project's columns."""

from __future__ import annotations

from dataclasses import dataclass, field

from ghcolumns.locate.locator import position_in
from ghcolumns.models import Position, ProjectColumn


@dataclass(slots=True)
class ColumnSnapshot:
    """
    In-memory representation of a project's columns.

    Indexes:
        - columns_by_local_id
        - order: local ids in remote (fetch) order

    Deleted columns leave `order` but stay in `columns_by_local_id`, so plan
    operations targeting them still resolve.
    """

    columns_by_local_id: dict[str, ProjectColumn] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    @classmethod
    def from_columns(cls, columns: list[ProjectColumn]) -> ColumnSnapshot:
        """Build snapshot from columns given in fetch order."""
        snap = cls()
        for info in columns:
            snap.add_column(info)
        return snap

    def clone(self) -> ColumnSnapshot:
        """Deep-clone this snapshot (including the order index)."""
        new_columns: dict[str, ProjectColumn] = {}
        for local_id, info in self.columns_by_local_id.items():
            new_columns[local_id] = ProjectColumn(
                local_id=info.local_id,
                name=info.name,
                column_id=info.column_id,
                project_id=info.project_id,
                created_at=info.created_at,
                updated_at=info.updated_at,
            )
        return ColumnSnapshot(columns_by_local_id=new_columns, order=list(self.order))

    # ----------------------------
    # Query helpers
    # ----------------------------
    def has(self, local_id: str) -> bool:
        return local_id in self.columns_by_local_id

    def get(self, local_id: str) -> ProjectColumn:
        return self.columns_by_local_id[local_id]

    def ordered(self) -> list[ProjectColumn]:
        return [self.columns_by_local_id[local_id] for local_id in self.order]

    def position_of(self, local_id: str) -> Position:
        return position_in(self.order, local_id)

    def is_placed(self, local_id: str, position: Position) -> bool:
        """
        Return True if local_id already satisfies position.

        first: index 0, last: final index, after:X: immediately preceded by X.
        """
        if local_id not in self.order:
            return False
        index = self.order.index(local_id)
        if position.is_first:
            return index == 0
        if position.is_last:
            return index == len(self.order) - 1
        return index > 0 and self.order[index - 1] == position.anchor

    # ----------------------------
    # Mutation helpers (keep indexes consistent)
    # ----------------------------
    def add_column(self, info: ProjectColumn) -> None:
        """Add a column at the end, as GitHub does for newly created columns."""
        self.columns_by_local_id[info.local_id] = info
        if info.local_id not in self.order:
            self.order.append(info.local_id)

    def remove_column(self, local_id: str) -> None:
        """Drop the column from the order; its record is kept."""
        if local_id in self.order:
            self.order.remove(local_id)

    def rename(self, local_id: str, new_name: str) -> None:
        self.columns_by_local_id[local_id].name = new_name

    def place(self, local_id: str, position: Position) -> None:
        """Apply move semantics: first, last, or right after the anchor."""
        self.order.remove(local_id)
        if position.is_first:
            self.order.insert(0, local_id)
        elif position.is_last:
            self.order.append(local_id)
        else:
            self.order.insert(self.order.index(position.anchor) + 1, local_id)  # type: ignore[arg-type]
