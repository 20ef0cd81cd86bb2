"""Local view exports for ghcolumns."""

from __future__ import annotations

from .columns_local import ProjectColumnsLocal
from .snapshot import ColumnSnapshot

__all__ = ["ProjectColumnsLocal", "ColumnSnapshot"]
