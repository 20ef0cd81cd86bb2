"""Position lookup exports for ghcolumns."""

from __future__ import annotations

from .locator import ColumnPageLister, PositionLocator, position_in

__all__ = ["PositionLocator", "ColumnPageLister", "position_in"]
