"""Data models for projects and their columns."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .position import Position


@dataclass(slots=True)
class ProjectColumn:
    """
    Represents a project column tracked by the library.

    Notes:
        - For existing columns: local_id == column_id.
        - For columns not created on GitHub yet: column_id is None and
          local_id is a generated UUID.
    """

    local_id: str
    name: str

    column_id: Optional[str] = None
    project_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class DesiredColumn:
    """One slot of the declared column order. column_id is None for new columns."""

    name: str
    column_id: Optional[str] = None


@dataclass(slots=True)
class Project:
    project_id: str
    name: str
    state: Optional[str] = None
    body: Optional[str] = None


@dataclass(slots=True)
class ColumnPage:
    """One page of a project's column listing, in fetch order."""

    columns: list[ProjectColumn]
    next_page_token: Optional[str] = None


@dataclass(slots=True)
class LocatedColumn:
    """A column as read back from GitHub, with its current position."""

    column: ProjectColumn
    position: Position
