"""Plan actions for ghcolumns."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Remote mutations a plan can contain."""

    CREATE = "CREATE"
    RENAME = "RENAME"
    MOVE = "MOVE"
    DELETE = "DELETE"
