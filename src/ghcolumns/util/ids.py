from __future__ import annotations

import uuid
from typing import Any

from ghcolumns.errors import ValidationError


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_plan_id() -> str:
    """Generate a new ReconcilePlan ID."""
    return new_uuid()


def new_op_id() -> str:
    """Generate a new PlanOperation ID."""
    return new_uuid()


def new_local_id() -> str:
    """Generate a new local_id for columns that don't have a GitHub column_id yet."""
    return new_uuid()


def parse_remote_id(value: Any, what: str = "id") -> str:
    """
    Normalize a GitHub numeric id (int or decimal string) to its string form.

    Raises:
        ValidationError: if value is not a positive integer.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Unconvertible {what}: {value!r}")
    if isinstance(value, int):
        if value <= 0:
            raise ValidationError(f"Unconvertible {what}: {value!r}")
        return str(value)
    if isinstance(value, str):
        s = value.strip()
        if s.isdigit() and int(s) > 0:
            return str(int(s))
    raise ValidationError(f"Unconvertible {what}: {value!r}", details={what: value})


def project_id_from_url(url: str) -> str:
    """
    Extract the project id from a column's `project_url`.

    Accepts any host as long as the path ends with /projects/<id>.
    """
    if not isinstance(url, str) or not url:
        raise ValidationError("project_url must be a non-empty string")

    tail = url.rstrip("/").rsplit("/", 1)[-1]
    return parse_remote_id(tail, "project_id")
