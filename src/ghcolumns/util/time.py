from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    GitHub returns strings like 2016-09-05T14:18:44Z; offsets are accepted too.
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    # fromisoformat doesn't accept 'Z' before 3.11.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    return normalize_dt(datetime.fromisoformat(s)).astimezone(timezone.utc)


def parse_github_timestamp(value: Any) -> Optional[datetime]:
    """Lenient variant for API payloads: None when absent or unparseable."""
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt
