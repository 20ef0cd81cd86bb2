from .ids import (
    new_local_id,
    new_op_id,
    new_plan_id,
    new_uuid,
    parse_remote_id,
    project_id_from_url,
)
from .time import normalize_dt, now_utc, parse_github_timestamp, parse_rfc3339

__all__ = [
    "new_uuid",
    "new_plan_id",
    "new_op_id",
    "new_local_id",
    "parse_remote_id",
    "project_id_from_url",
    "now_utc",
    "parse_rfc3339",
    "parse_github_timestamp",
    "normalize_dt",
]
