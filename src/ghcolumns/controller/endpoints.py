"""Endpoint paths for the GitHub Projects (classic) REST API."""

from __future__ import annotations

DEFAULT_BASE_URL: str = "https://api.github.com"
DEFAULT_PER_PAGE: int = 30
MAX_PER_PAGE: int = 100
DEFAULT_TIMEOUT_SEC: float = 30.0

PROJECT_PATH: str = "/projects/{project_id}"
PROJECT_COLUMNS_PATH: str = "/projects/{project_id}/columns"
COLUMN_PATH: str = "/projects/columns/{column_id}"
COLUMN_MOVES_PATH: str = "/projects/columns/{column_id}/moves"
ORG_PROJECTS_PATH: str = "/orgs/{org}/projects"
