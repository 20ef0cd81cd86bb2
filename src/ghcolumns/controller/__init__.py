"""Internal controller exports for ghcolumns."""

from __future__ import annotations

from .projects_controller import GitHubProjectsController

__all__ = ["GitHubProjectsController"]
