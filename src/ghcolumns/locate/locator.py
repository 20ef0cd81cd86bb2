"""Locate a column's relative position in a paginated column listing."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from ghcolumns.errors import NotFoundError
from ghcolumns.models import ColumnPage, Position, ProjectColumn

logger = logging.getLogger(__name__)


class ColumnPageLister(Protocol):
    def list_columns_page(
        self,
        project_id: str,
        page_token: Optional[str] = None,
    ) -> ColumnPage: ...


def position_in(ordered_ids: Sequence[str], column_id: str) -> Position:
    """
    Classify column_id within an already materialised order.

    Same rule as PositionLocator: first when nothing precedes it, last when
    nothing follows it, otherwise after its immediate predecessor.
    """
    try:
        index = list(ordered_ids).index(column_id)
    except ValueError:
        raise NotFoundError(
            "Column not found",
            details={"column_id": column_id},
        ) from None

    if index == 0:
        return Position.first()
    if index == len(ordered_ids) - 1:
        return Position.last()
    return Position.after(ordered_ids[index - 1])


class PositionLocator:
    """
    Read back a column's position by scanning the project's pages in order.

    Pages are consumed once, front to back; nothing is cached between calls.
    The result does not depend on the page size.
    """

    def __init__(self, lister: ColumnPageLister) -> None:
        self._lister = lister

    def locate(self, project_id: str, column_id: str) -> Position:
        """
        Return the position of column_id.

        Raises:
            NotFoundError: column absent from every page, or project gone.
        """
        _, position = self.find(project_id, column_id)
        return position

    def find(self, project_id: str, column_id: str) -> tuple[ProjectColumn, Position]:
        """Return the matched column together with its position."""
        previous: Optional[ProjectColumn] = None
        page_token: Optional[str] = None
        pages_read = 0

        while True:
            page = self._fetch(project_id, page_token, first=pages_read == 0)
            pages_read += 1
            columns = page.columns

            for i, column in enumerate(columns):
                if column.column_id != column_id:
                    continue

                predecessor = columns[i - 1] if i > 0 else previous
                position = self._classify(project_id, page, i, predecessor)
                logger.debug(
                    "Located column %s in project %s at %s (page %d)",
                    column_id,
                    project_id,
                    position,
                    pages_read,
                )
                return column, position

            if columns:
                previous = columns[-1]
            if not page.next_page_token:
                break
            page_token = page.next_page_token

        raise NotFoundError(
            "Column not found in project",
            details={"project_id": project_id, "column_id": column_id},
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _classify(
        self,
        project_id: str,
        page: ColumnPage,
        index: int,
        predecessor: Optional[ProjectColumn],
    ) -> Position:
        if predecessor is None:
            return Position.first()

        anchor = predecessor.column_id or predecessor.local_id
        if index < len(page.columns) - 1:
            return Position.after(anchor)

        # Final entry of its page: last only if no column follows anywhere.
        if page.next_page_token and self._has_more(project_id, page.next_page_token):
            return Position.after(anchor)
        return Position.last()

    def _has_more(self, project_id: str, page_token: Optional[str]) -> bool:
        while page_token:
            page = self._lister.list_columns_page(project_id, page_token)
            if page.columns:
                return True
            page_token = page.next_page_token
        return False

    def _fetch(self, project_id: str, page_token: Optional[str], *, first: bool) -> ColumnPage:
        try:
            return self._lister.list_columns_page(project_id, page_token)
        except NotFoundError as exc:
            if not first:
                raise
            # The project itself no longer exists.
            raise NotFoundError(
                "Project not found",
                details={"project_id": project_id, **exc.details},
                cause=exc,
            ) from exc
