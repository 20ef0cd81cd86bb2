from ghcolumns.errors import ConflictError, NotFoundError
from ghcolumns.models import ColumnPage, Position, Project, ProjectColumn


class FakeController:
    """In-memory stand-in for GitHubProjectsController with real ordering rules."""

    MUTATIONS = (
        "create_column",
        "rename_column",
        "move_column",
        "delete_column",
        "create_project",
        "delete_project",
    )

    def __init__(self, project_id="P1", columns=None, per_page=2):
        self.project_id = project_id
        self.per_page = per_page
        self.calls = []
        self.order = []
        self.names = {}
        self.project_exists = True
        self.other_projects = {}
        self.closed = False
        self._next_id = 1
        for column_id, name in columns or []:
            self.order.append(column_id)
            self.names[column_id] = name
            self._next_id = max(self._next_id, int(column_id) + 1)

    # ----------------------------
    # Inspection helpers
    # ----------------------------
    def mutations(self):
        return [c for c in self.calls if c[0] in self.MUTATIONS]

    def board(self):
        return [(cid, self.names[cid]) for cid in self.order]

    # ----------------------------
    # Controller API
    # ----------------------------
    def get_project(self, project_id):
        self.calls.append(("get_project", project_id))
        if project_id in self.other_projects:
            return self.other_projects[project_id]
        self._check_project(project_id)
        return Project(project_id=project_id, name="board")

    def create_project(self, org, name, body=None):
        self.calls.append(("create_project", org, name, body))
        project = Project(project_id=f"P{len(self.other_projects) + 2}", name=name, body=body)
        self.other_projects[project.project_id] = project
        return project

    def delete_project(self, project_id):
        self.calls.append(("delete_project", project_id))
        if project_id in self.other_projects:
            del self.other_projects[project_id]
            return
        self._check_project(project_id)
        self.project_exists = False

    def close(self):
        self.closed = True

    def list_columns_page(self, project_id, page_token=None):
        self.calls.append(("list_columns_page", project_id, page_token))
        self._check_project(project_id)
        start = int(page_token) if page_token else 0
        ids = self.order[start:start + self.per_page]
        end = start + self.per_page
        next_token = str(end) if end < len(self.order) else None
        return ColumnPage(columns=[self._column(cid) for cid in ids], next_page_token=next_token)

    def list_columns(self, project_id):
        columns = []
        token = None
        while True:
            page = self.list_columns_page(project_id, token)
            columns.extend(page.columns)
            if not page.next_page_token:
                return columns
            token = page.next_page_token

    def get_column(self, column_id):
        self.calls.append(("get_column", column_id))
        self._check_column(column_id)
        return self._column(column_id)

    def create_column(self, project_id, name):
        self.calls.append(("create_column", name))
        self._check_project(project_id)
        column_id = str(self._next_id)
        self._next_id += 1
        self.order.append(column_id)
        self.names[column_id] = name
        return self._column(column_id)

    def rename_column(self, column_id, new_name):
        self.calls.append(("rename_column", column_id, new_name))
        self._check_column(column_id)
        self.names[column_id] = new_name
        return self._column(column_id)

    def move_column(self, column_id, position):
        if isinstance(position, str):
            position = Position.parse(position)
        self.calls.append(("move_column", column_id, position.to_wire()))
        self._check_column(column_id)
        if position.is_after and position.anchor not in self.order:
            raise ConflictError("Validation Failed", details={"status_code": 422})

        self.order.remove(column_id)
        if position.is_first:
            self.order.insert(0, column_id)
        elif position.is_last:
            self.order.append(column_id)
        else:
            self.order.insert(self.order.index(position.anchor) + 1, column_id)

    def delete_column(self, column_id):
        self.calls.append(("delete_column", column_id))
        self._check_column(column_id)
        self.order.remove(column_id)
        del self.names[column_id]

    # ----------------------------
    # Internals
    # ----------------------------
    def _column(self, column_id):
        return ProjectColumn(
            local_id=column_id,
            column_id=column_id,
            name=self.names[column_id],
            project_id=self.project_id,
        )

    def _check_project(self, project_id):
        if not self.project_exists or project_id != self.project_id:
            raise NotFoundError("Not Found", details={"status_code": 404})

    def _check_column(self, column_id):
        if column_id not in self.order:
            raise NotFoundError("Not Found", details={"status_code": 404, "column_id": column_id})
