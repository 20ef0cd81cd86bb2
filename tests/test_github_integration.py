import argparse
import os
import unittest
import uuid

from ghcolumns import AuthInfo, Position, ProjectColumnsManager

TOKEN_ENV = "GHCOLUMNS_TOKEN"
ORG_ENV = "GHCOLUMNS_TEST_ORG"


@unittest.skipUnless(
    os.environ.get(TOKEN_ENV, "").strip() and os.environ.get(ORG_ENV, "").strip(),
    f"Set {TOKEN_ENV} and {ORG_ENV} to run against GitHub",
)
class TestGitHubIntegration(unittest.TestCase):
    """
    Integration test with real GitHub classic projects.

    Required env vars:
        - GHCOLUMNS_TOKEN: token allowed to create org projects
        - GHCOLUMNS_TEST_ORG: organization in which a throwaway project is
          created for the run and deleted afterwards
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.mgr = ProjectColumnsManager(AuthInfo.from_env(TOKEN_ENV))
        cls.project = cls.mgr.create_project(
            os.environ[ORG_ENV].strip(),
            f"ghcolumns-it-{uuid.uuid4().hex[:8]}",
            "Created by the ghcolumns integration tests",
        )
        cls.project_id = cls.project.project_id

    @classmethod
    def tearDownClass(cls) -> None:
        try:
            cls.mgr.delete_project(cls.project_id)
        finally:
            cls.mgr.close()

    def setUp(self) -> None:
        self.suffix = uuid.uuid4().hex[:8]

    def test_project_is_readable(self) -> None:
        project = self.mgr.read_project(self.project_id)
        self.assertIsNotNone(project)
        self.assertEqual(project.name, self.project.name)

    def test_single_column_lifecycle(self) -> None:
        created = self.mgr.create_column(self.project_id, f"it-{self.suffix}", "first")
        column_id = created.column.column_id
        self.assertEqual(created.position, Position.first())

        try:
            updated = self.mgr.update_column(
                self.project_id, column_id, f"it-{self.suffix}-renamed", "last"
            )
            self.assertEqual(updated.column.name, f"it-{self.suffix}-renamed")
            self.assertEqual(updated.position, Position.last())

            imported = self.mgr.import_column(column_id)
            self.assertEqual(imported.column.project_id, self.project_id)
        finally:
            self.mgr.delete_column(column_id)

        self.assertIsNone(self.mgr.read_column(self.project_id, column_id))

    def test_reconcile_converges(self) -> None:
        desired = [(f"{name}-{self.suffix}", None) for name in ("todo", "doing", "done")]
        first = self.mgr.reconcile(self.project_id, desired)
        self.assertEqual(first.status, "success")

        columns = self.mgr.read_columns(self.project_id)
        self.assertEqual([c.name for c in columns], [name for name, _ in desired])

        again = self.mgr.reconcile(
            self.project_id, [(c.name, c.column_id) for c in columns]
        )
        self.assertEqual(again.mutation_count, 0)

        self.mgr.reconcile(self.project_id, [])
        self.assertEqual(self.mgr.read_columns(self.project_id), [])


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose unittest output",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    unittest.main(verbosity=2 if args.verbose else 1)
