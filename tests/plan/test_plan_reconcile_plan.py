import unittest
from datetime import datetime, timezone

from ghcolumns.models import Position
from ghcolumns.plan import Action, PlanOperation, ReconcilePlan


class TestReconcilePlan(unittest.TestCase):
    def test_plan_fields_and_counts(self) -> None:
        created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        ops = [
            PlanOperation(op_id="o1", seq=0, action=Action.CREATE, name="a", result_local_id="l1"),
            PlanOperation(
                op_id="o2",
                seq=1,
                action=Action.MOVE,
                target_local_id="l1",
                position=Position.first(),
            ),
            PlanOperation(
                op_id="o3",
                seq=2,
                action=Action.MOVE,
                target_local_id="9",
                position=Position.last(),
            ),
        ]
        plan = ReconcilePlan(plan_id="p1", project_id="42", created_at=created_at, operations=ops)
        self.assertEqual(plan.project_id, "42")
        self.assertFalse(plan.is_empty())
        self.assertEqual(plan.count_by_action(), {"CREATE": 1, "MOVE": 2})

    def test_empty_plan(self) -> None:
        plan = ReconcilePlan(
            plan_id="p1",
            project_id="42",
            created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            operations=[],
        )
        self.assertTrue(plan.is_empty())
        self.assertEqual(plan.count_by_action(), {})


if __name__ == "__main__":
    unittest.main()
