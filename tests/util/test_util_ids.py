import unittest
import uuid

from ghcolumns.errors import ValidationError
from ghcolumns.util.ids import (
    new_local_id,
    new_op_id,
    new_plan_id,
    new_uuid,
    parse_remote_id,
    project_id_from_url,
)


class TestUtilIds(unittest.TestCase):
    def test_generated_ids_are_uuid4(self) -> None:
        for factory in (new_uuid, new_plan_id, new_op_id, new_local_id):
            with self.subTest(factory=factory.__name__):
                parsed = uuid.UUID(factory())
                self.assertEqual(parsed.version, 4)

    def test_ids_are_unique(self) -> None:
        values = {new_uuid(), new_uuid(), new_uuid()}
        self.assertEqual(len(values), 3)

    def test_parse_remote_id_accepts_ints_and_digit_strings(self) -> None:
        self.assertEqual(parse_remote_id(42), "42")
        self.assertEqual(parse_remote_id("42"), "42")
        self.assertEqual(parse_remote_id(" 0042 "), "42")

    def test_parse_remote_id_rejects_garbage(self) -> None:
        for value in ("", "abc", "-1", "1.5", 0, -3, True, None, 2.0):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    parse_remote_id(value, "column_id")

    def test_project_id_from_url(self) -> None:
        self.assertEqual(
            project_id_from_url("https://api.github.com/projects/1002604"),
            "1002604",
        )
        self.assertEqual(
            project_id_from_url("https://ghe.example.com/api/v3/projects/7/"),
            "7",
        )
        with self.assertRaises(ValidationError):
            project_id_from_url("https://api.github.com/projects/")
        with self.assertRaises(ValidationError):
            project_id_from_url("")


if __name__ == "__main__":
    unittest.main()
