import unittest
from datetime import datetime, timezone

from ghcolumns.util.time import (
    normalize_dt,
    now_utc,
    parse_github_timestamp,
    parse_rfc3339,
)


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_normalize_dt_rejects_naive(self) -> None:
        naive = datetime(2025, 1, 1, 12, 0, 0)
        with self.assertRaises(ValueError):
            normalize_dt(naive)

    def test_normalize_dt_rejects_non_datetime(self) -> None:
        with self.assertRaises(TypeError):
            normalize_dt("2025-01-01")

    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2016-09-05T14:18:44Z")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2016, 9, 5, 14, 18, 44, tzinfo=timezone.utc))

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_invalid(self) -> None:
        with self.assertRaises(ValueError):
            parse_rfc3339("")
        with self.assertRaises(ValueError):
            parse_rfc3339("not-a-date")

    def test_parse_github_timestamp_is_lenient(self) -> None:
        self.assertIsNone(parse_github_timestamp(None))
        self.assertIsNone(parse_github_timestamp("garbage"))
        self.assertEqual(
            parse_github_timestamp("2016-09-05T14:22:28Z"),
            datetime(2016, 9, 5, 14, 22, 28, tzinfo=timezone.utc),
        )


if __name__ == "__main__":
    unittest.main()
