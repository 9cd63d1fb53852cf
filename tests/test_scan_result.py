import json
import unittest
from datetime import datetime, timezone, timedelta

from app.exceptions import MalformedPersistedRecord
from app.schemas.scan import ScanResult


class TestScanResult(unittest.TestCase):
    def setUp(self):
        self.record = ScanResult(
            plant_name="Monstera (Monstera deliciosa)",
            summary="Name: Monstera (Monstera deliciosa)\nLight: Bright indirect",
            timestamp=datetime(2024, 5, 1, 9, 30, 15, 123456, tzinfo=timezone.utc),
            image_path="/tmp/scan.jpg",
            is_favorite=True,
            tags=("indoor", "tropical"),
        )

    def test_encode_decode_round_trip(self):
        self.assertEqual(ScanResult.decode(self.record.encode()), self.record)

    def test_round_trip_with_missing_optionals(self):
        bare = ScanResult(summary="Disease: Rust", timestamp=datetime(2023, 1, 2, tzinfo=timezone(timedelta(hours=5))))
        self.assertEqual(ScanResult.decode(bare.encode()), bare)

    def test_json_uses_camel_case_fields(self):
        data = self.record.to_json()
        self.assertEqual(set(data), {"plantName", "summary", "timestamp", "imagePath", "isFavorite", "tags"})
        self.assertEqual(data["timestamp"], "2024-05-01T09:30:15.123456+00:00")
        self.assertEqual(data["tags"], ["indoor", "tropical"])

    def test_reads_naive_timestamps(self):
        record = ScanResult.from_json({"summary": "x", "timestamp": "2024-03-04T05:06:07.890"})
        self.assertEqual(record.timestamp, datetime(2024, 3, 4, 5, 6, 7, 890000))

    def test_field_fallbacks(self):
        before = datetime.now(timezone.utc)
        record = ScanResult.from_json({"timestamp": "not a date", "isFavorite": "yes", "tags": "a,b", "plantName": 3})
        self.assertEqual(record.summary, "")
        self.assertGreaterEqual(record.timestamp, before)
        self.assertFalse(record.is_favorite)
        self.assertEqual(record.tags, ())
        self.assertIsNone(record.plant_name)
        self.assertIsNone(record.image_path)

    def test_non_string_tags_dropped(self):
        record = ScanResult.from_json({"summary": "x", "tags": ["a", 1, None, "b"]})
        self.assertEqual(record.tags, ("a", "b"))

    def test_decode_rejects_garbage(self):
        with self.assertRaises(MalformedPersistedRecord):
            ScanResult.decode("{not json")
        with self.assertRaises(MalformedPersistedRecord):
            ScanResult.decode(json.dumps(["a", "list"]))

    def test_records_are_immutable(self):
        with self.assertRaises(Exception):
            self.record.summary = "changed"

    def test_toggle_favorite_twice_restores_value(self):
        toggled = self.record.with_favorite_toggled()
        self.assertFalse(toggled.is_favorite)
        self.assertTrue(self.record.is_favorite)
        self.assertEqual(toggled.with_favorite_toggled(), self.record)

    def test_with_summary_keeps_identity(self):
        updated = self.record.with_summary("Name: Monstera\nLight: Luz indirecta")
        self.assertEqual(updated.identity, self.record.identity)
        self.assertNotEqual(updated.summary, self.record.summary)


if __name__ == '__main__':
    unittest.main()
