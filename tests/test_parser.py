import unittest
from datetime import datetime, timedelta, timezone

from app.schemas.scan import ScanResult
from app.services.parser import (
    compose_share_text,
    display_title,
    format_relative_time,
    parse_fields,
    split_tips,
    tips_from_summary,
)


class TestParseFields(unittest.TestCase):
    def test_basic_fields(self):
        fields = parse_fields("Name: Monstera\nLight: Bright indirect\nWater: Weekly")
        self.assertEqual(fields, {"Name": "Monstera", "Light": "Bright indirect", "Water": "Weekly"})

    def test_tips_split(self):
        tips = parse_fields("Tips: Mist leaves; Avoid direct sun; Repot yearly")["Tips"]
        self.assertEqual(split_tips(tips), ["Mist leaves", "Avoid direct sun", "Repot yearly"])

    def test_tips_keep_order_and_duplicates(self):
        self.assertEqual(split_tips(" a ;; b;a ; "), ["a", "b", "a"])
        self.assertEqual(split_tips(None), [])

    def test_empty_and_garbage_input(self):
        self.assertEqual(parse_fields(""), {})
        self.assertEqual(parse_fields(":\n: value\nkey:\n   \n:::"), {})
        self.assertEqual(parse_fields(None), {})
        self.assertEqual(parse_fields(b"Name: bytes"), {})
        self.assertIsInstance(parse_fields("\x00\xff�::\x1c ab:c"), dict)

    def test_first_colon_splits(self):
        fields = parse_fields("Temperature: 18:00 to 24:00 C")
        self.assertEqual(fields, {"Temperature": "18:00 to 24:00 C"})

    def test_last_line_wins_and_lines_are_trimmed(self):
        fields = parse_fields("  Water : daily \nno colon here\nWater: weekly\r\n")
        self.assertEqual(fields, {"Water": "weekly"})

    def test_tips_from_summary(self):
        self.assertEqual(tips_from_summary("Name: Fern\nTips: Keep moist; Shade"), ["Keep moist", "Shade"])
        self.assertEqual(tips_from_summary("Name: Fern"), [])


class TestPresentationHelpers(unittest.TestCase):
    def test_title_fallbacks(self):
        named = ScanResult(plant_name="Fern", summary="Name: Other")
        parsed = ScanResult(summary="Name: Boston fern\nLight: Shade")
        unnamed = ScanResult(summary="Disease: Rust")
        self.assertEqual(display_title(named), "Fern")
        self.assertEqual(display_title(parsed), "Boston fern")
        self.assertEqual(display_title(unnamed), "Scan Result")
        self.assertEqual(display_title(unnamed, default="Unknown plant"), "Unknown plant")

    def test_share_text(self):
        record = ScanResult(
            plant_name="Monstera",
            summary="Name: Monstera\nLight: Bright indirect\nWater: Weekly\nSoil: Chunky mix\nTips: Mist leaves; Repot yearly",
        )
        self.assertEqual(
            compose_share_text(record),
            "Monstera\nLight: Bright indirect\nWater: Weekly\nSoil: Chunky mix\n\nTips:\n- Mist leaves\n- Repot yearly",
        )

    def test_share_text_without_fields(self):
        self.assertEqual(compose_share_text(ScanResult(summary="No description available.")), "Scan Result")

    def test_relative_time(self):
        now = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(format_relative_time(now - timedelta(minutes=5), now), "5m ago")
        self.assertEqual(format_relative_time(now - timedelta(hours=3, minutes=59), now), "3h ago")
        self.assertEqual(format_relative_time(now - timedelta(days=2), now), "2024-06-08")

    def test_relative_time_mixed_naive_and_aware(self):
        now = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(format_relative_time(datetime(2024, 6, 10, 11, 30), now), "30m ago")

    def test_relative_time_in_future_is_clamped(self):
        now = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(format_relative_time(now + timedelta(minutes=3), now), "0m ago")
        self.assertEqual(format_relative_time(now + timedelta(days=2), now), "0m ago")


if __name__ == '__main__':
    unittest.main()
