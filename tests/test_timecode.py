"""Unit tests for the timecode helpers."""

import pytest

from yt_digest.core.timecode import format_clock, parse_timecode, pick_seconds


class TestParseTimecode:

    @pytest.mark.parametrize("text,expected", [
        ("01:02:03", 3723),
        ("02:03", 123),
        ("05", 5),
        ("00:00:01,500", 1.5),
        ("00:00:01.250", 1.25),
        ("1:00:00", 3600),
    ])
    def test_valid_forms(self, text, expected):
        assert parse_timecode(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["abc", "1:xx", "1:2:3:4", "", "1_0:00"])
    def test_invalid_returns_none(self, text):
        assert parse_timecode(text) is None

    def test_non_string_returns_none(self):
        assert parse_timecode(None) is None

    def test_overflowing_total_returns_none(self):
        # every part is finite but hours * 3600 is not
        assert parse_timecode("1e306:00:00") is None


class TestFormatClock:

    def test_with_hours(self):
        assert format_clock(3723) == "1:02:03"

    def test_without_hours(self):
        assert format_clock(59) == "0:59"
        assert format_clock(65) == "1:05"

    def test_negative_clamped(self):
        assert format_clock(-5) == "0:00"

    def test_floors_fractions(self):
        assert format_clock(59.99) == "0:59"


class TestPickSeconds:

    def test_number(self):
        assert pick_seconds(12) == 12.0
        assert pick_seconds(1.5) == 1.5

    def test_timecode_string(self):
        assert pick_seconds("1:05") == 65.0

    def test_numeric_string(self):
        assert pick_seconds("12.75") == 12.75

    @pytest.mark.parametrize("value", [None, "hello", True, [], {}, float("nan"), "1_000", "1e400"])
    def test_unusable_values(self, value):
        assert pick_seconds(value) is None
