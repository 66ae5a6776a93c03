"""Unit tests for timestamps.py."""

from datetime import datetime, timedelta, timezone

import pytest

from timestamps import format_timestamp, normalize_timestamps, parse_timestamp


class TestParseTimestamp:
    def test_zulu(self):
        dt = parse_timestamp("2024-03-01T10:20:30.123Z")
        assert dt == datetime(2024, 3, 1, 10, 20, 30, 123000, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        dt = parse_timestamp("2024-03-01T12:20:30+02:00")
        assert dt == datetime(2024, 3, 1, 10, 20, 30, tzinfo=timezone.utc)

    def test_naive_datetime_assumed_utc(self):
        dt = parse_timestamp(datetime(2024, 3, 1, 10, 0, 0))
        assert dt.tzinfo == timezone.utc

    @pytest.mark.parametrize("value", [None, "", "0001-01-01T00:00:00Z"])
    def test_unset(self, value):
        assert parse_timestamp(value) is None


class TestFormatTimestamp:
    def test_millisecond_pattern(self):
        assert (
            format_timestamp("2024-03-01T10:20:30.123456Z")
            == "2024-03-01T10:20:30.123Z"
        )

    def test_whole_seconds(self):
        assert format_timestamp("2024-03-01T10:20:30Z") == "2024-03-01T10:20:30.000Z"

    def test_aware_datetime(self):
        dt = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(dt) == "2024-03-01T10:00:00.000Z"

    def test_zero_instant(self):
        assert format_timestamp("0001-01-01T00:00:00Z") is None


class TestNormalizeTimestamps:
    def test_formats_and_drops(self):
        record = {
            "id": "d1",
            "updated_at": "2024-03-01T10:20:30Z",
            "matched_at": "0001-01-01T00:00:00Z",
        }
        result = normalize_timestamps(record, ("updated_at", "matched_at"))
        assert result == {"id": "d1", "updated_at": "2024-03-01T10:20:30.000Z"}
        # Original unchanged
        assert record["matched_at"] == "0001-01-01T00:00:00Z"

    def test_missing_fields_ignored(self):
        assert normalize_timestamps({"id": "x"}, ("created_at",)) == {"id": "x"}

    def test_null_dropped(self):
        assert normalize_timestamps({"created_at": None}, ("created_at",)) == {}

    def test_malformed_names_field(self):
        with pytest.raises(ValueError, match="created_at"):
            normalize_timestamps({"created_at": "not-a-date"}, ("created_at",))


class TestInvalidTimestamps:
    @pytest.mark.parametrize("value", ["not-a-date", "2024-13-01T00:00:00Z", 12345])
    def test_rejected(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)

    def test_zero_instant_with_offset(self):
        assert parse_timestamp("0001-01-01T00:00:00+01:00") is None
