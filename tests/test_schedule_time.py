from datetime import datetime, timezone

from postmate.schedule_time import (
    format_local,
    local_to_utc,
    parse_instant,
    split_local,
    to_storage,
    utc_to_local,
)


class TestFixedOffset:
    """User-facing times are always JST (UTC+9), independent of server locale"""

    def test_local_to_utc_subtracts_nine_hours(self):
        assert local_to_utc("2025-01-10", "09:00") == datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_crosses_day_boundary(self):
        assert local_to_utc("2025-01-01", "03:30") == datetime(2024, 12, 31, 18, 30, tzinfo=timezone.utc)

    def test_round_trip_reproduces_inputs(self):
        for date, time in [("2025-01-10", "09:00"), ("2024-02-29", "00:00"), ("2025-12-31", "23:59")]:
            assert split_local(local_to_utc(date, time)) == (date, time)

    def test_utc_to_local(self):
        local = utc_to_local(datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc))
        assert (local.hour, local.utcoffset().total_seconds()) == (9, 9 * 3600)

    def test_format_local(self):
        assert format_local(datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)) == "2025-01-10 09:00"
        assert format_local(None) == "Immediate"


class TestStorageLiterals:
    def test_to_storage(self):
        assert to_storage(datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)) == "2025-01-10T00:00:00.000Z"
        assert to_storage(None) == ""

    def test_parse_iso_z(self):
        assert parse_instant("2025-01-10T00:00:00.000Z") == datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_parse_plain_literal_is_utc(self):
        assert parse_instant("2025-01-10 00:00") == datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_parse_offset(self):
        assert parse_instant("2025-01-10T09:00:00+09:00") == datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)

    def test_blank_and_garbage(self):
        assert parse_instant("") is None
        assert parse_instant(None) is None
        assert parse_instant("next tuesday") is None
