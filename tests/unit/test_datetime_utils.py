"""Tests for do_common.datetime_utils."""

from datetime import UTC, datetime, timedelta, timezone

from src.do_common.datetime_utils import epoch_millis, iso_timestamp, parse_iso_timestamp


class TestIsoTimestamp:
    def test_millisecond_precision_with_z(self) -> None:
        dt = datetime(2025, 1, 31, 12, 0, 0, 123456, tzinfo=UTC)
        assert iso_timestamp(dt) == "2025-01-31T12:00:00.123Z"

    def test_converts_to_utc(self) -> None:
        dt = datetime(2025, 1, 31, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert iso_timestamp(dt) == "2025-01-31T12:00:00.000Z"

    def test_defaults_to_now(self) -> None:
        value = iso_timestamp()
        assert value.endswith("Z")
        assert abs(parse_iso_timestamp(value) - datetime.now(UTC)) < timedelta(seconds=5)


class TestParseIsoTimestamp:
    def test_round_trip(self) -> None:
        dt = datetime(2025, 3, 1, 8, 30, 15, 250000, tzinfo=UTC)
        assert parse_iso_timestamp(iso_timestamp(dt)) == dt

    def test_naive_is_treated_as_utc(self) -> None:
        assert parse_iso_timestamp("2025-03-01T08:30:15").tzinfo is not None

    def test_offset_form(self) -> None:
        assert parse_iso_timestamp("2025-03-01T10:30:15+02:00") == datetime(
            2025, 3, 1, 8, 30, 15, tzinfo=UTC
        )


def test_epoch_millis() -> None:
    assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)) == 1000
