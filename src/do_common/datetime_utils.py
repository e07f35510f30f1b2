"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def iso_timestamp(dt: datetime | None = None) -> str:
    """Format as ISO-8601 UTC with millisecond precision and a Z suffix.

    e.g. 2025-01-31T12:00:00.123Z
    """
    dt = (dt or utc_now()).astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 string (Z or offset) into an aware UTC datetime."""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def epoch_millis(dt: datetime | None = None) -> int:
    return int((dt or utc_now()).timestamp() * 1000)
