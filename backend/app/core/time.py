"""Clock helpers for lead timestamps."""

from datetime import UTC, date, datetime, time, timedelta


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime; used for every stored timestamp."""
    return datetime.now(UTC)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` range covering ``day``."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
