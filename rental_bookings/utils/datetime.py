"""UTC datetime and calendar-date helpers."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    Used for lifecycle timestamps (confirmed_at, cancelled_at) so they are
    stored in UTC regardless of server locale.

    Example:
        >>> utc_now().tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def nights_between(check_in: date, check_out: date) -> int:
    """Whole days from check_in to check_out (negative if reversed)."""
    return (check_out - check_in).days
