"""Time helpers shared by models and reports."""
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def period_start(period: str, now: datetime = None) -> datetime:
    """
    Lower bound for a reporting period.

    'today' starts at midnight UTC, 'week' and 'month' are rolling 7 and 30
    day windows ending today.
    """
    now = now or utc_now()
    today = start_of_day(now)
    if period == 'today':
        return today
    if period == 'week':
        return today - timedelta(days=7)
    if period == 'month':
        return today - timedelta(days=30)
    raise ValueError(f"Unknown period: {period}")
