# livinsalti/utils/date_utils.py
import datetime
from typing import Optional, Union


def _as_date(now: Union[datetime.date, datetime.datetime, None]) -> datetime.date:
    if now is None:
        return datetime.date.today()
    if isinstance(now, datetime.datetime):
        return now.date()
    return now


def get_current_week_start(now: Union[datetime.date, datetime.datetime, None] = None) -> str:
    """Monday of the week containing `now`, as YYYY-MM-DD. Weeks run Monday to Sunday."""
    today = _as_date(now)
    week_start = today - datetime.timedelta(days=today.weekday())
    return week_start.strftime("%Y-%m-%d")


def get_current_week_end(now: Union[datetime.date, datetime.datetime, None] = None) -> str:
    """Sunday of the week containing `now`, as YYYY-MM-DD."""
    today = _as_date(now)
    week_end = today + datetime.timedelta(days=6 - today.weekday())
    return week_end.strftime("%Y-%m-%d")


def week_end_for(week_start_date: str) -> str:
    """Sunday that closes the week starting on week_start_date."""
    start = datetime.datetime.strptime(week_start_date, "%Y-%m-%d").date()
    return (start + datetime.timedelta(days=6)).strftime("%Y-%m-%d")


def parse_due_date(value: Optional[str]) -> Optional[datetime.date]:
    """Parses a YYYY-MM-DD goal date; returns None when it is missing or malformed."""
    if not value:
        return None
    try:
        return datetime.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None
