# services/calendar.py
import datetime

KEY_FORMAT = "%Y-%m-%d"


def format_key(date: datetime.date) -> str:
    """Stable day-key: one key per calendar day."""
    if isinstance(date, datetime.datetime):
        date = date.date()
    return date.strftime(KEY_FORMAT)


def add_days(date: datetime.date, days: int) -> datetime.date:
    return date + datetime.timedelta(days=int(days))


def whole_day_distance(start: datetime.date, end: datetime.date) -> int:
    """Number of whole days between two dates, regardless of order."""
    if isinstance(start, datetime.datetime):
        start = start.date()
    if isinstance(end, datetime.datetime):
        end = end.date()
    return abs((end - start).days)


def format_display(date: datetime.date) -> str:
    """e.g. 'Monday, January 5, 2026'"""
    return f"{date.strftime('%A, %B')} {date.day}, {date.year}"
