"""Week helpers for plan persistence. Plans are keyed by the Monday of their week."""

from datetime import date, datetime, timedelta
from typing import Optional


def monday_of_week(day: date) -> date:
    """Monday of the week containing ``day`` (Sunday belongs to the week before)."""
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


def current_monday(today: Optional[date] = None) -> date:
    return monday_of_week(today or date.today())


def format_week_start(day: date) -> str:
    """ISO date string (YYYY-MM-DD) used as the database key."""
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()
