from __future__ import annotations

from datetime import date, timedelta

WEEKEND_DAYS = (5, 6)  # Saturday, Sunday
DEFAULT_HORIZON_DAYS = 365


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def is_selectable_date(day: date, today: date) -> bool:
    """Past dates and weekends cannot be picked."""
    if day < today:
        return False
    return not is_weekend(day)


def disabled_dates(today: date, horizon_days: int = DEFAULT_HORIZON_DAYS) -> list[date]:
    """Weekend dates from today through today + horizon_days, for the date picker."""
    return [
        today + timedelta(days=offset)
        for offset in range(horizon_days + 1)
        if is_weekend(today + timedelta(days=offset))
    ]
