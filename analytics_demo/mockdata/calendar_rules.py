"""Calendar classification used to shape synthetic engagement.

Vietnamese students preparing for the SAT: usage dips over the lunar new year
holiday, spikes in the two weeks before each test date and sags at weekends.
"""
import datetime as dt
from typing import Iterable, Literal

from ..utils import DateLike, to_date

# Lunar new year (Tet) window, inclusive; month/day bounds reused each year.
HOLIDAY_START = dt.date(2025, 1, 28)
HOLIDAY_END = dt.date(2025, 2, 3)

EXAM_DATES = (
    dt.date(2025, 3, 8),
    dt.date(2025, 5, 3),
    dt.date(2025, 6, 7),
)
EXAM_LOOKBACK_DAYS = 14

WEEKEND_FACTOR = 0.55
HOLIDAY_FACTOR = 0.7
EXAM_FACTOR = 1.5


def is_holiday_window(value: DateLike) -> bool:
    d = to_date(value)
    start = HOLIDAY_START.replace(year=d.year)
    end = HOLIDAY_END.replace(year=d.year)
    return start <= d <= end


def is_near_recurring_event(
    value: DateLike,
    events: Iterable[dt.date] = EXAM_DATES,
    lookback_days: int = EXAM_LOOKBACK_DAYS,
) -> bool:
    """True when ``value`` falls on or within ``lookback_days`` before an event."""
    d = to_date(value)
    for event in events:
        days_before = (to_date(event) - d).days
        if 0 <= days_before <= lookback_days:
            return True
    return False


def day_of_week(value: DateLike) -> int:
    """Monday is 0, Sunday is 6."""
    return to_date(value).weekday()


def is_weekend(value: DateLike) -> bool:
    return day_of_week(value) >= 5


def day_type(value: DateLike) -> Literal["weekday", "weekend"]:
    return "weekend" if is_weekend(value) else "weekday"


def weekday_multiplier(value: DateLike) -> float:
    return WEEKEND_FACTOR if is_weekend(value) else 1.0
