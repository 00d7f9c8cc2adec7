"""
Period boundaries used by the calendar grid, summaries and reports.

All periods are inclusive (start, end) date pairs.
"""
from datetime import date, timedelta
from typing import Iterator

from periodic_calendar.domain.frequency import add_months, last_day_of_month

_MONTH_NAMES = {
    1: "January", 2: "February", 3: "March", 4: "April", 5: "May", 6: "June",
    7: "July", 8: "August", 9: "September", 10: "October", 11: "November", 12: "December",
}


def _shift_days(d: date, days: int) -> date:
    """d + days, clamped to the representable date range."""
    try:
        return d + timedelta(days=days)
    except OverflowError:
        return date.min if days < 0 else date.max


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, last_day_of_month(year, month))


def week_bounds(d: date, week_start: int = 6) -> tuple[date, date]:
    """Calendar week containing d. week_start is a weekday index (Monday=0, Sunday=6).

    Weeks straddling date.min or date.max are cut there.
    """
    offset = (d.weekday() - week_start) % 7
    return _shift_days(d, -offset), _shift_days(d, 6 - offset)


def trailing_months_bounds(reference: date, months: int) -> tuple[date, date]:
    """The reference date's month plus the (months - 1) months before it."""
    try:
        first = add_months(reference.replace(day=1), -(months - 1))
    except ValueError:
        # window reaches back before year 1
        first = date.min
    _, end = month_bounds(reference.year, reference.month)
    return first, end


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def iter_days(start: date, end: date) -> Iterator[date]:
    d = start
    while d <= end:
        yield d
        if d == end:
            break
        d += timedelta(days=1)


def month_label(year: int, month: int) -> str:
    """'March 2024'"""
    return f"{_MONTH_NAMES[month]} {year}"
