"""
Deterministic occurrence generator for calendar entries.

Uses date only (no timezone). Occurrences are found by stepping forward from
the entry's start date one period at a time until the range is passed, so
variable-length month steps never need extrapolation. No I/O, no state:
identical inputs always give the same ascending list.
"""
from datetime import date, timedelta

from periodic_calendar.domain.entry import Entry, GeneratedOccurrence


def generate_occurrence_dates(entry: Entry, range_start: date, range_end: date) -> list[date]:
    """Occurrence dates of entry in [range_start, range_end] (inclusive), ascending.

    - paused entries yield nothing
    - nothing before start_date; if the range opens earlier, generation starts at start_date
    - an occurrence equal to end_date is kept, the first one after it stops generation
    - stepping stops as soon as a date passes range_end
    """
    if entry.is_paused:
        return []

    out: list[date] = []
    k = 0
    d = entry.start_date
    while d <= range_end:
        if entry.end_date is not None and d > entry.end_date:
            break
        if d >= range_start:
            out.append(d)
        k += 1
        try:
            d = entry.frequency.nth(entry.start_date, k)
        except (OverflowError, ValueError):
            # next occurrence would lie past date.max
            break
    return out


def generate_occurrences(entry: Entry, range_start: date, range_end: date) -> list[GeneratedOccurrence]:
    """Same as generate_occurrence_dates, wrapped with the originating entry."""
    return [
        GeneratedOccurrence(entry_id=entry.id, date=d, entry=entry)
        for d in generate_occurrence_dates(entry, range_start, range_end)
    ]


def last_occurrence_before(entry: Entry, before: date) -> date | None:
    """Latest occurrence strictly before the given date, or None."""
    if entry.start_date >= before:
        return None
    dates = generate_occurrence_dates(entry, entry.start_date, before - timedelta(days=1))
    return dates[-1] if dates else None
