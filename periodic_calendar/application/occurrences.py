"""
Occurrence aggregation: day-indexed occurrence maps and period summaries.

Pure read-layer: entries come in as arguments, nothing is cached or stored.
Callers re-invoke whenever entries change.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from periodic_calendar.application.periods import (
    iter_days, month_bounds, trailing_months_bounds, week_bounds, year_bounds,
)
from periodic_calendar.domain.entry import Entry, GeneratedOccurrence
from periodic_calendar.domain.frequency import Frequency
from periodic_calendar.domain.recurrence import generate_occurrences

_ZERO = Decimal("0")


@dataclass(frozen=True)
class PeriodSummary:
    period_start: date
    period_end: date
    total_amount: Decimal
    occurrence_count: int
    occurrences: list[GeneratedOccurrence] = field(default_factory=list)


@dataclass(frozen=True)
class DaySummary:
    day: date
    total_amount: Decimal
    occurrences: list[GeneratedOccurrence]


def occurrence_amount(occ: GeneratedOccurrence) -> Decimal:
    """Amount contributed by one occurrence; an absent amount counts as zero."""
    return occ.entry.amount or _ZERO


def occurrences_by_date(
    entries: Iterable[Entry],
    period_start: date,
    period_end: date,
    seed_days: bool = False,
) -> dict[date, list[GeneratedOccurrence]]:
    """Group occurrences of all entries in [period_start, period_end] by date.

    Within a date, occurrences keep the entries' iteration order. With
    seed_days every date of the period is present (empty list when nothing
    falls on it); otherwise only dates with occurrences appear, ascending.
    """
    grouped: dict[date, list[GeneratedOccurrence]] = defaultdict(list)
    for entry in entries:
        for occ in generate_occurrences(entry, period_start, period_end):
            grouped[occ.date].append(occ)

    if seed_days:
        return {d: grouped.get(d, []) for d in iter_days(period_start, period_end)}
    return {d: grouped[d] for d in sorted(grouped)}


def month_occurrences(entries: Iterable[Entry], year: int, month: int) -> dict[date, list[GeneratedOccurrence]]:
    """Calendar-grid map: one key per day of the month."""
    start, end = month_bounds(year, month)
    return occurrences_by_date(entries, start, end, seed_days=True)


def date_occurrences(entries: Iterable[Entry], day: date) -> DaySummary:
    """Occurrences falling on a single day, with their amount total."""
    occs = [occ for entry in entries for occ in generate_occurrences(entry, day, day)]
    return DaySummary(
        day=day,
        total_amount=sum((occurrence_amount(o) for o in occs), _ZERO),
        occurrences=occs,
    )


def period_summary(entries: Iterable[Entry], period_start: date, period_end: date) -> PeriodSummary:
    """Occurrence count, amount total and flattened occurrences for a period."""
    occs: list[GeneratedOccurrence] = []
    total = _ZERO
    for entry in entries:
        for occ in generate_occurrences(entry, period_start, period_end):
            total += occurrence_amount(occ)
            occs.append(occ)
    return PeriodSummary(
        period_start=period_start,
        period_end=period_end,
        total_amount=total,
        occurrence_count=len(occs),
        occurrences=occs,
    )


def standard_summaries(
    entries: Iterable[Entry],
    reference_date: date,
    today: date,
    week_start: int = 6,
) -> dict[str, PeriodSummary]:
    """The four dashboard rollups.

    - weekly:      calendar week containing today
    - monthly:     month containing reference_date
    - quarterly:   reference month plus the two months before it
    - half_yearly: reference month plus the five months before it
    """
    entries = list(entries)
    periods = {
        "weekly": week_bounds(today, week_start),
        "monthly": month_bounds(reference_date.year, reference_date.month),
        "quarterly": trailing_months_bounds(reference_date, 3),
        "half_yearly": trailing_months_bounds(reference_date, 6),
    }
    return {name: period_summary(entries, start, end) for name, (start, end) in periods.items()}


def yearly_occurrences(entries: Iterable[Entry], year: int) -> list[GeneratedOccurrence]:
    """Occurrences of YEARLY entries in a calendar year, by date (stable on ties)."""
    start, end = year_bounds(year)
    occs = [
        occ
        for entry in entries
        if entry.frequency is Frequency.YEARLY
        for occ in generate_occurrences(entry, start, end)
    ]
    return sorted(occs, key=lambda o: o.date)
