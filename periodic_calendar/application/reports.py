"""
Report data builders: tabular projections handed to the CSV/TXT renderers.

- daily register:      one row per day of a month
- yearly register:     one row per yearly-entry occurrence in a year
- equipment schedule:  one row per entry with last/next dates around a month

All builders are pure; the same entries and period always give the same rows.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping

from periodic_calendar.application.occurrences import month_occurrences, yearly_occurrences
from periodic_calendar.application.periods import month_bounds
from periodic_calendar.domain.entry import Entry
from periodic_calendar.domain.entry_status import EntryStatusValue, resolve_status
from periodic_calendar.domain.recurrence import generate_occurrence_dates, last_occurrence_before

_JOIN = ", "


@dataclass(frozen=True)
class RegisterRow:
    serial: int
    date: date
    titles: str
    frequencies: str
    statuses: str = ""


@dataclass(frozen=True)
class YearlyRow:
    serial: int
    date: date
    title: str
    frequency: str


@dataclass(frozen=True)
class ScheduleRow:
    serial: int
    entry_id: str
    title: str
    frequency: str
    last_before: date | None
    within: tuple[date, ...]
    slots: int
    occurrence_count: int


def build_daily_register(
    entries: Iterable[Entry],
    year: int,
    month: int,
    status_lookup: Mapping[str, "EntryStatusValue | str"] | None = None,
) -> list[RegisterRow]:
    """One row per calendar day, including days without occurrences.

    statuses is filled only when a lookup is supplied; a missing key reads
    as INCOMPLETE.
    """
    rows: list[RegisterRow] = []
    for day, occs in month_occurrences(entries, year, month).items():
        statuses = ""
        if status_lookup is not None:
            statuses = _JOIN.join(
                resolve_status(status_lookup, o.entry_id, o.date).display for o in occs
            )
        rows.append(RegisterRow(
            serial=day.day,
            date=day,
            titles=_JOIN.join(o.entry.title for o in occs),
            frequencies=_JOIN.join(o.entry.frequency.export_code for o in occs),
            statuses=statuses,
        ))
    return rows


def build_yearly_register(entries: Iterable[Entry], year: int) -> list[YearlyRow]:
    return [
        YearlyRow(serial=i, date=o.date, title=o.entry.title, frequency=o.entry.frequency.export_code)
        for i, o in enumerate(yearly_occurrences(entries, year), start=1)
    ]


def build_equipment_schedule(entries: Iterable[Entry], year: int, month: int) -> list[ScheduleRow]:
    """One row per entry, in the order given.

    last_before is the latest occurrence before the month; within holds the
    first N occurrences inside the month, N being the cadence's slot count.
    """
    start, end = month_bounds(year, month)
    rows: list[ScheduleRow] = []
    for i, entry in enumerate(entries, start=1):
        in_month = generate_occurrence_dates(entry, start, end)
        slots = entry.frequency.schedule_slots
        rows.append(ScheduleRow(
            serial=i,
            entry_id=entry.id,
            title=entry.title,
            frequency=entry.frequency.export_code,
            last_before=last_occurrence_before(entry, start),
            within=tuple(in_month[:slots]),
            slots=slots,
            occurrence_count=len(in_month),
        ))
    return rows
