"""Entry value object handed to the recurrence engine, and the occurrences it yields"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from periodic_calendar.domain.frequency import Frequency


@dataclass(frozen=True)
class Entry:
    id: str
    title: str
    start_date: date
    frequency: Frequency
    description: str | None = None
    amount: Decimal | None = None
    end_date: date | None = None
    is_paused: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class GeneratedOccurrence:
    entry_id: str
    date: date
    entry: Entry


def entry_from_db(row) -> Entry:
    """Build an Entry from a CalendarEntryModel row (any object with matching attributes)."""
    return Entry(
        id=row.entry_id,
        title=row.title,
        description=row.description,
        amount=Decimal(row.amount) if row.amount is not None else None,
        start_date=row.start_date,
        frequency=Frequency.from_storage(row.frequency),
        end_date=row.end_date,
        is_paused=bool(row.is_paused),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
