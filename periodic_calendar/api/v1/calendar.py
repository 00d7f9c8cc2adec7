"""
Calendar API endpoints - month grid, day detail, dashboard summaries
"""
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel
from sqlalchemy.orm import Session

from periodic_calendar.api.deps import get_account_id, get_db, get_today, get_week_start
from periodic_calendar.application.entries import list_entries
from periodic_calendar.application.entry_statuses import load_status_lookup
from periodic_calendar.application.occurrences import (
    PeriodSummary, date_occurrences, month_occurrences, occurrence_amount, standard_summaries,
)
from periodic_calendar.application.periods import month_bounds, month_label
from periodic_calendar.domain.entry import GeneratedOccurrence
from periodic_calendar.domain.entry_status import resolve_status


router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


# === Response models ===

class OccurrenceResponse(BaseModel):
    entry_id: str
    occurrence_date: date
    title: str
    description: str | None
    frequency: str
    frequency_label: str
    amount: str | None
    status: str  # COMPLETED / INCOMPLETE


class DayResponse(BaseModel):
    day: date
    total_amount: str
    occurrences: list[OccurrenceResponse]


class MonthResponse(BaseModel):
    year: int
    month: int
    title: str  # "March 2024"
    days: list[DayResponse]


class SummaryResponse(BaseModel):
    period_start: date
    period_end: date
    total_amount: str
    occurrence_count: int


class SummariesResponse(BaseModel):
    reference_date: date
    weekly: SummaryResponse
    monthly: SummaryResponse
    quarterly: SummaryResponse
    half_yearly: SummaryResponse


# === Helpers ===

def _occurrence_response(occ: GeneratedOccurrence, lookup) -> OccurrenceResponse:
    entry = occ.entry
    return OccurrenceResponse(
        entry_id=occ.entry_id,
        occurrence_date=occ.date,
        title=entry.title,
        description=entry.description,
        frequency=entry.frequency.value,
        frequency_label=entry.frequency.label,
        amount=str(entry.amount) if entry.amount is not None else None,
        status=resolve_status(lookup, occ.entry_id, occ.date).value,
    )


def _summary_response(summary: PeriodSummary) -> SummaryResponse:
    return SummaryResponse(
        period_start=summary.period_start,
        period_end=summary.period_end,
        total_amount=str(summary.total_amount),
        occurrence_count=summary.occurrence_count,
    )


# === Endpoints ===
# Literal paths are registered before /{year}/{month}

@router.get("/day/{day}", response_model=DayResponse)
def day_detail(
    day: date,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Occurrences falling on one day, with their statuses and amount total"""
    entries = list_entries(db, account_id)
    lookup = load_status_lookup(db, account_id, day, day)
    detail = date_occurrences(entries, day)
    return DayResponse(
        day=day,
        total_amount=str(detail.total_amount),
        occurrences=[_occurrence_response(o, lookup) for o in detail.occurrences],
    )


@router.get("/summary", response_model=SummariesResponse)
def summaries(
    reference_date: date | None = None,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
    today: date = Depends(get_today),
    week_start: int = Depends(get_week_start),
):
    """Weekly / monthly / quarterly / half-yearly rollups"""
    reference = reference_date or today
    result = standard_summaries(list_entries(db, account_id), reference, today, week_start)
    return SummariesResponse(
        reference_date=reference,
        **{name: _summary_response(s) for name, s in result.items()},
    )


@router.get("/{year}/{month}", response_model=MonthResponse)
def month_grid(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Every day of the month with the occurrences that fall on it"""
    entries = list_entries(db, account_id)
    start, end = month_bounds(year, month)
    lookup = load_status_lookup(db, account_id, start, end)

    days = []
    for day, occs in month_occurrences(entries, year, month).items():
        days.append(DayResponse(
            day=day,
            total_amount=str(sum((occurrence_amount(o) for o in occs), Decimal("0"))),
            occurrences=[_occurrence_response(o, lookup) for o in occs],
        ))
    return MonthResponse(year=year, month=month, title=month_label(year, month), days=days)
