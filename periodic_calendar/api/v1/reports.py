"""
Report API endpoints - daily register, yearly register, equipment schedule

Every report is served as JSON rows or as a downloadable file.
"""
import logging
from datetime import date
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from periodic_calendar.api.deps import get_account_id, get_db
from periodic_calendar.application.entries import list_entries
from periodic_calendar.application.entry_statuses import load_status_lookup
from periodic_calendar.application.exports import (
    render_register_csv, render_register_txt, render_schedule_csv, render_yearly_csv, report_filename,
)
from periodic_calendar.application.periods import month_bounds, month_label
from periodic_calendar.application.reports import (
    build_daily_register, build_equipment_schedule, build_yearly_register,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])

_MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "txt": "text/plain; charset=utf-8",
}


class ReportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TXT = "txt"


# === Response models ===

class RegisterRowResponse(BaseModel):
    serial: int
    day: date
    titles: str
    frequencies: str
    statuses: str


class YearlyRowResponse(BaseModel):
    serial: int
    day: date
    title: str
    frequency: str


class ScheduleRowResponse(BaseModel):
    serial: int
    entry_id: str
    title: str
    frequency: str
    last_before: date | None
    within: list[date]
    slots: int
    occurrence_count: int


# === Helpers ===

def _file_response(content: str, filename: str, ext: str) -> Response:
    logger.info("Rendered report %s (%d bytes)", filename, len(content))
    return Response(
        content=content,
        media_type=_MEDIA_TYPES[ext],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# === Endpoints ===

@router.get("/register/{year}/{month}", response_model=list[RegisterRowResponse])
def daily_register(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    format: ReportFormat = ReportFormat.JSON,
    with_status: bool = False,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """One row per day of the month; optional per-occurrence status column"""
    entries = list_entries(db, account_id)
    lookup = None
    if with_status:
        start, end = month_bounds(year, month)
        lookup = load_status_lookup(db, account_id, start, end)
    rows = build_daily_register(entries, year, month, status_lookup=lookup)

    title = month_label(year, month)
    if format is ReportFormat.CSV:
        return _file_response(
            render_register_csv(rows, include_status=with_status),
            report_filename("Monthly_Report", title, "csv"),
            "csv",
        )
    if format is ReportFormat.TXT:
        return _file_response(
            render_register_txt(rows, title, include_status=with_status),
            report_filename("Monthly_Report", title, "txt"),
            "txt",
        )

    return [
        RegisterRowResponse(serial=r.serial, day=r.date, titles=r.titles, frequencies=r.frequencies, statuses=r.statuses)
        for r in rows
    ]


@router.get("/yearly/{year}", response_model=list[YearlyRowResponse])
def yearly_register(
    year: int = Path(ge=1, le=9999),
    format: ReportFormat = ReportFormat.JSON,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Every occurrence of yearly entries in the year, by date"""
    rows = build_yearly_register(list_entries(db, account_id), year)

    if format is ReportFormat.CSV:
        return _file_response(render_yearly_csv(rows), report_filename("Yearly_Report", str(year), "csv"), "csv")
    if format is ReportFormat.TXT:
        raise HTTPException(status_code=422, detail="Yearly report is available as json or csv")

    return [YearlyRowResponse(serial=r.serial, day=r.date, title=r.title, frequency=r.frequency) for r in rows]


@router.get("/schedule/{year}/{month}", response_model=list[ScheduleRowResponse])
def equipment_schedule(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    format: ReportFormat = ReportFormat.JSON,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Per-entry last date before the month and next dates inside it"""
    rows = build_equipment_schedule(list_entries(db, account_id), year, month)

    if format is ReportFormat.CSV:
        return _file_response(
            render_schedule_csv(rows),
            report_filename("Schedule", month_label(year, month), "csv"),
            "csv",
        )
    if format is ReportFormat.TXT:
        raise HTTPException(status_code=422, detail="Schedule is available as json or csv")

    return [
        ScheduleRowResponse(
            serial=r.serial,
            entry_id=r.entry_id,
            title=r.title,
            frequency=r.frequency,
            last_before=r.last_before,
            within=list(r.within),
            slots=r.slots,
            occurrence_count=r.occurrence_count,
        )
        for r in rows
    ]
