"""
Occurrence status API endpoints
"""
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from periodic_calendar.api.deps import get_account_id, get_db
from periodic_calendar.application.entry_statuses import SetEntryStatusUseCase, list_statuses
from periodic_calendar.application.periods import month_bounds
from periodic_calendar.domain.calendar_entry import EntryNotFoundError
from periodic_calendar.domain.entry_status import EntryStatusValidationError, EntryStatusValue
from periodic_calendar.infrastructure.db.models import EntryStatusModel


router = APIRouter(prefix="/api/v1/statuses", tags=["statuses"])


class SetStatusRequest(BaseModel):
    entry_id: str
    day: date
    status: str  # COMPLETED / INCOMPLETE
    remarks: str | None = None


class StatusResponse(BaseModel):
    entry_id: str
    day: date
    status: str
    display: str  # "Completed" / "In-Completed"
    remarks: str | None
    updated_at: datetime | None


def _status_response(row: EntryStatusModel) -> StatusResponse:
    return StatusResponse(
        entry_id=row.entry_id,
        day=row.date,
        status=row.status,
        display=EntryStatusValue(row.status).display,
        remarks=row.remarks,
        updated_at=row.updated_at,
    )


@router.get("", response_model=list[StatusResponse])
def list_month_statuses(
    year: int = Query(ge=1, le=9999),
    month: int = Query(ge=1, le=12),
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Recorded statuses for a month; occurrences without a record are incomplete"""
    start, end = month_bounds(year, month)
    return [_status_response(row) for row in list_statuses(db, account_id, start, end)]


@router.put("", response_model=StatusResponse)
def set_status(
    req: SetStatusRequest,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Mark one occurrence completed or incomplete"""
    try:
        SetEntryStatusUseCase(db).execute(
            account_id=account_id,
            entry_id=req.entry_id,
            day=req.day,
            status=req.status,
            remarks=req.remarks,
        )
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EntryStatusValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    row = db.query(EntryStatusModel).filter(
        EntryStatusModel.entry_id == req.entry_id,
        EntryStatusModel.date == req.day,
    ).one()
    return _status_response(row)
