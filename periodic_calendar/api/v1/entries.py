"""
Calendar entry API endpoints
"""
from datetime import date, datetime

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from periodic_calendar.api.deps import get_account_id, get_db, get_today
from periodic_calendar.application.entries import (
    CreateEntryUseCase, DeleteEntryUseCase, ImportEntriesUseCase,
    TogglePauseUseCase, UpdateEntryUseCase, get_entry, list_entries,
)
from periodic_calendar.application.exports import ImportParseError, parse_import_csv
from periodic_calendar.domain.calendar_entry import EntryNotFoundError, EntryValidationError
from periodic_calendar.domain.entry import Entry
from periodic_calendar.utils.validation import validate_and_normalize_amount


router = APIRouter(prefix="/api/v1/entries", tags=["entries"])


# === Request/Response models ===

class CreateEntryRequest(BaseModel):
    title: str
    start_date: date
    frequency: str  # daily, weekly, fortnightly, monthly, quarterly, halfyearly, yearly
    description: str | None = None
    amount: str | None = None  # Decimal as string, "100,50" accepted
    end_date: date | None = None
    is_paused: bool = False

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str | None) -> str | None:
        return validate_and_normalize_amount(v)


class UpdateEntryRequest(BaseModel):
    title: str | None = None
    start_date: date | None = None
    frequency: str | None = None
    description: str | None = None
    amount: str | None = None
    end_date: date | None = None
    is_paused: bool | None = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str | None) -> str | None:
        return validate_and_normalize_amount(v)


class EntryResponse(BaseModel):
    id: str
    title: str
    description: str | None
    amount: str | None  # Decimal as string
    start_date: date
    end_date: date | None
    frequency: str
    frequency_label: str
    is_paused: bool
    created_at: datetime | None
    updated_at: datetime | None


class ImportResponse(BaseModel):
    imported: int
    entry_ids: list[str]


def entry_response(entry: Entry) -> EntryResponse:
    return EntryResponse(
        id=entry.id,
        title=entry.title,
        description=entry.description,
        amount=str(entry.amount) if entry.amount is not None else None,
        start_date=entry.start_date,
        end_date=entry.end_date,
        frequency=entry.frequency.value,
        frequency_label=entry.frequency.label,
        is_paused=entry.is_paused,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


# === Endpoints ===

@router.get("", response_model=list[EntryResponse])
def list_entries_endpoint(
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """All entries ordered by start date"""
    return [entry_response(e) for e in list_entries(db, account_id)]


@router.post("", response_model=EntryResponse, status_code=201)
def create_entry(
    req: CreateEntryRequest,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Create a recurring entry"""
    try:
        entry_id = CreateEntryUseCase(db).execute(
            account_id=account_id,
            title=req.title,
            start_date=req.start_date,
            frequency=req.frequency,
            description=req.description,
            amount=req.amount,
            end_date=req.end_date,
            is_paused=req.is_paused,
        )
    except EntryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return entry_response(get_entry(db, account_id, entry_id))


@router.post("/import", response_model=ImportResponse, status_code=201)
def import_entries(
    file: UploadFile = File(...),
    frequency: str = Form(...),
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
    today: date = Depends(get_today),
):
    """Bulk-create entries from a CSV file; every row gets the chosen frequency"""
    raw = file.file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="File must be UTF-8 encoded CSV")

    try:
        rows = parse_import_csv(text, default_start=today)
        entry_ids = ImportEntriesUseCase(db).execute(
            account_id=account_id,
            rows=rows,
            frequency=frequency,
        )
    except (ImportParseError, EntryValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ImportResponse(imported=len(entry_ids), entry_ids=entry_ids)


@router.get("/{entry_id}", response_model=EntryResponse)
def get_entry_endpoint(
    entry_id: str,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    try:
        return entry_response(get_entry(db, account_id, entry_id))
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{entry_id}", response_model=EntryResponse)
def update_entry(
    entry_id: str,
    req: UpdateEntryRequest,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Partial update; only fields present in the body change"""
    changes = req.model_dump(exclude_unset=True)
    try:
        UpdateEntryUseCase(db).execute(entry_id=entry_id, account_id=account_id, **changes)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EntryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return entry_response(get_entry(db, account_id, entry_id))


@router.post("/{entry_id}/toggle-pause", response_model=EntryResponse)
def toggle_pause(
    entry_id: str,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    """Pause a running entry or resume a paused one"""
    try:
        TogglePauseUseCase(db).execute(entry_id=entry_id, account_id=account_id)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return entry_response(get_entry(db, account_id, entry_id))


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    account_id: int = Depends(get_account_id),
):
    try:
        DeleteEntryUseCase(db).execute(entry_id=entry_id, account_id=account_id)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"status": "deleted"}
