"""CalendarEntry domain entity - validates entries and generates events for entry operations"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Any

from periodic_calendar.domain.frequency import Frequency


class EntryValidationError(ValueError):
    pass


class EntryNotFoundError(LookupError):
    pass


def coerce_date(value: "str | date | None", field: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        raise EntryValidationError(f"{field} must be a YYYY-MM-DD date, got {value!r}") from None


def coerce_amount(value: "str | int | float | Decimal | None") -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise EntryValidationError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise EntryValidationError(f"Invalid amount: {value!r}")
    return amount


def validate_entry(
    title: str,
    start_date: "str | date | None",
    frequency: "str | Frequency",
    end_date: "str | date | None" = None,
    amount: "str | Decimal | None" = None,
) -> Dict[str, Any]:
    """Validate entry fields and return them normalized.

    Raises EntryValidationError on failure. start_date <= end_date is checked
    here once; the recurrence engine never re-validates it.
    """
    title = (title or "").strip()
    if not title:
        raise EntryValidationError("Title is required")

    start = coerce_date(start_date, "start_date")
    if start is None:
        raise EntryValidationError("start_date is required")
    end = coerce_date(end_date, "end_date")
    if end is not None and end < start:
        raise EntryValidationError("end_date must not be before start_date")

    try:
        freq = Frequency.parse(frequency)
    except ValueError as e:
        raise EntryValidationError(str(e)) from e

    return {
        "title": title,
        "start_date": start,
        "end_date": end,
        "frequency": freq,
        "amount": coerce_amount(amount),
    }


def _iso(d: date | None) -> str | None:
    return d.isoformat() if d is not None else None


def _amount_str(amount: Decimal | None) -> str | None:
    return str(amount) if amount is not None else None


class CalendarEntry:
    @staticmethod
    def create(
        account_id: int,
        entry_id: str,
        title: str,
        start_date: date,
        frequency: Frequency,
        description: str | None = None,
        amount: Decimal | None = None,
        end_date: date | None = None,
        is_paused: bool = False,
    ) -> Dict[str, Any]:
        now = datetime.utcnow().isoformat()
        return {
            "entry_id": entry_id,
            "account_id": account_id,
            "title": title,
            "description": description,
            "amount": _amount_str(amount),
            "start_date": start_date.isoformat(),
            "frequency": frequency.storage_code,
            "end_date": _iso(end_date),
            "is_paused": is_paused,
            "created_at": now,
            "updated_at": now,
        }

    @staticmethod
    def update(entry_id: str, **changes) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"entry_id": entry_id, "updated_at": datetime.utcnow().isoformat()}
        for key in ("title", "description", "is_paused"):
            if key in changes:
                payload[key] = changes[key]
        if "amount" in changes:
            payload["amount"] = _amount_str(changes["amount"])
        if "start_date" in changes:
            payload["start_date"] = changes["start_date"].isoformat()
        if "end_date" in changes:
            payload["end_date"] = _iso(changes["end_date"])
        if "frequency" in changes:
            payload["frequency"] = changes["frequency"].storage_code
        return payload

    @staticmethod
    def delete(entry_id: str) -> Dict[str, Any]:
        return {"entry_id": entry_id, "deleted_at": datetime.utcnow().isoformat()}
