"""
Per-occurrence completion status.

Statuses are keyed by (entry_id, date). Lookups handed to report builders use
the flat key "{entry_id}-{YYYY-MM-DD}"; a missing key means INCOMPLETE.
"""
from datetime import date, datetime
from enum import Enum
from typing import Dict, Any, Mapping


class EntryStatusValidationError(ValueError):
    pass


class EntryStatusValue(str, Enum):
    COMPLETED = "COMPLETED"
    INCOMPLETE = "INCOMPLETE"

    @property
    def display(self) -> str:
        return "Completed" if self is EntryStatusValue.COMPLETED else "In-Completed"


def parse_status(value: "str | EntryStatusValue") -> EntryStatusValue:
    try:
        return EntryStatusValue((value or "").upper())
    except ValueError:
        raise EntryStatusValidationError(f"invalid status: {value!r}") from None


def status_key(entry_id: str, d: date) -> str:
    return f"{entry_id}-{d.isoformat()}"


def resolve_status(lookup: Mapping[str, "EntryStatusValue | str"], entry_id: str, d: date) -> EntryStatusValue:
    raw = lookup.get(status_key(entry_id, d))
    if raw is None:
        return EntryStatusValue.INCOMPLETE
    return EntryStatusValue(raw)


class EntryStatusEvent:
    @staticmethod
    def set(
        account_id: int,
        entry_id: str,
        day: date,
        status: EntryStatusValue,
        remarks: str | None = None,
    ) -> Dict[str, Any]:
        return {
            "account_id": account_id,
            "entry_id": entry_id,
            "date": day.isoformat(),
            "status": status.value,
            "remarks": remarks,
            "updated_at": datetime.utcnow().isoformat(),
        }
