"""EntriesProjector - builds calendar_entries read model from events"""
from datetime import date, datetime
from decimal import Decimal
from periodic_calendar.readmodels.projectors.base import BaseProjector
from periodic_calendar.infrastructure.db.models import CalendarEntryModel, EventLog


ENTRY_CREATED = "calendar_entry_created"
ENTRY_UPDATED = "calendar_entry_updated"
ENTRY_DELETED = "calendar_entry_deleted"


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _parse_amount(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


class EntriesProjector(BaseProjector):
    event_types = (ENTRY_CREATED, ENTRY_UPDATED, ENTRY_DELETED)

    def __init__(self, db):
        super().__init__(db, projector_name="calendar_entries")

    def handle_event(self, event: EventLog) -> None:
        if event.event_type == ENTRY_CREATED:
            self._handle_created(event)
        elif event.event_type == ENTRY_UPDATED:
            self._handle_updated(event)
        elif event.event_type == ENTRY_DELETED:
            self._handle_deleted(event)

    def _get(self, entry_id: str) -> CalendarEntryModel | None:
        return self.db.query(CalendarEntryModel).filter(
            CalendarEntryModel.entry_id == entry_id
        ).first()

    def _handle_created(self, event: EventLog) -> None:
        payload = event.payload_json
        self.db.flush()
        if self._get(payload["entry_id"]):
            return
        self.db.add(CalendarEntryModel(
            entry_id=payload["entry_id"],
            account_id=payload["account_id"],
            title=payload["title"],
            description=payload.get("description"),
            amount=_parse_amount(payload.get("amount")),
            start_date=date.fromisoformat(payload["start_date"]),
            frequency=payload["frequency"],
            end_date=_parse_date(payload.get("end_date")),
            is_paused=bool(payload.get("is_paused", False)),
            created_at=datetime.fromisoformat(payload["created_at"]),
            updated_at=datetime.fromisoformat(payload.get("updated_at") or payload["created_at"]),
        ))
        self.db.flush()

    def _handle_updated(self, event: EventLog) -> None:
        payload = event.payload_json
        entry = self._get(payload["entry_id"])
        if not entry:
            return
        for key in ("title", "description", "frequency"):
            if key in payload:
                setattr(entry, key, payload[key])
        if "is_paused" in payload:
            entry.is_paused = bool(payload["is_paused"])
        if "amount" in payload:
            entry.amount = _parse_amount(payload["amount"])
        if "start_date" in payload:
            entry.start_date = date.fromisoformat(payload["start_date"])
        if "end_date" in payload:
            entry.end_date = _parse_date(payload["end_date"])
        entry.updated_at = datetime.fromisoformat(payload["updated_at"])

    def _handle_deleted(self, event: EventLog) -> None:
        self.db.query(CalendarEntryModel).filter(
            CalendarEntryModel.entry_id == event.payload_json["entry_id"]
        ).delete(synchronize_session=False)

    def reset(self, account_id: int) -> None:
        self.db.query(CalendarEntryModel).filter(CalendarEntryModel.account_id == account_id).delete()
        super().reset(account_id)
