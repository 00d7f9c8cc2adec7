"""EntryStatusesProjector - builds entry_statuses read model from events"""
from datetime import date, datetime
from periodic_calendar.readmodels.projectors.base import BaseProjector
from periodic_calendar.readmodels.projectors.entries import ENTRY_DELETED
from periodic_calendar.infrastructure.db.models import EntryStatusModel, EventLog


ENTRY_STATUS_SET = "entry_status_set"


class EntryStatusesProjector(BaseProjector):
    event_types = (ENTRY_STATUS_SET, ENTRY_DELETED)

    def __init__(self, db):
        super().__init__(db, projector_name="entry_statuses")

    def handle_event(self, event: EventLog) -> None:
        if event.event_type == ENTRY_STATUS_SET:
            self._handle_set(event)
        elif event.event_type == ENTRY_DELETED:
            self._handle_entry_deleted(event)

    def _handle_set(self, event: EventLog) -> None:
        """Upsert on (entry_id, date)."""
        payload = event.payload_json
        day = date.fromisoformat(payload["date"])
        self.db.flush()
        row = self.db.query(EntryStatusModel).filter(
            EntryStatusModel.entry_id == payload["entry_id"],
            EntryStatusModel.date == day,
        ).first()
        if row is None:
            row = EntryStatusModel(
                account_id=payload["account_id"],
                entry_id=payload["entry_id"],
                date=day,
            )
            self.db.add(row)
        row.status = payload["status"]
        row.remarks = payload.get("remarks")
        row.updated_at = datetime.fromisoformat(payload["updated_at"])
        self.db.flush()

    def _handle_entry_deleted(self, event: EventLog) -> None:
        self.db.query(EntryStatusModel).filter(
            EntryStatusModel.entry_id == event.payload_json["entry_id"]
        ).delete(synchronize_session=False)

    def reset(self, account_id: int) -> None:
        self.db.query(EntryStatusModel).filter(EntryStatusModel.account_id == account_id).delete()
        super().reset(account_id)
