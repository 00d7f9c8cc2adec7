"""Entry status use cases - mark an occurrence completed/incomplete, status lookups"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from periodic_calendar.application.entries import get_entry
from periodic_calendar.domain.entry_status import (
    EntryStatusEvent, EntryStatusValue, parse_status, status_key,
)
from periodic_calendar.infrastructure.db.models import EntryStatusModel
from periodic_calendar.infrastructure.eventlog.repository import EventLogRepository
from periodic_calendar.readmodels.projectors.entry_statuses import EntryStatusesProjector, ENTRY_STATUS_SET

logger = logging.getLogger(__name__)


class SetEntryStatusUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(
        self,
        account_id: int,
        entry_id: str,
        day: date,
        status: "str | EntryStatusValue",
        remarks: str | None = None,
        actor_user_id: int | None = None,
    ) -> EntryStatusValue:
        """Upsert the status of one occurrence. Raises EntryNotFoundError / EntryStatusValidationError."""
        value = parse_status(status)
        get_entry(self.db, account_id, entry_id)

        payload = EntryStatusEvent.set(
            account_id=account_id,
            entry_id=entry_id,
            day=day,
            status=value,
            remarks=(remarks or "").strip() or None,
        )
        self.event_repo.append_event(
            account_id=account_id,
            event_type=ENTRY_STATUS_SET,
            payload=payload,
            actor_user_id=actor_user_id,
        )
        self.db.commit()
        EntryStatusesProjector(self.db).run(account_id)
        logger.info("Entry %s on %s marked %s", entry_id, day.isoformat(), value.value)
        return value


def list_statuses(db: Session, account_id: int, start: date, end: date) -> list[EntryStatusModel]:
    return db.query(EntryStatusModel).filter(
        EntryStatusModel.account_id == account_id,
        EntryStatusModel.date >= start,
        EntryStatusModel.date <= end,
    ).order_by(EntryStatusModel.date.asc(), EntryStatusModel.id.asc()).all()


def load_status_lookup(db: Session, account_id: int, start: date, end: date) -> dict[str, EntryStatusValue]:
    """Statuses in [start, end] keyed "{entry_id}-{YYYY-MM-DD}"."""
    return {
        status_key(row.entry_id, row.date): EntryStatusValue(row.status)
        for row in list_statuses(db, account_id, start, end)
    }
