"""Entry use cases - create, update, delete, pause toggle, bulk import, queries"""
import logging
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from periodic_calendar.application.exports import ImportRow
from periodic_calendar.domain.calendar_entry import (
    CalendarEntry, EntryNotFoundError, EntryValidationError, validate_entry,
)
from periodic_calendar.domain.entry import Entry, entry_from_db
from periodic_calendar.domain.frequency import Frequency
from periodic_calendar.infrastructure.db.models import CalendarEntryModel
from periodic_calendar.infrastructure.eventlog.repository import EventLogRepository
from periodic_calendar.readmodels.projectors.entries import (
    EntriesProjector, ENTRY_CREATED, ENTRY_UPDATED, ENTRY_DELETED,
)
from periodic_calendar.readmodels.projectors.entry_statuses import EntryStatusesProjector

logger = logging.getLogger(__name__)

_UPDATABLE = ("title", "description", "amount", "start_date", "frequency", "end_date", "is_paused")


# ============================================================================
# Queries
# ============================================================================

def list_entries(db: Session, account_id: int) -> list[Entry]:
    """All entries of the account, ordered by start date then creation."""
    rows = db.query(CalendarEntryModel).filter(
        CalendarEntryModel.account_id == account_id,
    ).order_by(
        CalendarEntryModel.start_date.asc(),
        CalendarEntryModel.created_at.asc(),
        CalendarEntryModel.entry_id.asc(),
    ).all()
    return [entry_from_db(row) for row in rows]


def _get_row(db: Session, account_id: int, entry_id: str) -> CalendarEntryModel:
    row = db.query(CalendarEntryModel).filter(
        CalendarEntryModel.entry_id == entry_id,
        CalendarEntryModel.account_id == account_id,
    ).first()
    if not row:
        raise EntryNotFoundError(f"Entry {entry_id} not found")
    return row


def get_entry(db: Session, account_id: int, entry_id: str) -> Entry:
    """Raises EntryNotFoundError if the entry does not exist in the account."""
    return entry_from_db(_get_row(db, account_id, entry_id))


# ============================================================================
# Commands
# ============================================================================

class CreateEntryUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(
        self,
        account_id: int,
        title: str,
        start_date: "str | date",
        frequency: "str | Frequency",
        description: str | None = None,
        amount: "str | Decimal | None" = None,
        end_date: "str | date | None" = None,
        is_paused: bool = False,
        actor_user_id: int | None = None,
    ) -> str:
        fields = validate_entry(title, start_date, frequency, end_date, amount)

        entry_id = str(uuid.uuid4())
        payload = CalendarEntry.create(
            account_id=account_id,
            entry_id=entry_id,
            description=(description or "").strip() or None,
            is_paused=is_paused,
            **fields,
        )
        self.event_repo.append_event(
            account_id=account_id,
            event_type=ENTRY_CREATED,
            payload=payload,
            actor_user_id=actor_user_id,
        )
        self.db.commit()

        EntriesProjector(self.db).run(account_id)
        return entry_id


class UpdateEntryUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, entry_id: str, account_id: int, actor_user_id: int | None = None, **changes) -> None:
        current = get_entry(self.db, account_id, entry_id)

        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise EntryValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        # Validate the entry as it will look after the change
        merged = validate_entry(
            title=changes.get("title", current.title),
            start_date=changes.get("start_date", current.start_date),
            frequency=changes.get("frequency", current.frequency),
            end_date=changes.get("end_date", current.end_date),
            amount=changes.get("amount", current.amount),
        )
        normalized = {key: merged[key] for key in merged if key in changes}
        if "description" in changes:
            normalized["description"] = (changes["description"] or "").strip() or None
        if "is_paused" in changes:
            normalized["is_paused"] = bool(changes["is_paused"])

        payload = CalendarEntry.update(entry_id, **normalized)
        self.event_repo.append_event(
            account_id=account_id,
            event_type=ENTRY_UPDATED,
            payload=payload,
            actor_user_id=actor_user_id,
        )
        self.db.commit()
        EntriesProjector(self.db).run(account_id)


class TogglePauseUseCase:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, entry_id: str, account_id: int, actor_user_id: int | None = None) -> bool:
        """Flip is_paused; returns the new value."""
        current = get_entry(self.db, account_id, entry_id)
        paused = not current.is_paused
        UpdateEntryUseCase(self.db).execute(
            entry_id=entry_id,
            account_id=account_id,
            actor_user_id=actor_user_id,
            is_paused=paused,
        )
        return paused


class DeleteEntryUseCase:
    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(self, entry_id: str, account_id: int, actor_user_id: int | None = None) -> None:
        _get_row(self.db, account_id, entry_id)

        self.event_repo.append_event(
            account_id=account_id,
            event_type=ENTRY_DELETED,
            payload=CalendarEntry.delete(entry_id),
            actor_user_id=actor_user_id,
        )
        self.db.commit()
        EntriesProjector(self.db).run(account_id)
        EntryStatusesProjector(self.db).run(account_id)


class ImportEntriesUseCase:
    """Create one entry per parsed CSV row, all with the same frequency."""

    def __init__(self, db: Session):
        self.db = db
        self.event_repo = EventLogRepository(db)

    def execute(
        self,
        account_id: int,
        rows: list[ImportRow],
        frequency: "str | Frequency",
        actor_user_id: int | None = None,
    ) -> list[str]:
        try:
            freq = Frequency.parse(frequency)
        except ValueError as e:
            raise EntryValidationError(str(e)) from e

        entry_ids: list[str] = []
        for row in rows:
            fields = validate_entry(row.title, row.start_date, freq, None, row.amount)
            entry_id = str(uuid.uuid4())
            self.event_repo.append_event(
                account_id=account_id,
                event_type=ENTRY_CREATED,
                payload=CalendarEntry.create(
                    account_id=account_id,
                    entry_id=entry_id,
                    description=row.description,
                    **fields,
                ),
                actor_user_id=actor_user_id,
            )
            entry_ids.append(entry_id)

        self.db.commit()
        EntriesProjector(self.db).run(account_id)
        logger.info("Imported %d entries (%s) for account_id=%s", len(entry_ids), freq.value, account_id)
        return entry_ids
