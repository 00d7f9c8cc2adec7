"""Tests for calendar read-model projectors"""
from datetime import date

from periodic_calendar.domain.calendar_entry import CalendarEntry
from periodic_calendar.domain.entry_status import EntryStatusEvent, EntryStatusValue
from periodic_calendar.domain.frequency import Frequency
from periodic_calendar.infrastructure.db.models import CalendarEntryModel, EntryStatusModel
from periodic_calendar.infrastructure.eventlog.repository import EventLogRepository
from periodic_calendar.readmodels.projectors.entries import (
    EntriesProjector, ENTRY_CREATED, ENTRY_DELETED, ENTRY_UPDATED,
)
from periodic_calendar.readmodels.projectors.entry_statuses import EntryStatusesProjector, ENTRY_STATUS_SET


def _append_created(db_session, account_id, entry_id="e1", title="Pump service"):
    EventLogRepository(db_session).append_event(
        account_id=account_id,
        event_type=ENTRY_CREATED,
        payload=CalendarEntry.create(
            account_id=account_id,
            entry_id=entry_id,
            title=title,
            start_date=date(2024, 1, 1),
            frequency=Frequency.QUARTERLY,
        ),
    )
    db_session.commit()


def test_created_and_updated(db_session, sample_account_id):
    _append_created(db_session, sample_account_id)
    EventLogRepository(db_session).append_event(
        account_id=sample_account_id,
        event_type=ENTRY_UPDATED,
        payload=CalendarEntry.update("e1", title="Pump overhaul", is_paused=True),
    )
    db_session.commit()

    processed = EntriesProjector(db_session).run(sample_account_id)

    row = db_session.query(CalendarEntryModel).one()
    assert processed == 2
    assert row.title == "Pump overhaul"
    assert row.is_paused is True
    assert row.frequency == "3_MONTHLY"


def test_run_is_incremental(db_session, sample_account_id):
    _append_created(db_session, sample_account_id)
    projector = EntriesProjector(db_session)
    assert projector.run(sample_account_id) == 1
    assert projector.run(sample_account_id) == 0
    assert db_session.query(CalendarEntryModel).count() == 1


def test_reset_rebuilds(db_session, sample_account_id):
    _append_created(db_session, sample_account_id, "e1", "A")
    _append_created(db_session, sample_account_id, "e2", "B")
    projector = EntriesProjector(db_session)
    projector.run(sample_account_id)

    projector.reset(sample_account_id)
    db_session.commit()
    assert db_session.query(CalendarEntryModel).count() == 0

    assert projector.run(sample_account_id) == 2
    assert {r.title for r in db_session.query(CalendarEntryModel).all()} == {"A", "B"}


def test_projectors_ignore_foreign_events(db_session, sample_account_id):
    _append_created(db_session, sample_account_id)
    assert EntryStatusesProjector(db_session).run(sample_account_id) == 0


def test_status_upsert_and_entry_delete(db_session, sample_account_id):
    _append_created(db_session, sample_account_id)
    repo = EventLogRepository(db_session)
    for value in (EntryStatusValue.COMPLETED, EntryStatusValue.INCOMPLETE):
        repo.append_event(
            account_id=sample_account_id,
            event_type=ENTRY_STATUS_SET,
            payload=EntryStatusEvent.set(sample_account_id, "e1", date(2024, 4, 1), value),
        )
    db_session.commit()

    EntryStatusesProjector(db_session).run(sample_account_id)
    row = db_session.query(EntryStatusModel).one()
    assert row.status == "INCOMPLETE"

    repo.append_event(
        account_id=sample_account_id,
        event_type=ENTRY_DELETED,
        payload=CalendarEntry.delete("e1"),
    )
    db_session.commit()
    EntryStatusesProjector(db_session).run(sample_account_id)
    assert db_session.query(EntryStatusModel).count() == 0
