"""Tests for entry use cases (event log + projection)"""
import pytest
from datetime import date
from decimal import Decimal

from periodic_calendar.application.entries import (
    CreateEntryUseCase, DeleteEntryUseCase, ImportEntriesUseCase, TogglePauseUseCase,
    UpdateEntryUseCase, get_entry, list_entries,
)
from periodic_calendar.application.exports import ImportRow
from periodic_calendar.domain.calendar_entry import EntryNotFoundError, EntryValidationError
from periodic_calendar.domain.frequency import Frequency
from periodic_calendar.infrastructure.db.models import CalendarEntryModel, EventLog
from periodic_calendar.infrastructure.eventlog.repository import EventLogRepository


def _create(db_session, account_id, title="AC service", start="2024-03-01", frequency="monthly", **kw):
    return CreateEntryUseCase(db_session).execute(
        account_id=account_id, title=title, start_date=start, frequency=frequency, **kw
    )


class TestCreate:
    def test_creates_event_and_read_model(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id, amount="1500.50", description="  Split unit ")

        event = db_session.query(EventLog).one()
        assert event.event_type == "calendar_entry_created"
        assert event.payload_json["entry_id"] == entry_id

        entry = get_entry(db_session, sample_account_id, entry_id)
        assert entry.title == "AC service"
        assert entry.description == "Split unit"
        assert entry.amount == Decimal("1500.50")
        assert entry.frequency is Frequency.MONTHLY
        assert entry.is_paused is False

    def test_frequency_stored_as_code(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id, frequency="quarterly")
        row = db_session.query(CalendarEntryModel).filter(CalendarEntryModel.entry_id == entry_id).one()
        assert row.frequency == "3_MONTHLY"

    def test_invalid_frequency_rejected(self, db_session, sample_account_id):
        with pytest.raises(EntryValidationError):
            _create(db_session, sample_account_id, frequency="hourly")
        assert db_session.query(EventLog).count() == 0

    def test_end_before_start_rejected(self, db_session, sample_account_id):
        with pytest.raises(EntryValidationError):
            _create(db_session, sample_account_id, start="2024-03-01", end_date="2024-02-01")


class TestQueries:
    def test_list_ordered_by_start_date(self, db_session, sample_account_id):
        _create(db_session, sample_account_id, title="Later", start="2024-05-01")
        _create(db_session, sample_account_id, title="Earlier", start="2024-01-01")
        assert [e.title for e in list_entries(db_session, sample_account_id)] == ["Earlier", "Later"]

    def test_list_scoped_to_account(self, db_session, sample_account_id):
        _create(db_session, sample_account_id)
        _create(db_session, 2, title="Other account")
        assert [e.title for e in list_entries(db_session, sample_account_id)] == ["AC service"]

    def test_get_missing(self, db_session, sample_account_id):
        with pytest.raises(EntryNotFoundError):
            get_entry(db_session, sample_account_id, "nope")


class TestUpdate:
    def test_partial_update(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id, amount="10")
        UpdateEntryUseCase(db_session).execute(
            entry_id=entry_id, account_id=sample_account_id, title="Renamed", frequency="weekly",
        )
        entry = get_entry(db_session, sample_account_id, entry_id)
        assert entry.title == "Renamed"
        assert entry.frequency is Frequency.WEEKLY
        assert entry.amount == Decimal("10")
        assert entry.start_date == date(2024, 3, 1)

    def test_clear_amount(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id, amount="10")
        UpdateEntryUseCase(db_session).execute(entry_id=entry_id, account_id=sample_account_id, amount=None)
        assert get_entry(db_session, sample_account_id, entry_id).amount is None

    def test_end_date_checked_against_current_start(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id, start="2024-03-01")
        with pytest.raises(EntryValidationError):
            UpdateEntryUseCase(db_session).execute(
                entry_id=entry_id, account_id=sample_account_id, end_date="2024-01-01",
            )

    def test_unknown_field(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id)
        with pytest.raises(EntryValidationError):
            UpdateEntryUseCase(db_session).execute(entry_id=entry_id, account_id=sample_account_id, colour="red")

    def test_missing_entry(self, db_session, sample_account_id):
        with pytest.raises(EntryNotFoundError):
            UpdateEntryUseCase(db_session).execute(entry_id="nope", account_id=sample_account_id, title="x")


class TestPauseAndDelete:
    def test_toggle_pause(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id)
        use_case = TogglePauseUseCase(db_session)
        assert use_case.execute(entry_id=entry_id, account_id=sample_account_id) is True
        assert get_entry(db_session, sample_account_id, entry_id).is_paused is True
        assert use_case.execute(entry_id=entry_id, account_id=sample_account_id) is False
        assert get_entry(db_session, sample_account_id, entry_id).is_paused is False

    def test_delete(self, db_session, sample_account_id):
        entry_id = _create(db_session, sample_account_id)
        DeleteEntryUseCase(db_session).execute(entry_id=entry_id, account_id=sample_account_id)
        assert list_entries(db_session, sample_account_id) == []
        repo = EventLogRepository(db_session)
        assert repo.count_events(sample_account_id, event_types=["calendar_entry_deleted"]) == 1
        assert repo.count_events(sample_account_id) == 2

    def test_delete_missing(self, db_session, sample_account_id):
        with pytest.raises(EntryNotFoundError):
            DeleteEntryUseCase(db_session).execute(entry_id="nope", account_id=sample_account_id)


class TestImport:
    def test_import_applies_frequency(self, db_session, sample_account_id):
        rows = [
            ImportRow(title="Filter", start_date=date(2024, 1, 1), amount=Decimal("5")),
            ImportRow(title="Pump", start_date=date(2024, 2, 1), description="Borewell"),
        ]
        ids = ImportEntriesUseCase(db_session).execute(
            account_id=sample_account_id, rows=rows, frequency="fortnightly",
        )
        entries = list_entries(db_session, sample_account_id)
        assert len(ids) == 2
        assert [e.title for e in entries] == ["Filter", "Pump"]
        assert all(e.frequency is Frequency.FORTNIGHTLY for e in entries)
        assert all(e.is_paused is False for e in entries)
        assert entries[1].description == "Borewell"

    def test_import_rejects_bad_frequency(self, db_session, sample_account_id):
        rows = [ImportRow(title="Filter", start_date=date(2024, 1, 1))]
        with pytest.raises(EntryValidationError):
            ImportEntriesUseCase(db_session).execute(account_id=sample_account_id, rows=rows, frequency="sometimes")
