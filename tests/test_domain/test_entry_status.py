"""Tests for occurrence status values and lookups"""
import pytest
from datetime import date

from periodic_calendar.domain.entry_status import (
    EntryStatusEvent, EntryStatusValidationError, EntryStatusValue,
    parse_status, resolve_status, status_key,
)


def test_status_key_format():
    assert status_key("abc", date(2024, 3, 5)) == "abc-2024-03-05"


def test_missing_key_is_incomplete():
    assert resolve_status({}, "abc", date(2024, 3, 5)) is EntryStatusValue.INCOMPLETE


def test_lookup_accepts_plain_strings():
    lookup = {"abc-2024-03-05": "COMPLETED"}
    assert resolve_status(lookup, "abc", date(2024, 3, 5)) is EntryStatusValue.COMPLETED
    assert resolve_status(lookup, "abc", date(2024, 3, 6)) is EntryStatusValue.INCOMPLETE


def test_display_strings():
    assert EntryStatusValue.COMPLETED.display == "Completed"
    assert EntryStatusValue.INCOMPLETE.display == "In-Completed"


@pytest.mark.parametrize("raw,expected", [
    ("completed", EntryStatusValue.COMPLETED),
    ("INCOMPLETE", EntryStatusValue.INCOMPLETE),
    (EntryStatusValue.COMPLETED, EntryStatusValue.COMPLETED),
])
def test_parse_status(raw, expected):
    assert parse_status(raw) is expected


@pytest.mark.parametrize("raw", ["", None, "done"])
def test_parse_status_rejects(raw):
    with pytest.raises(EntryStatusValidationError):
        parse_status(raw)


def test_status_event_payload():
    payload = EntryStatusEvent.set(1, "abc", date(2024, 3, 5), EntryStatusValue.COMPLETED, "replaced")
    assert payload["date"] == "2024-03-05"
    assert payload["status"] == "COMPLETED"
    assert payload["remarks"] == "replaced"
