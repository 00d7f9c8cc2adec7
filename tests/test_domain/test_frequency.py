"""Tests for Frequency cadences and month arithmetic"""
import pytest
from datetime import date

from periodic_calendar.domain.frequency import Frequency, add_months, last_day_of_month, MAX_SCHEDULE_SLOTS


class TestAddMonths:
    def test_plain(self):
        assert add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)

    def test_clamps_to_leap_february(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_clamps_to_common_february(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_crosses_year(self):
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_negative(self):
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_last_day_of_month(self):
        assert last_day_of_month(2024, 2) == 29
        assert last_day_of_month(2023, 2) == 28
        assert last_day_of_month(2024, 4) == 30


class TestParse:
    @pytest.mark.parametrize("raw,expected", [
        ("daily", Frequency.DAILY),
        ("Weekly", Frequency.WEEKLY),
        ("fortnightly", Frequency.FORTNIGHTLY),
        ("3_MONTHLY", Frequency.QUARTERLY),
        ("6_MONTHLY", Frequency.HALFYEARLY),
        (" yearly ", Frequency.YEARLY),
        (Frequency.MONTHLY, Frequency.MONTHLY),
    ])
    def test_accepts_values_and_storage_codes(self, raw, expected):
        assert Frequency.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["", None, "biweekly", "hourly"])
    def test_rejects_unknown(self, raw):
        with pytest.raises(ValueError):
            Frequency.parse(raw)

    def test_from_storage_rejects_value_names(self):
        with pytest.raises(ValueError):
            Frequency.from_storage("quarterly")


class TestAttributes:
    def test_storage_codes(self):
        assert Frequency.QUARTERLY.storage_code == "3_MONTHLY"
        assert Frequency.HALFYEARLY.storage_code == "6_MONTHLY"
        assert Frequency.DAILY.storage_code == "DAILY"

    def test_storage_code_round_trip(self):
        for member in Frequency:
            assert Frequency.from_storage(member.storage_code) is member

    def test_labels(self):
        assert Frequency.FORTNIGHTLY.label == "Fortnightly (15 days)"
        assert Frequency.QUARTERLY.label == "3 Monthly"

    def test_export_code(self):
        assert Frequency.HALFYEARLY.export_code == "HALFYEARLY"

    def test_schedule_slots(self):
        assert Frequency.WEEKLY.schedule_slots == 5
        assert Frequency.FORTNIGHTLY.schedule_slots == 3
        assert Frequency.MONTHLY.schedule_slots == 1
        assert MAX_SCHEDULE_SLOTS == 5


class TestStepping:
    def test_day_steps(self):
        d = date(2024, 1, 1)
        assert Frequency.DAILY.nth(d, 1) == date(2024, 1, 2)
        assert Frequency.WEEKLY.nth(d, 1) == date(2024, 1, 8)
        assert Frequency.FORTNIGHTLY.nth(d, 1) == date(2024, 1, 16)

    def test_month_steps(self):
        d = date(2024, 1, 15)
        assert Frequency.MONTHLY.nth(d, 1) == date(2024, 2, 15)
        assert Frequency.QUARTERLY.nth(d, 1) == date(2024, 4, 15)
        assert Frequency.HALFYEARLY.nth(d, 1) == date(2024, 7, 15)
        assert Frequency.YEARLY.nth(d, 1) == date(2025, 1, 15)

    def test_nth_measured_from_anchor(self):
        anchor = date(2024, 1, 31)
        assert Frequency.MONTHLY.nth(anchor, 0) == anchor
        assert Frequency.MONTHLY.nth(anchor, 1) == date(2024, 2, 29)
        assert Frequency.MONTHLY.nth(anchor, 2) == date(2024, 3, 31)

    def test_yearly_leap_day(self):
        assert Frequency.YEARLY.nth(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert Frequency.YEARLY.nth(date(2024, 2, 29), 4) == date(2028, 2, 29)
