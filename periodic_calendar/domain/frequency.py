"""
Entry frequencies (recurrence cadences).

Day cadences advance by a fixed number of days. Month cadences advance by
calendar months, clipping the anchor's day to the last day of shorter months:

- DAILY:       every day
- WEEKLY:      every 7 days
- FORTNIGHTLY: every 15 days (not "twice a month")
- MONTHLY:     every calendar month
- QUARTERLY:   every 3 calendar months
- HALFYEARLY:  every 6 calendar months
- YEARLY:      every 12 calendar months
"""
import calendar
from datetime import date, timedelta
from enum import Enum


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, n: int) -> date:
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    last = last_day_of_month(year, month)
    day = min(d.day, last)
    return date(year, month, day)


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALFYEARLY = "halfyearly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: "str | Frequency") -> "Frequency":
        """Accept a member, its value or its storage code (case-insensitive).

        Raises ValueError for anything else: there is no fallback cadence.
        """
        if isinstance(value, Frequency):
            return value
        raw = (value or "").strip()
        lowered = raw.lower()
        for member in cls:
            if member.value == lowered:
                return member
        upper = raw.upper()
        if upper in _BY_STORAGE_CODE:
            return _BY_STORAGE_CODE[upper]
        raise ValueError(f"invalid frequency: {value!r}")

    @classmethod
    def from_storage(cls, code: str) -> "Frequency":
        try:
            return _BY_STORAGE_CODE[code]
        except KeyError:
            raise ValueError(f"invalid frequency code: {code!r}") from None

    @property
    def storage_code(self) -> str:
        return _STORAGE_CODES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def export_code(self) -> str:
        return self.value.upper()

    @property
    def schedule_slots(self) -> int:
        """How many in-month dates the equipment schedule shows for this cadence."""
        return _SCHEDULE_SLOTS[self]

    def nth(self, anchor: date, k: int) -> date:
        """The k-th occurrence counted from anchor (k=0 is the anchor itself).

        Month cadences are measured from the anchor, so a 31st anchor yields
        Feb 29 and then Mar 31 again rather than drifting to the 29th.
        """
        if self in _MONTH_STEPS:
            return add_months(anchor, k * _MONTH_STEPS[self])
        return anchor + timedelta(days=k * _DAY_STEPS[self])


_DAY_STEPS = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
    Frequency.FORTNIGHTLY: 15,
}

_MONTH_STEPS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.HALFYEARLY: 6,
    Frequency.YEARLY: 12,
}

_STORAGE_CODES = {
    Frequency.DAILY: "DAILY",
    Frequency.WEEKLY: "WEEKLY",
    Frequency.FORTNIGHTLY: "FORTNIGHTLY",
    Frequency.MONTHLY: "MONTHLY",
    Frequency.QUARTERLY: "3_MONTHLY",
    Frequency.HALFYEARLY: "6_MONTHLY",
    Frequency.YEARLY: "YEARLY",
}
_BY_STORAGE_CODE = {code: member for member, code in _STORAGE_CODES.items()}

_LABELS = {
    Frequency.DAILY: "Daily",
    Frequency.WEEKLY: "Weekly",
    Frequency.FORTNIGHTLY: "Fortnightly (15 days)",
    Frequency.MONTHLY: "Monthly",
    Frequency.QUARTERLY: "3 Monthly",
    Frequency.HALFYEARLY: "6 Monthly",
    Frequency.YEARLY: "Yearly",
}

# A 31-day month holds at most 5 weekly and 3 fifteen-day occurrences
_SCHEDULE_SLOTS = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 5,
    Frequency.FORTNIGHTLY: 3,
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 1,
    Frequency.HALFYEARLY: 1,
    Frequency.YEARLY: 1,
}

MAX_SCHEDULE_SLOTS = max(_SCHEDULE_SLOTS.values())
