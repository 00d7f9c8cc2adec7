"""
Local-date helpers
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

from periodic_calendar.config import get_settings


def today_local() -> date:
    """Today's date in the configured TIMEZONE."""
    return datetime.now(tz=ZoneInfo(get_settings().TIMEZONE)).date()
