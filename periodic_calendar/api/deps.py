"""
FastAPI dependencies (DB session, account scope, local date)
"""
from datetime import date

from periodic_calendar.config import get_settings
from periodic_calendar.infrastructure.db.session import get_db as _get_db
from periodic_calendar.utils.dates import today_local


# Re-export get_db for routers
get_db = _get_db


def get_account_id() -> int:
    """
    Account every request acts on

    The tracker is single-user, so this is the configured DEFAULT_ACCOUNT_ID.
    Tests override it through app.dependency_overrides.
    """
    return get_settings().DEFAULT_ACCOUNT_ID


def get_today() -> date:
    """Current local date; overridable in tests."""
    return today_local()


def get_week_start() -> int:
    return get_settings().WEEK_START
