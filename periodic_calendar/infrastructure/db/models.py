"""
SQLAlchemy ORM models (event log + readmodels)
"""
from decimal import Decimal
from datetime import date as date_type
from sqlalchemy import String, DateTime, Integer, Text, TIMESTAMP, Date, JSON, func, false, Boolean, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import JSONB

from periodic_calendar.infrastructure.db.session import Base


class EventLog(Base):
    """
    Event log - source of truth for entries and statuses

    Every change is recorded as an immutable event
    """
    __tablename__ = "event_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    actor_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    # JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
    payload_json: Mapped[dict] = mapped_column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)

    occurred_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        index=True
    )
    idempotency_key: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True
    )
    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False
    )


# ============================================================================
# Read Models (projections built from events)
# ============================================================================


class ProjectorCheckpoint(Base):
    """
    Infrastructure: Track projector progress for idempotent event processing
    """
    __tablename__ = "projector_checkpoints"

    id: Mapped[int] = mapped_column(primary_key=True)
    projector_name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    last_event_id: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    __table_args__ = (
        UniqueConstraint('projector_name', 'account_id', name='uq_projector_account'),
    )


class CalendarEntryModel(Base):
    """Read model: recurring calendar entries (built by EntriesProjector)"""
    __tablename__ = "calendar_entries"

    entry_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(precision=20, scale=2), nullable=True)

    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    frequency: Mapped[str] = mapped_column(String(16), nullable=False)  # DAILY/WEEKLY/FORTNIGHTLY/MONTHLY/3_MONTHLY/6_MONTHLY/YEARLY
    end_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    is_paused: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())

    created_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class EntryStatusModel(Base):
    """Read model: completion status of one entry occurrence"""
    __tablename__ = "entry_statuses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    entry_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="INCOMPLETE")  # COMPLETED/INCOMPLETE
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    updated_at: Mapped[DateTime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('entry_id', 'date', name='uq_entry_status_entry_date'),
    )
