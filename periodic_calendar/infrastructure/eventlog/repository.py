"""
Event Log Repository - append-only store behind entries and statuses

Projectors read events back in id order, filtered by the types they handle.
"""
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from periodic_calendar.infrastructure.db.models import EventLog


class EventLogRepository:
    def __init__(self, db: Session):
        self.db = db

    def append_event(
        self,
        account_id: int,
        event_type: str,
        payload: Dict[str, Any],
        occurred_at: datetime | None = None,
        actor_user_id: int | None = None,
        idempotency_key: str | None = None,
    ) -> int:
        """
        Add an event and flush it (no commit); returns the new event id

        Raises:
            IntegrityError: if idempotency_key was already used

        Example:
            >>> EventLogRepository(db).append_event(
            ...     account_id=1,
            ...     event_type="calendar_entry_created",
            ...     payload={"entry_id": "0b7c...", "title": "Water filter"},
            ... )
        """
        event = EventLog(
            account_id=account_id,
            actor_user_id=actor_user_id,
            event_type=event_type,
            payload_json=payload,
            occurred_at=occurred_at or datetime.utcnow(),
            idempotency_key=idempotency_key,
        )
        self.db.add(event)
        self.db.flush()
        return event.id

    def list_events_since(
        self,
        account_id: int,
        after_id: int = 0,
        limit: int = 200,
        event_types: List[str] | None = None,
    ) -> List[EventLog]:
        """Events with id > after_id, oldest first, at most `limit` of them."""
        query = self.db.query(EventLog).filter(
            EventLog.account_id == account_id,
            EventLog.id > after_id,
        )
        if event_types:
            query = query.filter(EventLog.event_type.in_(event_types))
        return query.order_by(EventLog.id.asc()).limit(limit).all()

    def count_events(self, account_id: int, event_types: List[str] | None = None) -> int:
        query = self.db.query(EventLog).filter(EventLog.account_id == account_id)
        if event_types:
            query = query.filter(EventLog.event_type.in_(event_types))
        return query.count()
