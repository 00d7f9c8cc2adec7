"""
Base Projector - read side of the event log

A projector folds the events it subscribes to into its read-model table and
keeps a per-account checkpoint (last event id applied), so every run only
sees new events and replaying is harmless.
"""
from abc import ABC, abstractmethod

from sqlalchemy.orm import Session

from periodic_calendar.infrastructure.db.models import EventLog, ProjectorCheckpoint
from periodic_calendar.infrastructure.eventlog.repository import EventLogRepository


class BaseProjector(ABC):
    # Event types this projector consumes; run() never reads anything else
    event_types: tuple[str, ...] = ()

    def __init__(self, db: Session, projector_name: str):
        self.db = db
        self.projector_name = projector_name
        self.event_repo = EventLogRepository(db)

    @abstractmethod
    def handle_event(self, event: EventLog) -> None:
        """Apply one event to the read model. Must be idempotent."""

    def _checkpoint_row(self, account_id: int) -> ProjectorCheckpoint | None:
        return self.db.query(ProjectorCheckpoint).filter(
            ProjectorCheckpoint.projector_name == self.projector_name,
            ProjectorCheckpoint.account_id == account_id,
        ).first()

    def get_checkpoint(self, account_id: int) -> int:
        """Last applied event id for the account (0 if never run)."""
        checkpoint = self._checkpoint_row(account_id)
        return checkpoint.last_event_id if checkpoint else 0

    def save_checkpoint(self, account_id: int, event_id: int) -> None:
        # Flush first so uncommitted read-model rows are visible
        self.db.flush()

        checkpoint = self._checkpoint_row(account_id)
        if checkpoint:
            checkpoint.last_event_id = event_id
        else:
            self.db.add(ProjectorCheckpoint(
                projector_name=self.projector_name,
                account_id=account_id,
                last_event_id=event_id,
            ))

    def run(self, account_id: int, batch_size: int = 200) -> int:
        """
        Apply every new event for the account, committing after each batch

        Returns:
            Number of processed events

        Example:
            >>> EntriesProjector(db).run(account_id=1)
            3
        """
        checkpoint = self.get_checkpoint(account_id)
        processed_count = 0

        while True:
            events = self.event_repo.list_events_since(
                account_id=account_id,
                after_id=checkpoint,
                limit=batch_size,
                event_types=list(self.event_types) or None,
            )
            if not events:
                break

            for event in events:
                self.handle_event(event)
                checkpoint = event.id
                processed_count += 1

            self.save_checkpoint(account_id, checkpoint)
            self.db.commit()

            if len(events) < batch_size:
                break

        return processed_count

    def reset(self, account_id: int) -> None:
        """
        Rewind the checkpoint to 0; the next run rebuilds the read model

        Subclasses delete their rows for the account before calling super().
        """
        self.save_checkpoint(account_id, 0)
