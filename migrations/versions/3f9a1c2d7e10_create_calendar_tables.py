"""create_calendar_tables

Revision ID: 3f9a1c2d7e10
Revises:
Create Date: 2026-10-16 10:12:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'event_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('actor_user_id', sa.Integer(), nullable=True),
        sa.Column('event_type', sa.String(length=128), nullable=False),
        sa.Column('payload_json', JSONB, nullable=False),
        sa.Column('occurred_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('idempotency_key', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_event_log_account_id', 'event_log', ['account_id'])
    op.create_index('ix_event_log_event_type', 'event_log', ['event_type'])
    op.create_index('ix_event_log_occurred_at', 'event_log', ['occurred_at'])
    op.create_index('ix_event_log_idempotency_key', 'event_log', ['idempotency_key'], unique=True)

    op.create_table(
        'projector_checkpoints',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('projector_name', sa.String(length=128), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('last_event_id', sa.Integer(), server_default='0', nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('projector_name', 'account_id', name='uq_projector_account')
    )
    op.create_index('ix_projector_checkpoints_projector_name', 'projector_checkpoints', ['projector_name'])
    op.create_index('ix_projector_checkpoints_account_id', 'projector_checkpoints', ['account_id'])

    op.create_table(
        'calendar_entries',
        sa.Column('entry_id', sa.String(length=36), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('frequency', sa.String(length=16), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('is_paused', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('entry_id')
    )
    op.create_index('ix_calendar_entries_account_id', 'calendar_entries', ['account_id'])

    op.create_table(
        'entry_statuses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('entry_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='INCOMPLETE', nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('entry_id', 'date', name='uq_entry_status_entry_date')
    )
    op.create_index('ix_entry_statuses_account_id', 'entry_statuses', ['account_id'])
    op.create_index('ix_entry_statuses_entry_id', 'entry_statuses', ['entry_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_entry_statuses_entry_id', table_name='entry_statuses')
    op.drop_index('ix_entry_statuses_account_id', table_name='entry_statuses')
    op.drop_table('entry_statuses')
    op.drop_index('ix_calendar_entries_account_id', table_name='calendar_entries')
    op.drop_table('calendar_entries')
    op.drop_index('ix_projector_checkpoints_account_id', table_name='projector_checkpoints')
    op.drop_index('ix_projector_checkpoints_projector_name', table_name='projector_checkpoints')
    op.drop_table('projector_checkpoints')
    op.drop_index('ix_event_log_idempotency_key', table_name='event_log')
    op.drop_index('ix_event_log_occurred_at', table_name='event_log')
    op.drop_index('ix_event_log_event_type', table_name='event_log')
    op.drop_index('ix_event_log_account_id', table_name='event_log')
    op.drop_table('event_log')
