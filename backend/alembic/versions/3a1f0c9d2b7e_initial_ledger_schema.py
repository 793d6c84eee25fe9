"""initial ledger schema

Revision ID: 3a1f0c9d2b7e
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f0c9d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'accounts',
        sa.Column('id', sa.String(length=24), primary_key=True),
        sa.Column('number', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_accounts_number', 'accounts', ['number'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.String(length=24), primary_key=True),
        sa.Column('trans_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_journal_entries_trans_id', 'journal_entries', ['trans_id'], unique=True)
    op.create_index('ix_journal_entries_date', 'journal_entries', ['date'])

    op.create_table(
        'journal_lines',
        sa.Column('id', sa.String(length=24), primary_key=True),
        sa.Column('journal_entry_id', sa.String(length=24), sa.ForeignKey('journal_entries.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('account_no', sa.Integer(), nullable=True),
        sa.Column('account_name', sa.String(length=100), nullable=True),
        sa.Column('account_ref', sa.String(length=24), nullable=True),
        sa.Column('debit', sa.Numeric(14, 2), nullable=False),
        sa.Column('credit', sa.Numeric(14, 2), nullable=False),
    )
    op.create_index('ix_journal_lines_journal_entry_id', 'journal_lines', ['journal_entry_id'])
    op.create_index('ix_journal_lines_account_ref', 'journal_lines', ['account_ref'])

    op.create_table(
        'journal_attachments',
        sa.Column('id', sa.String(length=24), primary_key=True),
        sa.Column('journal_entry_id', sa.String(length=24), sa.ForeignKey('journal_entries.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('mime_type', sa.String(length=100), nullable=True),
    )
    op.create_index('ix_journal_attachments_journal_entry_id', 'journal_attachments', ['journal_entry_id'])

    op.create_table(
        'counters',
        sa.Column('name', sa.String(length=100), primary_key=True),
        sa.Column('value', sa.Integer(), nullable=False),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=24), primary_key=True),
        sa.Column('google_sub', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('picture', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_google_sub', 'users', ['google_sub'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('users')
    op.drop_table('counters')
    op.drop_table('journal_attachments')
    op.drop_table('journal_lines')
    op.drop_table('journal_entries')
    op.drop_table('accounts')
