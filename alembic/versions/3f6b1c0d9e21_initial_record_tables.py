"""Initial record tables: sales reps, rfps, prospects, needs, client needs, links, references

Revision ID: 3f6b1c0d9e21
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f6b1c0d9e21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _candidate_columns():
    """Columns shared by prospects and client_needs."""
    return [
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('text_content', sa.Text(), nullable=True),
        sa.Column('file_name', sa.Text(), nullable=True),
        sa.Column('file_url', sa.Text(), nullable=True),
        sa.Column('file_content', sa.Text(), nullable=True),
        sa.Column('availability', sa.Text(), nullable=True),
        sa.Column('daily_rate', sa.Integer(), nullable=True),
        sa.Column('salary_expectations', sa.Integer(), nullable=True),
        sa.Column('residence', sa.Text(), nullable=True),
        sa.Column('mobility', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('assigned_to', sa.Text(), sa.ForeignKey('sales_reps.id'), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('sales_reps',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('code', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
        sa.UniqueConstraint('email'),
    )

    op.create_table('rfps',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('client', sa.Text(), nullable=True),
        sa.Column('mission', sa.Text(), nullable=True),
        sa.Column('location', sa.Text(), nullable=True),
        sa.Column('max_rate', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('assigned_to', sa.Text(), sa.ForeignKey('sales_reps.id'), nullable=False),
        sa.Column('raw_content', sa.Text(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rfps_assigned_status', 'rfps', ['assigned_to', 'status'])

    op.create_table('prospects',
        *_candidate_columns(),
        sa.Column('target_account', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_prospects_assigned_status', 'prospects', ['assigned_to', 'status'])

    op.create_table('needs',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('client', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.Text(), nullable=True),
        sa.Column('skills', sa.Text(), nullable=True),
        sa.Column('max_rate', sa.Integer(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('created_by', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('client_needs',
        *_candidate_columns(),
        sa.Column('selected_need_id', sa.Text(),
                  sa.ForeignKey('needs.id', ondelete='SET NULL'), nullable=True),
        sa.Column('selected_need_title', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_client_needs_assigned_status', 'client_needs', ['assigned_to', 'status'])

    op.create_table('linkedin_links',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('rfp_id', sa.Text(), sa.ForeignKey('rfps.id', ondelete='CASCADE'), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_linkedin_links_rfp_id', 'linkedin_links', ['rfp_id'])

    op.create_table('reference_marketplace',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('client', sa.Text(), nullable=False),
        sa.Column('need', sa.Text(), nullable=True),
        sa.Column('tech_name', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False),
        sa.Column('assigned_to', sa.Text(), sa.ForeignKey('sales_reps.id'), nullable=False),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('reference_marketplace')
    op.drop_index('ix_linkedin_links_rfp_id', table_name='linkedin_links')
    op.drop_table('linkedin_links')
    op.drop_index('ix_client_needs_assigned_status', table_name='client_needs')
    op.drop_table('client_needs')
    op.drop_table('needs')
    op.drop_index('ix_prospects_assigned_status', table_name='prospects')
    op.drop_table('prospects')
    op.drop_index('ix_rfps_assigned_status', table_name='rfps')
    op.drop_table('rfps')
    op.drop_table('sales_reps')
