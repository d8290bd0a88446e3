"""create users, trips and stages tables

Revision ID: 20261019_1000_create_trip_tables
Revises:
Create Date: 2026-10-19 10:00:00
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision = '20261019_1000_create_trip_tables'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', sa.String(16), nullable=False, server_default='Explorer'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("role IN ('Explorer', 'Ranger', 'Sentinel')", name='ck_users_role'),
    )
    op.create_table(
        'trips',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('slug', sa.String(120), nullable=False, unique=True, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('destination', sa.String(255), nullable=False),
        sa.Column('theme', sa.String(100), nullable=True),
        sa.Column('duration_days', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('duration_nights', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('travel_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('media', JSONB, nullable=False, server_default='[]'),
        sa.Column('gpx_file', JSONB, nullable=True),
        sa.Column('status', sa.String(32), nullable=False, server_default='Bozza', index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "status IN ('Bozza', 'Pronto_per_revisione', 'Pubblicato', 'Archiviato')",
            name='ck_trips_status',
        ),
    )
    op.create_table(
        'stages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('trip_id', sa.Integer(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('route_type', sa.String(100), nullable=True),
        sa.Column('media', JSONB, nullable=False, server_default='[]'),
        sa.Column('gpx_file', JSONB, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('trip_id', 'order_index', name='uq_stages_trip_order'),
    )

def downgrade() -> None:
    op.drop_table('stages')
    op.drop_table('trips')
    op.drop_table('users')
