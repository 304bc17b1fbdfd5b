"""Initial Schema - Grow Ledger

Revision ID: 001
Revises:
Create Date: 2026-10-18

Räume, Sorten, Chargen mit Sortenzuteilung, Ernten und Kostenbuchungen.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum-Werte entsprechen den Namen der Python-Enums
room_status = sa.Enum('ACTIVE', 'INACTIVE', 'ARCHIVED', name='roomstatus')
batch_status = sa.Enum('PLANNED', 'ACTIVE', 'HARVESTED', 'ARCHIVED', name='batchstatus')


def upgrade() -> None:
    # Sorten
    op.create_table(
        'strains',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, index=True),
        sa.Column('strain_code', sa.String(50)),
        sa.Column('strain_class', sa.String(50)),
        sa.Column('abbreviation', sa.String(20)),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    # Räume
    op.create_table(
        'rooms',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, index=True),
        sa.Column('area', sa.Numeric(10, 2)),
        sa.Column('lights', sa.Integer),
        sa.Column('status', room_status),
        sa.Column('strain_id', sa.Uuid, sa.ForeignKey('strains.id', ondelete='SET NULL')),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    # Chargen
    op.create_table(
        'batches',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('room_id', sa.Uuid, sa.ForeignKey('rooms.id', ondelete='SET NULL'), index=True),
        sa.Column('strain_id', sa.Uuid, sa.ForeignKey('strains.id', ondelete='SET NULL')),
        sa.Column('batch_code', sa.String(50), index=True),
        sa.Column('start_date', sa.Date, nullable=False, index=True),
        sa.Column('expected_harvest', sa.Date),
        sa.Column('status', batch_status, index=True),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    # Sortenzuteilung je Charge
    op.create_table(
        'batch_strains',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('batch_id', sa.Uuid, sa.ForeignKey('batches.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('strain_id', sa.Uuid, sa.ForeignKey('strains.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('lights_assigned', sa.Integer, nullable=False, server_default='0'),
        sa.Column('percentage', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
        sa.CheckConstraint('lights_assigned >= 0', name='batch_strains_lights_check'),
        sa.CheckConstraint('percentage >= 0 AND percentage <= 100', name='batch_strains_percentage_check'),
    )

    # Ernten (bleiben beim Löschen der Charge erhalten)
    op.create_table(
        'harvest_summaries',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('batch_id', sa.Uuid, sa.ForeignKey('batches.id', ondelete='SET NULL'), index=True),
        sa.Column('total_harvest_lbs', sa.Numeric(10, 2), nullable=False),
        sa.Column('yield_per_light', sa.Numeric(12, 4), nullable=False),
        sa.Column('total_lights', sa.Integer, nullable=False, server_default='0'),
        sa.Column('harvest_date', sa.Date, nullable=False, index=True),
        sa.Column('created_at', sa.DateTime),
    )

    op.create_table(
        'harvest_details',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('harvest_summary_id', sa.Uuid, sa.ForeignKey('harvest_summaries.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('strain_id', sa.Uuid),
        sa.Column('strain_name', sa.String(100)),
        sa.Column('bigs_lbs', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('smalls_lbs', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('micros_lbs', sa.Numeric(10, 2), nullable=False, server_default='0'),
        # Preise optional, ältere Ernten haben keine
        sa.Column('bigs_price_per_lb', sa.Numeric(10, 2)),
        sa.Column('smalls_price_per_lb', sa.Numeric(10, 2)),
        sa.Column('micros_price_per_lb', sa.Numeric(10, 2)),
    )

    # Kostenbuchungen
    op.create_table(
        'cost_entries',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('date', sa.Date, nullable=False, index=True),
        sa.Column('category', sa.String(50), nullable=False, index=True),
        sa.Column('room_id', sa.Uuid, sa.ForeignKey('rooms.id', ondelete='SET NULL'), index=True),
        sa.Column('batch_id', sa.Uuid, sa.ForeignKey('batches.id', ondelete='SET NULL'), index=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('notes', sa.Text),
        sa.Column('created_at', sa.DateTime),
    )


def downgrade() -> None:
    op.drop_table('cost_entries')
    op.drop_table('harvest_details')
    op.drop_table('harvest_summaries')
    op.drop_table('batch_strains')
    op.drop_table('batches')
    op.drop_table('rooms')
    op.drop_table('strains')
    batch_status.drop(op.get_bind(), checkfirst=True)
    room_status.drop(op.get_bind(), checkfirst=True)
