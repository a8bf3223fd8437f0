"""initial_schema

Revision ID: 000000000000
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '000000000000'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create lots table (address is indexed but intentionally not unique)
    op.create_table(
        'lots',
        sa.Column('id', sa.String(length=36), nullable=False, comment='UUID primary key'),
        sa.Column('address', sa.Text(), nullable=False, comment='Address the planning controls were looked up for'),
        sa.Column('council', sa.String(length=255), nullable=True, comment='Local government area name'),
        sa.Column('zone_code', sa.String(length=50), nullable=True, comment='Land zoning code (e.g. R2)'),
        sa.Column('lat', sa.Numeric(precision=10, scale=7), nullable=True, comment='Geocoded latitude'),
        sa.Column('lng', sa.Numeric(precision=10, scale=7), nullable=True, comment='Geocoded longitude'),
        sa.Column('max_height_m', sa.Numeric(precision=8, scale=2), nullable=True, comment='Maximum building height in metres'),
        sa.Column('fsr', sa.Numeric(precision=6, scale=2), nullable=True, comment='Floor space ratio'),
        sa.Column('min_lot_size_sqm', sa.Integer(), nullable=True, comment='Minimum lot size in square metres'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, comment='Timestamp when record was created'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, comment='Timestamp when record was last updated'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_lots_address', 'lots', ['address'], unique=False)

    # Create projects table
    op.create_table(
        'projects',
        sa.Column('id', sa.String(length=36), nullable=False, comment='UUID primary key'),
        sa.Column('site_address', sa.Text(), nullable=False, comment='Site street address'),
        sa.Column('project_type', sa.String(length=100), nullable=False, comment='Project type (e.g. New Dwelling)'),
        sa.Column('size_storeys', sa.Integer(), nullable=True, comment='Number of storeys'),
        sa.Column('budget_band', sa.String(length=100), nullable=True, comment='Budget band label'),
        sa.Column('target_timeline', sa.Date(), nullable=True, comment='Target completion date'),
        sa.Column('lot_id', sa.String(length=36), nullable=True, comment='Linked lot, set once during enrichment'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, comment='Timestamp when record was created'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, comment='Timestamp when record was last updated'),
        sa.ForeignKeyConstraint(['lot_id'], ['lots.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_projects_created_at', 'projects', ['created_at'], unique=False)
    op.create_index('idx_projects_lot_id', 'projects', ['lot_id'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_projects_lot_id', table_name='projects')
    op.drop_index('idx_projects_created_at', table_name='projects')
    op.drop_table('projects')
    op.drop_index('idx_lots_address', table_name='lots')
    op.drop_table('lots')
