"""Create statements, carriers and reps tables

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'statements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('file_name', sa.String(), nullable=False),
        sa.Column('file_type', sa.String(), nullable=False),
        sa.Column('carrier', sa.String(), nullable=False),
        sa.Column('month', sa.String(), nullable=False),
        sa.Column('premium', sa.Numeric(12, 2), nullable=False),
        sa.Column('commission', sa.Numeric(12, 2), nullable=False),
        sa.Column('lives', sa.Integer(), nullable=False),
        sa.Column('confidence', sa.Numeric(5, 4), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_statements_id', 'statements', ['id'])
    op.create_index('ix_statements_carrier', 'statements', ['carrier'])
    op.create_index('ix_statements_created_at', 'statements', ['created_at'])

    op.create_table(
        'carriers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('setup_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('first_statement_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_carriers_id', 'carriers', ['id'])
    # Upsert conflict target
    op.create_index('ix_carriers_name', 'carriers', ['name'], unique=True)

    op.create_table(
        'reps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('commission_rate', sa.Numeric(5, 4), nullable=False),
        sa.Column('total_earnings', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_lives', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_reps_id', 'reps', ['id'])
    op.create_index('ix_reps_name', 'reps', ['name'])


def downgrade():
    op.drop_table('reps')
    op.drop_table('carriers')
    op.drop_table('statements')
