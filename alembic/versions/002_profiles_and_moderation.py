"""Candidate profile sections and account suspension

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 15:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def _uuid():
    return postgresql.UUID(as_uuid=True)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.add_column('users', sa.Column('suspended_at', sa.DateTime(), nullable=True))
    op.add_column('users', sa.Column('suspension_reason', sa.String(1000), nullable=True))

    op.create_table(
        'experiences',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("end_date IS NULL OR end_date >= start_date", name='ck_experiences_dates'),
    )
    op.create_index('ix_experiences_user_id', 'experiences', ['user_id'])

    op.create_table(
        'educations',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('degree', sa.String(255), nullable=False),
        sa.Column('school', sa.String(255), nullable=False),
        sa.Column('level', sa.String(20), nullable=True),
        sa.Column('field_of_study', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('obtained', sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("end_date IS NULL OR end_date >= start_date", name='ck_educations_dates'),
        sa.CheckConstraint(
            "level IS NULL OR level IN ('high_school', 'associate', 'bachelor', 'master', 'doctorate', 'other')",
            name='ck_educations_level',
        ),
    )
    op.create_index('ix_educations_user_id', 'educations', ['user_id'])


def downgrade() -> None:
    op.drop_table('educations')
    op.drop_table('experiences')
    op.drop_column('users', 'suspension_reason')
    op.drop_column('users', 'suspended_at')
