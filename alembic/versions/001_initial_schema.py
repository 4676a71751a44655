"""Initial Hereoz schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
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
    """Create tables, constraints and indexes."""

    op.create_table(
        'companies',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email_domain', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_companies_email_domain', 'companies', ['email_domain'])

    op.create_table(
        'users',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('role', sa.String(30), server_default='candidate', nullable=False),
        sa.Column('company_id', _uuid(), sa.ForeignKey('companies.id'), nullable=True),
        sa.Column('headline', sa.String(255), nullable=True),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('languages', sa.JSON(), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('email_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('verification_token', sa.String(128), nullable=True),
        sa.Column('verification_token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('reset_token', sa.String(128), nullable=True),
        sa.Column('reset_token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('candidate', 'recruiter', 'company_admin', 'platform_admin')",
            name='ck_users_role',
        ),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_verification_token', 'users', ['verification_token'])
    op.create_index('ix_users_reset_token', 'users', ['reset_token'])

    op.create_table(
        'offers',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('company_id', _uuid(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('recruiter_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('contract_type', sa.String(30), server_default='permanent', nullable=False),
        sa.Column('remote_mode', sa.String(30), server_default='onsite', nullable=False),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('required_skills', sa.JSON(), nullable=True),
        sa.Column('required_languages', sa.JSON(), nullable=True),
        sa.Column('required_experience_years', sa.Integer(), nullable=True),
        sa.Column('is_urgent', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('status', sa.String(20), server_default='active', nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('application_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('favorite_count', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.CheckConstraint("status IN ('active', 'closed', 'filled')", name='ck_offers_status'),
        sa.CheckConstraint(
            'salary_min IS NULL OR salary_max IS NULL OR salary_max >= salary_min',
            name='ck_offers_salary_range',
        ),
    )
    op.create_index('ix_offers_company_id', 'offers', ['company_id'])
    op.create_index('ix_offers_recruiter_id', 'offers', ['recruiter_id'])
    op.create_index('ix_offers_status', 'offers', ['status'])

    op.create_table(
        'conversations',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('candidate_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('recruiter_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('offer_id', _uuid(), sa.ForeignKey('offers.id'), nullable=True),
        sa.Column('status', sa.String(20), server_default='open', nullable=False),
        sa.Column('last_activity_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            'candidate_id', 'recruiter_id', 'offer_id', name='uq_conversations_participants_offer'
        ),
        sa.CheckConstraint("status IN ('open', 'closed', 'archived')", name='ck_conversations_status'),
    )
    op.create_index('ix_conversations_candidate_id', 'conversations', ['candidate_id'])
    op.create_index('ix_conversations_recruiter_id', 'conversations', ['recruiter_id'])

    op.create_table(
        'messages',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('conversation_id', _uuid(), sa.ForeignKey('conversations.id'), nullable=False),
        sa.Column('sender_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('kind', sa.String(20), server_default='text', nullable=False),
        sa.Column('attachment_url', sa.String(500), nullable=True),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('read_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("kind IN ('text', 'file', 'video')", name='ck_messages_kind'),
    )
    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])

    op.create_table(
        'swipe_events',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('offer_id', _uuid(), sa.ForeignKey('offers.id'), nullable=False),
        sa.Column('action', sa.String(20), nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('matching_score', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'offer_id', name='uq_swipe_events_user_offer'),
        sa.CheckConstraint("action IN ('right', 'left', 'favorite')", name='ck_swipe_events_action'),
        sa.CheckConstraint(
            'matching_score IS NULL OR (matching_score >= 0 AND matching_score <= 100)',
            name='ck_swipe_events_matching_score',
        ),
    )
    op.create_index('ix_swipe_events_user_id', 'swipe_events', ['user_id'])
    op.create_index('ix_swipe_events_offer_id', 'swipe_events', ['offer_id'])

    op.create_table(
        'applications',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('candidate_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('offer_id', _uuid(), sa.ForeignKey('offers.id'), nullable=False),
        sa.Column('status', sa.String(20), server_default='new', nullable=False),
        sa.Column('applied_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('status_updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('cover_message', sa.Text(), nullable=True),
        sa.Column('recruiter_notes', sa.Text(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('matching_score', sa.Integer(), nullable=True),
        sa.Column('conversation_id', _uuid(), sa.ForeignKey('conversations.id'), nullable=True),
        sa.Column('withdrawn_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('candidate_id', 'offer_id', name='uq_applications_candidate_offer'),
        sa.CheckConstraint(
            "status IN ('new', 'viewed', 'contacted', 'interview', 'offer', 'accepted', 'hired', 'rejected')",
            name='ck_applications_status',
        ),
        sa.CheckConstraint(
            'matching_score IS NULL OR (matching_score >= 0 AND matching_score <= 100)',
            name='ck_applications_matching_score',
        ),
    )
    op.create_index('ix_applications_candidate_id', 'applications', ['candidate_id'])
    op.create_index('ix_applications_offer_id', 'applications', ['offer_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])

    op.create_table(
        'application_transition_logs',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('application_id', _uuid(), sa.ForeignKey('applications.id'), nullable=False),
        sa.Column('old_status', sa.String(20), nullable=False),
        sa.Column('new_status', sa.String(20), nullable=False),
        sa.Column('actor_id', _uuid(), nullable=True),
        sa.Column('actor_type', sa.String(20), server_default='SYSTEM', nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('is_terminal', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        'ix_application_transition_logs_application_id',
        'application_transition_logs',
        ['application_id'],
    )

    op.create_table(
        'interviews',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('application_id', _uuid(), sa.ForeignKey('applications.id'), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), server_default='30', nullable=False),
        sa.Column('mode', sa.String(20), server_default='video', nullable=False),
        sa.Column('status', sa.String(20), server_default='planned', nullable=False),
        sa.Column('video_link', sa.String(500), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("mode IN ('video', 'onsite')", name='ck_interviews_mode'),
        sa.CheckConstraint(
            "status IN ('planned', 'confirmed', 'completed', 'cancelled')", name='ck_interviews_status'
        ),
        sa.CheckConstraint(
            'duration_minutes >= 5 AND duration_minutes <= 480', name='ck_interviews_duration'
        ),
    )
    op.create_index('ix_interviews_application_id', 'interviews', ['application_id'])
    op.create_index('ix_interviews_scheduled_at', 'interviews', ['scheduled_at'])

    op.create_table(
        'availability_slots',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('weekday', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('recurrence', sa.String(20), server_default='weekly', nullable=False),
        sa.Column('specific_date', sa.Date(), nullable=True),
        sa.Column('timezone', sa.String(64), server_default='Europe/Paris', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('weekday >= 0 AND weekday <= 6', name='ck_availability_weekday'),
        sa.CheckConstraint(
            "recurrence IN ('once', 'weekly', 'monthly')", name='ck_availability_recurrence'
        ),
    )
    op.create_index('ix_availability_slots_user_id', 'availability_slots', ['user_id'])


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table('availability_slots')
    op.drop_table('interviews')
    op.drop_table('application_transition_logs')
    op.drop_table('applications')
    op.drop_table('swipe_events')
    op.drop_table('messages')
    op.drop_table('conversations')
    op.drop_table('offers')
    op.drop_table('users')
    op.drop_table('companies')
