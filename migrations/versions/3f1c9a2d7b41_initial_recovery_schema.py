"""initial recovery schema

Revision ID: 3f1c9a2d7b41
Revises:
Create Date: 2026-10-17 09:12:04.318220

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c9a2d7b41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('user',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('email_verified', sa.Boolean(), nullable=True),
        sa.Column('display_name', sa.String(length=120), nullable=True),
        sa.Column('timezone', sa.String(length=50), nullable=True),
        sa.Column('sponsor_name', sa.String(length=120), nullable=True),
        sa.Column('sponsor_phone', sa.String(length=40), nullable=True),
        sa.Column('emergency_contact_name', sa.String(length=120), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(length=40), nullable=True),
        sa.Column('timer_minutes', sa.Integer(), nullable=False),
        sa.Column('sobriety_date', sa.Date(), nullable=True),
        sa.Column('onboarded', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('user', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_user_email'), ['email'], unique=True)

    op.create_table('coping_tools',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=120), nullable=False),
        sa.Column('duration', sa.String(length=40), nullable=False),
        sa.Column('steps', sa.JSON(), nullable=False),
        sa.Column('when_to_use', sa.String(length=255), nullable=False),
        sa.Column('is_mandatory', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title')
    )

    op.create_table('auth_sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('token', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('auth_sessions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_auth_sessions_token'), ['token'], unique=True)
        batch_op.create_index(batch_op.f('ix_auth_sessions_user_id'), ['user_id'], unique=False)

    op.create_table('craving_sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('triggers', sa.JSON(), nullable=False),
        sa.Column('intensity', sa.Integer(), nullable=False),
        sa.Column('need_type', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('craving_sessions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_craving_sessions_user_id'), ['user_id'], unique=False)

    op.create_table('coping_tool_completions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('tool_id', sa.String(length=64), nullable=False),
        sa.Column('session_id', sa.String(length=36), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['craving_sessions.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['tool_id'], ['coping_tools.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('coping_tool_completions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_coping_tool_completions_user_id'), ['user_id'], unique=False)

    op.create_table('journal_entries',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('had_craving', sa.Boolean(), nullable=False),
        sa.Column('triggers', sa.JSON(), nullable=False),
        sa.Column('intensity', sa.Integer(), nullable=True),
        sa.Column('tools_used', sa.JSON(), nullable=False),
        sa.Column('outcome', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('journal_entries', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_journal_entries_user_id'), ['user_id'], unique=False)

    op.create_table('calendar_events',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.String(length=10), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('reminder', sa.Integer(), nullable=False),
        sa.Column('reminder_enabled', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('calendar_events', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_calendar_events_date'), ['date'], unique=False)
        batch_op.create_index(batch_op.f('ix_calendar_events_user_id'), ['user_id'], unique=False)


def downgrade():
    with op.batch_alter_table('calendar_events', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_calendar_events_user_id'))
        batch_op.drop_index(batch_op.f('ix_calendar_events_date'))
    op.drop_table('calendar_events')

    with op.batch_alter_table('journal_entries', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_journal_entries_user_id'))
    op.drop_table('journal_entries')

    with op.batch_alter_table('coping_tool_completions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_coping_tool_completions_user_id'))
    op.drop_table('coping_tool_completions')

    with op.batch_alter_table('craving_sessions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_craving_sessions_user_id'))
    op.drop_table('craving_sessions')

    with op.batch_alter_table('auth_sessions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_auth_sessions_user_id'))
        batch_op.drop_index(batch_op.f('ix_auth_sessions_token'))
    op.drop_table('auth_sessions')

    op.drop_table('coping_tools')

    with op.batch_alter_table('user', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_user_email'))
    op.drop_table('user')
