"""create users, goals, progress entries and notifications

Revision ID: 0001_create_fittrack_tables
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '0001_create_fittrack_tables'
down_revision = None
branch_labels = None
depends_on = None

goal_category = sa.Enum(
    'weight_loss', 'muscle_gain', 'endurance', 'flexibility', 'strength',
    'general_fitness', 'nutrition', 'mental_health', 'custom',
    name='goalcategory',
)
goal_status = sa.Enum('active', 'completed', 'abandoned', 'paused', name='goalstatus')
goal_privacy = sa.Enum('public', 'friends_only', 'private', name='goalprivacy')

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('is_superuser', sa.Boolean, nullable=False),
        sa.Column('is_verified', sa.Boolean, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.String(length=250), nullable=True),
        sa.Column('avatar_url', sa.String, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'goals',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('target_date', sa.DateTime, nullable=False),
        sa.Column('target_value', sa.Float, nullable=False),
        sa.Column('current_value', sa.Float, nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=False),
        sa.Column('category', goal_category, nullable=False),
        sa.Column('status', goal_status, nullable=False),
        sa.Column('privacy', goal_privacy, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    op.create_table(
        'progress_entries',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('goal_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('goals.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('value', sa.Float, nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_progress_entries_goal_id', 'progress_entries', ['goal_id'])
    op.create_index('ix_progress_entries_user_id', 'progress_entries', ['user_id'])

    op.create_table(
        'notifications',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('goal_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('goals.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String, nullable=False),
        sa.Column('message', sa.String, nullable=False),
        sa.Column('type', sa.String, nullable=False),
        sa.Column('status', sa.String, nullable=False),
        sa.Column('is_read', sa.Boolean, default=False),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
    )

def downgrade():
    op.drop_table('notifications')
    op.drop_index('ix_progress_entries_user_id', table_name='progress_entries')
    op.drop_index('ix_progress_entries_goal_id', table_name='progress_entries')
    op.drop_table('progress_entries')
    op.drop_index('ix_goals_user_id', table_name='goals')
    op.drop_table('goals')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    goal_privacy.drop(op.get_bind(), checkfirst=True)
    goal_status.drop(op.get_bind(), checkfirst=True)
    goal_category.drop(op.get_bind(), checkfirst=True)
