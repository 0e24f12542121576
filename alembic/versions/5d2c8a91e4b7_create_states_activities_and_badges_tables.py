"""create states, visited_states, activities, badges and user_badges tables

Revision ID: 5d2c8a91e4b7
Revises:
Create Date: 2026-10-17 10:12:40.118204
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5d2c8a91e4b7'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'states',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('state_id', sa.String(length=2), nullable=False, unique=True),
        sa.Column('name', sa.String(length=50), nullable=False)
    )

    op.create_table(
        'visited_states',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('state_id', sa.String(length=2), nullable=False),
        sa.Column('user_id', sa.String(length=100), nullable=False),
        sa.Column('visited', sa.Boolean(), nullable=False),
        sa.Column('visited_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'state_id', name='uq_visited_states_user_state')
    )
    op.create_index('ix_visited_states_state_id', 'visited_states', ['state_id'])
    op.create_index('ix_visited_states_user_id', 'visited_states', ['user_id'])

    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=100), nullable=False),
        sa.Column('state_id', sa.String(length=10), nullable=False),
        sa.Column('state_name', sa.String(length=100), nullable=False),
        sa.Column('action', sa.String(length=30), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
    )
    op.create_index('ix_activities_user_id', 'activities', ['user_id'])

    op.create_table(
        'badges',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=50), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('criteria', sa.Text(), nullable=False),
        sa.Column('tier', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
    )
    op.create_index('ix_badges_category', 'badges', ['category'])

    # one row per (user, badge): the unique constraint is what makes awards idempotent
    op.create_table(
        'user_badges',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=100), nullable=False),
        sa.Column('badge_id', sa.Integer(), sa.ForeignKey('badges.id', ondelete='CASCADE'), nullable=False),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.UniqueConstraint('user_id', 'badge_id', name='uq_user_badges_user_badge')
    )
    op.create_index('ix_user_badges_user_id', 'user_badges', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_user_badges_user_id', table_name='user_badges')
    op.drop_table('user_badges')

    op.drop_index('ix_badges_category', table_name='badges')
    op.drop_table('badges')

    op.drop_index('ix_activities_user_id', table_name='activities')
    op.drop_table('activities')

    op.drop_index('ix_visited_states_user_id', table_name='visited_states')
    op.drop_index('ix_visited_states_state_id', table_name='visited_states')
    op.drop_table('visited_states')

    op.drop_table('states')
