"""create_users_and_profiles

Revision ID: 4c1e9a7d2b30
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e9a7d2b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and profiles tables."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index('ix_users_created_at', 'users', ['created_at'], unique=False)

    # One profile per user; deleting the user removes the profile
    op.create_table('profiles',
        sa.Column('uuid', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('instagram', sa.String(length=255), nullable=True),
        sa.Column('twitter', sa.String(length=255), nullable=True),
        sa.Column('tiktok', sa.String(length=255), nullable=True),
        sa.Column('youtube', sa.String(length=255), nullable=True),
        sa.Column('linkedin', sa.String(length=255), nullable=True),
        sa.Column('facebook', sa.String(length=255), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('is_published', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('qr_code', sa.Text(), nullable=True),
        sa.Column('qr_payload', sa.String(length=500), nullable=True),
        sa.Column('qr_generated_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('uuid'),
        sa.UniqueConstraint('user_id'),
    )


def downgrade() -> None:
    """Drop profiles and users tables."""
    op.drop_table('profiles')
    op.drop_index('ix_users_created_at', table_name='users')
    op.drop_table('users')
