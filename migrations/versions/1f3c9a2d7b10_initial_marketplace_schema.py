"""initial_marketplace_schema

Revision ID: 1f3c9a2d7b10
Revises:
Create Date: 2026-10-18 09:12:31.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1f3c9a2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create users, categories, services, reviews and notifications."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='customer'),
        sa.Column('api_key_hash', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('average_rating', sa.Float(), nullable=True),
        sa.Column('total_reviews', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_api_key_hash', 'users', ['api_key_hash'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('parent_id', sa.Uuid(), sa.ForeignKey('categories.id'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)
    op.create_index('ix_categories_parent_id', 'categories', ['parent_id'])

    op.create_table(
        'services',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.String(100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('category_id', sa.Uuid(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column(
            'provider_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('working_time', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_services_category_id', 'services', ['category_id'])
    op.create_index('ix_services_provider_id', 'services', ['provider_id'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'reviewer_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column(
            'reviewee_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('reviewer_id', 'reviewee_id', name='uq_reviews_reviewer_reviewee'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating_range'),
    )
    op.create_index('ix_reviews_reviewee_id', 'reviews', ['reviewee_id'])

    op.create_table(
        'service_reviews',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'reviewer_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column(
            'service_id', sa.Uuid(), sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('reviewer_id', 'service_id', name='uq_service_reviews_reviewer_service'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_service_reviews_rating_range'),
    )
    op.create_index('ix_service_reviews_service_id', 'service_reviews', ['service_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('kind', sa.String(50), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])


def downgrade() -> None:
    """Drop all marketplace tables."""
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_service_reviews_service_id', table_name='service_reviews')
    op.drop_table('service_reviews')
    op.drop_index('ix_reviews_reviewee_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_services_provider_id', table_name='services')
    op.drop_index('ix_services_category_id', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_categories_parent_id', table_name='categories')
    op.drop_index('ix_categories_slug', table_name='categories')
    op.drop_table('categories')
    op.drop_index('ix_users_api_key_hash', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
