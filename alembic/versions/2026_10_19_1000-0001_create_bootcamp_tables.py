"""create_bootcamp_tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Create profiles, users, bootcamps, courses and reviews."""
    op.create_table(
        'profiles',
        *_timestamps(),
        sa.Column('firstname', sa.String(length=100), nullable=False),
        sa.Column('lastname', sa.String(length=100), nullable=False),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'], unique=False)

    op.create_table(
        'users',
        *_timestamps(),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('reset_password_token', sa.String(length=64), nullable=True),
        sa.Column('reset_password_expires', sa.DateTime(), nullable=True),
        sa.Column('profile_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('profile_id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(
        op.f('ix_users_reset_password_token'), 'users', ['reset_password_token'], unique=False
    )

    op.create_table(
        'bootcamps',
        *_timestamps(),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=True),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('level', sa.String(length=20), nullable=False),
        sa.Column('category', sa.JSON(), nullable=False),
        sa.Column('cost_type', sa.String(length=10), nullable=False),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('online_available', sa.Boolean(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('location', sa.JSON(), nullable=True),
        sa.Column('electronic_medium', sa.String(length=20), nullable=True),
        sa.Column('medium_link', sa.String(length=500), nullable=True),
        sa.Column('photo', sa.String(length=255), nullable=False),
        sa.Column('average_rating', sa.Float(), nullable=True),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_bootcamps_id'), 'bootcamps', ['id'], unique=False)
    op.create_index(op.f('ix_bootcamps_name'), 'bootcamps', ['name'], unique=True)
    op.create_index(op.f('ix_bootcamps_slug'), 'bootcamps', ['slug'], unique=False)
    op.create_index(op.f('ix_bootcamps_user_id'), 'bootcamps', ['user_id'], unique=False)

    op.create_table(
        'courses',
        *_timestamps(),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('instructor', sa.String(length=100), nullable=False),
        sa.Column('prerequisites', sa.JSON(), nullable=False),
        sa.Column('bootcamp_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['bootcamp_id'], ['bootcamps.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_courses_id'), 'courses', ['id'], unique=False)
    op.create_index(op.f('ix_courses_bootcamp_id'), 'courses', ['bootcamp_id'], unique=False)
    op.create_index(op.f('ix_courses_user_id'), 'courses', ['user_id'], unique=False)

    op.create_table(
        'reviews',
        *_timestamps(),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('bootcamp_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['bootcamp_id'], ['bootcamps.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('bootcamp_id', 'user_id', name='uq_reviews_bootcamp_user'),
    )
    op.create_index(op.f('ix_reviews_id'), 'reviews', ['id'], unique=False)
    op.create_index(op.f('ix_reviews_bootcamp_id'), 'reviews', ['bootcamp_id'], unique=False)
    op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop all bootcamp tables."""
    op.drop_table('reviews')
    op.drop_table('courses')
    op.drop_table('bootcamps')
    op.drop_table('users')
    op.drop_table('profiles')
