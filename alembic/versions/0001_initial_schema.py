"""Initial realty CRM schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

Creates the listing, CRM and site configuration tables. Works on both
SQLite and PostgreSQL.
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create all tables."""

    # =========================================================================
    # Table: users
    # =========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(40), nullable=True),
        sa.Column('profile_image', sa.Text(), nullable=True),
        sa.Column('role', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # =========================================================================
    # Table: properties
    # =========================================================================
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('address', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(50), nullable=False),
        sa.Column('zip_code', sa.String(20), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('bedrooms', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Float(), nullable=False),
        sa.Column('square_feet', sa.Integer(), nullable=False),
        sa.Column('lot_size', sa.Float(), nullable=True),
        sa.Column('year_built', sa.Integer(), nullable=True),
        sa.Column('parking_spaces', sa.String(50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('main_image', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('features', sa.JSON(), nullable=True),
        sa.Column('listed_by_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['listed_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_properties_status', 'properties', ['status'])
    op.create_index('ix_properties_listed_by_id', 'properties', ['listed_by_id'])
    op.create_index('ix_properties_owner_status', 'properties', ['listed_by_id', 'status'])

    # =========================================================================
    # Table: clients
    # =========================================================================
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(40), nullable=True),
        sa.Column('profile_image', sa.Text(), nullable=True),
        sa.Column('realtor_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['realtor_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_clients_realtor_id', 'clients', ['realtor_id'])

    # =========================================================================
    # Table: messages
    # =========================================================================
    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id']),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'])

    # =========================================================================
    # Table: appointments (client/property are plain references)
    # =========================================================================
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('realtor_id', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['realtor_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_appointments_date', 'appointments', ['date'])
    op.create_index('ix_appointments_realtor_id', 'appointments', ['realtor_id'])

    # =========================================================================
    # Table: activities
    # =========================================================================
    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_activities_type', 'activities', ['type'])
    op.create_index('ix_activities_user_id', 'activities', ['user_id'])

    # =========================================================================
    # Table: theme_settings
    # =========================================================================
    op.create_table(
        'theme_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('scope_id', sa.Integer(), nullable=False),
        sa.Column('primary_color', sa.String(20), nullable=False),
        sa.Column('secondary_color', sa.String(20), nullable=False),
        sa.Column('tertiary_color', sa.String(20), nullable=False),
        sa.Column('text_color', sa.String(20), nullable=False),
        sa.Column('link_color', sa.String(20), nullable=False),
        sa.Column('link_hover_color', sa.String(20), nullable=False),
        sa.Column('navigation_color', sa.String(20), nullable=False),
        sa.Column('sub_navigation_color', sa.String(20), nullable=False),
        sa.Column('header_background_color', sa.String(20), nullable=False),
        sa.Column('heading_font', sa.String(100), nullable=False),
        sa.Column('body_font', sa.String(100), nullable=False),
        sa.Column('button_font', sa.String(100), nullable=False),
        sa.Column('heading_font_weight', sa.String(10), nullable=False),
        sa.Column('body_font_weight', sa.String(10), nullable=False),
        sa.Column('button_font_weight', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('scope_id'),
    )

    # =========================================================================
    # Table: page_content
    # =========================================================================
    op.create_table(
        'page_content',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('page_name', sa.String(100), nullable=False),
        sa.Column('section_name', sa.String(100), nullable=False),
        sa.Column('content_key', sa.String(100), nullable=False),
        sa.Column('content_value', sa.Text(), nullable=False),
        sa.Column('content_type', sa.String(20), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('page_name', 'section_name', 'content_key', name='uq_page_content_triple'),
    )
    op.create_index('ix_page_content_page_name', 'page_content', ['page_name'])

    # =========================================================================
    # Table: website_themes
    # =========================================================================
    op.create_table(
        'website_themes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    # =========================================================================
    # Table: communities
    # =========================================================================
    op.create_table(
        'communities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('communities')
    op.drop_table('website_themes')
    op.drop_index('ix_page_content_page_name', table_name='page_content')
    op.drop_table('page_content')
    op.drop_table('theme_settings')
    op.drop_index('ix_activities_user_id', table_name='activities')
    op.drop_index('ix_activities_type', table_name='activities')
    op.drop_table('activities')
    op.drop_index('ix_appointments_realtor_id', table_name='appointments')
    op.drop_index('ix_appointments_date', table_name='appointments')
    op.drop_table('appointments')
    op.drop_index('ix_messages_receiver_id', table_name='messages')
    op.drop_index('ix_messages_sender_id', table_name='messages')
    op.drop_table('messages')
    op.drop_index('ix_clients_realtor_id', table_name='clients')
    op.drop_table('clients')
    op.drop_index('ix_properties_owner_status', table_name='properties')
    op.drop_index('ix_properties_listed_by_id', table_name='properties')
    op.drop_index('ix_properties_status', table_name='properties')
    op.drop_table('properties')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
