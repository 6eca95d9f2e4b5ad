"""create_listing_tables

Revision ID: a1c4e7f20b35
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7f20b35'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'businesses',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('owner_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('towns', sa.String(255), nullable=True),
        sa.Column('province_district', sa.String(255), nullable=True),
        sa.Column('google_map_location', sa.Text(), nullable=True),
        sa.Column('nearest_bus_stop', sa.String(255), nullable=True),
        sa.Column('nearest_train_station', sa.String(255), nullable=True),
        sa.Column('facebook_page', sa.String(500), nullable=True),
        sa.Column('tiktok_url', sa.String(500), nullable=True),
        sa.Column('website', sa.String(500), nullable=True),
        sa.Column('price_currency', sa.String(10), nullable=True),
        sa.Column('pos_lite_price', sa.String(50), nullable=True),
        sa.Column('service_listing_price', sa.String(50), nullable=True),
        sa.Column('lite_pos', sa.Integer(), nullable=True),
        sa.Column('lite_pos_expired', sa.Date(), nullable=True),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='to_be_confirmed'),
        sa.Column('searchable_business', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_businesses_owner_id'), 'businesses', ['owner_id'], unique=False)

    op.create_table(
        'services',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('category_id', sa.String(36), nullable=False),
        sa.Column('service_key', sa.String(120), nullable=False),
        sa.Column('popular_products', sa.Text(), nullable=True),
        sa.Column('services_description', sa.Text(), nullable=True),
        sa.Column('facilities', sa.Text(), nullable=True),
        sa.Column('rules', sa.Text(), nullable=True),
        sa.Column('service_images', sa.JSON(), nullable=False),
        sa.Column('contact_phone', sa.String(50), nullable=True),
        sa.Column('contact_available_start', sa.Time(), nullable=True),
        sa.Column('contact_available_until', sa.Time(), nullable=True),
        sa.Column('service_listing_receipt', sa.String(), nullable=True),
        sa.Column('service_listing_expired', sa.Date(), nullable=False),
        sa.Column('default_duration_min', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_services_category_id'), 'services', ['category_id'], unique=False)
    op.create_index(op.f('ix_services_service_key'), 'services', ['service_key'], unique=True)

    op.create_table(
        'business_resources',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('service_id', sa.String(36), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('max_capacity', sa.Integer(), nullable=False),
        sa.Column('field_count', sa.Integer(), nullable=True),
        sa.Column('base_price', sa.Float(), nullable=False),
        sa.Column('field_type', sa.String(100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_business_resources_business_id'), 'business_resources', ['business_id'], unique=False)
    op.create_index(op.f('ix_business_resources_service_id'), 'business_resources', ['service_id'], unique=False)

    op.create_table(
        'slots',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('resource_id', sa.String(36), sa.ForeignKey('business_resources.id'), nullable=False),
        sa.Column('slot_name', sa.String(255), nullable=False),
        sa.Column('slot_price', sa.Float(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=False),
        sa.Column('is_booked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_slots_resource_id'), 'slots', ['resource_id'], unique=False)

    op.create_table(
        'business_schedules',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('resource_id', sa.String(36), sa.ForeignKey('business_resources.id'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('is_open', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('open_time', sa.Time(), nullable=False),
        sa.Column('close_time', sa.Time(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id', 'day_of_week', name='uq_schedule_resource_day')
    )
    op.create_index(op.f('ix_business_schedules_resource_id'), 'business_schedules', ['resource_id'], unique=False)

    op.create_table(
        'payment_methods',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('method_type', sa.String(50), nullable=False),
        sa.Column('account_name', sa.String(255), nullable=True),
        sa.Column('account_number', sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_payment_methods_business_id'), 'payment_methods', ['business_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_payment_methods_business_id'), table_name='payment_methods')
    op.drop_table('payment_methods')
    op.drop_index(op.f('ix_business_schedules_resource_id'), table_name='business_schedules')
    op.drop_table('business_schedules')
    op.drop_index(op.f('ix_slots_resource_id'), table_name='slots')
    op.drop_table('slots')
    op.drop_index(op.f('ix_business_resources_service_id'), table_name='business_resources')
    op.drop_index(op.f('ix_business_resources_business_id'), table_name='business_resources')
    op.drop_table('business_resources')
    op.drop_index(op.f('ix_services_service_key'), table_name='services')
    op.drop_index(op.f('ix_services_category_id'), table_name='services')
    op.drop_table('services')
    op.drop_index(op.f('ix_businesses_owner_id'), table_name='businesses')
    op.drop_table('businesses')
