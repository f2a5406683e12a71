"""Create initial schema

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261018_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False

def upgrade() -> None:
    # ### Create all tables, lookup tables first ###
    bind = op.get_bind()

    if not _has_table(bind, 'users'):
        op.create_table('users',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('first_name', sa.String(length=100), nullable=False),
            sa.Column('last_name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('phone_number', sa.String(length=30), nullable=True),
            sa.Column('role', sa.String(length=20), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint("role IN ('host', 'guest', 'admin')", name=op.f('ck_users_role')),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_users'))
        )
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not _has_table(bind, 'locations'):
        op.create_table('locations',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('city', sa.String(length=100), nullable=False),
            sa.Column('state', sa.String(length=100), nullable=True),
            sa.Column('country', sa.String(length=100), nullable=False),
            sa.Column('postal_code', sa.String(length=20), nullable=True),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_locations')),
            sa.UniqueConstraint('city', 'state', 'country', 'postal_code',
                                name=op.f('uq_locations_city_state_country_postal_code'))
        )

    if not _has_table(bind, 'property_types'):
        op.create_table('property_types',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('type_name', sa.String(length=50), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_property_types')),
            sa.UniqueConstraint('type_name', name=op.f('uq_property_types_type_name'))
        )

    if not _has_table(bind, 'amenities'):
        op.create_table('amenities',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('amenity_name', sa.String(length=100), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_amenities')),
            sa.UniqueConstraint('amenity_name', name=op.f('uq_amenities_amenity_name'))
        )

    if not _has_table(bind, 'properties'):
        op.create_table('properties',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('owner_id', sa.String(length=36), nullable=False),
            sa.Column('location_id', sa.String(length=36), nullable=False),
            sa.Column('property_type_id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('price_per_night', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint('price_per_night > 0', name=op.f('ck_properties_price_positive')),
            sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_properties_owner_id_users'), ondelete='RESTRICT'),
            sa.ForeignKeyConstraint(['location_id'], ['locations.id'], name=op.f('fk_properties_location_id_locations'), ondelete='RESTRICT'),
            sa.ForeignKeyConstraint(['property_type_id'], ['property_types.id'], name=op.f('fk_properties_property_type_id_property_types'), ondelete='RESTRICT'),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_properties'))
        )
        op.create_index(op.f('ix_properties_owner_id'), 'properties', ['owner_id'], unique=False)
        op.create_index(op.f('ix_properties_location_id'), 'properties', ['location_id'], unique=False)
        op.create_index(op.f('ix_properties_property_type_id'), 'properties', ['property_type_id'], unique=False)

    if not _has_table(bind, 'property_amenities'):
        op.create_table('property_amenities',
            sa.Column('property_id', sa.String(length=36), nullable=False),
            sa.Column('amenity_id', sa.String(length=36), nullable=False),
            sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name=op.f('fk_property_amenities_property_id_properties'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['amenity_id'], ['amenities.id'], name=op.f('fk_property_amenities_amenity_id_amenities'), ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('property_id', 'amenity_id', name=op.f('pk_property_amenities'))
        )
        op.create_index(op.f('ix_property_amenities_amenity_id'), 'property_amenities', ['amenity_id'], unique=False)

    if not _has_table(bind, 'bookings'):
        op.create_table('bookings',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('property_id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=False),
            sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint('end_date > start_date', name=op.f('ck_bookings_date_order')),
            sa.CheckConstraint('total_price >= 0', name=op.f('ck_bookings_total_price_non_negative')),
            sa.CheckConstraint("status IN ('pending', 'confirmed', 'canceled', 'completed')", name=op.f('ck_bookings_status')),
            sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name=op.f('fk_bookings_property_id_properties'), ondelete='RESTRICT'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_bookings_user_id_users'), ondelete='RESTRICT'),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_bookings'))
        )
        op.create_index(op.f('ix_bookings_property_id'), 'bookings', ['property_id'], unique=False)
        op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
        op.create_index('ix_bookings_property_start_end', 'bookings', ['property_id', 'start_date', 'end_date'], unique=False)

    if not _has_table(bind, 'payment_methods'):
        op.create_table('payment_methods',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('method_type', sa.String(length=20), nullable=False),
            sa.Column('is_default', sa.Boolean(), nullable=False),
            sa.Column('added_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint("method_type IN ('credit_card', 'paypal', 'bank_transfer')", name=op.f('ck_payment_methods_method_type')),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_payment_methods_user_id_users'), ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_payment_methods'))
        )
        op.create_index(op.f('ix_payment_methods_user_id'), 'payment_methods', ['user_id'], unique=False)

    if not _has_table(bind, 'payments'):
        op.create_table('payments',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('booking_id', sa.String(length=36), nullable=False),
            sa.Column('payment_method_id', sa.String(length=36), nullable=False),
            sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('transaction_id', sa.String(length=100), nullable=True),
            sa.Column('payment_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint('amount >= 0', name=op.f('ck_payments_amount_non_negative')),
            sa.CheckConstraint("status IN ('pending', 'completed', 'failed', 'refunded')", name=op.f('ck_payments_status')),
            sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], name=op.f('fk_payments_booking_id_bookings'), ondelete='RESTRICT'),
            sa.ForeignKeyConstraint(['payment_method_id'], ['payment_methods.id'], name=op.f('fk_payments_payment_method_id_payment_methods'), ondelete='RESTRICT'),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_payments')),
            sa.UniqueConstraint('transaction_id', name=op.f('uq_payments_transaction_id'))
        )
        # one payment per booking
        op.create_index(op.f('ix_payments_booking_id'), 'payments', ['booking_id'], unique=True)
        op.create_index(op.f('ix_payments_payment_method_id'), 'payments', ['payment_method_id'], unique=False)

    if not _has_table(bind, 'reviews'):
        op.create_table('reviews',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('property_id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(length=36), nullable=False),
            sa.Column('booking_id', sa.String(length=36), nullable=True),
            sa.Column('rating', sa.Integer(), nullable=False),
            sa.Column('comment', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint('rating BETWEEN 1 AND 5', name=op.f('ck_reviews_rating_range')),
            sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name=op.f('fk_reviews_property_id_properties'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_reviews_user_id_users'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], name=op.f('fk_reviews_booking_id_bookings'), ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_reviews'))
        )
        op.create_index(op.f('ix_reviews_property_id'), 'reviews', ['property_id'], unique=False)
        op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)
        op.create_index(op.f('ix_reviews_booking_id'), 'reviews', ['booking_id'], unique=False)

    if not _has_table(bind, 'messages'):
        op.create_table('messages',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('sender_id', sa.String(length=36), nullable=False),
            sa.Column('recipient_id', sa.String(length=36), nullable=False),
            sa.Column('booking_id', sa.String(length=36), nullable=True),
            sa.Column('review_id', sa.String(length=36), nullable=True),
            sa.Column('subject', sa.String(length=200), nullable=True),
            sa.Column('message_body', sa.Text(), nullable=False),
            sa.Column('is_read', sa.Boolean(), nullable=False),
            sa.Column('sent_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint('sender_id <> recipient_id', name=op.f('ck_messages_distinct_parties')),
            sa.ForeignKeyConstraint(['sender_id'], ['users.id'], name=op.f('fk_messages_sender_id_users'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['recipient_id'], ['users.id'], name=op.f('fk_messages_recipient_id_users'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], name=op.f('fk_messages_booking_id_bookings'), ondelete='SET NULL'),
            sa.ForeignKeyConstraint(['review_id'], ['reviews.id'], name=op.f('fk_messages_review_id_reviews'), ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id', name=op.f('pk_messages'))
        )
        op.create_index(op.f('ix_messages_sender_id'), 'messages', ['sender_id'], unique=False)
        op.create_index(op.f('ix_messages_recipient_id'), 'messages', ['recipient_id'], unique=False)


def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('reviews')
    op.drop_table('payments')
    op.drop_table('payment_methods')
    op.drop_table('bookings')
    op.drop_table('property_amenities')
    op.drop_table('properties')
    op.drop_table('amenities')
    op.drop_table('property_types')
    op.drop_table('locations')
    op.drop_table('users')
