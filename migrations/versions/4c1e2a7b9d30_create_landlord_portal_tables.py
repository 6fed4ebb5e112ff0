"""create landlord portal tables

Revision ID: 4c1e2a7b9d30
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '4c1e2a7b9d30'
down_revision = None
branch_labels = None
depends_on = None


MONTHS = (
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'landlords',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('password_reset_token', sa.String(length=64), nullable=True),
        sa.Column('password_reset_expires', sa.DateTime(), nullable=True),
        sa.Column('apartment_numbers', sa.JSON(), nullable=True),
        sa.Column('profile_name', sa.String(length=200), nullable=True),
        sa.Column('profile_gender', sa.String(length=50), nullable=True),
        sa.Column('profile_location', sa.String(length=200), nullable=True),
        sa.Column('profile_website', sa.String(length=500), nullable=True),
        sa.Column('profile_picture', sa.String(length=500), nullable=True),
        sa.Column('deletion_requested_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_landlords_email', 'landlords', ['email'], unique=True)
    op.create_index('ix_landlords_password_reset_token', 'landlords', ['password_reset_token'])

    op.create_table(
        'linked_accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('landlord_id', sa.Integer(), sa.ForeignKey('landlords.id'), nullable=False),
        sa.Column('kind', sa.String(length=50), nullable=False),
        sa.Column('access_token', sa.String(length=500), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_linked_accounts_landlord_id', 'linked_accounts', ['landlord_id'])

    op.create_table(
        'apartments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('apartment_number', sa.Integer(), nullable=False),
        sa.Column('landlord_email', sa.String(length=255), nullable=False),
        sa.Column('num_bedrooms', sa.Integer(), nullable=True),
        sa.Column('num_bathrooms', sa.Integer(), nullable=True),
        sa.Column('photos_folder', sa.String(length=500), nullable=True),
        *[sa.Column(f'{month}_price', sa.Numeric(12, 2), nullable=True) for month in MONTHS],
        sa.Column('additional_information', sa.Text(), nullable=True),
        sa.Column('for_sale_price', sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_apartments_apartment_number', 'apartments', ['apartment_number'], unique=True)
    op.create_index('ix_apartments_landlord_email', 'apartments', ['landlord_email'])

    op.create_table(
        'apartment_bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('apartment_number', sa.Integer(), nullable=False),
        sa.Column('booked_on', sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_apartment_bookings_apartment_number', 'apartment_bookings', ['apartment_number'])


def downgrade() -> None:
    op.drop_index('ix_apartment_bookings_apartment_number', table_name='apartment_bookings')
    op.drop_table('apartment_bookings')
    op.drop_index('ix_apartments_landlord_email', table_name='apartments')
    op.drop_index('ix_apartments_apartment_number', table_name='apartments')
    op.drop_table('apartments')
    op.drop_index('ix_linked_accounts_landlord_id', table_name='linked_accounts')
    op.drop_table('linked_accounts')
    op.drop_index('ix_landlords_password_reset_token', table_name='landlords')
    op.drop_index('ix_landlords_email', table_name='landlords')
    op.drop_table('landlords')
