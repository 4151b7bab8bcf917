
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

CONFIRMED = sa.text("status = 'confirmed'")


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('visits', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_visit', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_customers_email', 'customers', ['email'], unique=True)

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_name', sa.String(length=120), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=32), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=8), nullable=False),
        sa.Column('guests', sa.Integer(), nullable=False),
        sa.Column('table_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('special_requests', sa.Text(), nullable=False, server_default=''),
        *_timestamps(),
    )
    op.create_index('ix_bookings_customer_email', 'bookings', ['customer_email'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])
    op.create_index('ix_bookings_date_status', 'bookings', ['date', 'status'])
    op.create_index(
        'uq_bookings_confirmed_slot', 'bookings', ['date', 'time'], unique=True,
        sqlite_where=CONFIRMED, postgresql_where=CONFIRMED,
    )

    op.create_table(
        'time_slot_policies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('policy_key', sa.String(length=10), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('slots', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_time_slot_policies_policy_key', 'time_slot_policies', ['policy_key'], unique=True)

    op.create_table(
        'menu_documents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('menu_title', sa.String(length=64), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False, unique=True),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('mime_type', sa.String(length=64), nullable=False, server_default='application/pdf'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_menu_documents_title_active', 'menu_documents', ['menu_title', 'is_active'])

    op.create_table(
        'settings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('restaurant_name', sa.String(length=120), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('max_party_size', sa.Integer(), nullable=False),
        sa.Column('booking_advance_days', sa.Integer(), nullable=False),
        sa.Column('table_count', sa.Integer(), nullable=False),
        sa.Column('operating_hours', sa.JSON(), nullable=False),
        *_timestamps(),
    )


def downgrade():
    op.drop_table('settings')
    op.drop_index('ix_menu_documents_title_active', table_name='menu_documents')
    op.drop_table('menu_documents')
    op.drop_index('ix_time_slot_policies_policy_key', table_name='time_slot_policies')
    op.drop_table('time_slot_policies')
    op.drop_index('uq_bookings_confirmed_slot', table_name='bookings')
    op.drop_index('ix_bookings_date_status', table_name='bookings')
    op.drop_index('ix_bookings_status', table_name='bookings')
    op.drop_index('ix_bookings_customer_email', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_customers_email', table_name='customers')
    op.drop_table('customers')
