
from sqlalchemy import func, text
from .extensions import db

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")
SETTINGS_ID = 1
DEFAULT_POLICY_KEY = "default"


class TimestampMixin:
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Customer(TimestampMixin, db.Model):
    __tablename__ = "customers"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    phone = db.Column(db.String(32))
    visits = db.Column(db.Integer, nullable=False, default=0)
    last_visit = db.Column(db.Date)


class Booking(TimestampMixin, db.Model):
    __tablename__ = "bookings"
    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(120), nullable=False)
    customer_email = db.Column(db.String(255), nullable=False, index=True)
    customer_phone = db.Column(db.String(32))
    date = db.Column(db.Date, nullable=False)
    # "HH:MM:SS"
    time = db.Column(db.String(8), nullable=False)
    guests = db.Column(db.Integer, nullable=False)
    table_number = db.Column(db.Integer, nullable=False, default=1)
    status = db.Column(db.String(16), nullable=False, default="pending", index=True)
    special_requests = db.Column(db.Text, nullable=False, default="")

    __table_args__ = (
        db.Index("ix_bookings_date_status", "date", "status"),
        db.Index(
            "uq_bookings_confirmed_slot",
            "date",
            "time",
            unique=True,
            sqlite_where=text("status = 'confirmed'"),
            postgresql_where=text("status = 'confirmed'"),
        ),
    )


class TimeSlotPolicy(TimestampMixin, db.Model):
    __tablename__ = "time_slot_policies"
    id = db.Column(db.Integer, primary_key=True)
    # ISO date, or DEFAULT_POLICY_KEY for the global default
    policy_key = db.Column(db.String(10), nullable=False, unique=True, index=True)
    date = db.Column(db.Date)
    slots = db.Column(db.JSON, nullable=False, default=dict)


class MenuDocument(TimestampMixin, db.Model):
    __tablename__ = "menu_documents"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    menu_title = db.Column(db.String(64), nullable=False)
    filename = db.Column(db.String(255), nullable=False, unique=True)
    file_size = db.Column(db.Integer, nullable=False)
    mime_type = db.Column(db.String(64), nullable=False, default="application/pdf")
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.Index("ix_menu_documents_title_active", "menu_title", "is_active"),
    )


class Settings(TimestampMixin, db.Model):
    __tablename__ = "settings"
    id = db.Column(db.Integer, primary_key=True)
    restaurant_name = db.Column(db.String(120), nullable=False, default="Laurent Restaurant")
    address = db.Column(db.String(255), nullable=False, default="123 Main Street, City, State 12345")
    phone = db.Column(db.String(32), nullable=False, default="+1 (555) 123-4567")
    max_party_size = db.Column(db.Integer, nullable=False, default=12)
    booking_advance_days = db.Column(db.Integer, nullable=False, default=30)
    table_count = db.Column(db.Integer, nullable=False, default=20)
    operating_hours = db.Column(db.JSON, nullable=False, default=lambda: dict(DEFAULT_OPERATING_HOURS))


DEFAULT_OPERATING_HOURS = {
    "weekdays": "11:00 AM - 10:00 PM",
    "weekends": "11:00 AM - 11:00 PM",
    "sunday": "12:00 PM - 9:00 PM",
}
