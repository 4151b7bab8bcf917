"""
Booking creation and the conflict checks that guard it.

A booking is refused when its time falls in a slot the admin marked as
unavailable for that date (or in the global default), or when a confirmed
booking already holds the same date and time. The partial unique index on
confirmed bookings backs the second check at the storage level.
"""
import logging
from datetime import date

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import ConflictError, NotFoundError, ValidationError
from ..extensions import db
from ..models import Booking
from ..utils.time import to_hhmm
from .customers import upsert_customer
from .settings import get_settings
from .slots import find_containing_slot, find_policy

logger = logging.getLogger(__name__)

SLOT_UNAVAILABLE = "Selected time slot is unavailable for the chosen date"
SLOT_BOOKED = "Selected time slot is already booked"


def _slot_blocked(day: date, time_str: str) -> bool:
    slot = find_containing_slot(to_hhmm(time_str))
    if slot is None:
        return False
    try:
        policy = find_policy(day)
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning("Time slot availability check failed for %s %s, allowing booking", day, time_str, exc_info=True)
        return False
    if policy is None:
        return False
    return (policy.slots or {}).get(slot) is False


def check_booking_allowed(day: date, time_str: str) -> None:
    """Raises ConflictError when (day, time) may not be booked."""
    if _slot_blocked(day, time_str):
        logger.info("Rejected booking at %s %s: slot unavailable", day, time_str)
        raise ConflictError(SLOT_UNAVAILABLE, code="SLOT_UNAVAILABLE")

    if Booking.query.filter_by(date=day, time=time_str, status="confirmed").first() is not None:
        logger.info("Rejected booking at %s %s: already booked", day, time_str)
        raise ConflictError(SLOT_BOOKED, code="SLOT_BOOKED")


def _check_party_size(guests: int) -> None:
    max_party = get_settings().max_party_size
    if guests > max_party:
        raise ValidationError(f"Party size cannot exceed {max_party} guests.", code="PARTY_TOO_LARGE")


def create_booking(data) -> Booking:
    """
    Validates and stores a booking, then records the customer's visit.

    The booking is committed on its own; the customer upsert that follows is
    best-effort and a failure there is logged without undoing the booking.
    """
    _check_party_size(data.guests)
    check_booking_allowed(data.booking_date, data.time)

    booking = Booking(
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        date=data.booking_date,
        time=data.time,
        guests=data.guests,
        table_number=data.table_number,
        status=data.status,
        special_requests=data.special_requests,
    )
    db.session.add(booking)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(SLOT_BOOKED, code="SLOT_BOOKED")

    logger.info("Created booking %s for %s on %s %s", booking.id, booking.customer_email, booking.date, booking.time)

    try:
        upsert_customer(booking.customer_email, booking.customer_name, booking.customer_phone, booking.date)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Customer upsert failed for booking %s", booking.id)

    return booking


def list_bookings() -> list[Booking]:
    return Booking.query.order_by(Booking.date.asc(), Booking.time.asc(), Booking.id.asc()).all()


def get_booking(booking_id: int) -> Booking:
    booking = db.session.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


def update_booking(booking_id: int, changes: dict) -> Booking:
    booking = get_booking(booking_id)
    if "guests" in changes:
        _check_party_size(changes["guests"])

    day = changes.get("booking_date", booking.date)
    time_str = changes.get("time", booking.time)
    status = changes.get("status", booking.status)
    if status == "confirmed" and (
        booking.status != "confirmed" or day != booking.date or time_str != booking.time
    ):
        q = Booking.query.filter_by(date=day, time=time_str, status="confirmed").filter(Booking.id != booking.id)
        if q.first() is not None:
            raise ConflictError(SLOT_BOOKED, code="SLOT_BOOKED")

    if "booking_date" in changes:
        changes["date"] = changes.pop("booking_date")
    for field, value in changes.items():
        setattr(booking, field, value)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(SLOT_BOOKED, code="SLOT_BOOKED")
    return booking


def delete_booking(booking_id: int) -> None:
    booking = get_booking(booking_id)
    db.session.delete(booking)
    db.session.commit()
    logger.info("Deleted booking %s", booking_id)
