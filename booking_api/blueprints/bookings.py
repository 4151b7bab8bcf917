from flask import Blueprint, jsonify
from ..models import Booking
from ..errors import parse_body
from ..schemas import CreateBookingRequest, UpdateBookingRequest
from ..services import bookings
from ..utils.time import api_iso_z

bp = Blueprint("bookings", __name__)


def booking_to_dict(b: Booking) -> dict:
    return {
        "id": b.id,
        "customerName": b.customer_name,
        "customerEmail": b.customer_email,
        "customerPhone": b.customer_phone,
        "date": b.date.isoformat(),
        "time": b.time,
        "guests": b.guests,
        "tableNumber": b.table_number,
        "status": b.status,
        "specialRequests": b.special_requests,
        "createdAt": api_iso_z(b.created_at),
    }


@bp.get("")
def list_bookings():
    return jsonify([booking_to_dict(b) for b in bookings.list_bookings()])


@bp.post("")
def create_booking():
    data = parse_body(CreateBookingRequest)
    booking = bookings.create_booking(data)
    return jsonify(success=True, booking=booking_to_dict(booking)), 201


@bp.get("/<int:booking_id>")
def get_booking(booking_id: int):
    return jsonify(booking_to_dict(bookings.get_booking(booking_id)))


@bp.put("/<int:booking_id>")
def update_booking(booking_id: int):
    data = parse_body(UpdateBookingRequest)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    booking = bookings.update_booking(booking_id, changes)
    return jsonify(success=True, booking=booking_to_dict(booking))


@bp.delete("/<int:booking_id>")
def delete_booking(booking_id: int):
    bookings.delete_booking(booking_id)
    return jsonify(success=True)
