from flask import Blueprint, request, jsonify
from ..errors import ValidationError, parse_body
from ..schemas import SlotAvailability
from ..services import slots
from ..utils.time import parse_iso_date

bp = Blueprint("time_slots", __name__)


def _requested_date():
    """?date=YYYY-MM-DD, or None for the global default."""
    raw = (request.args.get("date") or "").strip()
    if not raw:
        return None
    try:
        return parse_iso_date(raw)
    except ValueError as e:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.", code="BAD_DATE", details=str(e))


@bp.get("/availability")
def get_availability():
    return jsonify(slots.get_availability(_requested_date()))


@bp.put("/availability")
def set_availability():
    day = _requested_date()
    data = parse_body(SlotAvailability)
    slots.set_availability(day, data.root)
    return jsonify(success=True, message="Time slot settings saved successfully")
