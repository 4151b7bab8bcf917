from flask import Blueprint, jsonify
from ..models import Settings
from ..errors import parse_body
from ..schemas import UpdateSettingsRequest
from ..services.settings import get_settings, update_settings

bp = Blueprint("settings", __name__)


def settings_to_dict(s: Settings) -> dict:
    return {
        "name": s.restaurant_name,
        "address": s.address,
        "phone": s.phone,
        "maxPartySize": s.max_party_size,
        "bookingAdvanceDays": s.booking_advance_days,
        "tableCount": s.table_count,
        "operatingHours": s.operating_hours,
    }


@bp.get("")
def read_settings():
    return jsonify(settings_to_dict(get_settings()))


@bp.put("")
def write_settings():
    data = parse_body(UpdateSettingsRequest)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        changes["restaurant_name"] = changes.pop("name")
    settings = update_settings(changes)
    return jsonify(success=True, settings=settings_to_dict(settings))
