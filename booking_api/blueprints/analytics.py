from collections import Counter
from flask import Blueprint, jsonify
from sqlalchemy import func, select
from ..extensions import db
from ..models import Booking
from ..utils.time import to_12h

bp = Blueprint("analytics", __name__)


@bp.get("")
def analytics():
    total = db.session.execute(select(func.count()).select_from(Booking)).scalar_one()
    confirmed = db.session.execute(
        select(Booking.guests, Booking.time).where(Booking.status == "confirmed")
    ).all()

    avg = sum(guests or 0 for guests, _ in confirmed) / len(confirmed) if confirmed else 0
    counts = Counter(time for _, time in confirmed)
    peak_hours = [to_12h(t) for t, _ in counts.most_common(3)]

    return jsonify(
        totalBookings=int(total),
        averagePartySize=round(avg, 1),
        peakHours=peak_hours or ["No data available"],
    )
