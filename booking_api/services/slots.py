"""
Time-slot availability policies.

A policy maps the canonical slot labels to a boolean. There is one policy
per calendar date that has been configured, plus a global default that
applies to every other date.
"""
import logging
from datetime import date

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import DEFAULT_POLICY_KEY, TimeSlotPolicy

logger = logging.getLogger(__name__)

CANONICAL_SLOTS = (
    "07:30-08:30", "08:30-09:30", "09:30-10:30",
    "12:00-13:00", "13:00-14:00", "13:30-14:30",
    "15:30-16:30", "16:30-17:30",
    "17:30-18:30", "18:30-19:30",
    "19:30-20:30", "20:30-21:30", "21:30-22:30",
)


def policy_key(day: date | None) -> str:
    return day.isoformat() if day else DEFAULT_POLICY_KEY


def find_containing_slot(hhmm: str) -> str | None:
    """Returns the first canonical slot whose [start, end) contains 'HH:MM'."""
    for label in CANONICAL_SLOTS:
        start, end = label.split("-")
        if start <= hhmm < end:
            return label
    return None


def find_policy(day: date | None = None) -> TimeSlotPolicy | None:
    """Date-specific policy if one exists, otherwise the global default."""
    policy = None
    if day:
        policy = TimeSlotPolicy.query.filter_by(policy_key=policy_key(day)).one_or_none()
    if policy is None:
        policy = TimeSlotPolicy.query.filter_by(policy_key=DEFAULT_POLICY_KEY).one_or_none()
    return policy


def _create_default_policy() -> TimeSlotPolicy:
    policy = TimeSlotPolicy(
        policy_key=DEFAULT_POLICY_KEY,
        date=None,
        slots={label: True for label in CANONICAL_SLOTS},
    )
    db.session.add(policy)
    try:
        db.session.commit()
    except IntegrityError:
        # another request created it first
        db.session.rollback()
        return TimeSlotPolicy.query.filter_by(policy_key=DEFAULT_POLICY_KEY).one()
    logger.info("Created default time-slot policy")
    return policy


def get_availability(day: date | None = None) -> dict[str, bool]:
    policy = find_policy(day)
    if policy is None:
        policy = _create_default_policy()
    return dict(policy.slots or {})


def set_availability(day: date | None, slots: dict[str, bool]) -> TimeSlotPolicy:
    """Replaces the whole slot map stored for ``day`` (or the global default)."""
    key = policy_key(day)
    new_slots = {label: bool(value) for label, value in slots.items()}

    policy = TimeSlotPolicy.query.filter_by(policy_key=key).one_or_none()
    if policy is None:
        policy = TimeSlotPolicy(policy_key=key, date=day, slots=new_slots)
        db.session.add(policy)
    else:
        policy.slots = new_slots

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        policy = TimeSlotPolicy.query.filter_by(policy_key=key).one()
        policy.slots = new_slots
        db.session.commit()

    logger.info("Saved time-slot policy %s (%d slots)", key, len(new_slots))
    return policy
