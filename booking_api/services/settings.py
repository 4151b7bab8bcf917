from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import SETTINGS_ID, Settings


def get_settings() -> Settings:
    """Returns the singleton settings row, creating it under its fixed key on first access."""
    settings = db.session.get(Settings, SETTINGS_ID)
    if settings is not None:
        return settings

    settings = Settings(id=SETTINGS_ID)
    db.session.add(settings)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        settings = db.session.get(Settings, SETTINGS_ID)
    return settings


def update_settings(changes: dict) -> Settings:
    settings = get_settings()
    hours = changes.pop("operating_hours", None)
    for field, value in changes.items():
        setattr(settings, field, value)
    if hours:
        merged = dict(settings.operating_hours or {})
        merged.update({k: v for k, v in hours.items() if v is not None})
        settings.operating_hours = merged
    db.session.commit()
    return settings
