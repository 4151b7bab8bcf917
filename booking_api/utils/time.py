import re
from datetime import date, datetime, timezone

DEFAULT_TIME = "19:30:00"

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?$")


def parse_iso_date(value) -> date:
    """Parses 'YYYY-MM-DD' or a full ISO 8601 timestamp (handling 'Z') into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    if "T" in s or " " in s:
        return datetime.fromisoformat(s).date()
    return date.fromisoformat(s)


def normalize_time(value: str | None) -> str:
    """
    Normalizes a time-of-day input to zero-padded 'HH:MM:SS'.

    Accepts 'HH:MM', 'HH:MM:SS', 'H:MM AM/PM' and slot ranges such as
    '19:30-20:30' (the start is used). A missing value falls back to
    DEFAULT_TIME; anything unparseable raises ValueError.
    """
    if value is None or not str(value).strip():
        return DEFAULT_TIME
    s = str(value).strip()
    if "-" in s:
        s = s.split("-", 1)[0].strip()

    m = _TIME_RE.match(s)
    if not m:
        raise ValueError(f"Invalid time '{value}', expected HH:MM or HH:MM:SS.")
    hour, minute, second = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
    meridiem = (m.group(4) or "").upper()
    if meridiem:
        if not 1 <= hour <= 12:
            raise ValueError(f"Invalid 12-hour time '{value}'.")
        hour = hour % 12 + (12 if meridiem == "PM" else 0)
    if hour > 23 or minute > 59 or second > 59:
        raise ValueError(f"Invalid time '{value}'.")
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def to_hhmm(time_str: str) -> str:
    return time_str[:5]


def to_12h(time_str: str) -> str:
    """'19:30:00' -> '7:30 PM'"""
    hour, minute = time_str.split(":")[:2]
    h = int(hour)
    suffix = "PM" if h >= 12 else "AM"
    display = 12 if h % 12 == 0 else h % 12
    return f"{display}:{minute} {suffix}"


def to_utc(dt: datetime) -> datetime:
    """Converts a naive datetime to a timezone-aware UTC datetime."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def api_iso_z(dt: datetime | None) -> str | None:
    """Formats a datetime into an ISO 8601 string ending in 'Z' for API responses."""
    if dt is None:
        return None
    return to_utc(dt).astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
