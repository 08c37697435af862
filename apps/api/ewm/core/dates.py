from __future__ import annotations

from datetime import datetime, timezone

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_dt(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_dt(raw: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM:SS``; ISO-8601 input is accepted as a fallback."""
    value = raw.strip()
    try:
        return datetime.strptime(value, DATETIME_FORMAT)
    except ValueError:
        return to_naive_utc(datetime.fromisoformat(value))
