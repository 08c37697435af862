from datetime import datetime, timezone

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_dt(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def parse_dt(raw: str) -> datetime:
    """Strict ``YYYY-MM-DD HH:MM:SS``, the only format the stats API speaks."""
    return datetime.strptime(raw.strip(), DATETIME_FORMAT)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
