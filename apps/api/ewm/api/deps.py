from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, TypeVar

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from ewm.core.config import settings
from ewm.core.dates import parse_dt
from ewm.db import get_db
from ewm.stats_client import StatsClient, get_stats_client
from ewm.services.exceptions import InvalidDateTimeError, InvalidSortError

DBSession = Annotated[Session, Depends(get_db)]
Stats = Annotated[StatsClient, Depends(get_stats_client)]

FromParam = Annotated[int, Query(alias="from", ge=0)]
SizeParam = Annotated[int, Query(ge=1, le=1000)]

E = TypeVar("E", bound=Enum)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and settings.trust_forwarded_for:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def record_hit(stats: StatsClient, request: Request) -> None:
    stats.hit(uri=request.url.path, ip=client_ip(request))


def parse_datetime_param(raw: str | None, name: str) -> datetime | None:
    if raw is None or not raw.strip():
        return None
    try:
        return parse_dt(raw)
    except ValueError:
        raise InvalidDateTimeError(
            f"{name} must use the format YYYY-MM-DD HH:MM:SS, got {raw!r}"
        ) from None


def parse_sort(raw: str | None, enum_cls: type[E], default: E) -> E:
    if raw is None or not raw.strip():
        return default
    try:
        return enum_cls(raw.strip().upper())
    except ValueError:
        raise InvalidSortError(raw) from None
