from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import structlog
from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from ewm_stats.api.schemas.stats import EndpointHitDto, ViewStatsDto
from ewm_stats.db import transaction
from ewm_stats.models import EndpointHit
from ewm_stats.services.exceptions import ValidationError

logger = structlog.get_logger(__name__)


def split_uris(raw: Iterable[str] | None) -> list[str]:
    """Flatten repeated and comma-separated ``uris`` values, dropping blanks and duplicates."""
    uris: list[str] = []
    for value in raw or ():
        uris.extend(part.strip() for part in value.split(",") if part.strip())
    return list(dict.fromkeys(uris))


def record_hit(db: Session, payload: EndpointHitDto) -> EndpointHit:
    hit = EndpointHit(
        app=payload.app,
        uri=payload.uri,
        ip=payload.ip,
        timestamp=payload.timestamp,
    )
    with transaction(db):
        db.add(hit)

    logger.debug("hit_saved", app=hit.app, uri=hit.uri)
    return hit


def get_stats(
    db: Session,
    start: datetime,
    end: datetime,
    uris: Iterable[str] | None = None,
    unique: bool = False,
) -> list[ViewStatsDto]:
    if start > end:
        raise ValidationError("INVALID_RANGE", "start must not be after end")

    hits = func.count(distinct(EndpointHit.ip)) if unique else func.count(EndpointHit.id)
    stmt = (
        select(EndpointHit.app, EndpointHit.uri, hits.label("hits"))
        .where(EndpointHit.timestamp >= start, EndpointHit.timestamp <= end)
        .group_by(EndpointHit.app, EndpointHit.uri)
        .order_by(hits.desc(), EndpointHit.app, EndpointHit.uri)
    )
    uri_list = split_uris(uris)
    if uri_list:
        stmt = stmt.where(EndpointHit.uri.in_(uri_list))

    return [ViewStatsDto(app=row.app, uri=row.uri, hits=row.hits) for row in db.execute(stmt)]
