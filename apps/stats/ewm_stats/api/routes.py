from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ewm_stats.api.schemas.stats import EndpointHitDto, ViewStatsDto
from ewm_stats.core.dates import parse_dt
from ewm_stats.db import get_db
from ewm_stats.services import stats_service
from ewm_stats.services.exceptions import ValidationError

router = APIRouter(tags=["stats"])

DBSession = Annotated[Session, Depends(get_db)]


def _parse_bound(raw: str, name: str):
    try:
        return parse_dt(raw)
    except ValueError:
        raise ValidationError(
            "INVALID_DATETIME", f"{name} must use the format YYYY-MM-DD HH:MM:SS"
        ) from None


@router.post("/hit", response_model=EndpointHitDto, status_code=201)
def save_hit(payload: EndpointHitDto, db: DBSession):
    return EndpointHitDto.model_validate(stats_service.record_hit(db, payload))


@router.get("/stats", response_model=list[ViewStatsDto])
def get_stats(
    db: DBSession,
    start: Annotated[str, Query()],
    end: Annotated[str, Query()],
    uris: Annotated[list[str] | None, Query()] = None,
    unique: bool = False,
):
    return stats_service.get_stats(
        db,
        _parse_bound(start, "start"),
        _parse_bound(end, "end"),
        uris,
        unique,
    )
