from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Request

from ewm.api.deps import (
    DBSession,
    FromParam,
    SizeParam,
    Stats,
    parse_datetime_param,
    parse_sort,
    record_hit,
)
from ewm.api.schemas.events import EventFullDto, EventShortDto, EventSort
from ewm.services import events_service
from ewm.services.events_service import PublicEventFilter

router = APIRouter(prefix="/events", tags=["public"])


@router.get("", response_model=list[EventShortDto])
def search_events(
    request: Request,
    db: DBSession,
    stats: Stats,
    text: str | None = None,
    categories: Annotated[list[int] | None, Query()] = None,
    paid: bool | None = None,
    range_start: Annotated[str | None, Query(alias="rangeStart")] = None,
    range_end: Annotated[str | None, Query(alias="rangeEnd")] = None,
    only_available: Annotated[bool, Query(alias="onlyAvailable")] = False,
    sort: str | None = None,
    from_: FromParam = 0,
    size: SizeParam = 10,
):
    flt = PublicEventFilter(
        text=text,
        categories=tuple(categories or ()),
        paid=paid,
        range_start=parse_datetime_param(range_start, "rangeStart"),
        range_end=parse_datetime_param(range_end, "rangeEnd"),
        only_available=only_available,
        sort=parse_sort(sort, EventSort, EventSort.EVENT_DATE),
        offset=from_,
        limit=size,
    )
    items = events_service.search_public_events(db, stats, flt)
    record_hit(stats, request)
    return [EventShortDto.from_event(item.event, item.views) for item in items]


@router.get("/{event_id}", response_model=EventFullDto)
def get_event(event_id: int, request: Request, db: DBSession, stats: Stats):
    item = events_service.get_public_event(db, stats, event_id)
    record_hit(stats, request)
    return EventFullDto.from_event(item.event, item.views)
