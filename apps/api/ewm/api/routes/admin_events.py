from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from ewm.api.deps import DBSession, FromParam, SizeParam, Stats, parse_datetime_param
from ewm.api.schemas.events import EventFullDto, UpdateEventAdminRequest
from ewm.models.event import EventState
from ewm.services import events_service
from ewm.services.events_service import AdminEventFilter

router = APIRouter(prefix="/admin/events", tags=["admin"])


@router.get("", response_model=list[EventFullDto])
def search_events(
    db: DBSession,
    stats: Stats,
    users: Annotated[list[int] | None, Query()] = None,
    states: Annotated[list[EventState] | None, Query()] = None,
    categories: Annotated[list[int] | None, Query()] = None,
    range_start: Annotated[str | None, Query(alias="rangeStart")] = None,
    range_end: Annotated[str | None, Query(alias="rangeEnd")] = None,
    from_: FromParam = 0,
    size: SizeParam = 10,
):
    flt = AdminEventFilter(
        users=tuple(users or ()),
        states=tuple(states or ()),
        categories=tuple(categories or ()),
        range_start=parse_datetime_param(range_start, "rangeStart"),
        range_end=parse_datetime_param(range_end, "rangeEnd"),
        offset=from_,
        limit=size,
    )
    return [
        EventFullDto.from_event(item.event, item.views)
        for item in events_service.search_admin_events(db, stats, flt)
    ]


@router.patch("/{event_id}", response_model=EventFullDto)
def update_event(event_id: int, payload: UpdateEventAdminRequest, db: DBSession, stats: Stats):
    item = events_service.update_event_admin(db, stats, event_id, payload)
    return EventFullDto.from_event(item.event, item.views)
