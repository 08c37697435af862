from __future__ import annotations

from fastapi import APIRouter

from ewm.api.deps import DBSession, FromParam, SizeParam, Stats
from ewm.api.schemas.events import EventFullDto, EventShortDto, NewEventDto, UpdateEventUserRequest
from ewm.api.schemas.requests import EventRequestStatusUpdateRequest, ParticipationRequestDto
from ewm.services import events_service, requests_service

router = APIRouter(prefix="/users/{user_id}/events", tags=["private"])


@router.post("", response_model=EventFullDto, status_code=201)
def create_event(user_id: int, payload: NewEventDto, db: DBSession):
    event = events_service.create_event(db, user_id, payload)
    return EventFullDto.from_event(event, 0)


@router.get("", response_model=list[EventShortDto])
def list_events(
    user_id: int,
    db: DBSession,
    stats: Stats,
    from_: FromParam = 0,
    size: SizeParam = 10,
):
    items = events_service.list_user_events(db, stats, user_id, from_, size)
    return [EventShortDto.from_event(item.event, item.views) for item in items]


@router.get("/{event_id}", response_model=EventFullDto)
def get_event(user_id: int, event_id: int, db: DBSession, stats: Stats):
    item = events_service.get_user_event(db, stats, user_id, event_id)
    return EventFullDto.from_event(item.event, item.views)


@router.patch("/{event_id}", response_model=EventFullDto)
def update_event(
    user_id: int,
    event_id: int,
    payload: UpdateEventUserRequest,
    db: DBSession,
    stats: Stats,
):
    item = events_service.update_event_of_user(db, stats, user_id, event_id, payload)
    return EventFullDto.from_event(item.event, item.views)


@router.get("/{event_id}/requests", response_model=list[ParticipationRequestDto])
def list_event_requests(user_id: int, event_id: int, db: DBSession):
    requests = requests_service.list_event_requests(db, user_id, event_id)
    return [ParticipationRequestDto.from_request(r) for r in requests]


@router.patch("/{event_id}/requests", response_model=list[ParticipationRequestDto])
def update_event_requests(
    user_id: int,
    event_id: int,
    payload: EventRequestStatusUpdateRequest,
    db: DBSession,
):
    requests = requests_service.update_requests_status(db, user_id, event_id, payload)
    return [ParticipationRequestDto.from_request(r) for r in requests]
