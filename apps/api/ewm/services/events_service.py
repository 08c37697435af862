from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

import structlog
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ewm.api.schemas.events import (
    AdminStateAction,
    EventSort,
    NewEventDto,
    UpdateEventAdminRequest,
    UpdateEventUserRequest,
    UserStateAction,
)
from ewm.db import transaction
from ewm.models import Event
from ewm.models.base import utcnow
from ewm.models.event import EventState
from ewm.services.categories_service import get_category
from ewm.services.error_codes import ErrorCode
from ewm.services.exceptions import (
    ConflictError,
    InvalidDateTimeError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)
from ewm.services.users_service import get_user
from ewm.services.views import EventView, fetch_views, with_views
from ewm.stats_client import StatsClient

logger = structlog.get_logger(__name__)

OWNER_EVENT_DATE_BUFFER = timedelta(hours=2)
ADMIN_EVENT_DATE_BUFFER = timedelta(hours=1)


@dataclass(frozen=True)
class PublicEventFilter:
    text: str | None = None
    categories: tuple[int, ...] = ()
    paid: bool | None = None
    range_start: datetime | None = None
    range_end: datetime | None = None
    only_available: bool = False
    sort: EventSort = EventSort.EVENT_DATE
    offset: int = 0
    limit: int = 10


@dataclass(frozen=True)
class AdminEventFilter:
    users: tuple[int, ...] = ()
    states: tuple[EventState, ...] = ()
    categories: tuple[int, ...] = ()
    range_start: datetime | None = None
    range_end: datetime | None = None
    offset: int = 0
    limit: int = 10


def get_event(db: Session, event_id: int, *, for_update: bool = False) -> Event:
    stmt = select(Event).where(Event.id == event_id)
    if for_update:
        # Row lock; refresh whatever the identity map already holds.
        stmt = stmt.with_for_update(of=Event).execution_options(populate_existing=True)
    event = db.scalar(stmt)
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, f"event {event_id} not found")
    return event


def require_owner(event: Event, user_id: int) -> None:
    if event.initiator_id != user_id:
        raise ValidationError(ErrorCode.EVENT_NOT_OWNED, "event belongs to another user")


def _check_event_date(event_date: datetime, buffer: timedelta) -> None:
    if event_date <= utcnow() + buffer:
        hours = int(buffer.total_seconds() // 3600)
        raise ValidationError(
            ErrorCode.EVENT_DATE_TOO_SOON,
            f"eventDate must be at least {hours}h from now",
        )


def _check_range(start: datetime | None, end: datetime | None) -> None:
    if start and end and end < start:
        raise InvalidDateTimeError("rangeEnd must not be before rangeStart")


def _apply_patch(db: Session, event: Event, patch: UpdateEventUserRequest | UpdateEventAdminRequest) -> None:
    """Overwrite fields that are present and non-blank; everything else stays."""
    for name in ("title", "annotation", "description"):
        value = getattr(patch, name)
        if value is not None and value.strip():
            setattr(event, name, value)

    if patch.category is not None:
        event.category = get_category(db, patch.category)
    if patch.event_date is not None:
        event.event_date = patch.event_date
    if patch.location is not None:
        event.lat = patch.location.lat
        event.lon = patch.location.lon
    if patch.paid is not None:
        event.paid = patch.paid
    if patch.participant_limit is not None:
        if patch.participant_limit and patch.participant_limit < event.confirmed_requests:
            raise ConflictError(
                ErrorCode.PARTICIPANT_LIMIT_REACHED,
                "participant limit cannot be below confirmed requests",
            )
        event.participant_limit = patch.participant_limit
    if patch.request_moderation is not None:
        event.request_moderation = patch.request_moderation


def create_event(db: Session, user_id: int, payload: NewEventDto) -> Event:
    _check_event_date(payload.event_date, OWNER_EVENT_DATE_BUFFER)
    initiator = get_user(db, user_id)
    category = get_category(db, payload.category)

    event = Event(
        title=payload.title,
        annotation=payload.annotation,
        description=payload.description,
        category=category,
        initiator=initiator,
        lat=payload.location.lat,
        lon=payload.location.lon,
        event_date=payload.event_date,
        paid=payload.paid,
        participant_limit=payload.participant_limit,
        request_moderation=payload.request_moderation,
        confirmed_requests=0,
        state=EventState.PENDING,
        created_on=utcnow(),
    )
    with transaction(db):
        db.add(event)

    logger.info("event_created", event_id=event.id, user_id=user_id)
    return event


def list_user_events(
    db: Session, stats: StatsClient, user_id: int, offset: int, limit: int
) -> list[EventView]:
    get_user(db, user_id)
    events = db.scalars(
        select(Event)
        .where(Event.initiator_id == user_id)
        .order_by(Event.created_on, Event.id)
        .offset(offset)
        .limit(limit)
    ).all()
    return with_views(stats, events)


def get_user_event(db: Session, stats: StatsClient, user_id: int, event_id: int) -> EventView:
    get_user(db, user_id)
    event = get_event(db, event_id)
    require_owner(event, user_id)
    return with_views(stats, [event])[0]


def update_event_of_user(
    db: Session,
    stats: StatsClient,
    user_id: int,
    event_id: int,
    patch: UpdateEventUserRequest,
) -> EventView:
    get_user(db, user_id)
    with transaction(db):
        event = get_event(db, event_id, for_update=True)
        require_owner(event, user_id)
        if event.state == EventState.PUBLISHED:
            raise ConflictError(
                ErrorCode.EVENT_ALREADY_PUBLISHED, "published events cannot be changed"
            )
        if patch.event_date is not None:
            _check_event_date(patch.event_date, OWNER_EVENT_DATE_BUFFER)

        _apply_patch(db, event, patch)

        # Re-submission goes back to moderation; only an admin publishes.
        if patch.state_action == UserStateAction.SEND_TO_REVIEW:
            event.state = EventState.PENDING
        elif patch.state_action == UserStateAction.CANCEL_REVIEW:
            event.state = EventState.CANCELED

    logger.info(
        "event_updated_by_owner",
        event_id=event.id,
        user_id=user_id,
        state=event.state.value,
    )
    return with_views(stats, [event])[0]


def update_event_admin(
    db: Session,
    stats: StatsClient,
    event_id: int,
    patch: UpdateEventAdminRequest,
) -> EventView:
    with transaction(db):
        event = get_event(db, event_id, for_update=True)

        if patch.state_action == AdminStateAction.PUBLISH_EVENT and event.state != EventState.PENDING:
            raise OperationFailedError(
                ErrorCode.EVENT_NOT_PENDING,
                f"cannot publish event in state {event.state.value}",
            )
        if patch.state_action == AdminStateAction.REJECT_EVENT and event.state == EventState.PUBLISHED:
            raise OperationFailedError(
                ErrorCode.EVENT_ALREADY_PUBLISHED, "cannot reject a published event"
            )
        if patch.event_date is not None:
            _check_event_date(patch.event_date, ADMIN_EVENT_DATE_BUFFER)

        _apply_patch(db, event, patch)

        if patch.state_action == AdminStateAction.PUBLISH_EVENT:
            event.state = EventState.PUBLISHED
            event.published_on = utcnow()
            logger.info("event_published", event_id=event.id)
        elif patch.state_action == AdminStateAction.REJECT_EVENT:
            event.state = EventState.CANCELED
            logger.info("event_rejected", event_id=event.id)

    return with_views(stats, [event])[0]


def search_public_events(db: Session, stats: StatsClient, flt: PublicEventFilter) -> list[EventView]:
    _check_range(flt.range_start, flt.range_end)

    stmt = select(Event).where(
        Event.state == EventState.PUBLISHED,
        Event.event_date >= (flt.range_start or utcnow()),
    )
    if flt.range_end:
        stmt = stmt.where(Event.event_date <= flt.range_end)
    if flt.text and flt.text.strip():
        like = f"%{flt.text.strip()}%"
        stmt = stmt.where(or_(Event.annotation.ilike(like), Event.description.ilike(like)))
    if flt.categories:
        stmt = stmt.where(Event.category_id.in_(flt.categories))
    if flt.paid is not None:
        stmt = stmt.where(Event.paid == flt.paid)
    if flt.only_available:
        stmt = stmt.where(
            or_(
                Event.participant_limit == 0,
                Event.confirmed_requests < Event.participant_limit,
            )
        )

    if flt.sort == EventSort.EVENT_DATE:
        events = db.scalars(
            stmt.order_by(Event.event_date, Event.id).offset(flt.offset).limit(flt.limit)
        ).all()
        return with_views(stats, events)

    # Views live in the stats service, so sorting by them happens in memory.
    events = db.scalars(stmt).all()
    views = fetch_views(stats, events)
    ranked = sorted(events, key=lambda e: (views[e.id], e.event_date, e.id))
    page = ranked[flt.offset : flt.offset + flt.limit]
    return [EventView(e, views[e.id]) for e in page]


def get_public_event(db: Session, stats: StatsClient, event_id: int) -> EventView:
    event = db.scalar(
        select(Event).where(Event.id == event_id, Event.state == EventState.PUBLISHED)
    )
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, f"published event {event_id} not found")
    return with_views(stats, [event])[0]


def search_admin_events(db: Session, stats: StatsClient, flt: AdminEventFilter) -> list[EventView]:
    _check_range(flt.range_start, flt.range_end)

    stmt = select(Event)
    if flt.users:
        stmt = stmt.where(Event.initiator_id.in_(flt.users))
    if flt.states:
        stmt = stmt.where(Event.state.in_(flt.states))
    if flt.categories:
        stmt = stmt.where(Event.category_id.in_(flt.categories))
    if flt.range_start:
        stmt = stmt.where(Event.event_date >= flt.range_start)
    if flt.range_end:
        stmt = stmt.where(Event.event_date <= flt.range_end)

    events = db.scalars(stmt.order_by(Event.id).offset(flt.offset).limit(flt.limit)).all()
    return with_views(stats, events)
