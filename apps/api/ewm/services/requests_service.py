from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ewm.api.schemas.requests import EventRequestStatusUpdateRequest, RequestUpdateStatus
from ewm.db import transaction
from ewm.models import Event, ParticipationRequest
from ewm.models.event import EventState
from ewm.models.participation_request import RequestStatus
from ewm.services.error_codes import ErrorCode
from ewm.services.events_service import get_event, require_owner
from ewm.services.exceptions import ConflictError, NotFoundError, ValidationError
from ewm.services.users_service import get_user

logger = structlog.get_logger(__name__)


def _limit_reached(event: Event) -> bool:
    return event.participant_limit != 0 and event.confirmed_requests >= event.participant_limit


def _auto_confirms(event: Event) -> bool:
    # participantLimit 0 means unlimited and skips moderation
    return not event.request_moderation or event.participant_limit == 0


def create_request(db: Session, user_id: int, event_id: int) -> ParticipationRequest:
    get_user(db, user_id)
    try:
        with transaction(db):
            event = get_event(db, event_id, for_update=True)

            duplicate = db.scalar(
                select(ParticipationRequest.id).where(
                    ParticipationRequest.requester_id == user_id,
                    ParticipationRequest.event_id == event.id,
                )
            )
            if duplicate is not None:
                raise ConflictError(ErrorCode.REQUEST_ALREADY_EXISTS, "request already exists")
            if event.initiator_id == user_id:
                raise ConflictError(
                    ErrorCode.REQUEST_OWN_EVENT, "initiator cannot request own event"
                )
            if event.state != EventState.PUBLISHED:
                raise ConflictError(ErrorCode.EVENT_NOT_PUBLISHED, "event is not published")
            if _limit_reached(event):
                raise ConflictError(
                    ErrorCode.PARTICIPANT_LIMIT_REACHED, "participant limit reached"
                )

            request = ParticipationRequest(
                event_id=event.id,
                requester_id=user_id,
                status=RequestStatus.CONFIRMED if _auto_confirms(event) else RequestStatus.PENDING,
            )
            db.add(request)
            if request.status == RequestStatus.CONFIRMED:
                event.confirmed_requests += 1
            db.flush()
    except IntegrityError as exc:
        raise ConflictError(ErrorCode.REQUEST_ALREADY_EXISTS, "request already exists") from exc

    logger.info(
        "request_created",
        request_id=request.id,
        event_id=event_id,
        user_id=user_id,
        status=request.status.value,
    )
    return request


def cancel_request(db: Session, user_id: int, request_id: int) -> ParticipationRequest:
    get_user(db, user_id)
    with transaction(db):
        stmt = select(ParticipationRequest).where(
            ParticipationRequest.id == request_id,
            ParticipationRequest.requester_id == user_id,
        )
        request = db.scalar(stmt)
        if not request:
            raise NotFoundError(
                ErrorCode.REQUEST_NOT_FOUND, f"request {request_id} not found for user {user_id}"
            )

        # Lock the event first, then re-read the request under that lock.
        event = get_event(db, request.event_id, for_update=True)
        request = db.scalar(stmt.execution_options(populate_existing=True))

        previous = request.status
        if previous == RequestStatus.CONFIRMED:
            event.confirmed_requests -= 1
        request.status = RequestStatus.CANCELED

    logger.info(
        "request_cancelled",
        request_id=request_id,
        event_id=request.event_id,
        previous_status=previous.value,
    )
    return request


def list_user_requests(db: Session, user_id: int) -> list[ParticipationRequest]:
    get_user(db, user_id)
    stmt = (
        select(ParticipationRequest)
        .where(ParticipationRequest.requester_id == user_id)
        .order_by(ParticipationRequest.id)
    )
    return list(db.scalars(stmt).all())


def list_event_requests(db: Session, user_id: int, event_id: int) -> list[ParticipationRequest]:
    get_user(db, user_id)
    event = get_event(db, event_id)
    require_owner(event, user_id)
    stmt = (
        select(ParticipationRequest)
        .where(ParticipationRequest.event_id == event.id)
        .order_by(ParticipationRequest.id)
    )
    return list(db.scalars(stmt).all())


def update_requests_status(
    db: Session,
    user_id: int,
    event_id: int,
    payload: EventRequestStatusUpdateRequest,
) -> list[ParticipationRequest]:
    get_user(db, user_id)
    with transaction(db):
        event = get_event(db, event_id, for_update=True)
        require_owner(event, user_id)
        if _limit_reached(event):
            raise ConflictError(ErrorCode.PARTICIPANT_LIMIT_REACHED, "participant limit reached")

        ids = list(dict.fromkeys(payload.request_ids))
        found = db.scalars(
            select(ParticipationRequest)
            .where(ParticipationRequest.id.in_(ids))
            .with_for_update()
            .execution_options(populate_existing=True)
        ).all()
        by_id = {r.id: r for r in found}
        missing = [i for i in ids if i not in by_id]
        if missing:
            raise NotFoundError(ErrorCode.REQUEST_NOT_FOUND, f"requests not found: {missing}")

        requests = [by_id[i] for i in ids]
        if any(r.event_id != event.id for r in requests):
            raise ValidationError(
                ErrorCode.REQUEST_WRONG_EVENT, "all requests must belong to the event"
            )

        if _auto_confirms(event):
            return requests

        for request in requests:
            if request.status != RequestStatus.PENDING:
                raise ConflictError(
                    ErrorCode.REQUEST_NOT_PENDING,
                    f"request {request.id} is {request.status.value}, only PENDING can change",
                )
            if payload.status == RequestUpdateStatus.REJECTED or _limit_reached(event):
                request.status = RequestStatus.CANCELED
            else:
                request.status = RequestStatus.CONFIRMED
                event.confirmed_requests += 1

    logger.info(
        "requests_status_updated",
        event_id=event.id,
        requested=payload.status.value,
        confirmed_requests=event.confirmed_requests,
        count=len(requests),
    )
    return requests
