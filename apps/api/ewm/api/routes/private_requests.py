from typing import Annotated

from fastapi import APIRouter, Query

from ewm.api.deps import DBSession
from ewm.api.schemas.requests import ParticipationRequestDto
from ewm.services import requests_service

router = APIRouter(prefix="/users/{user_id}/requests", tags=["private"])


@router.post("", response_model=ParticipationRequestDto, status_code=201)
def create_request(
    user_id: int,
    db: DBSession,
    event_id: Annotated[int, Query(alias="eventId")],
):
    return ParticipationRequestDto.from_request(
        requests_service.create_request(db, user_id, event_id)
    )


@router.get("", response_model=list[ParticipationRequestDto])
def list_requests(user_id: int, db: DBSession):
    return [
        ParticipationRequestDto.from_request(r)
        for r in requests_service.list_user_requests(db, user_id)
    ]


@router.patch("/{request_id}/cancel", response_model=ParticipationRequestDto)
def cancel_request(user_id: int, request_id: int, db: DBSession):
    return ParticipationRequestDto.from_request(
        requests_service.cancel_request(db, user_id, request_id)
    )
