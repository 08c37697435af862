from __future__ import annotations

from enum import Enum

from pydantic import Field

from ewm.api.schemas.common import ApiDateTime, SchemaBase
from ewm.models import ParticipationRequest
from ewm.models.participation_request import RequestStatus


class RequestUpdateStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"


class EventRequestStatusUpdateRequest(SchemaBase):
    request_ids: list[int] = Field(min_length=1)
    status: RequestUpdateStatus


class ParticipationRequestDto(SchemaBase):
    id: int
    created: ApiDateTime
    event: int
    requester: int
    status: RequestStatus

    @classmethod
    def from_request(cls, request: ParticipationRequest) -> ParticipationRequestDto:
        return cls(
            id=request.id,
            created=request.created,
            event=request.event_id,
            requester=request.requester_id,
            status=request.status,
        )
