from __future__ import annotations

from enum import Enum

from pydantic import Field

from ewm.api.schemas.categories import CategoryDto
from ewm.api.schemas.common import ApiDateTime, LocationDto, NonBlankStr, SchemaBase
from ewm.api.schemas.users import UserShortDto
from ewm.models import Event
from ewm.models.event import EventState


class UserStateAction(str, Enum):
    SEND_TO_REVIEW = "SEND_TO_REVIEW"
    CANCEL_REVIEW = "CANCEL_REVIEW"


class AdminStateAction(str, Enum):
    PUBLISH_EVENT = "PUBLISH_EVENT"
    REJECT_EVENT = "REJECT_EVENT"


class EventSort(str, Enum):
    EVENT_DATE = "EVENT_DATE"
    VIEWS = "VIEWS"


class NewEventDto(SchemaBase):
    title: NonBlankStr = Field(min_length=3, max_length=120)
    annotation: NonBlankStr = Field(min_length=20, max_length=2000)
    description: NonBlankStr = Field(min_length=20, max_length=7000)
    category: int
    event_date: ApiDateTime
    location: LocationDto
    paid: bool = False
    participant_limit: int = Field(default=0, ge=0)
    request_moderation: bool = True


class _UpdateEventFields(SchemaBase):
    title: str | None = Field(default=None, min_length=3, max_length=120)
    annotation: str | None = Field(default=None, min_length=20, max_length=2000)
    description: str | None = Field(default=None, min_length=20, max_length=7000)
    category: int | None = None
    event_date: ApiDateTime | None = None
    location: LocationDto | None = None
    paid: bool | None = None
    participant_limit: int | None = Field(default=None, ge=0)
    request_moderation: bool | None = None


class UpdateEventUserRequest(_UpdateEventFields):
    state_action: UserStateAction | None = None


class UpdateEventAdminRequest(_UpdateEventFields):
    state_action: AdminStateAction | None = None


class EventShortDto(SchemaBase):
    id: int
    title: str
    annotation: str
    category: CategoryDto
    initiator: UserShortDto
    event_date: ApiDateTime
    paid: bool
    confirmed_requests: int
    views: int = 0

    @classmethod
    def from_event(cls, event: Event, views: int = 0) -> EventShortDto:
        return cls(
            id=event.id,
            title=event.title,
            annotation=event.annotation,
            category=CategoryDto.model_validate(event.category),
            initiator=UserShortDto.model_validate(event.initiator),
            event_date=event.event_date,
            paid=event.paid,
            confirmed_requests=event.confirmed_requests,
            views=views,
        )


class EventFullDto(EventShortDto):
    description: str
    location: LocationDto
    participant_limit: int
    request_moderation: bool
    state: EventState
    created_on: ApiDateTime
    published_on: ApiDateTime | None = None

    @classmethod
    def from_event(cls, event: Event, views: int = 0) -> EventFullDto:
        short = EventShortDto.from_event(event, views)
        return cls(
            **short.model_dump(),
            description=event.description,
            location=LocationDto(lat=event.lat, lon=event.lon),
            participant_limit=event.participant_limit,
            request_moderation=event.request_moderation,
            state=event.state,
            created_on=event.created_on,
            published_on=event.published_on,
        )
