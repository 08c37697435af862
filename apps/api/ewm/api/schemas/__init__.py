from ewm.api.schemas.categories import CategoryDto, NewCategoryDto
from ewm.api.schemas.comments import CommentDto, CommentSort, NewCommentDto
from ewm.api.schemas.compilations import CompilationDto, NewCompilationDto, UpdateCompilationRequest
from ewm.api.schemas.events import (
    AdminStateAction,
    EventFullDto,
    EventShortDto,
    EventSort,
    NewEventDto,
    UpdateEventAdminRequest,
    UpdateEventUserRequest,
    UserStateAction,
)
from ewm.api.schemas.requests import (
    EventRequestStatusUpdateRequest,
    ParticipationRequestDto,
    RequestUpdateStatus,
)
from ewm.api.schemas.users import NewUserRequest, UserDto, UserShortDto

__all__ = [
    "NewUserRequest",
    "UserDto",
    "UserShortDto",
    "NewCategoryDto",
    "CategoryDto",
    "NewEventDto",
    "UpdateEventUserRequest",
    "UpdateEventAdminRequest",
    "UserStateAction",
    "AdminStateAction",
    "EventSort",
    "EventShortDto",
    "EventFullDto",
    "EventRequestStatusUpdateRequest",
    "RequestUpdateStatus",
    "ParticipationRequestDto",
    "NewCompilationDto",
    "UpdateCompilationRequest",
    "CompilationDto",
    "NewCommentDto",
    "CommentDto",
    "CommentSort",
]
