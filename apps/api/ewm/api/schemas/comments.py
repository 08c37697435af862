from enum import Enum

from pydantic import Field

from ewm.api.schemas.common import ApiDateTime, NonBlankStr, SchemaBase


class CommentSort(str, Enum):
    LIKES = "LIKES"
    DATE = "DATE"


class NewCommentDto(SchemaBase):
    text: NonBlankStr = Field(min_length=1, max_length=2000)


class CommentDto(SchemaBase):
    id: int
    text: str
    author_name: str
    event_id: int
    created: ApiDateTime
    edited: ApiDateTime | None = None
    likes: int = Field(ge=0)
