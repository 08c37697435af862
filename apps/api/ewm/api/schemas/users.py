from pydantic import EmailStr, Field, field_validator

from ewm.api.schemas.common import NonBlankStr, SchemaBase


class NewUserRequest(SchemaBase):
    name: NonBlankStr = Field(min_length=2, max_length=250)
    email: EmailStr

    @field_validator("email", mode="after")
    @classmethod
    def _email_length(cls, value: str) -> str:
        if not 6 <= len(value) <= 254:
            raise ValueError("email must be between 6 and 254 characters")
        return value.lower()


class UserDto(SchemaBase):
    id: int
    name: str
    email: str


class UserShortDto(SchemaBase):
    id: int
    name: str
