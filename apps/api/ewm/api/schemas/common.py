from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from ewm.core.dates import format_dt, parse_dt, to_naive_utc


def _parse_api_dt(value: Any) -> Any:
    if isinstance(value, str):
        return parse_dt(value)
    return value


# "YYYY-MM-DD HH:MM:SS" on the wire, naive UTC inside.
ApiDateTime = Annotated[
    datetime,
    BeforeValidator(_parse_api_dt),
    AfterValidator(to_naive_utc),
    PlainSerializer(format_dt, return_type=str, when_used="json"),
]


def _not_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class SchemaBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LocationDto(SchemaBase):
    lat: float
    lon: float
