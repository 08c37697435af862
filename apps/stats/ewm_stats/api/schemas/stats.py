from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from ewm_stats.core.dates import format_dt, parse_dt, to_naive_utc


def _parse(value: Any) -> Any:
    if isinstance(value, str):
        return parse_dt(value)
    return value


StatsDateTime = Annotated[
    datetime,
    BeforeValidator(_parse),
    AfterValidator(to_naive_utc),
    PlainSerializer(format_dt, return_type=str, when_used="json"),
]


class EndpointHitDto(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: int | None = None
    app: str = Field(min_length=1, max_length=255)
    uri: str = Field(min_length=1, max_length=512)
    ip: str = Field(min_length=1, max_length=64)
    timestamp: StatsDateTime


class ViewStatsDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    app: str
    uri: str
    hits: int
