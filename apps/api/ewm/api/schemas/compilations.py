from __future__ import annotations

from pydantic import Field

from ewm.api.schemas.common import NonBlankStr, SchemaBase
from ewm.api.schemas.events import EventShortDto
from ewm.models import Compilation


class NewCompilationDto(SchemaBase):
    title: NonBlankStr = Field(min_length=1, max_length=50)
    pinned: bool = False
    events: list[int] = Field(default_factory=list)


class UpdateCompilationRequest(SchemaBase):
    title: str | None = Field(default=None, min_length=1, max_length=50)
    pinned: bool | None = None
    events: list[int] | None = None


class CompilationDto(SchemaBase):
    id: int
    title: str
    pinned: bool
    events: list[EventShortDto]

    @classmethod
    def from_compilation(cls, compilation: Compilation, views: dict[int, int]) -> CompilationDto:
        return cls(
            id=compilation.id,
            title=compilation.title,
            pinned=compilation.pinned,
            events=[EventShortDto.from_event(e, views.get(e.id, 0)) for e in compilation.events],
        )
