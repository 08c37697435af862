from fastapi import APIRouter

from ewm.api.deps import DBSession, FromParam, SizeParam, Stats
from ewm.api.schemas.compilations import CompilationDto
from ewm.services import compilations_service

router = APIRouter(prefix="/compilations", tags=["public"])


@router.get("", response_model=list[CompilationDto])
def list_compilations(
    db: DBSession,
    stats: Stats,
    pinned: bool | None = None,
    from_: FromParam = 0,
    size: SizeParam = 10,
):
    compilations = compilations_service.list_compilations(db, pinned, from_, size)
    views = compilations_service.views_for_compilations(stats, compilations)
    return [CompilationDto.from_compilation(c, views) for c in compilations]


@router.get("/{comp_id}", response_model=CompilationDto)
def get_compilation(comp_id: int, db: DBSession, stats: Stats):
    compilation = compilations_service.get_compilation(db, comp_id)
    views = compilations_service.views_for_compilations(stats, [compilation])
    return CompilationDto.from_compilation(compilation, views)
