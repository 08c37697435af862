from fastapi import APIRouter, Response

from ewm.api.deps import DBSession, Stats
from ewm.api.schemas.compilations import CompilationDto, NewCompilationDto, UpdateCompilationRequest
from ewm.services import compilations_service

router = APIRouter(prefix="/admin/compilations", tags=["admin"])


@router.post("", response_model=CompilationDto, status_code=201)
def create_compilation(payload: NewCompilationDto, db: DBSession, stats: Stats):
    compilation = compilations_service.create_compilation(db, payload)
    views = compilations_service.views_for_compilations(stats, [compilation])
    return CompilationDto.from_compilation(compilation, views)


@router.patch("/{comp_id}", response_model=CompilationDto)
def update_compilation(comp_id: int, payload: UpdateCompilationRequest, db: DBSession, stats: Stats):
    compilation = compilations_service.update_compilation(db, comp_id, payload)
    views = compilations_service.views_for_compilations(stats, [compilation])
    return CompilationDto.from_compilation(compilation, views)


@router.delete("/{comp_id}", status_code=204)
def delete_compilation(comp_id: int, db: DBSession):
    compilations_service.delete_compilation(db, comp_id)
    return Response(status_code=204)
