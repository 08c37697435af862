from fastapi import APIRouter, Response

from ewm.api.deps import DBSession
from ewm.api.schemas.categories import CategoryDto, NewCategoryDto
from ewm.services import categories_service

router = APIRouter(prefix="/admin/categories", tags=["admin"])


@router.post("", response_model=CategoryDto, status_code=201)
def create_category(payload: NewCategoryDto, db: DBSession):
    return CategoryDto.model_validate(categories_service.create_category(db, payload))


@router.patch("/{cat_id}", response_model=CategoryDto)
def update_category(cat_id: int, payload: NewCategoryDto, db: DBSession):
    return CategoryDto.model_validate(categories_service.update_category(db, cat_id, payload))


@router.delete("/{cat_id}", status_code=204)
def delete_category(cat_id: int, db: DBSession):
    categories_service.delete_category(db, cat_id)
    return Response(status_code=204)
