from fastapi import APIRouter

from ewm.api.deps import DBSession, FromParam, SizeParam
from ewm.api.schemas.categories import CategoryDto
from ewm.services import categories_service

router = APIRouter(prefix="/categories", tags=["public"])


@router.get("", response_model=list[CategoryDto])
def list_categories(db: DBSession, from_: FromParam = 0, size: SizeParam = 10):
    return [
        CategoryDto.model_validate(c)
        for c in categories_service.list_categories(db, from_, size)
    ]


@router.get("/{cat_id}", response_model=CategoryDto)
def get_category(cat_id: int, db: DBSession):
    return CategoryDto.model_validate(categories_service.get_category(db, cat_id))
