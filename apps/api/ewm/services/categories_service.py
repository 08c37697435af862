from __future__ import annotations

import structlog
from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ewm.api.schemas.categories import NewCategoryDto
from ewm.db import transaction
from ewm.models import Category, Event
from ewm.services.error_codes import ErrorCode
from ewm.services.exceptions import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if not category:
        raise NotFoundError(ErrorCode.CATEGORY_NOT_FOUND, f"category {category_id} not found")
    return category


def _ensure_name_free(db: Session, name: str, exclude_id: int | None = None) -> None:
    stmt = select(Category.id).where(Category.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ConflictError(ErrorCode.CATEGORY_NAME_TAKEN, f"category {name!r} already exists")


def create_category(db: Session, payload: NewCategoryDto) -> Category:
    _ensure_name_free(db, payload.name)
    category = Category(name=payload.name)
    try:
        with transaction(db):
            db.add(category)
    except IntegrityError as exc:
        raise ConflictError(ErrorCode.CATEGORY_NAME_TAKEN, "category name already exists") from exc
    logger.info("category_created", category_id=category.id)
    return category


def update_category(db: Session, category_id: int, payload: NewCategoryDto) -> Category:
    category = get_category(db, category_id)
    if category.name == payload.name:
        return category

    _ensure_name_free(db, payload.name, exclude_id=category.id)
    try:
        with transaction(db):
            category.name = payload.name
    except IntegrityError as exc:
        raise ConflictError(ErrorCode.CATEGORY_NAME_TAKEN, "category name already exists") from exc
    return category


def delete_category(db: Session, category_id: int) -> None:
    category = get_category(db, category_id)
    in_use = db.scalar(select(exists().where(Event.category_id == category.id)))
    if in_use:
        raise ConflictError(ErrorCode.CATEGORY_IN_USE, "category has events attached")
    with transaction(db):
        db.delete(category)
    logger.info("category_deleted", category_id=category_id)


def list_categories(db: Session, offset: int, limit: int) -> list[Category]:
    stmt = select(Category).order_by(Category.id).offset(offset).limit(limit)
    return list(db.scalars(stmt).all())
