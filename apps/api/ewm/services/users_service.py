from __future__ import annotations

from collections.abc import Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ewm.api.schemas.users import NewUserRequest
from ewm.db import transaction
from ewm.models import User
from ewm.services.error_codes import ErrorCode
from ewm.services.exceptions import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError(ErrorCode.USER_NOT_FOUND, f"user {user_id} not found")
    return user


def create_user(db: Session, payload: NewUserRequest) -> User:
    existing = db.scalar(select(User).where(User.email == payload.email))
    if existing:
        raise ConflictError(ErrorCode.USER_EMAIL_TAKEN, "email already registered")

    user = User(name=payload.name, email=payload.email)
    try:
        with transaction(db):
            db.add(user)
    except IntegrityError as exc:
        raise ConflictError(ErrorCode.USER_EMAIL_TAKEN, "email already registered") from exc

    logger.info("user_created", user_id=user.id)
    return user


def list_users(db: Session, ids: Sequence[int] | None, offset: int, limit: int) -> list[User]:
    stmt = select(User).order_by(User.id).offset(offset).limit(limit)
    if ids:
        stmt = stmt.where(User.id.in_(ids))
    return list(db.scalars(stmt).all())


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    with transaction(db):
        db.delete(user)
    logger.info("user_deleted", user_id=user_id)
