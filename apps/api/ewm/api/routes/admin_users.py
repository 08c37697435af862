from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response

from ewm.api.deps import DBSession, FromParam, SizeParam
from ewm.api.schemas.users import NewUserRequest, UserDto
from ewm.services import users_service

router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.post("", response_model=UserDto, status_code=201)
def create_user(payload: NewUserRequest, db: DBSession):
    return UserDto.model_validate(users_service.create_user(db, payload))


@router.get("", response_model=list[UserDto])
def list_users(
    db: DBSession,
    ids: Annotated[list[int] | None, Query()] = None,
    from_: FromParam = 0,
    size: SizeParam = 10,
):
    users = users_service.list_users(db, ids, from_, size)
    return [UserDto.model_validate(u) for u in users]


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, db: DBSession):
    users_service.delete_user(db, user_id)
    return Response(status_code=204)
