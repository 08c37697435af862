from typing import Annotated

from fastapi import APIRouter, Query, Response

from ewm.api.deps import DBSession
from ewm.api.schemas.comments import CommentDto, NewCommentDto
from ewm.services import comments_service

router = APIRouter(prefix="/users/{user_id}/comments", tags=["private"])

EventIdParam = Annotated[int, Query(alias="eventId")]


@router.post("", response_model=CommentDto, status_code=201)
def create_comment(user_id: int, event_id: EventIdParam, payload: NewCommentDto, db: DBSession):
    return CommentDto.model_validate(
        comments_service.create_comment(db, user_id, event_id, payload)
    )


@router.patch("/{comment_id}", response_model=CommentDto)
def update_comment(
    user_id: int,
    comment_id: int,
    event_id: EventIdParam,
    payload: NewCommentDto,
    db: DBSession,
):
    return CommentDto.model_validate(
        comments_service.update_comment(db, user_id, event_id, comment_id, payload)
    )


@router.delete("/{comment_id}", status_code=204)
def delete_comment(user_id: int, comment_id: int, event_id: EventIdParam, db: DBSession):
    comments_service.delete_comment(db, user_id, event_id, comment_id)
    return Response(status_code=204)


@router.put("/{comment_id}/like", response_model=CommentDto)
def like_comment(user_id: int, comment_id: int, db: DBSession):
    return CommentDto.model_validate(comments_service.add_like(db, user_id, comment_id))


@router.delete("/{comment_id}/like", status_code=204)
def unlike_comment(user_id: int, comment_id: int, db: DBSession):
    comments_service.remove_like(db, user_id, comment_id)
    return Response(status_code=204)
