from __future__ import annotations

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ewm.api.schemas.comments import CommentSort, NewCommentDto
from ewm.db import transaction
from ewm.models import Comment, comment_likes
from ewm.models.base import utcnow
from ewm.models.event import EventState
from ewm.services.error_codes import ErrorCode
from ewm.services.events_service import get_event
from ewm.services.exceptions import ConflictError, NotFoundError, ValidationError
from ewm.services.users_service import get_user

logger = structlog.get_logger(__name__)


def get_comment(db: Session, comment_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if not comment:
        raise NotFoundError(ErrorCode.COMMENT_NOT_FOUND, f"comment {comment_id} not found")
    return comment


def _get_authored_comment(db: Session, user_id: int, event_id: int, comment_id: int) -> Comment:
    get_user(db, user_id)
    get_event(db, event_id)
    comment = get_comment(db, comment_id)
    if comment.event_id != event_id:
        raise NotFoundError(
            ErrorCode.COMMENT_NOT_FOUND, f"comment {comment_id} not found for event {event_id}"
        )
    if comment.author_id != user_id:
        raise ValidationError(ErrorCode.COMMENT_NOT_OWNED, "only the author can change a comment")
    return comment


def create_comment(db: Session, user_id: int, event_id: int, payload: NewCommentDto) -> Comment:
    author = get_user(db, user_id)
    event = get_event(db, event_id)
    if event.state != EventState.PUBLISHED:
        raise ConflictError(ErrorCode.EVENT_NOT_PUBLISHED, "only published events can be commented")

    comment = Comment(event_id=event.id, author=author, text=payload.text, created=utcnow())
    with transaction(db):
        db.add(comment)
    logger.info("comment_created", comment_id=comment.id, event_id=event_id, user_id=user_id)
    return comment


def update_comment(
    db: Session, user_id: int, event_id: int, comment_id: int, payload: NewCommentDto
) -> Comment:
    comment = _get_authored_comment(db, user_id, event_id, comment_id)
    with transaction(db):
        comment.text = payload.text
        comment.edited = utcnow()
    return comment


def delete_comment(db: Session, user_id: int, event_id: int, comment_id: int) -> None:
    comment = _get_authored_comment(db, user_id, event_id, comment_id)
    with transaction(db):
        db.delete(comment)
    logger.info("comment_deleted", comment_id=comment_id, user_id=user_id)


def delete_comment_admin(db: Session, comment_id: int) -> None:
    comment = get_comment(db, comment_id)
    with transaction(db):
        db.delete(comment)
    logger.info("comment_removed_by_admin", comment_id=comment_id)


def add_like(db: Session, user_id: int, comment_id: int) -> Comment:
    user = get_user(db, user_id)
    comment = get_comment(db, comment_id)
    if comment.author_id == user_id:
        raise ConflictError(ErrorCode.COMMENT_OWN_LIKE, "cannot like own comment")
    if any(liker.id == user_id for liker in comment.likers):
        raise ConflictError(ErrorCode.COMMENT_ALREADY_LIKED, "comment already liked")

    try:
        with transaction(db):
            comment.likers.append(user)
    except IntegrityError as exc:
        raise ConflictError(ErrorCode.COMMENT_ALREADY_LIKED, "comment already liked") from exc
    return comment


def remove_like(db: Session, user_id: int, comment_id: int) -> None:
    get_user(db, user_id)
    comment = get_comment(db, comment_id)
    liker = next((u for u in comment.likers if u.id == user_id), None)
    if liker is None:
        raise NotFoundError(ErrorCode.COMMENT_LIKE_NOT_FOUND, "comment is not liked by user")
    with transaction(db):
        comment.likers.remove(liker)


def list_event_comments(
    db: Session, event_id: int, sort: CommentSort, offset: int, limit: int
) -> list[Comment]:
    event = get_event(db, event_id)
    if event.state != EventState.PUBLISHED:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, f"published event {event_id} not found")

    stmt = select(Comment).where(Comment.event_id == event.id)
    if sort == CommentSort.LIKES:
        like_count = (
            select(func.count())
            .select_from(comment_likes)
            .where(comment_likes.c.comment_id == Comment.id)
            .correlate(Comment)
            .scalar_subquery()
        )
        stmt = stmt.order_by(like_count.desc(), Comment.created.desc(), Comment.id.desc())
    else:
        stmt = stmt.order_by(Comment.created.desc(), Comment.id.desc())

    return list(db.scalars(stmt.offset(offset).limit(limit)).all())
