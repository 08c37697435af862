from fastapi import APIRouter, Request

from ewm.api.deps import DBSession, FromParam, SizeParam, Stats, parse_sort, record_hit
from ewm.api.schemas.comments import CommentDto, CommentSort
from ewm.services import comments_service

router = APIRouter(prefix="/comments", tags=["public"])


@router.get("/{event_id}", response_model=list[CommentDto])
def list_comments(
    event_id: int,
    request: Request,
    db: DBSession,
    stats: Stats,
    sort: str | None = None,
    from_: FromParam = 0,
    size: SizeParam = 20,
):
    order = parse_sort(sort, CommentSort, CommentSort.LIKES)
    comments = comments_service.list_event_comments(db, event_id, order, from_, size)
    record_hit(stats, request)
    return [CommentDto.model_validate(c) for c in comments]
