from fastapi import APIRouter, Response

from ewm.api.deps import DBSession
from ewm.services import comments_service

router = APIRouter(prefix="/admin/comments", tags=["admin"])


@router.delete("/{comment_id}", status_code=204)
def delete_comment(comment_id: int, db: DBSession):
    comments_service.delete_comment_admin(db, comment_id)
    return Response(status_code=204)
