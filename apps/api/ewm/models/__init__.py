from ewm.models.base import Base
from ewm.models.category import Category
from ewm.models.comment import Comment, comment_likes
from ewm.models.compilation import Compilation, compilation_events
from ewm.models.event import Event
from ewm.models.participation_request import ParticipationRequest
from ewm.models.user import User

__all__ = [
    "Base",
    "User",
    "Category",
    "Event",
    "ParticipationRequest",
    "Compilation",
    "compilation_events",
    "Comment",
    "comment_likes",
]
