from ewm.services.categories_service import (
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)
from ewm.services.comments_service import (
    add_like,
    create_comment,
    delete_comment,
    delete_comment_admin,
    list_event_comments,
    remove_like,
    update_comment,
)
from ewm.services.compilations_service import (
    create_compilation,
    delete_compilation,
    get_compilation,
    list_compilations,
    update_compilation,
)
from ewm.services.events_service import (
    AdminEventFilter,
    PublicEventFilter,
    create_event,
    get_public_event,
    get_user_event,
    list_user_events,
    search_admin_events,
    search_public_events,
    update_event_admin,
    update_event_of_user,
)
from ewm.services.requests_service import (
    cancel_request,
    create_request,
    list_event_requests,
    list_user_requests,
    update_requests_status,
)
from ewm.services.users_service import create_user, delete_user, list_users

__all__ = [
    "create_user",
    "list_users",
    "delete_user",
    "create_category",
    "update_category",
    "delete_category",
    "get_category",
    "list_categories",
    "create_event",
    "list_user_events",
    "get_user_event",
    "update_event_of_user",
    "update_event_admin",
    "search_public_events",
    "search_admin_events",
    "get_public_event",
    "PublicEventFilter",
    "AdminEventFilter",
    "create_request",
    "cancel_request",
    "list_user_requests",
    "list_event_requests",
    "update_requests_status",
    "create_compilation",
    "update_compilation",
    "delete_compilation",
    "get_compilation",
    "list_compilations",
    "create_comment",
    "update_comment",
    "delete_comment",
    "delete_comment_admin",
    "add_like",
    "remove_like",
    "list_event_comments",
]
