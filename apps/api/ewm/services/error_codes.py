from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"

    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_EMAIL_TAKEN = "USER_EMAIL_TAKEN"

    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CATEGORY_NAME_TAKEN = "CATEGORY_NAME_TAKEN"
    CATEGORY_IN_USE = "CATEGORY_IN_USE"

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_NOT_OWNED = "EVENT_NOT_OWNED"
    EVENT_DATE_TOO_SOON = "EVENT_DATE_TOO_SOON"
    EVENT_ALREADY_PUBLISHED = "EVENT_ALREADY_PUBLISHED"
    EVENT_NOT_PENDING = "EVENT_NOT_PENDING"
    EVENT_NOT_PUBLISHED = "EVENT_NOT_PUBLISHED"

    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    REQUEST_ALREADY_EXISTS = "REQUEST_ALREADY_EXISTS"
    REQUEST_OWN_EVENT = "REQUEST_OWN_EVENT"
    REQUEST_NOT_PENDING = "REQUEST_NOT_PENDING"
    REQUEST_WRONG_EVENT = "REQUEST_WRONG_EVENT"
    PARTICIPANT_LIMIT_REACHED = "PARTICIPANT_LIMIT_REACHED"

    COMPILATION_NOT_FOUND = "COMPILATION_NOT_FOUND"

    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    COMMENT_NOT_OWNED = "COMMENT_NOT_OWNED"
    COMMENT_OWN_LIKE = "COMMENT_OWN_LIKE"
    COMMENT_ALREADY_LIKED = "COMMENT_ALREADY_LIKED"
    COMMENT_LIKE_NOT_FOUND = "COMMENT_LIKE_NOT_FOUND"

    INVALID_SORT = "INVALID_SORT"
    INVALID_DATETIME = "INVALID_DATETIME"

    RATE_LIMITED = "RATE_LIMITED"
