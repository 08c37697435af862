from ewm.services.error_codes import ErrorCode


class ServiceError(Exception):
    def __init__(self, code: ErrorCode | str, message: str | None = None) -> None:
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message or self.code
        super().__init__(self.message)


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class OperationFailedError(ServiceError):
    """Illegal lifecycle transition requested by an administrator."""


class ValidationError(ServiceError):
    pass


class InvalidSortError(ValidationError):
    def __init__(self, value: str) -> None:
        super().__init__(ErrorCode.INVALID_SORT, f"unknown sort type: {value}")


class InvalidDateTimeError(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_DATETIME, message)
