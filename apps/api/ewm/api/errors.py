from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ewm.services.error_codes import ErrorCode
from ewm.services.exceptions import (
    ConflictError,
    NotFoundError,
    OperationFailedError,
    ServiceError,
    ValidationError,
)


def http_error_from_service(err: ServiceError) -> HTTPException:
    if isinstance(err, NotFoundError):
        status = 404
    elif isinstance(err, (ConflictError, OperationFailedError)):
        status = 409
    elif isinstance(err, ValidationError):
        status = 400
    else:
        status = 500

    return HTTPException(
        status_code=status,
        detail={"code": err.code, "message": err.message},
    )


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    http_exc = http_error_from_service(exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": "request validation failed",
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
