"""
Service errors and their HTTP mapping.

Every failure raised by a service carries a human-readable message and the
status code it should be answered with. The handlers registered here render
all of them, plus framework errors, as an ErrorResponse body.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from models import ErrorResponse

log = structlog.get_logger(__name__)

ADDRESS_NOT_FOUND = "address not found"
INTERNAL_ERROR = "internal server error"


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamError(ServiceError):
    """An upstream API call failed or returned something unusable."""


class GetLocationError(UpstreamError):
    pass


class GetSunriseSunsetError(UpstreamError):
    pass


class LocationNotFoundError(ServiceError):
    status_code = 404

    def __init__(self, address: str, message: str = ADDRESS_NOT_FOUND):
        super().__init__(message)
        self.address = address


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    log.warning(
        "service_error",
        path=request.url.path,
        error=exc.message,
        status_code=exc.status_code,
        kind=type(exc).__name__,
    )
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "invalid request"
    log.info("invalid_request", path=request.url.path, error=message)
    return error_response(400, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_error", path=request.url.path, exc_info=exc)
    return error_response(500, INTERNAL_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
