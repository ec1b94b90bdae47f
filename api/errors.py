"""Exception handlers rendering every failure as the JSON error envelope.

    {"error": {"message": "...", "status": 404}}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import ServiceError, StoreError
from verticals.books.models.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_STORE_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(message=message, status=status_code))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return error_response(exc.status_code, GENERIC_STORE_MESSAGE)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return error_response(400, "; ".join(messages) or "Invalid request")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc)
    return error_response(500, GENERIC_STORE_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
