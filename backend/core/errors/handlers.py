"""FastAPI Exception Handlers

Converts ApiErrors, request ValidationErrors and stray exceptions into
JSON responses with the right status code.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging import get_logger

from .types import ApiError, ErrorKind, Result

log = get_logger("conduit.errors")

REQUEST_ID_HEADER = "X-Request-ID"


class ApiErrorException(Exception):
    """Exception wrapper for ApiError.

    Use this when an ApiError has to leave code that does not return
    Results (e.g., FastAPI dependencies).
    """

    def __init__(self, error: ApiError):
        self.error = error
        super().__init__(str(error))


def error_response(error: ApiError) -> JSONResponse:
    """Convert ApiError to a JSONResponse, logging by severity."""
    log_method = log.warning if error.is_operational else log.error
    log_method(
        "error_response",
        kind=error.kind.name,
        status=error.status_code,
        message=error.message,
        category=error.kind.category.value,
        request_id=error.context.request_id,
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or request.headers.get(REQUEST_ID_HEADER)


async def api_error_handler(request: Request, exc: ApiErrorException) -> JSONResponse:
    return error_response(exc.error.with_context(request_id=_request_id(request)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle standard HTTP exceptions with the structured error body."""
    kind = ErrorKind.from_status(exc.status_code)
    error = ApiError(
        kind=kind,
        message=str(exc.detail) if exc.detail else kind.default_message,
    ).with_context(request_id=_request_id(request))
    response = error_response(error)
    # Starlette may raise statuses outside the taxonomy (e.g. 418); keep them.
    response.status_code = exc.status_code
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI's own body/query validation failures."""
    from core.validation.errors import ValidationError

    error = ValidationError.from_pydantic_errors(exc.errors())
    return error_response(error.to_api_error().with_context(request_id=_request_id(request)))


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle ValidationError raised by ``FieldSchema.parse`` in handlers."""
    from core.validation.errors import ValidationError

    if not isinstance(exc, ValidationError):
        raise exc
    return error_response(exc.to_api_error().with_context(request_id=_request_id(request)))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, answer with a generic 500."""
    error = ApiError(
        kind=ErrorKind.INTERNAL_SERVER_ERROR,
        message=ErrorKind.INTERNAL_SERVER_ERROR.default_message,
        cause=exc,
    ).with_context(request_id=_request_id(request))

    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        request_id=error.context.request_id,
    )
    return error_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI app."""
    from core.validation.errors import ValidationError

    app.add_exception_handler(ApiErrorException, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def raise_error(error: ApiError) -> None:
    """Raise ApiError as exception.

    Usage:
        if ctx.user is None:
            raise_error(unauthorized().error)
    """
    raise ApiErrorException(error)


def raise_result(result: Result) -> None:
    """Raise if Result is Err, otherwise return."""
    if result.is_err():
        raise ApiErrorException(result.unwrap_err())
