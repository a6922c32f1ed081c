"""API Error Builders

Ergonomic constructors for each ErrorKind. Every builder returns
``Err(ApiError)`` so it can be returned directly from Result-typed code.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .types import ApiError, ErrorContext, ErrorKind, Err

if TYPE_CHECKING:
    from core.validation.errors import ValidationError


def api_error(
    kind: ErrorKind,
    message: str | None = None,
    *,
    code: str | None = None,
    resource: str | None = None,
    user_id: str | None = None,
    cause: Exception | None = None,
    **details: Any,
) -> Err[ApiError]:
    """Create an API error of the given kind."""
    return Err(ApiError(
        kind=kind,
        message=message or kind.default_message,
        details={k: v for k, v in details.items() if v is not None},
        code=code,
        context=ErrorContext(resource=resource, user_id=user_id),
        cause=cause,
    ))


# =============================================================================
# Client errors (4xx)
# =============================================================================

def bad_request(message: str = "Bad Request", **details: Any) -> Err[ApiError]:
    return api_error(ErrorKind.BAD_REQUEST, message, **details)


def unauthorized(message: str = "Unauthorized", **details: Any) -> Err[ApiError]:
    return api_error(ErrorKind.UNAUTHORIZED, message, **details)


def forbidden(message: str = "Forbidden", **details: Any) -> Err[ApiError]:
    return api_error(ErrorKind.FORBIDDEN, message, **details)


def not_found(entity: str, id: str | None = None, **details: Any) -> Err[ApiError]:
    msg = f"{entity} not found"
    if id:
        msg += f": {id}"
    return api_error(ErrorKind.NOT_FOUND, msg, resource=entity, **details)


def method_not_allowed(method: str, **details: Any) -> Err[ApiError]:
    return api_error(ErrorKind.METHOD_NOT_ALLOWED, f"Method {method} not allowed", method=method, **details)


def request_timeout(operation: str, timeout_seconds: float) -> Err[ApiError]:
    return api_error(
        ErrorKind.REQUEST_TIMEOUT,
        f"Operation '{operation}' timed out after {timeout_seconds}s",
        operation=operation,
        timeout_seconds=timeout_seconds,
    )


def conflict(entity: str, field: str, value: str) -> Err[ApiError]:
    return api_error(
        ErrorKind.CONFLICT,
        f"{entity} with {field}='{value}' already exists",
        resource=entity,
        field=field,
    )


def unprocessable_entity(message: str = "Unprocessable Entity", **details: Any) -> Err[ApiError]:
    return api_error(ErrorKind.UNPROCESSABLE_ENTITY, message, **details)


def too_many_requests(retry_after: float | None = None) -> Err[ApiError]:
    return api_error(ErrorKind.TOO_MANY_REQUESTS, retry_after=retry_after)


# =============================================================================
# Server errors (5xx)
# =============================================================================

def internal_error(
    message: str = "Internal Server Error", *, cause: Exception | None = None, **details: Any
) -> Err[ApiError]:
    return api_error(ErrorKind.INTERNAL_SERVER_ERROR, message, cause=cause, **details)


def not_implemented(feature: str) -> Err[ApiError]:
    return api_error(ErrorKind.NOT_IMPLEMENTED, f"Feature '{feature}' is not implemented", feature=feature)


def service_unavailable(service: str, reason: str = "") -> Err[ApiError]:
    msg = f"Service '{service}' unavailable"
    if reason:
        msg += f": {reason}"
    return api_error(ErrorKind.SERVICE_UNAVAILABLE, msg, service=service)


def from_status(status_code: int, message: str | None = None, **details: Any) -> Err[ApiError]:
    """Build an error from a raw HTTP status code."""
    return api_error(ErrorKind.from_status(status_code), message, **details)


# =============================================================================
# Validation
# =============================================================================

def validation_failed(error: ValidationError) -> Err[ApiError]:
    """Wrap a request validation failure as a 400 API error."""
    return Err(error.to_api_error())
