"""Monadic Error Handling System

Key components:
- Result[T, E]: Monadic container for success/failure
- ApiError: one flat error type tagged with an ErrorKind (status code,
  category and severity follow from the kind)
- Builder functions: Ergonomic error construction

Usage:
    from core.errors import Ok, Result, ApiError, not_found

    def find_article(slug: str) -> Result[Article, ApiError]:
        article = repo.get(slug)
        if not article:
            return not_found("Article", slug)
        return Ok(article)

    match find_article("how-to-train-your-dragon"):
        case Ok(article):
            ...
        case Err(error):
            log.warning(error.message, kind=error.kind.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    ApiError,
    ErrorKind,
    ErrorContext,
    ErrorMetadata,
    ErrorSeverity,
    ErrorCategory,
    HttpStatusCode,
    # Constructors
    ok,
    err,
    # Combinators
    collect_results,
)

from .builders import (
    api_error,
    bad_request,
    unauthorized,
    forbidden,
    not_found,
    method_not_allowed,
    request_timeout,
    conflict,
    unprocessable_entity,
    too_many_requests,
    internal_error,
    not_implemented,
    service_unavailable,
    from_status,
    validation_failed,
)

from .handlers import (
    ApiErrorException,
    register_error_handlers,
    error_response,
    raise_error,
    raise_result,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "ApiError",
    "ErrorKind",
    "ErrorContext",
    "ErrorMetadata",
    "ErrorSeverity",
    "ErrorCategory",
    "HttpStatusCode",
    "ok",
    "err",
    "collect_results",
    "api_error",
    "bad_request",
    "unauthorized",
    "forbidden",
    "not_found",
    "method_not_allowed",
    "request_timeout",
    "conflict",
    "unprocessable_entity",
    "too_many_requests",
    "internal_error",
    "not_implemented",
    "service_unavailable",
    "from_status",
    "validation_failed",
    "ApiErrorException",
    "register_error_handlers",
    "error_response",
    "raise_error",
    "raise_result",
]
