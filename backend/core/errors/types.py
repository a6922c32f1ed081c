"""Monadic Error Handling Types

Result/Either types for composable error propagation, plus the single flat
API error type. Every HTTP-facing failure is one ``ApiError`` tagged with an
``ErrorKind``; the kind carries the status code, category and severity.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union, final

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class HttpStatusCode(IntEnum):
    """HTTP status codes used by API errors."""
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503


class ErrorSeverity(str, Enum):
    """Error severity levels, ordered low to critical."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = (ErrorSeverity.LOW, ErrorSeverity.MEDIUM, ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)


class ErrorCategory(str, Enum):
    """Error categories for monitoring and alerting."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_LOGIC = "business_logic"
    EXTERNAL_SERVICE = "external_service"
    DATABASE = "database"
    NETWORK = "network"
    SYSTEM = "system"


class ErrorKind(Enum):
    """Flat taxonomy of API errors.

    Each member is ``(status, default message, category, severity)``.
    """
    BAD_REQUEST = (HttpStatusCode.BAD_REQUEST, "Bad Request", ErrorCategory.VALIDATION, ErrorSeverity.LOW)
    UNAUTHORIZED = (HttpStatusCode.UNAUTHORIZED, "Unauthorized", ErrorCategory.AUTHENTICATION, ErrorSeverity.MEDIUM)
    FORBIDDEN = (HttpStatusCode.FORBIDDEN, "Forbidden", ErrorCategory.AUTHORIZATION, ErrorSeverity.MEDIUM)
    NOT_FOUND = (HttpStatusCode.NOT_FOUND, "Not Found", ErrorCategory.BUSINESS_LOGIC, ErrorSeverity.LOW)
    METHOD_NOT_ALLOWED = (HttpStatusCode.METHOD_NOT_ALLOWED, "Method Not Allowed", ErrorCategory.VALIDATION, ErrorSeverity.LOW)
    REQUEST_TIMEOUT = (HttpStatusCode.REQUEST_TIMEOUT, "Request Timeout", ErrorCategory.NETWORK, ErrorSeverity.MEDIUM)
    CONFLICT = (HttpStatusCode.CONFLICT, "Conflict", ErrorCategory.BUSINESS_LOGIC, ErrorSeverity.LOW)
    UNPROCESSABLE_ENTITY = (HttpStatusCode.UNPROCESSABLE_ENTITY, "Unprocessable Entity", ErrorCategory.VALIDATION, ErrorSeverity.LOW)
    TOO_MANY_REQUESTS = (HttpStatusCode.TOO_MANY_REQUESTS, "Too Many Requests", ErrorCategory.NETWORK, ErrorSeverity.MEDIUM)
    INTERNAL_SERVER_ERROR = (HttpStatusCode.INTERNAL_SERVER_ERROR, "Internal Server Error", ErrorCategory.SYSTEM, ErrorSeverity.HIGH)
    NOT_IMPLEMENTED = (HttpStatusCode.NOT_IMPLEMENTED, "Not Implemented", ErrorCategory.SYSTEM, ErrorSeverity.MEDIUM)
    SERVICE_UNAVAILABLE = (HttpStatusCode.SERVICE_UNAVAILABLE, "Service Unavailable", ErrorCategory.EXTERNAL_SERVICE, ErrorSeverity.CRITICAL)

    @property
    def status_code(self) -> int:
        return int(self.value[0])

    @property
    def default_message(self) -> str:
        return self.value[1]

    @property
    def category(self) -> ErrorCategory:
        return self.value[2]

    @property
    def severity(self) -> ErrorSeverity:
        return self.value[3]

    @property
    def retryable(self) -> bool:
        return self in (ErrorKind.REQUEST_TIMEOUT, ErrorKind.TOO_MANY_REQUESTS, ErrorKind.SERVICE_UNAVAILABLE)

    @classmethod
    def from_status(cls, status_code: int) -> ErrorKind:
        """Find the kind for a status code; unknown codes fall back by class."""
        for kind in cls:
            if kind.status_code == status_code:
                return kind
        return cls.INTERNAL_SERVER_ERROR if status_code >= 500 else cls.BAD_REQUEST


@dataclass(frozen=True, slots=True)
class ErrorMetadata:
    """Monitoring metadata derived from an error."""
    severity: ErrorSeverity
    category: ErrorCategory
    retryable: bool
    user_message: str | None = None
    technical_message: str | None = None


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing and debugging."""
    request_id: str | None = None
    user_id: str | None = None
    resource: str | None = None
    action: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        ctx = {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "resource": self.resource,
            "action": self.action,
            **self.extra,
        }
        return {k: v for k, v in ctx.items() if v is not None}


@dataclass(frozen=True, slots=True)
class ApiError:
    """API error with kind, message, details and tracing context.

    Replaces a per-status exception hierarchy: the ``kind`` field is the
    variant tag and ``status_code`` follows from it.
    """
    kind: ErrorKind
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    code: str | None = None
    context: ErrorContext = field(default_factory=ErrorContext)
    cause: Exception | None = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def is_operational(self) -> bool:
        """Client-caused errors are operational; 5xx are not."""
        return self.status_code < 500

    @property
    def metadata(self) -> ErrorMetadata:
        return ErrorMetadata(
            severity=self.kind.severity,
            category=self.kind.category,
            retryable=self.kind.retryable,
            user_message=self.message if self.is_operational else self.kind.default_message,
            technical_message=str(self.cause) if self.cause else None,
        )

    def with_context(self, **kwargs) -> ApiError:
        """Create new error with updated context."""
        extra = {**self.context.extra, **kwargs.pop("extra", {})}
        new_ctx = ErrorContext(
            request_id=kwargs.get("request_id", self.context.request_id),
            user_id=kwargs.get("user_id", self.context.user_id),
            resource=kwargs.get("resource", self.context.resource),
            action=kwargs.get("action", self.context.action),
            timestamp=self.context.timestamp,
            extra=extra,
        )
        return ApiError(self.kind, self.message, self.details, self.code, new_ctx, self.cause)

    def with_details(self, **kwargs) -> ApiError:
        """Create new error with additional details."""
        return ApiError(self.kind, self.message, {**self.details, **kwargs}, self.code, self.context, self.cause)

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for API responses."""
        body: dict[str, Any] = {
            "name": self.kind.name,
            "status": self.status_code,
            "message": self.message,
        }
        if self.code:
            body["code"] = self.code
        if self.details:
            try:
                json.dumps(self.details)
                body["details"] = self.details
            except (TypeError, ValueError):
                body["details"] = "[Unserializable]"
        if ctx := self.context.to_dict():
            body["context"] = ctx
        return {"error": body}

    def __str__(self) -> str:
        return f"[{self.kind.name}] {self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result monad."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def map(self, f: Callable[[T], U]) -> Result[U, Any]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], F]) -> Result[T, F]:
        return self  # type: ignore

    def flat_map(self, f: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        return f(self.value)

    def match(self, ok: Callable[[T], U], err: Callable[[Any], U]) -> U:
        """Pattern match on Result. Forces exhaustive handling."""
        return ok(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result monad."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[Any], U]) -> Result[U, E]:
        return self  # type: ignore

    def map_err(self, f: Callable[[E], F]) -> Result[Any, F]:
        return Err(f(self.error))

    def flat_map(self, f: Callable[[Any], Result[U, E]]) -> Result[U, E]:
        return self  # type: ignore

    def match(self, ok: Callable[[Any], U], err: Callable[[E], U]) -> U:
        return err(self.error)


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def err(error: E) -> Err[E]:
    return Err(error)


def collect_results(results: list[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect list of Results into Result of list, keeping every error."""
    values: list[T] = []
    errors: list[E] = []

    for r in results:
        match r:
            case Ok(v):
                values.append(v)
            case Err(e):
                errors.append(e)

    if errors:
        return Err(errors)
    return Ok(values)
