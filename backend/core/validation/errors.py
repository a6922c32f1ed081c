"""Validation Error System

One ValidationError kind, differentiated by the ``code`` and ``path`` of
each issue. Pydantic's built-in error types are folded into the small
IssueCode vocabulary so API consumers only ever see one set of codes.

Error Format (``format_validation_error``):
{
    "message": "Validation failed",
    "errors": [
        {
            "field": "user.email",
            "message": "Please enter a valid email address",
            "code": "invalid_email"
        }
    ]
}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Sequence

from core.errors.types import ApiError, ErrorKind

VALIDATION_FAILED = "Validation failed"


class IssueCode(str, Enum):
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_TYPE = "invalid_type"
    INVALID_FORMAT = "invalid_format"
    INVALID_EMAIL = "invalid_email"
    INVALID_URL = "invalid_url"
    DUPLICATE = "duplicate"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    CUSTOM = "custom"


_ISSUE_CODES = frozenset(code.value for code in IssueCode)

# Pydantic built-ins that can still surface (structure and type errors).
_PYDANTIC_CODES: dict[str, IssueCode] = {
    "missing": IssueCode.REQUIRED,
    "extra_forbidden": IssueCode.UNRECOGNIZED_KEYS,
    "string_too_short": IssueCode.TOO_SHORT,
    "string_too_long": IssueCode.TOO_LONG,
    "too_short": IssueCode.TOO_SHORT,
    "too_long": IssueCode.TOO_LONG,
    "greater_than": IssueCode.TOO_SMALL,
    "greater_than_equal": IssueCode.TOO_SMALL,
    "less_than": IssueCode.TOO_BIG,
    "less_than_equal": IssueCode.TOO_BIG,
    "string_pattern_mismatch": IssueCode.INVALID_FORMAT,
    "uuid_parsing": IssueCode.INVALID_FORMAT,
    "url_parsing": IssueCode.INVALID_URL,
    "url_scheme": IssueCode.INVALID_URL,
}


def issue_code(error_type: str) -> IssueCode:
    """Map a pydantic error ``type`` onto an IssueCode."""
    if error_type in _ISSUE_CODES:
        return IssueCode(error_type)
    if error_type in _PYDANTIC_CODES:
        return _PYDANTIC_CODES[error_type]
    if error_type.endswith(("_type", "_parsing")) or error_type in ("int_from_float", "model_attributes_type"):
        return IssueCode.INVALID_TYPE
    return IssueCode.CUSTOM


def _issue_message(error: dict[str, Any]) -> str:
    err_type = error.get("type", "")
    loc = error.get("loc", ())
    if err_type == "missing":
        return "Required"
    if err_type == "extra_forbidden" and loc:
        return f"Unrecognized key in object: '{loc[-1]}'"
    return error.get("msg", VALIDATION_FAILED)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single failed rule: where it failed, why, and which rule."""
    path: tuple[str | int, ...]
    message: str
    code: IssueCode

    @property
    def field(self) -> str:
        return ".".join(str(part) for part in self.path)

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "code": self.code.value}

    @classmethod
    def from_pydantic_error(cls, error: dict[str, Any]) -> ValidationIssue:
        return cls(
            path=tuple(error.get("loc", ())),
            message=_issue_message(error),
            code=issue_code(error.get("type", "")),
        )


@dataclass
class ValidationError(Exception):
    """Validation failure carrying every issue found.

    Returned inside ``ValidationFailure`` by the ``validate_*`` helpers and
    raised only by the explicit ``parse`` entry points.
    """
    issues: list[ValidationIssue] = field(default_factory=list)
    message: str = VALIDATION_FAILED

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.issues: return self.message
        if len(self.issues) == 1: return f"{(i := self.issues[0]).field}: {i.message}"
        return f"{self.message} ({len(self.issues)} errors)"

    @property
    def first_issue(self) -> ValidationIssue | None: return self.issues[0] if self.issues else None

    def issues_for(self, field_path: str) -> list[ValidationIssue]:
        return [i for i in self.issues if i.field == field_path]

    def to_api_error(self) -> ApiError:
        """Convert to a 400 ApiError carrying the formatted issue list."""
        payload = format_validation_error(self)
        return ApiError(
            kind=ErrorKind.BAD_REQUEST,
            message=payload["message"],
            details={"errors": payload["errors"]},
            code="VALIDATION_ERROR",
        )

    @classmethod
    def from_pydantic(cls, exc: Exception) -> ValidationError:
        """Create from a pydantic ValidationError."""
        if not hasattr(exc, "errors"):
            return cls(issues=[ValidationIssue(path=(), message=str(exc), code=IssueCode.CUSTOM)])
        return cls.from_pydantic_errors(exc.errors())

    @classmethod
    def from_pydantic_errors(cls, errors: Iterable[dict[str, Any]]) -> ValidationError:
        return cls(issues=[ValidationIssue.from_pydantic_error(e) for e in errors])


def format_validation_error(error: ValidationError | Sequence[ValidationIssue]) -> dict[str, Any]:
    """Shape issues for direct inclusion in an API error payload."""
    issues = error.issues if isinstance(error, ValidationError) else error
    return {
        "message": VALIDATION_FAILED,
        "errors": [issue.to_dict() for issue in issues],
    }
