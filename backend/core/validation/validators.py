"""Compositional Validator System

Atomic validators combine via AllOf and message overrides.
Each check returns a CheckResult carrying the message and IssueCode of the
first rule that failed; ``check()`` bridges any validator into a pydantic
AfterValidator so the same objects drive the request schemas.

Features:
- Frozen dataclass validators for immutability
- Compiled regex caching
- Short-circuit evaluation for AllOf
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Sequence
from urllib.parse import urlsplit

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

from .errors import IssueCode


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check."""
    is_valid: bool
    message: str | None = None
    code: IssueCode | None = None
    constraint: str | None = None

    @classmethod
    def valid(cls) -> CheckResult: return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str, code: IssueCode = IssueCode.CUSTOM, *, constraint: str | None = None) -> CheckResult:
        return cls(is_valid=False, message=message, code=code, constraint=constraint)


class AtomicValidator(ABC):
    """Base class for atomic validators.

    Validators are immutable and compose with ``AllOf`` (first failure wins)
    and ``with_message`` (replace the failure message).
    """

    @abstractmethod
    def validate(self, value: Any) -> CheckResult:
        """Validate a value. Returns CheckResult."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Human-readable constraint name for diagnostics."""

    def __call__(self, value: Any) -> CheckResult: return self.validate(value)

    def with_message(self, message: str, code: IssueCode | None = None) -> WithMessage:
        return WithMessage(self, message, code)


def _type_mismatch(expected: str, value: Any) -> CheckResult:
    return CheckResult.invalid(
        f"Expected {expected}, received {type(value).__name__}",
        IssueCode.INVALID_TYPE,
        constraint=expected,
    )


@lru_cache(maxsize=128)
def _compile(pattern: str, flags: int) -> re.Pattern:
    return re.compile(pattern, flags)


# ============================================================================
# String Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringLength(AtomicValidator):
    """Validate string length constraints."""
    min_length: int | None = None
    max_length: int | None = None

    @property
    def constraint_name(self) -> str:
        if self.min_length is not None and self.max_length is not None:
            return f"length[{self.min_length},{self.max_length}]"
        if self.min_length is not None:
            return f"min_length[{self.min_length}]"
        if self.max_length is not None:
            return f"max_length[{self.max_length}]"
        return "string_length"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, str):
            return _type_mismatch("string", value)

        length = len(value)
        if self.min_length is not None and length < self.min_length:
            return CheckResult.invalid(
                f"String must contain at least {self.min_length} character(s)",
                IssueCode.TOO_SHORT,
                constraint=self.constraint_name,
            )
        if self.max_length is not None and length > self.max_length:
            return CheckResult.invalid(
                f"String must contain at most {self.max_length} character(s)",
                IssueCode.TOO_LONG,
                constraint=self.constraint_name,
            )
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class NonEmpty(AtomicValidator):
    """Validate that string is not empty (or whitespace-only when stripping)."""
    strip_whitespace: bool = True

    @property
    def constraint_name(self) -> str:
        return "non_empty"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, str):
            return _type_mismatch("string", value)

        check_value = value.strip() if self.strip_whitespace else value
        if not check_value:
            return CheckResult.invalid("String cannot be empty", IssueCode.REQUIRED, constraint=self.constraint_name)
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class RegexPattern(AtomicValidator):
    """Validate that the whole string matches a regex pattern."""
    pattern: str
    flags: int = 0
    description: str | None = None
    code: IssueCode = IssueCode.INVALID_FORMAT

    @property
    def constraint_name(self) -> str:
        return self.description or f"pattern[{self.pattern}]"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, str):
            return _type_mismatch("string", value)

        if not _compile(self.pattern, self.flags).fullmatch(value):
            return CheckResult.invalid(
                f"Value does not match pattern: {self.description or self.pattern}",
                self.code,
                constraint=self.constraint_name,
            )
        return CheckResult.valid()


# ============================================================================
# Numeric Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class NumericRange(AtomicValidator):
    """Validate inclusive numeric range constraints."""
    min_value: int | float | None = None
    max_value: int | float | None = None

    @property
    def constraint_name(self) -> str:
        parts = []
        if self.min_value is not None:
            parts.append(f">={self.min_value}")
        if self.max_value is not None:
            parts.append(f"<={self.max_value}")
        return f"range[{', '.join(parts)}]" if parts else "numeric"

    def validate(self, value: Any) -> CheckResult:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return _type_mismatch("number", value)

        if self.min_value is not None and value < self.min_value:
            return CheckResult.invalid(
                f"Number must be greater than or equal to {self.min_value}",
                IssueCode.TOO_SMALL,
                constraint=self.constraint_name,
            )
        if self.max_value is not None and value > self.max_value:
            return CheckResult.invalid(
                f"Number must be less than or equal to {self.max_value}",
                IssueCode.TOO_BIG,
                constraint=self.constraint_name,
            )
        return CheckResult.valid()


# ============================================================================
# Format Validators
# ============================================================================

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_UUID = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")


@dataclass(frozen=True, slots=True)
class URLValidator(AtomicValidator):
    """Validate that a string is an absolute URL.

    Any scheme is syntactically acceptable; restrict schemes with
    ``URLProtocol``. Hierarchical URLs (``scheme://``) need a host.
    """

    @property
    def constraint_name(self) -> str:
        return "url"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, str):
            return _type_mismatch("string", value)

        invalid = CheckResult.invalid("Invalid url", IssueCode.INVALID_URL, constraint=self.constraint_name)
        if not value or any(c.isspace() for c in value):
            return invalid
        try:
            parsed = urlsplit(value)
            # Ports are only range-checked on access.
            parsed.port
            hostname = parsed.hostname
        except ValueError:
            return invalid
        if not _SCHEME.fullmatch(parsed.scheme):
            return invalid
        if value[len(parsed.scheme):].startswith("://") and not hostname:
            return invalid
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class URLProtocol(AtomicValidator):
    """Validate that a URL starts with ``<protocol>://`` for an allowed protocol."""
    protocols: tuple[str, ...] = ("http", "https")

    def __init__(self, protocols: Sequence[str] = ("http", "https")):
        object.__setattr__(self, "protocols", tuple(protocols))

    @property
    def constraint_name(self) -> str:
        return f"url_protocol[{', '.join(self.protocols)}]"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, str):
            return _type_mismatch("string", value)

        if not any(value.startswith(f"{protocol}://") for protocol in self.protocols):
            return CheckResult.invalid(
                f"URL must use one of these protocols: {', '.join(self.protocols)}",
                IssueCode.INVALID_URL,
                constraint=self.constraint_name,
            )
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class UUIDValidator(AtomicValidator):
    """Validate canonical (hyphenated) UUID strings."""

    @property
    def constraint_name(self) -> str:
        return "uuid"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, str):
            return _type_mismatch("string", value)

        if not _UUID.fullmatch(value):
            return CheckResult.invalid("Invalid uuid", IssueCode.INVALID_FORMAT, constraint=self.constraint_name)
        return CheckResult.valid()


# ============================================================================
# Collection Validators
# ============================================================================

@dataclass(frozen=True, slots=True)
class ListLength(AtomicValidator):
    """Validate list length constraints."""
    min_length: int | None = None
    max_length: int | None = None

    @property
    def constraint_name(self) -> str:
        parts = []
        if self.min_length is not None:
            parts.append(f"min={self.min_length}")
        if self.max_length is not None:
            parts.append(f"max={self.max_length}")
        return f"list_length[{', '.join(parts)}]" if parts else "list"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, (list, tuple)):
            return _type_mismatch("array", value)

        length = len(value)
        if self.min_length is not None and length < self.min_length:
            return CheckResult.invalid(
                f"Array must contain at least {self.min_length} element(s)",
                IssueCode.TOO_SHORT,
                constraint=self.constraint_name,
            )
        if self.max_length is not None and length > self.max_length:
            return CheckResult.invalid(
                f"Array must contain at most {self.max_length} element(s)",
                IssueCode.TOO_LONG,
                constraint=self.constraint_name,
            )
        return CheckResult.valid()


@dataclass(frozen=True, slots=True)
class UniqueItems(AtomicValidator):
    """Validate list contains unique (hashable) items."""

    @property
    def constraint_name(self) -> str:
        return "unique_items"

    def validate(self, value: Any) -> CheckResult:
        if not isinstance(value, (list, tuple)):
            return _type_mismatch("array", value)

        seen: set = set()
        duplicates = []
        for item in value:
            if item in seen:
                duplicates.append(item)
            seen.add(item)

        if duplicates:
            return CheckResult.invalid(
                f"Array contains duplicate items: {duplicates[:3]}",
                IssueCode.DUPLICATE,
                constraint=self.constraint_name,
            )
        return CheckResult.valid()


# ============================================================================
# Combinators
# ============================================================================

@dataclass(frozen=True, slots=True)
class WithMessage(AtomicValidator):
    """Wrapper to override the failure message (and optionally the code)."""
    validator: AtomicValidator
    message: str
    code: IssueCode | None = None

    @property
    def constraint_name(self) -> str:
        return self.validator.constraint_name

    def validate(self, value: Any) -> CheckResult:
        if (result := self.validator.validate(value)).is_valid: return result
        return CheckResult.invalid(self.message, self.code or result.code or IssueCode.CUSTOM,
            constraint=result.constraint)


@dataclass(frozen=True, slots=True)
class AllOf(AtomicValidator):
    """All validators must pass, checked in order; the first failure wins."""
    validators: tuple[AtomicValidator, ...]

    def __init__(self, *validators: AtomicValidator):
        object.__setattr__(self, "validators", tuple(validators))

    @property
    def constraint_name(self) -> str:
        return f"all_of[{', '.join(v.constraint_name for v in self.validators)}]"

    def validate(self, value: Any) -> CheckResult:
        for v in self.validators:
            if not (result := v.validate(value)).is_valid: return result
        return CheckResult.valid()


# ============================================================================
# Pydantic bridge
# ============================================================================

def check(validator: AtomicValidator) -> AfterValidator:
    """Run ``validator`` as a pydantic AfterValidator.

    Failures raise PydanticCustomError so the IssueCode survives as the
    pydantic error ``type`` and the message is reported verbatim.
    """
    def run(value: Any) -> Any:
        result = validator.validate(value)
        if not result.is_valid:
            code = result.code or IssueCode.CUSTOM
            raise PydanticCustomError(code.value, result.message or "Invalid input")
        return value
    return AfterValidator(run)
