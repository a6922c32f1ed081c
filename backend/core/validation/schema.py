"""Core Schema System

Two building blocks:

- FieldSchema: one annotated pydantic type (a single scalar or list field)
  with ``parse`` / ``safe_parse``; its ``annotation`` drops straight into a
  model field.
- RequestSchema / StrictSchema: pydantic models for request envelopes.
  Strict schemas reject unknown keys; both only accept the wire names
  (``tagList``), never the Python attribute names.

``safe_parse`` never raises for malformed input: it returns either
ValidationSuccess(data) or ValidationFailure(error).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, Literal, Self, TypeVar, Union

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.errors import Err, Ok
from core.logging import validation_logger

from .errors import ValidationError
from .validators import AtomicValidator, check

T = TypeVar("T")
M = TypeVar("M", bound=PydanticBaseModel)


@dataclass(frozen=True)
class ValidationSuccess(Generic[T]):
    data: T
    success: Literal[True] = field(default=True, init=False)

    def to_result(self) -> Ok[T]:
        return Ok(self.data)


@dataclass(frozen=True)
class ValidationFailure:
    error: ValidationError
    success: Literal[False] = field(default=False, init=False)

    def to_result(self) -> Err[ValidationError]:
        return Err(self.error)


ValidationResult = Union[ValidationSuccess[T], ValidationFailure]


def _failure(name: str, exc: PydanticValidationError) -> ValidationFailure:
    error = ValidationError.from_pydantic(exc)
    # Paths and codes only: values may hold passwords or emails.
    validation_logger().debug(
        "validation_failed",
        schema=name,
        issues=[{"path": issue.field, "code": issue.code.value} for issue in error.issues],
    )
    return ValidationFailure(error)


class FieldSchema(Generic[T]):
    """Validator and normalizer for a single value.

    Usage:
        title = FieldSchema(Annotated[str, Trimmed, check(NonEmpty())], name="title")
        title.parse("  Hello ")  # "Hello"
    """

    def __init__(self, annotation: Any, *, name: str | None = None, default: Any = None):
        self.annotation = annotation
        self.name = name or "field"
        self.default = default
        self._adapter: TypeAdapter[T] = TypeAdapter(annotation)

    def __repr__(self) -> str:
        return f"FieldSchema({self.name})"

    def refine(self, validator: AtomicValidator) -> FieldSchema[T]:
        """New schema that also runs ``validator`` after the existing checks."""
        return FieldSchema(Annotated[self.annotation, check(validator)], name=self.name, default=self.default)

    def parse(self, value: Any) -> T:
        """Return the normalized value or raise ValidationError."""
        try:
            return self._adapter.validate_python(value)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

    def safe_parse(self, value: Any) -> ValidationResult[T]:
        try:
            return ValidationSuccess(self._adapter.validate_python(value))
        except PydanticValidationError as exc:
            return _failure(self.name, exc)


def safe_parse(model: type[M], data: Any) -> ValidationResult[M]:
    """Validate ``data`` against ``model`` without raising."""
    try:
        return ValidationSuccess(model.model_validate(data))
    except PydanticValidationError as exc:
        return _failure(model.__name__, exc)


class RequestSchema(PydanticBaseModel):
    """Base model for request envelopes; unknown keys are dropped."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=False,
        validate_default=False,
        str_strip_whitespace=False,
    )

    @classmethod
    def parse(cls, data: Any) -> Self:
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

    @classmethod
    def safe_parse(cls, data: Any) -> ValidationResult[Self]:
        return safe_parse(cls, data)


class StrictSchema(RequestSchema):
    """Request entity that rejects any key it does not declare."""

    model_config = ConfigDict(extra="forbid")
