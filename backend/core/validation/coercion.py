"""Explicit Opt-in Coercion System

Coercion rules are explicit and opt-in, NEVER implicit. Query strings
arrive as text, so pagination fields opt into string-to-int coercion;
everything else keeps pydantic's type checks.

Features:
- Type-safe coercion with Result types
- No silent data loss: ``"2.5"`` and ``true`` are rejected, not truncated
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

from core.errors import Err, Ok, Result

from .errors import IssueCode

T = TypeVar("T")
S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class CoercionFailure:
    message: str
    code: IssueCode = IssueCode.INVALID_TYPE


class CoercionRule(ABC, Generic[S, T]):
    """Base class for coercion rules.

    Each rule defines:
    - Target type it coerces to
    - The actual coercion logic, returning a Result
    """

    @property
    @abstractmethod
    def target_type(self) -> type[T]:
        """Type this rule coerces to."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, CoercionFailure]:
        """Coerce value to target type. Returns Result."""

    def __call__(self, value: Any) -> Result[T, CoercionFailure]:
        return self.coerce(value)


@dataclass(frozen=True, slots=True)
class StringToInt(CoercionRule[Any, int]):
    """Coerce decimal strings and integral floats to int.

    ``" 25 "`` -> 25, ``25.0`` -> 25, ``""`` -> 0; ``"abc"``, ``"2.5"`` and
    booleans fail with ``invalid_type``.
    """

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> Result[int, CoercionFailure]:
        if isinstance(value, bool):
            return Err(CoercionFailure("Expected number, received boolean"))
        if isinstance(value, int):
            return Ok(value)
        if isinstance(value, float):
            if value.is_integer():
                return Ok(int(value))
            return Err(CoercionFailure("Expected integer, received float"))
        if isinstance(value, str):
            stripped = value.strip()
            # A blank query value (`?offset=`) counts as zero.
            if not stripped:
                return Ok(0)
            if "_" in stripped:
                return Err(CoercionFailure("Expected number, received nan"))
            try:
                return Ok(int(stripped))
            except ValueError:
                pass
            try:
                number = float(stripped)
            except ValueError:
                return Err(CoercionFailure("Expected number, received nan"))
            if number.is_integer():
                return Ok(int(number))
            return Err(CoercionFailure("Expected integer, received float"))
        return Err(CoercionFailure(f"Expected number, received {type(value).__name__}"))


def _make_coercing_validator(rule: CoercionRule):
    """Create a BeforeValidator body that applies ``rule``."""
    def validate(v: Any) -> Any:
        result = rule.coerce(v)
        if result.is_err():
            failure = result.unwrap_err()
            raise PydanticCustomError(failure.code.value, failure.message)
        return result.unwrap()
    return validate


CoercedInt = Annotated[int, BeforeValidator(_make_coercing_validator(StringToInt()))]
