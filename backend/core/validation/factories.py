"""Reusable Field Schemas

Factories for the field types shared across entities (bounded text,
URLs) and the ready-made pagination, id and email schemas.
"""
from __future__ import annotations

import re
from typing import Annotated, Sequence

from .annotated import Lowered, Trimmed
from .coercion import CoercedInt
from .constraints import COMMON_CONSTRAINTS, TextBounds
from .errors import IssueCode
from .schema import FieldSchema
from .validators import (
    AllOf,
    NonEmpty,
    NumericRange,
    RegexPattern,
    StringLength,
    URLProtocol,
    URLValidator,
    UUIDValidator,
    check,
)

_EMAIL_PATTERN = r"(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}"


def create_text_schema(bounds: TextBounds, field_name: str) -> FieldSchema[str]:
    """Trimmed text between ``bounds.min`` and ``bounds.max`` characters.

    Messages name the field, e.g. ``"Title is required"``.
    """
    return FieldSchema(
        Annotated[str, Trimmed, check(AllOf(
            NonEmpty().with_message(f"{field_name} is required"),
            StringLength(min_length=bounds.min).with_message(f"{field_name} is required"),
            StringLength(max_length=bounds.max).with_message(
                f"{field_name} must be no more than {bounds.max} characters"
            ),
        ))],
        name=field_name,
    )


def create_url_schema(protocols: Sequence[str] = ("http", "https")) -> FieldSchema[str]:
    """Absolute URL whose scheme is one of ``protocols``."""
    return FieldSchema(
        Annotated[str, check(AllOf(
            URLValidator().with_message("Invalid URL format"),
            URLProtocol(protocols),
        ))],
        name="url",
    )


def limit_schema_with_default(default: int) -> FieldSchema[int]:
    """Page size in [1, 100]; ``default`` applies when the key is absent."""
    bounds = COMMON_CONSTRAINTS.pagination
    return FieldSchema(
        Annotated[CoercedInt, check(AllOf(
            NumericRange(min_value=COMMON_CONSTRAINTS.positive_int.min).with_message("Limit must be at least 1"),
            NumericRange(max_value=bounds.max).with_message(f"Limit cannot exceed {bounds.max}"),
        ))],
        name="limit",
        default=default,
    )


limit_schema = limit_schema_with_default(20)

offset_schema = FieldSchema(
    Annotated[CoercedInt, check(
        NumericRange(min_value=COMMON_CONSTRAINTS.pagination.min).with_message("Offset must be non-negative")
    )],
    name="offset",
    default=0,
)

id_schema = FieldSchema(
    Annotated[str, check(UUIDValidator().with_message("Invalid ID format"))],
    name="id",
)

email_schema = FieldSchema(
    Annotated[str, Trimmed, check(
        RegexPattern(_EMAIL_PATTERN, re.IGNORECASE | re.ASCII, description="email", code=IssueCode.INVALID_EMAIL)
        .with_message("Please enter a valid email address")
    ), Lowered],
    name="email",
)
