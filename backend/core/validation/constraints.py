"""Shared Field Constraints

Named bounds reused by the user, article and comment schemas so that the
same limits apply everywhere a given kind of text appears. The registry is
immutable; build a new instance if a deployment needs different limits.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextBounds:
    """Inclusive character bounds for a text field."""
    min: int
    max: int


@dataclass(frozen=True, slots=True)
class MinBound:
    min: int


@dataclass(frozen=True, slots=True)
class IntRange:
    min: int
    max: int


@dataclass(frozen=True, slots=True)
class TagBounds:
    min_items: int
    max_items: int
    max_tag_length: int


@dataclass(frozen=True, slots=True)
class CommonConstraints:
    # Text field lengths (database columns and UX)
    short_text: TextBounds = TextBounds(min=1, max=100)  # titles, names
    medium_text: TextBounds = TextBounds(min=1, max=255)  # descriptions
    long_text: TextBounds = TextBounds(min=1, max=1000)  # bios, comments
    very_long_text: TextBounds = TextBounds(min=1, max=50000)  # article bodies

    positive_int: MinBound = MinBound(min=1)
    pagination: IntRange = IntRange(min=0, max=100)

    tags: TagBounds = TagBounds(min_items=0, max_items=10, max_tag_length=20)


COMMON_CONSTRAINTS = CommonConstraints()
