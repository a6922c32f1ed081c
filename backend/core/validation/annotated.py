"""Annotated Type Transformers

Normalizers that run around pydantic's own type check. Transformers leave
non-string input untouched so the type check still reports it.

Usage:
    Email = Annotated[str, Trimmed, check(email_format), Lowered]
"""
from __future__ import annotations

from pydantic import AfterValidator, BeforeValidator

_trim = lambda v: v.strip() if isinstance(v, str) else v
_lower = lambda v: v.lower() if isinstance(v, str) else v

# Trimming happens before the type check so " x " and "x" validate alike.
Trimmed = BeforeValidator(_trim)
# Lowercasing happens after checks run on the caller's spelling.
Lowered = AfterValidator(_lower)
LowerCaseItems = AfterValidator(lambda items: [_lower(item) for item in items])
