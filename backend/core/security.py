"""Request Authentication Context

Bearer tokens are HS256 JWTs carrying a ``userId`` claim. Every request
gets a RequestContext; an absent, malformed or expired token yields an
anonymous context rather than an error, and routes that need a user
depend on ``require_user``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from fastapi import Depends, Header, Request
from jose import ExpiredSignatureError, JWTError, jwt

from core.config import get_settings, parse_duration
from core.errors import ApiError, Ok, Result, raise_error, unauthorized
from core.logging import auth_logger

log = auth_logger()

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True)
class AuthUser:
    id: str
    email: str | None = None
    username: str | None = None


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Per-request auth state handed to route handlers."""
    user: AuthUser | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def create_access_token(
    user_id: str, expires_delta: timedelta | None = None, **claims: Any
) -> str:
    """Sign a token for ``user_id``; lifetime defaults to ``auth.jwt.expires_in``."""
    jwt_config = get_settings().auth.jwt
    expires = expires_delta if expires_delta is not None else parse_duration(jwt_config.expires_in)
    payload = {
        **claims,
        "userId": user_id,
        "exp": datetime.now(timezone.utc) + expires,
    }
    return jwt.encode(payload, jwt_config.secret, algorithm=jwt_config.algorithm)


def decode_access_token(token: str) -> Result[AuthUser, ApiError]:
    """Verify signature and expiry, then read the user from the claims."""
    jwt_config = get_settings().auth.jwt
    try:
        claims = jwt.decode(token, jwt_config.secret, algorithms=[jwt_config.algorithm])
    except ExpiredSignatureError as exc:
        return unauthorized("Token has expired", cause=exc)
    except JWTError as exc:
        return unauthorized("Invalid token", cause=exc)

    user_id = claims.get("userId")
    if not isinstance(user_id, str) or not user_id:
        return unauthorized("Invalid token payload")
    return Ok(AuthUser(id=user_id, email=claims.get("email"), username=claims.get("username")))


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    token = authorization.removeprefix(BEARER_PREFIX).strip()
    return token or None


def create_context(authorization: str | None) -> RequestContext:
    """Build the request context from an ``Authorization`` header value."""
    if (token := extract_bearer_token(authorization)) is None:
        return RequestContext()

    result = decode_access_token(token)
    if result.is_err():
        log.info("invalid_token", reason=result.unwrap_err().message)
        return RequestContext()
    return RequestContext(user=result.unwrap(), token=token)


def get_request_context(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """FastAPI dependency: the auth context of the current request.

    The user id is left on ``request.state`` for the request log.
    """
    ctx = create_context(authorization)
    if ctx.user is not None:
        request.state.user_id = ctx.user.id
    return ctx


def require_user(
    ctx: Annotated[RequestContext, Depends(get_request_context)],
) -> AuthUser:
    """FastAPI dependency: the authenticated user, or a 401."""
    if ctx.user is None:
        raise_error(unauthorized("Authentication required").unwrap_err())
    return ctx.user
