"""Auth Session State

An explicit session object replaces the client's global auth store. The
store owns one immutable AuthSession snapshot and writes the durable part
of it (user, token, is_authenticated) through an injected SessionStorage;
``is_loading`` is transient and never persisted.

Usage:
    store = SessionStore(InMemorySessionStorage())
    store.set_token(token)
    store.set_user(AuthUser(id="42", username="jake"))
    store.logout()  # resets state and clears storage
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Protocol

from core.logging import auth_logger
from core.security import AuthUser

log = auth_logger()

DEFAULT_STORAGE_KEY = "auth-storage"


@dataclass(frozen=True, slots=True)
class AuthSession:
    user: AuthUser | None = None
    token: str | None = None
    is_authenticated: bool = False
    is_loading: bool = False

    def persisted(self) -> dict[str, Any]:
        """The subset of state that survives a restart."""
        return {
            "user": asdict(self.user) if self.user else None,
            "token": self.token,
            "is_authenticated": self.is_authenticated,
        }

    @classmethod
    def restore(cls, data: dict[str, Any]) -> AuthSession:
        user = data.get("user")
        return cls(
            user=AuthUser(**user) if user else None,
            token=data.get("token"),
            is_authenticated=bool(data.get("is_authenticated", False)),
        )


class SessionStorage(Protocol):
    """Persistence port for session state."""

    def load(self, key: str) -> dict[str, Any] | None: ...

    def save(self, key: str, state: dict[str, Any]) -> None: ...

    def clear(self, key: str) -> None: ...


class InMemorySessionStorage:
    """SessionStorage kept in a dict (tests, single-process use)."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def load(self, key: str) -> dict[str, Any] | None:
        state = self._data.get(key)
        return dict(state) if state is not None else None

    def save(self, key: str, state: dict[str, Any]) -> None:
        self._data[key] = dict(state)

    def clear(self, key: str) -> None:
        self._data.pop(key, None)


class SessionStore:
    """Holds the current AuthSession and keeps storage in sync."""

    def __init__(self, storage: SessionStorage, key: str = DEFAULT_STORAGE_KEY):
        self._storage = storage
        self._key = key
        saved = storage.load(key)
        self._state = AuthSession.restore(saved) if saved else AuthSession()

    @property
    def state(self) -> AuthSession:
        return self._state

    def _set(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        self._storage.save(self._key, self._state.persisted())

    def set_user(self, user: AuthUser) -> None:
        self._set(user=user, is_authenticated=True, is_loading=False)

    def set_token(self, token: str) -> None:
        self._set(token=token)

    def set_loading(self, is_loading: bool) -> None:
        self._set(is_loading=is_loading)

    def logout(self) -> None:
        self._state = AuthSession()
        self._storage.clear(self._key)
        log.debug("session_cleared", key=self._key)
