"""Auth collaborator interface and ownership checks."""

from __future__ import annotations

from typing import Protocol

from inkwell.core.errors import NotAuthorized, Unauthenticated


class AuthProvider(Protocol):
    """Reports who is making the current request."""

    def get_current_user_id(self) -> str | None: ...


class StaticAuth:
    """Auth provider with a fixed (or switchable) current user."""

    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id

    def get_current_user_id(self) -> str | None:
        return self.user_id

    def sign_in(self, user_id: str) -> None:
        self.user_id = user_id

    def sign_out(self) -> None:
        self.user_id = None


def require_user(auth: AuthProvider) -> str:
    """Return the current user id or raise Unauthenticated."""
    user_id = auth.get_current_user_id()
    if not user_id:
        raise Unauthenticated()
    return user_id


def require_owner(owner_id: str, user_id: str, action: str, kind: str) -> None:
    """Raise NotAuthorized unless ``user_id`` owns the entity."""
    if owner_id != user_id:
        raise NotAuthorized(action, kind)
