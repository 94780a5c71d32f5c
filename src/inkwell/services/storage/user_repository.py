"""Database persistence for user profiles; doubles as the username registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import Session, col, select

from inkwell.identifiers import TokenEntry
from inkwell.models import User

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


def _entry(user: User) -> TokenEntry:
    return TokenEntry(entity_id=user.id, source=user.name, token=user.username)


class UserRepository(AsyncRepository[User]):
    """Persist and query user profiles."""

    model = User

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def get_by_username(self, username: str) -> User | None:
        """Indexed exact-match lookup on the stored username."""

        def _get(session: Session) -> User | None:
            return session.exec(select(User).where(User.username == username)).first()

        return await self._run_session(_get)

    async def get_by_email(self, email: str) -> User | None:
        def _get(session: Session) -> User | None:
            return session.exec(select(User).where(User.email == email)).first()

        return await self._run_session(_get)

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        """Users keyed by id; unknown ids are absent from the result."""
        if not user_ids:
            return {}

        def _get(session: Session) -> dict[str, User]:
            statement = select(User).where(col(User.id).in_(sorted(set(user_ids))))
            return {user.id: user for user in session.exec(statement).all()}

        return await self._run_session(_get)

    async def list_missing_username(self) -> list[User]:
        """Legacy profiles without a stored username, oldest first."""

        def _get(session: Session) -> list[User]:
            statement = (
                select(User).where(col(User.username).is_(None)).order_by(col(User.created_at))
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    # ==================== Token registry ====================

    async def find_by_token(self, token: str) -> TokenEntry | None:
        user = await self.get_by_username(token)
        return _entry(user) if user else None

    async def list_entries(self) -> list[TokenEntry]:
        def _get(session: Session) -> list[TokenEntry]:
            statement = select(User).order_by(col(User.created_at))
            return [_entry(user) for user in session.exec(statement).all()]

        return await self._run_session(_get)
