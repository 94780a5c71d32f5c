"""Database persistence for post claps and bookmarks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import Session, col, select

from inkwell.models import Bookmark, Post, PostClap

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


class InteractionRepository(AsyncRepository[PostClap]):
    """Persist per-user claps and bookmarks on posts."""

    model = PostClap

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def toggle_post_clap(self, post_id: str, user_id: str) -> tuple[int, bool] | None:
        """Add or remove a user's clap; returns (claps, has_clapped) or None if the post is gone."""

        def _toggle(session: Session) -> tuple[int, bool] | None:
            post = session.get(Post, post_id)
            if post is None:
                return None
            existing = session.exec(
                select(PostClap).where(PostClap.post_id == post_id, PostClap.user_id == user_id)
            ).first()
            if existing:
                session.delete(existing)
                post.claps = max(0, post.claps - 1)
                clapped = False
            else:
                session.add(PostClap(post_id=post_id, user_id=user_id))
                post.claps += 1
                clapped = True
            session.add(post)
            session.commit()
            return post.claps, clapped

        return await self._run_session(_toggle)

    async def has_clapped(self, post_id: str, user_id: str) -> bool:
        def _get(session: Session) -> bool:
            statement = select(PostClap).where(
                PostClap.post_id == post_id, PostClap.user_id == user_id
            )
            return session.exec(statement).first() is not None

        return await self._run_session(_get)

    async def toggle_bookmark(self, post_id: str, user_id: str) -> bool:
        """Add or remove a bookmark; returns whether the post is now bookmarked."""

        def _toggle(session: Session) -> bool:
            existing = session.exec(
                select(Bookmark).where(Bookmark.post_id == post_id, Bookmark.user_id == user_id)
            ).first()
            if existing:
                session.delete(existing)
                session.commit()
                return False
            session.add(Bookmark(post_id=post_id, user_id=user_id))
            session.commit()
            return True

        return await self._run_session(_toggle)

    async def has_bookmarked(self, post_id: str, user_id: str) -> bool:
        def _get(session: Session) -> bool:
            statement = select(Bookmark).where(
                Bookmark.post_id == post_id, Bookmark.user_id == user_id
            )
            return session.exec(statement).first() is not None

        return await self._run_session(_get)

    async def bookmarks_for(self, user_id: str) -> list[Bookmark]:
        """A user's bookmarks, newest first."""

        def _get(session: Session) -> list[Bookmark]:
            statement = (
                select(Bookmark)
                .where(Bookmark.user_id == user_id)
                .order_by(col(Bookmark.created_at).desc())
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)
