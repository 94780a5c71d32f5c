"""Database persistence for posts; doubles as the post slug registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete
from sqlmodel import Session, col, select

from inkwell.identifiers import TokenEntry
from inkwell.models import Bookmark, Comment, CommentClap, Post, PostClap

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


def _entry(post: Post) -> TokenEntry:
    return TokenEntry(entity_id=post.id, source=post.title, token=post.slug)


class PostRepository(AsyncRepository[Post]):
    """Persist and query posts."""

    model = Post

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def get_by_slug(self, slug: str) -> Post | None:
        """Indexed exact-match lookup on the stored slug."""

        def _get(session: Session) -> Post | None:
            return session.exec(select(Post).where(Post.slug == slug)).first()

        return await self._run_session(_get)

    async def list_all(self) -> list[Post]:
        """All posts, newest first."""

        def _get(session: Session) -> list[Post]:
            statement = select(Post).order_by(col(Post.created_at).desc())
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def list_by_author(self, author_id: str) -> list[Post]:
        """Posts by one author, newest first."""

        def _get(session: Session) -> list[Post]:
            statement = (
                select(Post)
                .where(Post.author_id == author_id)
                .order_by(col(Post.created_at).desc())
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def list_by_ids(self, post_ids: list[str]) -> list[Post]:
        """Posts with the given ids, in no particular order."""
        if not post_ids:
            return []

        def _get(session: Session) -> list[Post]:
            return list(session.exec(select(Post).where(col(Post.id).in_(post_ids))).all())

        return await self._run_session(_get)

    async def list_missing_slug(self) -> list[Post]:
        """Legacy posts created before slugs were stored, oldest first."""

        def _get(session: Session) -> list[Post]:
            statement = (
                select(Post).where(col(Post.slug).is_(None)).order_by(col(Post.created_at))
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def delete_with_dependents(self, post_id: str) -> None:
        """Delete a post with its comments, claps and bookmarks in one transaction."""

        def _delete(session: Session) -> None:
            comment_ids = select(Comment.id).where(Comment.post_id == post_id)
            session.execute(delete(CommentClap).where(col(CommentClap.comment_id).in_(comment_ids)))
            session.execute(delete(Comment).where(Comment.post_id == post_id))
            session.execute(delete(PostClap).where(PostClap.post_id == post_id))
            session.execute(delete(Bookmark).where(Bookmark.post_id == post_id))
            session.execute(delete(Post).where(Post.id == post_id))
            session.commit()

        await self._run_session(_delete)

    # ==================== Token registry ====================

    async def find_by_token(self, token: str) -> TokenEntry | None:
        post = await self.get_by_slug(token)
        return _entry(post) if post else None

    async def list_entries(self) -> list[TokenEntry]:
        def _get(session: Session) -> list[TokenEntry]:
            statement = select(Post).order_by(col(Post.created_at))
            return [_entry(post) for post in session.exec(statement).all()]

        return await self._run_session(_get)
