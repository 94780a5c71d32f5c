"""Database persistence for comments and comment claps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete
from sqlmodel import Session, col, func, select

from inkwell.models import Comment, CommentClap

from .repository import AsyncRepository

if TYPE_CHECKING:
    from sqlalchemy import Engine


class CommentRepository(AsyncRepository[Comment]):
    """Persist and query comments."""

    model = Comment

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    async def list_by_post(self, post_id: str) -> list[Comment]:
        """All comments on a post, oldest first."""

        def _get(session: Session) -> list[Comment]:
            statement = (
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(col(Comment.created_at))
            )
            return list(session.exec(statement).all())

        return await self._run_session(_get)

    async def count_by_post(self, post_id: str) -> int:
        def _count(session: Session) -> int:
            statement = select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
            return int(session.exec(statement).one())

        return await self._run_session(_count)

    async def delete_thread(self, comment_id: str) -> None:
        """Delete a comment, its descendants and their claps."""

        def _delete(session: Session) -> None:
            doomed = [comment_id]
            frontier = [comment_id]
            while frontier:
                statement = select(Comment.id).where(col(Comment.parent_id).in_(frontier))
                frontier = list(session.exec(statement).all())
                doomed.extend(frontier)

            session.execute(delete(CommentClap).where(col(CommentClap.comment_id).in_(doomed)))
            session.execute(delete(Comment).where(col(Comment.id).in_(doomed)))
            session.commit()

        await self._run_session(_delete)

    async def toggle_clap(self, comment_id: str, user_id: str) -> tuple[int, bool] | None:
        """Add or remove a user's clap; returns (claps, has_clapped) or None if gone."""

        def _toggle(session: Session) -> tuple[int, bool] | None:
            comment = session.get(Comment, comment_id)
            if comment is None:
                return None
            existing = session.exec(
                select(CommentClap).where(
                    CommentClap.comment_id == comment_id,
                    CommentClap.user_id == user_id,
                )
            ).first()
            if existing:
                session.delete(existing)
                comment.claps = max(0, comment.claps - 1)
                clapped = False
            else:
                session.add(CommentClap(comment_id=comment_id, user_id=user_id))
                comment.claps += 1
                clapped = True
            session.add(comment)
            session.commit()
            return comment.claps, clapped

        return await self._run_session(_toggle)

    async def clapped_by(self, comment_ids: list[str], user_id: str) -> set[str]:
        """Subset of ``comment_ids`` the user has clapped."""
        if not comment_ids:
            return set()

        def _get(session: Session) -> set[str]:
            statement = select(CommentClap.comment_id).where(
                col(CommentClap.comment_id).in_(comment_ids),
                CommentClap.user_id == user_id,
            )
            return set(session.exec(statement).all())

        return await self._run_session(_get)
