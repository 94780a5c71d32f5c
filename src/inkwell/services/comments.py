"""Comments and threaded replies on posts."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime

import structlog

from inkwell.core.errors import NotFound, ValidationError
from inkwell.models import Comment
from inkwell.services.storage import CommentRepository, PostRepository, UserRepository

from .auth import AuthProvider, require_owner, require_user
from .views import AuthorSummary, ClapState, CommentNode

logger = structlog.get_logger()


def _require_content(content: str) -> str:
    text = content.strip()
    if not text:
        raise ValidationError("content", "Comment content cannot be empty")
    return text


def _top_level_ancestor(comment: Comment, by_id: dict[str, Comment]) -> str | None:
    """Id of the top-level comment a reply belongs to, or None if orphaned."""
    seen: set[str] = set()
    current = comment
    while current.parent_id is not None:
        if current.parent_id in seen or current.parent_id not in by_id:
            return None
        seen.add(current.id)
        current = by_id[current.parent_id]
    return current.id


class CommentService:
    """Create, edit, delete, clap and list comments for the current user."""

    def __init__(
        self,
        comments: CommentRepository,
        posts: PostRepository,
        users: UserRepository,
        auth: AuthProvider,
    ) -> None:
        self.comments = comments
        self.posts = posts
        self.users = users
        self.auth = auth

    async def create(self, post_id: str, content: str, parent_id: str | None = None) -> Comment:
        """Comment on a post, or reply to a comment on the same post."""
        user_id = require_user(self.auth)
        text = _require_content(content)
        if await self.posts.get(post_id) is None:
            raise NotFound("post", post_id)
        if parent_id is not None:
            parent = await self.comments.get(parent_id)
            if parent is None or parent.post_id != post_id:
                raise NotFound("comment", parent_id)

        now = datetime.now(UTC)
        comment = await self.comments.insert(
            Comment(
                post_id=post_id,
                author_id=user_id,
                parent_id=parent_id,
                content=text,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("comment_created", comment_id=comment.id, post_id=post_id, parent_id=parent_id)
        return comment

    async def _owned(self, comment_id: str, action: str) -> Comment:
        user_id = require_user(self.auth)
        comment = await self.comments.get(comment_id)
        if comment is None:
            raise NotFound("comment", comment_id)
        require_owner(comment.author_id, user_id, action, "comment")
        return comment

    async def update(self, comment_id: str, content: str) -> Comment:
        await self._owned(comment_id, "edit")
        text = _require_content(content)
        now = datetime.now(UTC)
        updated = await self.comments.patch(
            comment_id, {"content": text, "updated_at": now, "edited_at": now}
        )
        if updated is None:
            raise NotFound("comment", comment_id)
        return updated

    async def remove(self, comment_id: str) -> None:
        """Delete a comment together with its replies."""
        await self._owned(comment_id, "delete")
        await self.comments.delete_thread(comment_id)
        logger.info("comment_deleted", comment_id=comment_id)

    async def toggle_clap(self, comment_id: str) -> ClapState:
        user_id = require_user(self.auth)
        result = await self.comments.toggle_clap(comment_id, user_id)
        if result is None:
            raise NotFound("comment", comment_id)
        claps, clapped = result
        return ClapState(claps=claps, has_clapped=clapped)

    async def count_by_post(self, post_id: str) -> int:
        return await self.comments.count_by_post(post_id)

    async def list_by_post(self, post_id: str) -> list[CommentNode]:
        """Comment tree for a post.

        Top-level comments come newest first. Every reply, however deep, is
        listed oldest first under its top-level ancestor. Replies whose parent
        chain is broken are dropped.
        """
        comments = await self.comments.list_by_post(post_id)
        user_id = self.auth.get_current_user_id()
        authors = await self.users.get_many([c.author_id for c in comments])
        clapped = (
            await self.comments.clapped_by([c.id for c in comments], user_id) if user_id else set()
        )

        def node(comment: Comment) -> CommentNode:
            author = authors.get(comment.author_id)
            return CommentNode(
                comment=comment,
                author=AuthorSummary.from_user(author) if author else None,
                can_edit=bool(user_id) and comment.author_id == user_id,
                has_clapped=comment.id in clapped,
            )

        by_id = {c.id: c for c in comments}
        replies: dict[str, list[CommentNode]] = defaultdict(list)
        roots: list[CommentNode] = []
        for comment in comments:
            if comment.parent_id is None:
                roots.append(node(comment))
                continue
            ancestor = _top_level_ancestor(comment, by_id)
            if ancestor is not None:
                replies[ancestor].append(node(comment))

        for root in roots:
            root.replies = replies.get(root.comment.id, [])
        roots.sort(key=lambda n: n.comment.created_at, reverse=True)
        return roots
