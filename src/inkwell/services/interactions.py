"""Post claps and bookmarks."""

from __future__ import annotations

import structlog

from inkwell.core.errors import NotFound
from inkwell.services.storage import InteractionRepository, PostRepository, UserRepository

from .auth import AuthProvider, require_user
from .views import AuthorSummary, ClapState, PostView

logger = structlog.get_logger()


class InteractionService:
    """Toggle and query the current user's claps and bookmarks."""

    def __init__(
        self,
        interactions: InteractionRepository,
        posts: PostRepository,
        users: UserRepository,
        auth: AuthProvider,
    ) -> None:
        self.interactions = interactions
        self.posts = posts
        self.users = users
        self.auth = auth

    async def toggle_clap(self, post_id: str) -> ClapState:
        user_id = require_user(self.auth)
        result = await self.interactions.toggle_post_clap(post_id, user_id)
        if result is None:
            raise NotFound("post", post_id)
        claps, clapped = result
        logger.debug("post_clap_toggled", post_id=post_id, claps=claps, has_clapped=clapped)
        return ClapState(claps=claps, has_clapped=clapped)

    async def has_clapped(self, post_id: str) -> bool:
        user_id = self.auth.get_current_user_id()
        if not user_id:
            return False
        return await self.interactions.has_clapped(post_id, user_id)

    async def toggle_bookmark(self, post_id: str) -> bool:
        """Save or unsave a post; returns whether it is now bookmarked."""
        user_id = require_user(self.auth)
        if await self.posts.get(post_id) is None:
            raise NotFound("post", post_id)
        return await self.interactions.toggle_bookmark(post_id, user_id)

    async def has_bookmarked(self, post_id: str) -> bool:
        user_id = self.auth.get_current_user_id()
        if not user_id:
            return False
        return await self.interactions.has_bookmarked(post_id, user_id)

    async def bookmarked_posts(self) -> list[PostView]:
        """The current user's saved posts, most recently bookmarked first."""
        user_id = require_user(self.auth)
        bookmarks = await self.interactions.bookmarks_for(user_id)
        posts = {p.id: p for p in await self.posts.list_by_ids([b.post_id for b in bookmarks])}
        authors = await self.users.get_many([p.author_id for p in posts.values()])

        views = []
        for bookmark in bookmarks:
            post = posts.get(bookmark.post_id)
            if post is None:
                continue
            author = authors.get(post.author_id)
            views.append(
                PostView(
                    post=post,
                    author=AuthorSummary.from_user(author) if author else None,
                    can_edit=post.author_id == user_id,
                    needs_backfill=post.slug is None,
                )
            )
        return views
