"""Post authoring, reading and search."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

import structlog

from inkwell.core.config import BlogConfig
from inkwell.core.errors import NotFound, ValidationError
from inkwell.core.slug import POST_FALLBACK, SlugGenerator
from inkwell.identifiers import IdentifierAssignmentService
from inkwell.models import Post
from inkwell.services.storage import PostRepository, UserRepository

from .auth import AuthProvider, require_owner, require_user
from .views import AuthorSummary, PostView

logger = structlog.get_logger()

_TAG = re.compile(r"<[^>]+>")


def strip_tags(html: str) -> str:
    """Drop markup from serialized editor HTML."""
    return _TAG.sub("", html)


def make_excerpt(content: str, length: int) -> str:
    """Plain-text preview of post content."""
    return strip_tags(content)[:length] + "…"


def _require_text(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationError(field, f"{field.capitalize()} cannot be empty")
    return value


class PostService:
    """Create, update, delete and read posts for the current user."""

    def __init__(
        self,
        config: BlogConfig,
        posts: PostRepository,
        users: UserRepository,
        auth: AuthProvider,
    ) -> None:
        self.config = config
        self.posts = posts
        self.users = users
        self.auth = auth
        self.slugs = IdentifierAssignmentService(
            posts,
            SlugGenerator(POST_FALLBACK, config.slug_max_length),
            config.slug_max_attempts,
        )

    async def create(
        self,
        title: str,
        content: str,
        excerpt: str | None = None,
        featured_image: str | None = None,
    ) -> Post:
        """Publish a post owned by the current user."""
        user_id = require_user(self.auth)
        _require_text("title", title)
        _require_text("content", content)

        slug = await self.slugs.assign_on_create(title)
        now = datetime.now(UTC)
        post = Post(
            title=title,
            slug=slug,
            content=content,
            excerpt=excerpt if excerpt is not None else make_excerpt(content, self.config.excerpt_length),
            featured_image=featured_image,
            author_id=user_id,
            created_at=now,
            updated_at=now,
        )
        post = await self.posts.insert(post)
        logger.info("post_created", post_id=post.id, slug=slug, author_id=user_id)
        return post

    async def update(
        self,
        post_id: str,
        title: str | None = None,
        content: str | None = None,
        excerpt: str | None = None,
        featured_image: str | None = None,
    ) -> Post:
        """Edit a post; a changed title re-slugs it."""
        user_id = require_user(self.auth)
        existing = await self.posts.get(post_id)
        if existing is None:
            raise NotFound("post", post_id)
        require_owner(existing.author_id, user_id, "edit", "post")

        patch: dict[str, Any] = {"updated_at": datetime.now(UTC)}
        if title is not None:
            patch["title"] = _require_text("title", title)
            if title != existing.title or existing.slug is None:
                patch["slug"] = await self.slugs.assign_on_rename(post_id, title)
        if content is not None:
            patch["content"] = _require_text("content", content)
        if excerpt is not None:
            patch["excerpt"] = excerpt
        if featured_image is not None:
            patch["featured_image"] = featured_image or None

        updated = await self.posts.patch(post_id, patch)
        if updated is None:
            raise NotFound("post", post_id)
        if "slug" in patch and patch["slug"] != existing.slug:
            logger.info("post_reslugged", post_id=post_id, old=existing.slug, new=patch["slug"])
        return updated

    async def remove(self, post_id: str) -> None:
        """Delete a post along with its comments, claps and bookmarks."""
        user_id = require_user(self.auth)
        existing = await self.posts.get(post_id)
        if existing is None:
            raise NotFound("post", post_id)
        require_owner(existing.author_id, user_id, "delete", "post")

        await self.posts.delete_with_dependents(post_id)
        logger.info("post_deleted", post_id=post_id, slug=existing.slug)

    async def list_posts(self) -> list[Post]:
        """All posts, newest first."""
        return await self.posts.list_all()

    async def list_by_author(self, author_id: str) -> list[Post]:
        return await self.posts.list_by_author(author_id)

    async def get(self, post_id: str) -> PostView | None:
        post = await self.posts.get(post_id)
        if post is None:
            return None
        return await self._view(post)

    async def get_by_slug(self, slug: str) -> PostView | None:
        """Resolve a slug, including legacy posts that never stored one.

        Slug history is not kept: once a post is renamed its old slug resolves
        to None, even if another post holds a suffixed form such as
        ``my-first-post-1``.
        """
        entry = await self.slugs.resolve_on_read(slug)
        if entry is None:
            logger.debug("post_slug_not_found", slug=slug)
            return None
        post = await self.posts.get(entry.entity_id)
        if post is None:
            return None
        return await self._view(post)

    async def ensure_post_slug(self, post_id: str) -> str:
        """Persist a slug on a legacy post; returns the stored slug."""
        post = await self.posts.get(post_id)
        if post is None:
            raise NotFound("post", post_id)
        if post.slug:
            return post.slug

        slug = await self.slugs.assign_on_rename(post_id, post.title)
        await self.posts.patch(post_id, {"slug": slug})
        logger.info("slug_backfilled", post_id=post_id, slug=slug)
        return slug

    async def search(self, query: str) -> list[Post]:
        """Case-insensitive substring match over title, excerpt and text, newest first."""
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            post
            for post in await self.posts.list_all()
            if needle in post.title.lower()
            or needle in (post.excerpt or "").lower()
            or needle in strip_tags(post.content).lower()
        ]

    async def _view(self, post: Post) -> PostView:
        author = await self.users.get(post.author_id)
        user_id = self.auth.get_current_user_id()
        return PostView(
            post=post,
            author=AuthorSummary.from_user(author) if author else None,
            can_edit=bool(user_id) and post.author_id == user_id,
            needs_backfill=post.slug is None,
        )
