"""Eager backfill of slugs and usernames for legacy entities."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from inkwell.core.progress import BatchProgress

from .posts import PostService
from .users import UserService

logger = structlog.get_logger()


@dataclass
class BackfillReport:
    """Tokens assigned by one backfill run, keyed by entity id."""

    post_slugs: dict[str, str] = field(default_factory=dict)
    usernames: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.post_slugs) + len(self.usernames)


class BackfillJob:
    """Assign tokens to every post and user that lacks one.

    Oldest entities are processed first so they keep the unsuffixed token.
    Once a run completes, read-time fallback scans only find entities
    created by writers that bypass the services.
    """

    def __init__(
        self,
        posts: PostService,
        users: UserService,
        progress: BatchProgress | None = None,
    ) -> None:
        self.posts = posts
        self.users = users
        self.progress = progress

    async def run(self) -> BackfillReport:
        report = BackfillReport()

        legacy_posts = await self.posts.posts.list_missing_slug()
        async for post, slug in self._each(legacy_posts, self.posts.ensure_post_slug, "Posts"):
            report.post_slugs[post] = slug

        legacy_users = await self.users.users.list_missing_username()
        async for user, username in self._each(legacy_users, self.users.ensure_username, "Users"):
            report.usernames[user] = username

        logger.info(
            "backfill_complete",
            posts=len(report.post_slugs),
            users=len(report.usernames),
        )
        return report

    async def _each(self, entities, func, description):
        ids = [entity.id for entity in entities]
        if self.progress is None:
            for entity_id in ids:
                yield entity_id, await func(entity_id)
            return
        async for entity_id, token in self.progress.track(ids, func, description=description):
            yield entity_id, token
