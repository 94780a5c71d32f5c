"""Service wiring for one blog database and one auth collaborator."""

from __future__ import annotations

import structlog

from inkwell.core.config import BlogConfig
from inkwell.core.progress import BatchProgress
from inkwell.services import (
    AuthProvider,
    BackfillJob,
    CommentService,
    InteractionService,
    PostService,
    StaticAuth,
    UserService,
)
from inkwell.services.storage import BlogDatabase

logger = structlog.get_logger()


class Blog:
    """Entry point used by request handlers and the CLI."""

    def __init__(
        self,
        config: BlogConfig,
        auth: AuthProvider | None = None,
        database: BlogDatabase | None = None,
    ) -> None:
        """Initialize the services.

        Args:
            config: Application configuration.
            auth: Current-user provider. Defaults to an anonymous StaticAuth.
            database: Existing database to share; created from config if None.
        """
        self.config = config
        self.auth = auth if auth is not None else StaticAuth()
        self.db = database or BlogDatabase(config)

        self.posts = PostService(config, self.db.posts, self.db.users, self.auth)
        self.users = UserService(config, self.db.users, self.db.posts, self.auth)
        self.comments = CommentService(self.db.comments, self.db.posts, self.db.users, self.auth)
        self.interactions = InteractionService(
            self.db.interactions, self.db.posts, self.db.users, self.auth
        )

    def backfill_job(self, progress: BatchProgress | None = None) -> BackfillJob:
        return BackfillJob(self.posts, self.users, progress)

    async def close(self) -> None:
        await self.db.close()
