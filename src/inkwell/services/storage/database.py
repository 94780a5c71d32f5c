"""Engine setup and repository wiring for the blog entity store."""

from __future__ import annotations

import gc

import structlog
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from inkwell import models  # noqa: F401  (registers tables on SQLModel.metadata)
from inkwell.core.config import BlogConfig

from .comment_repository import CommentRepository
from .interaction_repository import InteractionRepository
from .post_repository import PostRepository
from .user_repository import UserRepository

logger = structlog.get_logger()


class BlogDatabase:
    """Own the SQL engine and the repositories built on it."""

    def __init__(self, config: BlogConfig) -> None:
        """Create the engine and ensure tables exist.

        Args:
            config: Application configuration; only ``database_url`` is used here.
        """
        self.config = config
        # NullPool keeps file-backed DuckDB databases from holding stale connections
        self._engine = create_engine(config.database_url, poolclass=NullPool)
        SQLModel.metadata.create_all(self._engine)
        logger.info("database_init", url=config.database_url)

        self.posts = PostRepository(self._engine)
        self.users = UserRepository(self._engine)
        self.comments = CommentRepository(self._engine)
        self.interactions = InteractionRepository(self._engine)

    async def close(self) -> None:
        """Dispose of the database engine."""
        self.close_sync()

    def close_sync(self) -> None:
        """Synchronously dispose of the database engine."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

        gc.collect()
