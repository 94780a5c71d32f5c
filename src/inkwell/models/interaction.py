"""Per-user post interactions: claps and bookmarks."""

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class PostClap(SQLModel, table=True):
    """One user's clap on one post."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    post_id: str = Field(index=True)
    user_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Bookmark(SQLModel, table=True):
    """A post saved for later by one user."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    post_id: str = Field(index=True)
    user_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
