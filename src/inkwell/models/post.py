"""Post model."""

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Post(SQLModel, table=True):
    """A published article owned by one author."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str
    slug: str | None = Field(default=None, index=True)  # None for legacy posts
    content: str  # Serialized HTML from the editor
    excerpt: str | None = None
    featured_image: str | None = None
    author_id: str = Field(index=True)
    claps: int = 0
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
