import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Comment(SQLModel, table=True):
    """A comment on a post, optionally replying to another comment."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    post_id: str = Field(index=True)
    author_id: str = Field(index=True)
    parent_id: str | None = Field(default=None, index=True)
    content: str
    claps: int = 0  # Denormalized from CommentClap rows
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    edited_at: datetime | None = None


class CommentClap(SQLModel, table=True):
    """One user's clap on one comment."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    comment_id: str = Field(index=True)
    user_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
