"""User profile model."""

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """A profile for an identity issued by the auth collaborator."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str | None = None
    email: str | None = Field(default=None, index=True)
    image: str | None = None  # Profile picture URL
    bio: str | None = None
    username: str | None = Field(default=None, index=True)  # None for legacy profiles
    username_chosen: bool = False  # Picked by the user; renames keep it
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
