"""Read models handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from inkwell.core.slug import USER_FALLBACK, normalize
from inkwell.models import Comment, Post, User

ANONYMOUS_NAME = "Anonymous"


def author_handle(user: User | None) -> str:
    """Profile link token: stored username, else normalized name, else short id."""
    if user is None:
        return "anonymous"
    if user.username:
        return user.username
    if user.name:
        return normalize(user.name, USER_FALLBACK)
    return user.id[-8:]


@dataclass(frozen=True)
class AuthorSummary:
    """Public fields of a post or comment author."""

    id: str
    name: str
    handle: str
    image: str | None = None

    @classmethod
    def from_user(cls, user: User) -> AuthorSummary:
        return cls(
            id=user.id,
            name=user.name or ANONYMOUS_NAME,
            handle=author_handle(user),
            image=user.image,
        )


@dataclass
class PostView:
    """A post with its author and the viewer's permissions."""

    post: Post
    author: AuthorSummary | None
    can_edit: bool = False
    needs_backfill: bool = False

    @property
    def slug(self) -> str | None:
        return self.post.slug


@dataclass
class ProfileView:
    """A public profile page: the user and their posts."""

    user: User
    posts: list[Post] = field(default_factory=list)
    is_self: bool = False
    needs_backfill: bool = False

    @property
    def username(self) -> str:
        return author_handle(self.user)


@dataclass
class CommentNode:
    """A comment with its author and direct replies."""

    comment: Comment
    author: AuthorSummary | None
    replies: list[CommentNode] = field(default_factory=list)
    can_edit: bool = False
    has_clapped: bool = False


@dataclass(frozen=True)
class ClapState:
    """Clap count after a toggle and whether the viewer now claps."""

    claps: int
    has_clapped: bool
