from .auth import AuthProvider, StaticAuth, require_owner, require_user
from .backfill import BackfillJob, BackfillReport
from .comments import CommentService
from .interactions import InteractionService
from .posts import PostService, make_excerpt, strip_tags
from .users import UserService
from .views import AuthorSummary, ClapState, CommentNode, PostView, ProfileView, author_handle

__all__ = [
    "AuthProvider",
    "AuthorSummary",
    "BackfillJob",
    "BackfillReport",
    "ClapState",
    "CommentNode",
    "CommentService",
    "InteractionService",
    "PostService",
    "PostView",
    "ProfileView",
    "StaticAuth",
    "UserService",
    "author_handle",
    "make_excerpt",
    "require_owner",
    "require_user",
    "strip_tags",
]
