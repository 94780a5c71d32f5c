from .comment_repository import CommentRepository
from .database import BlogDatabase
from .interaction_repository import InteractionRepository
from .post_repository import PostRepository
from .repository import AsyncRepository
from .user_repository import UserRepository

__all__ = [
    "AsyncRepository",
    "BlogDatabase",
    "CommentRepository",
    "InteractionRepository",
    "PostRepository",
    "UserRepository",
]
