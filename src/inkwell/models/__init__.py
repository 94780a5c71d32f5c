from .comment import Comment, CommentClap
from .interaction import Bookmark, PostClap
from .post import Post
from .user import User

__all__ = ["Bookmark", "Comment", "CommentClap", "Post", "PostClap", "User"]
