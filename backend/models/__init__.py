"""SQLModel models package."""

from .comment import Comment
from .like import Like
from .post import (
    MAX_CALLER_ID_LENGTH,
    MAX_POST_CONTENT_LENGTH,
    MAX_POST_IMAGE_LENGTH,
    MAX_POST_TITLE_LENGTH,
    Post,
)

__all__ = [
    "Post",
    "Comment",
    "Like",
    "MAX_CALLER_ID_LENGTH",
    "MAX_POST_TITLE_LENGTH",
    "MAX_POST_CONTENT_LENGTH",
    "MAX_POST_IMAGE_LENGTH",
]
