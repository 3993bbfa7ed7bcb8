"""Post store service package."""

from .errors import (
    AlreadyLikedError,
    InvalidPostFieldError,
    NotLikedError,
    NotPostAuthorError,
    PostNotFoundError,
    PostStoreError,
)
from .ports import CallerIdentity, Clock, IdentitySource, SystemClock
from .schemas import CommentRecord, PostRecord
from .store import PostStore

__all__ = [
    "PostStore",
    "PostRecord",
    "CommentRecord",
    "IdentitySource",
    "Clock",
    "CallerIdentity",
    "SystemClock",
    "PostStoreError",
    "PostNotFoundError",
    "NotPostAuthorError",
    "InvalidPostFieldError",
    "AlreadyLikedError",
    "NotLikedError",
]
