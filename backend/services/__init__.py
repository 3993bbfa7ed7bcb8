"""Business logic services."""

from .posts import (
    AlreadyLikedError,
    CallerIdentity,
    Clock,
    CommentRecord,
    IdentitySource,
    InvalidPostFieldError,
    NotLikedError,
    NotPostAuthorError,
    PostNotFoundError,
    PostRecord,
    PostStore,
    PostStoreError,
    SystemClock,
)

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
