"""Typed failures raised by post store operations."""

from __future__ import annotations


class PostStoreError(Exception):
    """Base class for a rejected post store operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PostNotFoundError(PostStoreError):
    """The referenced post id is absent."""

    def __init__(self, post_id: str, *, action: str | None = None) -> None:
        message = f"Post with id={post_id} not found"
        if action is not None:
            message = f"{message}. Unable to {action}."
        super().__init__(message)
        self.post_id = post_id


class NotPostAuthorError(PostStoreError):
    """The caller is not the author of the post."""

    def __init__(self, post_id: str, *, action: str) -> None:
        super().__init__(f"Only the author can {action} the post.")
        self.post_id = post_id


class InvalidPostFieldError(PostStoreError):
    """A required field is missing, blank or too long."""


class AlreadyLikedError(PostStoreError):
    """The caller already likes the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__("You've already liked this post.")
        self.post_id = post_id


class NotLikedError(PostStoreError):
    """The caller does not like the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__("You haven't liked this post.")
        self.post_id = post_id
