"""Post existence, authorship and payload checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import (
    MAX_POST_CONTENT_LENGTH,
    MAX_POST_IMAGE_LENGTH,
    MAX_POST_TITLE_LENGTH,
    Post,
)
from services.posts.common import eq
from services.posts.errors import (
    InvalidPostFieldError,
    NotPostAuthorError,
    PostNotFoundError,
)

MAX_COMMENT_LENGTH = 500
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostFields:
    """Author-editable post fields after normalization."""

    title: str
    content: str
    image: str


def _normalize(value: str | None, label: str) -> str:
    if value is None:
        return ""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidPostFieldError(f"{label} must be valid UTF-8 text") from exc
    return value.strip()


async def require_post(
    session: AsyncSession,
    post_id: str,
    *,
    action: str | None = None,
) -> Post:
    """Return the stored post or raise PostNotFoundError."""
    result = await session.execute(
        select(Post).where(eq(Post.id, post_id)).limit(1)
    )
    post = result.scalar_one_or_none()
    if post is None:
        raise PostNotFoundError(post_id, action=action)
    return post


def require_author(post: Post, caller_id: str, *, action: str) -> None:
    """Raise NotPostAuthorError unless the caller wrote the post."""
    if post.author_id != caller_id:
        logger.warning(
            "Rejected post %s by non-author",
            action,
            extra={"post_id": post.id, "caller_id": caller_id},
        )
        raise NotPostAuthorError(post.id, action=action)


def normalize_post_payload(
    *,
    title: str | None,
    content: str | None,
    image: str | None,
    action: str,
) -> PostFields:
    """Strip and validate title, content and image.

    ``action`` completes the missing-field message, e.g. ``"creating"``.
    """
    fields = PostFields(
        title=_normalize(title, "Title"),
        content=_normalize(content, "Content"),
        image=_normalize(image, "Image"),
    )
    if not fields.title or not fields.content or not fields.image:
        raise InvalidPostFieldError(
            f"Title, content, and image are required for {action} a post."
        )

    limits = (
        ("Title", fields.title, MAX_POST_TITLE_LENGTH),
        ("Content", fields.content, MAX_POST_CONTENT_LENGTH),
        ("Image", fields.image, MAX_POST_IMAGE_LENGTH),
    )
    for label, value, limit in limits:
        if len(value) > limit:
            raise InvalidPostFieldError(f"{label} must be at most {limit} characters")
    return fields


def normalize_comment_content(content: str | None) -> str:
    normalized = _normalize(content, "Comment")
    if not normalized:
        raise InvalidPostFieldError("Comment content cannot be empty")
    if len(normalized) > MAX_COMMENT_LENGTH:
        raise InvalidPostFieldError(
            f"Comment must be at most {MAX_COMMENT_LENGTH} characters"
        )
    return normalized
