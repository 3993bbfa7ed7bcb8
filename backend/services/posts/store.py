"""Post store: author-gated mutation and per-caller like tracking."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, cast

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_unique_violation
from models import Comment, Like, Post
from services.post_policy import (
    normalize_comment_content,
    normalize_post_payload,
    require_author,
    require_post,
)

from .common import asc, eq, in_
from .errors import AlreadyLikedError, NotLikedError
from .ports import Clock, IdentitySource
from .schemas import CommentRecord, PostRecord

logger = logging.getLogger(__name__)


class PostStore:
    """Keyed post collection bound to one session, caller and clock.

    Every mutating operation runs its read-check-write sequence under
    ``write_lock`` and commits once, so mutations never interleave. Share one
    lock between all stores that write to the same database. Reads take no
    lock.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        identity: IdentitySource,
        clock: Clock,
        write_lock: asyncio.Lock,
    ) -> None:
        self.session = session
        self.identity = identity
        self.clock = clock
        self.write_lock = write_lock

    async def list_posts(self) -> list[PostRecord]:
        result = await self.session.execute(
            select(Post).order_by(asc(Post.created_at), asc(Post.id))
        )
        return await self._build_records(result.scalars().all())

    async def get_post(self, post_id: str) -> PostRecord:
        post = await require_post(self.session, post_id)
        return await self._build_record(post)

    async def get_comments(self, post_id: str) -> list[CommentRecord]:
        await require_post(self.session, post_id)
        comments_by_post = await self._collect_comments([post_id])
        return comments_by_post.get(post_id, [])

    async def get_liked_posts(self) -> list[PostRecord]:
        """Return every post the caller currently likes, possibly none."""
        caller_id = self.identity.current_caller()
        result = await self.session.execute(
            select(Post)
            .join(Like, eq(Like.post_id, Post.id))
            .where(eq(Like.user_id, caller_id))
            .order_by(asc(Post.created_at), asc(Post.id))
        )
        return await self._build_records(result.scalars().all())

    async def create_post(
        self,
        *,
        title: str | None,
        content: str | None,
        image: str | None,
    ) -> PostRecord:
        fields = normalize_post_payload(
            title=title,
            content=content,
            image=image,
            action="creating",
        )
        caller_id = self.identity.current_caller()

        async with self.write_lock:
            post = Post(
                author_id=caller_id,
                title=fields.title,
                content=fields.content,
                image=fields.image,
                created_at=self.clock.now(),
                updated_at=None,
            )
            self.session.add(post)
            await self._commit()

        logger.info("Post created", extra={"post_id": post.id, "caller_id": caller_id})
        return PostRecord.from_post(post, comments=[], liked=[])

    async def update_post(
        self,
        post_id: str,
        *,
        title: str | None,
        content: str | None,
        image: str | None,
    ) -> PostRecord:
        """Replace the editable fields; checks run existence, author, fields."""
        caller_id = self.identity.current_caller()

        async with self.write_lock:
            post = await require_post(self.session, post_id, action="update")
            require_author(post, caller_id, action="update")
            fields = normalize_post_payload(
                title=title,
                content=content,
                image=image,
                action="updating",
            )
            post.title = fields.title
            post.content = fields.content
            post.image = fields.image
            post.updated_at = self.clock.now()
            self.session.add(post)
            await self._commit()

        logger.info("Post updated", extra={"post_id": post_id, "caller_id": caller_id})
        return await self._build_record(post)

    async def delete_post(self, post_id: str) -> PostRecord:
        """Remove the post with its comments and likes; return it as it was."""
        caller_id = self.identity.current_caller()

        async with self.write_lock:
            post = await require_post(self.session, post_id, action="delete")
            require_author(post, caller_id, action="delete")
            removed = await self._build_record(post)

            await self.session.execute(delete(Like).where(eq(Like.post_id, post_id)))
            await self.session.execute(
                delete(Comment).where(eq(Comment.post_id, post_id))
            )
            await self.session.delete(post)
            await self._commit()

        logger.info("Post deleted", extra={"post_id": post_id, "caller_id": caller_id})
        return removed

    async def add_comment(self, post_id: str, content: str | None) -> CommentRecord:
        caller_id = self.identity.current_caller()

        async with self.write_lock:
            await require_post(self.session, post_id, action="add comment")
            comment = Comment(
                post_id=post_id,
                author_id=caller_id,
                content=normalize_comment_content(content),
                created_at=self.clock.now(),
            )
            self.session.add(comment)
            await self._commit()

        logger.info(
            "Comment added",
            extra={"post_id": post_id, "caller_id": caller_id},
        )
        return CommentRecord.from_comment(comment)

    async def like_post(self, post_id: str) -> int:
        """Record the caller's like and return the new like count."""
        caller_id = self.identity.current_caller()

        async with self.write_lock:
            await require_post(self.session, post_id, action="like")
            if await self._find_like(post_id, caller_id) is not None:
                raise AlreadyLikedError(post_id)

            self.session.add(
                Like(post_id=post_id, user_id=caller_id, created_at=self.clock.now())
            )
            try:
                await self.session.commit()
            except IntegrityError as exc:
                await self.session.rollback()
                if is_unique_violation(exc):
                    raise AlreadyLikedError(post_id) from exc
                raise
            like_count = await self._count_likes(post_id)

        logger.info("Post liked", extra={"post_id": post_id, "caller_id": caller_id})
        return like_count

    async def unlike_post(self, post_id: str) -> int:
        """Withdraw the caller's like and return the new like count."""
        caller_id = self.identity.current_caller()

        async with self.write_lock:
            await require_post(self.session, post_id, action="unlike")
            like = await self._find_like(post_id, caller_id)
            if like is None:
                raise NotLikedError(post_id)

            await self.session.delete(like)
            await self._commit()
            like_count = await self._count_likes(post_id)

        logger.info("Post unliked", extra={"post_id": post_id, "caller_id": caller_id})
        return like_count

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _find_like(self, post_id: str, caller_id: str) -> Like | None:
        result = await self.session.execute(
            select(Like)
            .where(eq(Like.post_id, post_id), eq(Like.user_id, caller_id))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def _count_likes(self, post_id: str) -> int:
        result = await self.session.execute(
            select(func.count(Like.user_id)).where(eq(Like.post_id, post_id))
        )
        return int(result.scalar_one())

    async def _collect_comments(
        self, post_ids: list[str]
    ) -> dict[str, list[CommentRecord]]:
        if not post_ids:
            return {}

        result = await self.session.execute(
            select(Comment)
            .where(in_(Comment.post_id, post_ids))
            .order_by(asc(Comment.post_id), asc(Comment.id))
        )
        comments_by_post: dict[str, list[CommentRecord]] = {}
        for comment in result.scalars().all():
            comments_by_post.setdefault(comment.post_id, []).append(
                CommentRecord.from_comment(comment)
            )
        return comments_by_post

    async def _collect_liked(self, post_ids: list[str]) -> dict[str, list[str]]:
        if not post_ids:
            return {}

        post_id_column = cast(ColumnElement[str], Like.post_id)
        user_id_column = cast(ColumnElement[str], Like.user_id)
        result = await self.session.execute(
            select(post_id_column, user_id_column)
            .where(in_(post_id_column, post_ids))
            .order_by(
                asc(post_id_column),
                asc(cast(Any, Like.created_at)),
                asc(user_id_column),
            )
        )
        liked_by_post: dict[str, list[str]] = {}
        for post_id, user_id in result.all():
            liked_by_post.setdefault(post_id, []).append(user_id)
        return liked_by_post

    async def _build_records(self, posts: Sequence[Post]) -> list[PostRecord]:
        post_ids = [post.id for post in posts]
        comments_by_post = await self._collect_comments(post_ids)
        liked_by_post = await self._collect_liked(post_ids)
        return [
            PostRecord.from_post(
                post,
                comments=comments_by_post.get(post.id, []),
                liked=liked_by_post.get(post.id, []),
            )
            for post in posts
        ]

    async def _build_record(self, post: Post) -> PostRecord:
        records = await self._build_records([post])
        return records[0]
