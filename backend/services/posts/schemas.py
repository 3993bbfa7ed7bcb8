"""Post and comment records returned by the store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from models import Comment, Post


class CommentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    author: str
    content: str
    created_at: int

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentRecord":
        return cls(
            author=comment.author_id,
            content=comment.content,
            created_at=comment.created_at,
        )


class PostRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    author: str
    title: str
    content: str
    image: str
    created_at: int
    updated_at: int | None = None
    comments: list[CommentRecord] = Field(default_factory=list)
    likes: int = 0
    liked: list[str] = Field(default_factory=list)

    @classmethod
    def from_post(
        cls,
        post: Post,
        *,
        comments: list[CommentRecord] | None = None,
        liked: list[str] | None = None,
    ) -> "PostRecord":
        liked_ids = list(liked or [])
        return cls(
            id=post.id,
            author=post.author_id,
            title=post.title,
            content=post.content,
            image=post.image,
            created_at=post.created_at,
            updated_at=post.updated_at,
            comments=list(comments or []),
            likes=len(liked_ids),
            liked=liked_ids,
        )


CommentRecord.model_rebuild()
PostRecord.model_rebuild()
