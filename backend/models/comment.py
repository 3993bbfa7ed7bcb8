"""Post comment model."""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, ForeignKey, Index, Integer, String, Text
from sqlmodel import Field, SQLModel

from .post import MAX_CALLER_ID_LENGTH


class Comment(SQLModel, table=True):
    """Append-only comment attached to a post."""

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_post_id_id", "post_id", "id"),)

    id: int | None = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )
    post_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    author_id: str = Field(
        sa_column=Column(String(MAX_CALLER_ID_LENGTH), nullable=False)
    )
    content: str = Field(sa_column=Column(Text, nullable=False))
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False))
