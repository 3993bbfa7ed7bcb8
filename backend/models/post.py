"""Post domain model."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy import BigInteger, Column, Index, String, Text
from sqlmodel import Field, SQLModel

MAX_POST_TITLE_LENGTH = 200
MAX_POST_CONTENT_LENGTH = 5000
MAX_POST_IMAGE_LENGTH = 2048
MAX_CALLER_ID_LENGTH = 255


class Post(SQLModel, table=True):
    """Authored post; its like count is derived from the likes table."""

    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_created_at_id", "created_at", "id"),)

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        sa_column=Column(String(36), primary_key=True),
    )
    author_id: str = Field(
        sa_column=Column(String(MAX_CALLER_ID_LENGTH), nullable=False, index=True)
    )
    title: str = Field(
        sa_column=Column(String(MAX_POST_TITLE_LENGTH), nullable=False)
    )
    content: str = Field(sa_column=Column(Text, nullable=False))
    image: str = Field(
        sa_column=Column(String(MAX_POST_IMAGE_LENGTH), nullable=False)
    )
    # Nanosecond timestamps from the store clock.
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False))
    updated_at: int | None = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )
