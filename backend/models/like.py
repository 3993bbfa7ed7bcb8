"""Post like model."""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, ForeignKey, Index, String
from sqlmodel import Field, SQLModel

from .post import MAX_CALLER_ID_LENGTH


class Like(SQLModel, table=True):
    """Tracks which callers liked which posts."""

    __tablename__ = "likes"
    __table_args__ = (
        Index("ix_likes_post_id_created_at", "post_id", "created_at"),
        Index("ix_likes_user_id_created_at", "user_id", "created_at"),
    )

    post_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    user_id: str = Field(
        sa_column=Column(String(MAX_CALLER_ID_LENGTH), primary_key=True)
    )
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False))
