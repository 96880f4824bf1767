"""
Blog Backend — Post SQLAlchemy Model
=====================================

What:  ORM model representing the `posts` table.

Table Design:
    - category_id: nullable FK to categories.id with ON DELETE RESTRICT, so a
      category cannot disappear from under its posts. SQLite only enforces it
      with `PRAGMA foreign_keys=ON` (see blog.database).
    - Index on created_at: every listing is ordered by it (newest first).
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from blog.database import Base


class Post(Base):
    """
    A blog post.

    Lifecycle:
        1. Created by POST /api/posts/ (id and created_at assigned here)
        2. Partially updated by PATCH; id and created_at never change
        3. Deleted by DELETE
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_posts_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, category_id={self.category_id}, "
            f"created_at='{self.created_at}')>"
        )
