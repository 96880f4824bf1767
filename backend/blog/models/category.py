"""
Blog Backend — Category SQLAlchemy Model
=========================================

What:  ORM model representing the `categories` table.
How:   Inherits from DeclarativeBase; the startup migrator and Alembic both read it.

The `posts` list shown in API responses is not a column or a relationship here:
CategoryService loads it with its own query at read time.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from blog.database import Base


class Category(Base):
    """A post category. Cannot be deleted while posts reference it."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Python-side default keeps sub-second precision for ordering;
    # CURRENT_TIMESTAMP covers rows inserted outside the ORM
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, title='{self.title}')>"
