"""
Pressroom Backend — Article SQLAlchemy Model
==============================================

What:  ORM model for the `articles` table and its three many-to-one relations.
Who:   Used by ArticleRepository / ArticleService.

Table Design Rationale:
    - category_id, author_id: required foreign keys. The service checks that
      the targets exist before writing, so SQLite (tests) and PostgreSQL
      behave the same.
    - photo_id: optional; ON DELETE SET NULL keeps the article if a photo row
      is ever removed out of band.
    - created_at / updated_at: UTC, timezone-aware.
    - Relationships are loaded explicitly through repository includes;
      nothing here is eager by default.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pressroom.database import Base
from pressroom.models.author import Author
from pressroom.models.category import Category
from pressroom.models.photo import Photo


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Article(Base):
    """A piece of content written by an author, filed under a category."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        nullable=False,
    )
    photo_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("photos.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    category: Mapped[Category] = relationship()
    author: Mapped[Author] = relationship()
    photo: Mapped[Optional[Photo]] = relationship()

    # Reference lookups used by the category/author delete guards
    __table_args__ = (
        Index("idx_articles_category_id", "category_id"),
        Index("idx_articles_author_id", "author_id"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title='{self.title}')>"
