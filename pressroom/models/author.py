"""
Pressroom Backend — Author SQLAlchemy Model
=============================================

What:  ORM model for the `authors` table.
Who:   Referenced read-only by Article.author_id; managed through AuthorService.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pressroom.database import Base


class Author(Base):
    """
    Profile of a person who writes articles.

    email is unique; AuthorService checks it before insert so the client
    gets a 409 instead of a raw IntegrityError.
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, email='{self.email}')>"
