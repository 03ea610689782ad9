"""
Pressroom Backend — Category SQLAlchemy Model
===============================================

What:  ORM model for the `categories` table.
Who:   Referenced by Article.category_id; managed through CategoryService.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pressroom.database import Base


class Category(Base):
    """A named bucket that groups articles. Referenced by zero or more articles."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
