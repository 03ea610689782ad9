"""
Pressroom Backend — Photo SQLAlchemy Model
============================================

What:  ORM model for the `photos` table.
Why:   Keeps uploaded file metadata in the database while the bytes stay in
       the blob store (files on disk are cheaper to serve than BLOB columns).

Lifecycle:
    1. Created only as a side effect of an article create/update carrying a file
    2. Owned by at most one article through Article.photo_id
    3. Deleted only together with its blob, when the owning article is deleted
       or its photo is replaced
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pressroom.database import Base


class Photo(Base):
    """Metadata row for one stored article photo."""

    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # What: Generated file name, e.g. 3f2b...9c.png (unique across the namespace)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # What: Path relative to STORAGE_ROOT, e.g. images/articles/3f2b...9c.png
    # Why relative: Portable between environments (Docker volume vs local dir)
    path: Mapped[str] = mapped_column(String(512), nullable=False)

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, path='{self.path}')>"
