"""Concrete repositories for each entity."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from pressroom.models import Article, Author, Category, Photo
from pressroom.repositories.base import Repository


class CategoryRepository(Repository[Category]):
    model = Category
    resource = "category"


class AuthorRepository(Repository[Author]):
    model = Author
    resource = "author"

    async def find_by_email(self, email: str) -> Optional[Author]:
        query = select(Author).where(func.lower(Author.email) == email.lower())
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("load", e)
        return result.scalars().first()


class PhotoRepository(Repository[Photo]):
    model = Photo
    resource = "photo"


class ArticleRepository(Repository[Article]):
    model = Article
    resource = "article"

    async def count_referencing(self, column_name: str, entity_id: int) -> int:
        """
        Number of articles whose `column_name` foreign key equals entity_id.

        Used to refuse deleting a category or author that is still in use.
        """
        column = getattr(Article, column_name)
        query = select(func.count(Article.id)).where(column == entity_id)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("load", e)
        return result.scalar() or 0
