"""
Pressroom Backend — Category Service
======================================

What:  Resource controller for categories.
Rule:  A category still referenced by an article cannot be deleted (409);
       articles.category_id is NOT NULL, so there is nothing to cascade to.
"""

from pressroom.exceptions import ConflictError
from pressroom.models import Category
from pressroom.repositories import ArticleRepository, CategoryRepository
from pressroom.schemas.category import CategoryPayload, CategoryResponse
from pressroom.services.resource_service import ResourceService


class CategoryService(ResourceService[Category, CategoryPayload, CategoryResponse]):
    repository_class = CategoryRepository
    response_schema = CategoryResponse

    async def _before_destroy(self, entity: Category) -> None:
        in_use = await ArticleRepository(self.db).count_referencing("category_id", entity.id)
        if in_use:
            raise ConflictError(
                message=f"Category '{entity.name}' is used by {in_use} article(s) and cannot be deleted.",
                context={"category_id": entity.id, "article_count": in_use},
            )
