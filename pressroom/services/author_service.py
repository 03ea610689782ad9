"""
Pressroom Backend — Author Service
====================================

What:  Resource controller for authors.
Rules:
    - email is unique (case-insensitive); a clash is a 409, not a 500
    - an author with articles cannot be deleted (409)
"""

from typing import Optional

from pressroom.exceptions import ConflictError
from pressroom.models import Author
from pressroom.repositories import ArticleRepository, AuthorRepository
from pressroom.schemas.author import AuthorPayload, AuthorResponse
from pressroom.services.resource_service import ResourceService


class AuthorService(ResourceService[Author, AuthorPayload, AuthorResponse]):
    repository_class = AuthorRepository
    response_schema = AuthorResponse

    async def _check_unique(self, payload: AuthorPayload, entity_id: Optional[int] = None) -> None:
        existing = await self.repository.find_by_email(payload.email)
        if existing is not None and existing.id != entity_id:
            raise ConflictError(
                message=f"An author with email '{payload.email}' already exists.",
                context={"field": "email"},
            )

    async def _before_destroy(self, entity: Author) -> None:
        in_use = await ArticleRepository(self.db).count_referencing("author_id", entity.id)
        if in_use:
            raise ConflictError(
                message=f"Author {entity.id} has {in_use} article(s) and cannot be deleted.",
                context={"author_id": entity.id, "article_count": in_use},
            )
