"""
Pressroom Backend — Generic Repository
========================================

What:  CRUD over one ORM model with explicit relation includes.
How:   Relations are requested with the `Relation` enum and resolved into
       `selectinload` options; a model that lacks the relation is a
       programming error and raises ValueError.

Lookup contract:
    find(id)  → model or None   (caller decides what absence means)
    get(id)   → model           (absence raises NotFoundError → 404)

Error Handling:
    SQLAlchemyError is logged and wrapped in DatabaseError so the client gets
    a generic 500 while the original error type stays in the server log.
"""

import logging
from enum import Enum
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pressroom.database import Base
from pressroom.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Relation(str, Enum):
    """Named relations a repository can eager-load alongside the primary row."""

    PHOTO = "photo"
    AUTHOR = "author"
    CATEGORY = "category"


class Repository(Generic[ModelT]):
    """
    Base repository. Subclasses set `model` and `resource`.

    Attributes:
        model:    ORM class handled by this repository
        resource: Name used in NotFoundError messages ("article", "category", ...)
    """

    model: Type[ModelT]
    resource: str = "resource"

    def __init__(self, db: AsyncSession):
        self.db = db

    def _load_options(self, include: Iterable[Relation]) -> List[Any]:
        options = []
        for relation in include:
            attribute = getattr(self.model, relation.value, None)
            if attribute is None:
                raise ValueError(f"{self.model.__name__} has no relation '{relation.value}'")
            options.append(selectinload(attribute))
        return options

    def _wrap(self, action: str, exc: SQLAlchemyError) -> DatabaseError:
        logger.error("Database error during %s %s: %s", action, self.resource, str(exc))
        return DatabaseError(
            message=f"Could not {action} the {self.resource}. Please try again.",
            context={"error_type": type(exc).__name__},
        )

    async def list(self, include: Iterable[Relation] = ()) -> List[ModelT]:
        """Unconditional full-table fetch ordered by primary key."""
        query = (
            select(self.model)
            .options(*self._load_options(include))
            .order_by(self.model.id)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("list", e)
        return list(result.scalars().all())

    async def find(self, entity_id: int, include: Iterable[Relation] = ()) -> Optional[ModelT]:
        """
        Load one row by primary key, or None.

        populate_existing refreshes an instance already in the session's
        identity map, so a row that was just flushed comes back with its
        server defaults and the requested relations attached.
        """
        query = (
            select(self.model)
            .where(self.model.id == entity_id)
            .options(*self._load_options(include))
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("load", e)
        return result.scalar_one_or_none()

    async def get(self, entity_id: int, include: Iterable[Relation] = ()) -> ModelT:
        """Like find(), but a missing row raises NotFoundError."""
        entity = await self.find(entity_id, include)
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        return entity

    async def exists(self, entity_id: int) -> bool:
        query = select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("load", e)
        return (result.scalar() or 0) > 0

    async def add(self, entity: ModelT) -> ModelT:
        """Insert and flush so the primary key is assigned (commit happens per request)."""
        self.db.add(entity)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise self._wrap("create", e)
        return entity

    async def save(self, entity: ModelT) -> ModelT:
        """Flush pending attribute changes of an already-loaded entity."""
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise self._wrap("update", e)
        return entity

    async def delete(self, entity: ModelT) -> None:
        try:
            await self.db.delete(entity)
            await self.db.flush()
        except SQLAlchemyError as e:
            raise self._wrap("delete", e)
