"""
Pressroom Backend — Generic Resource Service
==============================================

What:  The list / create / show / update / destroy pattern shared by every
       resource, written once and specialised per entity by subclassing.
Why:   Categories, authors and articles expose the same five operations;
       only their relations and side effects differ.
How:   A subclass sets the repository class, the response schema and the
       relations to eager-load. Hooks (`_check_references`, `_before_destroy`)
       let subclasses add rules without rewriting the flow.

Operation contract:
    list()            → all rows, ordered by id, relations attached
    create(payload)   → new row; caller responds 201
    show(id)          → row or NotFoundError
    update(id, data)  → full replace of every payload field; caller responds 202
    destroy(id)       → row removed or NotFoundError (every time it is absent)

Design Decision:
    The service receives its AsyncSession at construction (injected by FastAPI
    per request). It flushes but never commits; the session dependency owns
    the transaction.
"""

import logging
from typing import Generic, List, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.database import Base
from pressroom.repositories.base import Relation, Repository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
PayloadT = TypeVar("PayloadT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ResourceService(Generic[ModelT, PayloadT, ResponseT]):
    """
    Base resource controller.

    Class attributes set by subclasses:
        repository_class: Repository bound to the ORM model
        response_schema:  Pydantic schema used to serialize rows
        include:          Relations loaded for list/show/after writes
    """

    repository_class: Type[Repository]
    response_schema: Type[ResponseT]
    include: Sequence[Relation] = ()

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = self.repository_class(db)

    @property
    def resource(self) -> str:
        return self.repository.resource

    def serialize(self, entity: ModelT) -> ResponseT:
        return self.response_schema.model_validate(entity)

    async def _reload(self, entity_id: int) -> ModelT:
        """Fetch the row again with its relations, after a write."""
        return await self.repository.get(entity_id, self.include)

    # ── Hooks ─────────────────────────────────────────────────────────────

    async def _check_references(self, payload: PayloadT) -> None:
        """Validate anything the payload points at. Raises ValidationError."""

    async def _check_unique(self, payload: PayloadT, entity_id: int | None = None) -> None:
        """Validate uniqueness rules. Raises ConflictError."""

    async def _before_destroy(self, entity: ModelT) -> None:
        """Run guards or side effects before a row is deleted."""

    # ── Operations ────────────────────────────────────────────────────────

    async def list(self) -> List[ResponseT]:
        entities = await self.repository.list(self.include)
        return [self.serialize(entity) for entity in entities]

    async def show(self, entity_id: int) -> ResponseT:
        entity = await self.repository.get(entity_id, self.include)
        return self.serialize(entity)

    async def create(self, payload: PayloadT) -> ResponseT:
        await self._check_references(payload)
        await self._check_unique(payload)

        entity = self.repository.model(**payload.model_dump())
        await self.repository.add(entity)
        logger.info("%s %s created", self.resource.capitalize(), entity.id)

        return self.serialize(await self._reload(entity.id))

    async def update(self, entity_id: int, payload: PayloadT) -> ResponseT:
        """
        Full replace: every payload field overwrites the stored value,
        including optional fields that were left out (they reset to their
        default). Missing required fields never get here; the payload
        schema rejects them with a 400.
        """
        entity = await self.repository.get(entity_id)
        await self._check_references(payload)
        await self._check_unique(payload, entity_id=entity_id)

        for field, value in payload.model_dump().items():
            setattr(entity, field, value)
        await self.repository.save(entity)
        logger.info("%s %s updated", self.resource.capitalize(), entity_id)

        return self.serialize(await self._reload(entity_id))

    async def destroy(self, entity_id: int) -> None:
        entity = await self.repository.get(entity_id, self.include)
        await self._before_destroy(entity)
        await self.repository.delete(entity)
        logger.info("%s %s deleted", self.resource.capitalize(), entity_id)
