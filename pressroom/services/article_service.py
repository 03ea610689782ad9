"""
Pressroom Backend — Article Service
=====================================

What:  Resource controller for articles, including the photo upload flow.
Why:   Articles are the only resource with a file side effect; everything
       else follows the generic ResourceService pattern.

Photo flows:
    create(payload, photo):
        ┌───────────────┐   ┌───────────────┐   ┌──────────────┐   ┌─────────────┐
        │ validate refs │──▶│ validate file │──▶│ store blob   │──▶│ insert photo│──▶ insert article
        │ (category,    │   │ (ext, size)   │   │ (images/     │   │ row         │    (photo linked)
        │  author)      │   └───────────────┘   │  articles/)  │   └─────────────┘
        └───────────────┘                       └──────────────┘
        Every check runs before the first byte is written. If anything after
        the blob write fails, the blob is removed and the error propagates; the
        session rollback takes care of the rows.

    update(id, payload, photo):
        Full replace of the scalar/foreign-key fields. A new file replaces the
        current photo: the new blob and row are written and linked first, then
        the old blob and row are removed. Without a file the photo is kept.

    destroy(id):
        blob removed (already-missing file tolerated) → photo row → article row.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.exceptions import StorageError, ValidationError
from pressroom.models import Article, Photo
from pressroom.repositories import (
    ArticleRepository,
    AuthorRepository,
    CategoryRepository,
    PhotoRepository,
    Relation,
)
from pressroom.schemas.article import ArticlePayload, ArticleResponse
from pressroom.services.blob_store import BlobStore
from pressroom.services.resource_service import ResourceService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoUpload:
    """An uploaded file as received by the route: original name and raw bytes."""
    filename: str
    content: bytes


class ArticleService(ResourceService[Article, ArticlePayload, ArticleResponse]):
    repository_class = ArticleRepository
    response_schema = ArticleResponse
    include = (Relation.PHOTO, Relation.AUTHOR, Relation.CATEGORY)

    def __init__(self, db: AsyncSession, blob_store: BlobStore):
        super().__init__(db)
        self.blob_store = blob_store
        self.photos = PhotoRepository(db)
        self.categories = CategoryRepository(db)
        self.authors = AuthorRepository(db)

    # ── Validation ────────────────────────────────────────────────────────

    async def _check_references(self, payload: ArticlePayload) -> None:
        """Referenced category and author must exist at write time."""
        if not await self.categories.exists(payload.category_id):
            raise ValidationError(
                message=f"Category with ID '{payload.category_id}' does not exist",
                field="category_id",
            )
        if not await self.authors.exists(payload.author_id):
            raise ValidationError(
                message=f"Author with ID '{payload.author_id}' does not exist",
                field="author_id",
            )

    def _validate_upload(self, upload: Optional[PhotoUpload]) -> Optional[str]:
        if upload is None:
            return None
        return self.blob_store.validate_upload(upload.filename, upload.content)

    # ── Photo helpers ─────────────────────────────────────────────────────

    async def _store_photo(self, upload: PhotoUpload, extension: str) -> Tuple[Photo, str]:
        """
        Write the blob, then insert its Photo row.

        Returns: (photo, stored_path). If the row insert fails the blob is
        removed before the error propagates.
        """
        name = self.blob_store.generate_name(extension)
        stored_path = await self.blob_store.store(name, upload.content)
        photo = Photo(name=name, path=stored_path)
        try:
            await self.photos.add(photo)
        except Exception:
            await self._discard_blob(stored_path)
            raise
        logger.info("Photo %s stored at %s", photo.id, stored_path)
        return photo, stored_path

    async def _discard_blob(self, stored_path: str) -> None:
        """
        Best-effort removal of a blob whose database write did not happen.

        A failure here is logged, not raised: the original error is the one
        the client must see.
        """
        try:
            await self.blob_store.delete(stored_path)
        except StorageError as e:
            logger.warning("Could not discard orphaned blob %s: %s", stored_path, e.message)

    async def _remove_photo(self, photo: Photo) -> None:
        """Blob first, then the row."""
        await self.blob_store.delete(photo.path)
        await self.photos.delete(photo)
        logger.info("Photo %s removed", photo.id)

    # ── Operations ────────────────────────────────────────────────────────

    async def create(
        self,
        payload: ArticlePayload,
        photo: Optional[PhotoUpload] = None,
    ) -> ArticleResponse:
        await self._check_references(payload)
        extension = self._validate_upload(photo)

        stored_path: Optional[str] = None
        new_photo: Optional[Photo] = None
        if photo is not None and extension is not None:
            new_photo, stored_path = await self._store_photo(photo, extension)

        article = Article(**payload.model_dump(), photo=new_photo)
        try:
            await self.repository.add(article)
        except Exception:
            if stored_path:
                await self._discard_blob(stored_path)
            raise

        logger.info(
            "Article %s created (photo=%s)",
            article.id,
            new_photo.id if new_photo else None,
        )
        return self.serialize(await self._reload(article.id))

    async def update(
        self,
        entity_id: int,
        payload: ArticlePayload,
        photo: Optional[PhotoUpload] = None,
    ) -> ArticleResponse:
        article = await self.repository.get(entity_id, (Relation.PHOTO,))
        await self._check_references(payload)
        extension = self._validate_upload(photo)

        previous_photo = article.photo
        stored_path: Optional[str] = None
        if photo is not None and extension is not None:
            new_photo, stored_path = await self._store_photo(photo, extension)
            article.photo = new_photo

        for field, value in payload.model_dump().items():
            setattr(article, field, value)

        try:
            await self.repository.save(article)
            if stored_path and previous_photo is not None:
                await self._remove_photo(previous_photo)
        except Exception:
            # The transaction rolls back to the previous photo; its blob may
            # already be gone, the new one must not stay behind.
            if stored_path:
                await self._discard_blob(stored_path)
            raise

        logger.info("Article %s updated (photo replaced=%s)", entity_id, bool(stored_path))
        return self.serialize(await self._reload(entity_id))

    async def destroy(self, entity_id: int) -> None:
        article = await self.repository.get(entity_id, (Relation.PHOTO,))

        photo = article.photo
        if photo is not None:
            # Unlink first so the photo row can go before the article row
            article.photo = None
            await self._remove_photo(photo)

        await self.repository.delete(article)
        logger.info("Article %s deleted", entity_id)
