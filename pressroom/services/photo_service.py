"""
Pressroom Backend — Photo Service
===================================

What:  Read-only controller for photos.
Why:   Photos are created and removed only through their owning article
       (see ArticleService); clients may list and inspect them.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.repositories import PhotoRepository
from pressroom.schemas.photo import PhotoResponse


class PhotoService:
    def __init__(self, db: AsyncSession):
        self.repository = PhotoRepository(db)

    async def list(self) -> List[PhotoResponse]:
        photos = await self.repository.list()
        return [PhotoResponse.model_validate(photo) for photo in photos]

    async def show(self, photo_id: int) -> PhotoResponse:
        photo = await self.repository.get(photo_id)
        return PhotoResponse.model_validate(photo)
