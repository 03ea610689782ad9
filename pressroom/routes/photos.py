"""
Pressroom Backend — Photo Routes
==================================

What:  Read-only endpoints for photo rows. Photos are created and deleted
       through their article only.
"""

from typing import List

from fastapi import APIRouter, Depends

from pressroom.dependencies import EntityId, get_photo_service, require_api_token
from pressroom.schemas.common import ErrorResponse
from pressroom.schemas.photo import PhotoResponse
from pressroom.services.photo_service import PhotoService

router = APIRouter(
    prefix="/photos",
    tags=["Photos"],
    dependencies=[Depends(require_api_token)],
    responses={
        401: {"description": "Unauthenticated", "model": ErrorResponse},
        403: {"description": "Forbidden", "model": ErrorResponse},
    },
)


@router.get("", response_model=List[PhotoResponse], summary="List photos")
async def list_photos(
    service: PhotoService = Depends(get_photo_service),
) -> List[PhotoResponse]:
    return await service.list()


@router.get(
    "/{photo_id}",
    response_model=PhotoResponse,
    responses={404: {"description": "Resource Not Found", "model": ErrorResponse}},
    summary="Get a photo",
)
async def show_photo(
    photo_id: EntityId,
    service: PhotoService = Depends(get_photo_service),
) -> PhotoResponse:
    return await service.show(photo_id)
