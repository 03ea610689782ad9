"""
Pressroom Backend — Category Routes
=====================================

What:  CRUD endpoints for categories (JSON bodies).
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from pressroom.dependencies import EntityId, get_category_service, require_api_token
from pressroom.schemas.category import CategoryPayload, CategoryResponse
from pressroom.schemas.common import ErrorResponse
from pressroom.services.category_service import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    dependencies=[Depends(require_api_token)],
    responses={
        401: {"description": "Unauthenticated", "model": ErrorResponse},
        403: {"description": "Forbidden", "model": ErrorResponse},
    },
)


@router.get("", response_model=List[CategoryResponse], summary="List categories")
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryResponse]:
    return await service.list()


@router.post(
    "",
    status_code=201,
    response_model=CategoryResponse,
    responses={400: {"description": "Bad Request", "model": ErrorResponse}},
    summary="Create a category",
)
async def create_category(
    payload: CategoryPayload,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.create(payload)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"description": "Resource Not Found", "model": ErrorResponse}},
    summary="Get a category",
)
async def show_category(
    category_id: EntityId,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.show(category_id)


@router.put(
    "/{category_id}",
    status_code=202,
    response_model=CategoryResponse,
    responses={
        400: {"description": "Bad Request", "model": ErrorResponse},
        404: {"description": "Resource Not Found", "model": ErrorResponse},
    },
    summary="Replace a category",
)
async def update_category(
    category_id: EntityId,
    payload: CategoryPayload,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return await service.update(category_id, payload)


@router.delete(
    "/{category_id}",
    status_code=204,
    response_class=Response,
    responses={
        404: {"description": "Resource Not Found", "model": ErrorResponse},
        409: {"description": "Category still used by articles", "model": ErrorResponse},
    },
    summary="Delete a category",
)
async def destroy_category(
    category_id: EntityId,
    service: CategoryService = Depends(get_category_service),
) -> Response:
    await service.destroy(category_id)
    return Response(status_code=204)
