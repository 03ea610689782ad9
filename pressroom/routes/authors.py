"""
Pressroom Backend — Author Routes
==================================

What:  CRUD endpoints for authors (JSON bodies).
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from pressroom.dependencies import EntityId, get_author_service, require_api_token
from pressroom.schemas.author import AuthorPayload, AuthorResponse
from pressroom.schemas.common import ErrorResponse
from pressroom.services.author_service import AuthorService

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    dependencies=[Depends(require_api_token)],
    responses={
        401: {"description": "Unauthenticated", "model": ErrorResponse},
        403: {"description": "Forbidden", "model": ErrorResponse},
    },
)


@router.get("", response_model=List[AuthorResponse], summary="List authors")
async def list_authors(
    service: AuthorService = Depends(get_author_service),
) -> List[AuthorResponse]:
    return await service.list()


@router.post(
    "",
    status_code=201,
    response_model=AuthorResponse,
    responses={
        400: {"description": "Bad Request", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create an author",
)
async def create_author(
    payload: AuthorPayload,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    return await service.create(payload)


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    responses={404: {"description": "Resource Not Found", "model": ErrorResponse}},
    summary="Get an author",
)
async def show_author(
    author_id: EntityId,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    return await service.show(author_id)


@router.put(
    "/{author_id}",
    status_code=202,
    response_model=AuthorResponse,
    responses={
        400: {"description": "Bad Request", "model": ErrorResponse},
        404: {"description": "Resource Not Found", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Replace an author",
)
async def update_author(
    author_id: EntityId,
    payload: AuthorPayload,
    service: AuthorService = Depends(get_author_service),
) -> AuthorResponse:
    return await service.update(author_id, payload)


@router.delete(
    "/{author_id}",
    status_code=204,
    response_class=Response,
    responses={
        404: {"description": "Resource Not Found", "model": ErrorResponse},
        409: {"description": "Author still has articles", "model": ErrorResponse},
    },
    summary="Delete an author",
)
async def destroy_author(
    author_id: EntityId,
    service: AuthorService = Depends(get_author_service),
) -> Response:
    await service.destroy(author_id)
    return Response(status_code=204)
