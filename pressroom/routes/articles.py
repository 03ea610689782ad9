"""
Pressroom Backend — Article Routes
====================================

What:  CRUD endpoints for articles.
How:   POST and PUT take multipart/form-data so a `photo` file can be sent
       together with the fields:

           title=...  content=...  category_id=1  author_id=1  [photo=<file>]

       The fields are collected into ArticlePayload by `article_payload` and
       the optional file into a PhotoUpload by `photo_upload`; ArticleService
       does the rest.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError as PydanticValidationError

from pressroom.dependencies import EntityId, get_article_service, require_api_token
from pressroom.exceptions import ValidationError
from pressroom.schemas.article import ArticlePayload, ArticleResponse
from pressroom.schemas.common import ErrorResponse
from pressroom.services.article_service import ArticleService, PhotoUpload

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/articles",
    tags=["Articles"],
    dependencies=[Depends(require_api_token)],
    responses={
        401: {"description": "Unauthenticated", "model": ErrorResponse},
        403: {"description": "Forbidden", "model": ErrorResponse},
    },
)


# ── Request Validators ────────────────────────────────────────────────────

async def article_payload(
    title: str = Form(..., description="Article title"),
    content: str = Form(..., description="Article body"),
    category_id: int = Form(..., description="ID of an existing category"),
    author_id: int = Form(..., description="ID of an existing author"),
) -> ArticlePayload:
    """
    Validate the form fields against ArticlePayload.

    Missing or non-integer fields are rejected by FastAPI itself; the schema
    adds the length/range rules. Either way the client gets a 400.
    """
    try:
        return ArticlePayload(
            title=title,
            content=content,
            category_id=category_id,
            author_id=author_id,
        )
    except PydanticValidationError as e:
        raise ValidationError(
            message="Article payload is invalid",
            context={"errors": jsonable_encoder(e.errors(include_url=False))},
        )


async def photo_upload(
    photo: Optional[UploadFile] = File(default=None, description="Optional article photo"),
) -> Optional[PhotoUpload]:
    """
    Read the optional `photo` file into memory (size is checked by the blob store).

    A browser form with no file chosen still sends a `photo` part, with an
    empty filename and no bytes; that counts as no upload.
    """
    if photo is None:
        return None
    try:
        content = await photo.read()
    finally:
        await photo.close()
    if not photo.filename and not content:
        return None
    logger.info("Received photo upload: filename=%s, size=%d bytes", photo.filename, len(content))
    return PhotoUpload(filename=photo.filename or "", content=content)


# ── Endpoints ─────────────────────────────────────────────────────────────

@router.get("", response_model=List[ArticleResponse], summary="List articles")
async def list_articles(
    service: ArticleService = Depends(get_article_service),
) -> List[ArticleResponse]:
    """All articles with their photo, author and category attached."""
    return await service.list()


@router.post(
    "",
    status_code=201,
    response_model=ArticleResponse,
    responses={400: {"description": "Bad Request", "model": ErrorResponse}},
    summary="Create an article",
)
async def create_article(
    payload: ArticlePayload = Depends(article_payload),
    photo: Optional[PhotoUpload] = Depends(photo_upload),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    return await service.create(payload, photo)


@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    responses={404: {"description": "Resource Not Found", "model": ErrorResponse}},
    summary="Get an article",
)
async def show_article(
    article_id: EntityId,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    return await service.show(article_id)


@router.put(
    "/{article_id}",
    status_code=202,
    response_model=ArticleResponse,
    responses={
        400: {"description": "Bad Request", "model": ErrorResponse},
        404: {"description": "Resource Not Found", "model": ErrorResponse},
    },
    summary="Replace an article",
    description=(
        "Replaces every field of the article. Sending a `photo` file replaces the "
        "current photo; omitting it keeps the current one."
    ),
)
async def update_article(
    article_id: EntityId,
    payload: ArticlePayload = Depends(article_payload),
    photo: Optional[PhotoUpload] = Depends(photo_upload),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    return await service.update(article_id, payload, photo)


@router.delete(
    "/{article_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Resource Not Found", "model": ErrorResponse}},
    summary="Delete an article and its photo",
)
async def destroy_article(
    article_id: EntityId,
    service: ArticleService = Depends(get_article_service),
) -> Response:
    await service.destroy(article_id)
    return Response(status_code=204)
