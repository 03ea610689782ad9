"""
Pressroom Backend — Dependency Providers
==========================================

What:  FastAPI dependency functions that build the per-request object graph.
Why:   Every service gets its session and blob store handed in explicitly;
       tests swap either one through `app.dependency_overrides`.

    get_db_session ─┬─▶ get_category_service
                    ├─▶ get_author_service
                    ├─▶ get_photo_service
    get_blob_store ─┴─▶ get_article_service

Access gate:
    `require_api_token` guards every resource router. When API_TOKEN is empty
    the gate is open; otherwise a missing bearer token is a 401 and a wrong
    one a 403. Anything richer (users, roles) belongs to an upstream proxy.
"""

import logging
import secrets
from typing import Annotated, Optional

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.config import settings
from pressroom.database import get_db_session
from pressroom.exceptions import AuthenticationError, AuthorizationError
from pressroom.schemas.common import MAX_ID
from pressroom.services.article_service import ArticleService
from pressroom.services.author_service import AuthorService
from pressroom.services.blob_store import BlobStore, blob_store
from pressroom.services.category_service import CategoryService
from pressroom.services.photo_service import PhotoService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches require_api_token as None, so the
# response uses our error format instead of FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Path id of every resource route. Out-of-range values are a 400, never a
# driver overflow.
EntityId = Annotated[int, Path(ge=1, le=MAX_ID, description="Numeric resource ID")]


async def require_api_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> None:
    if not settings.api_token:
        return
    if credentials is None:
        raise AuthenticationError()
    if not secrets.compare_digest(credentials.credentials, settings.api_token):
        logger.warning("Rejected request with an invalid API token")
        raise AuthorizationError()


def get_blob_store() -> BlobStore:
    return blob_store


def get_category_service(db: AsyncSession = Depends(get_db_session)) -> CategoryService:
    return CategoryService(db)


def get_author_service(db: AsyncSession = Depends(get_db_session)) -> AuthorService:
    return AuthorService(db)


def get_photo_service(db: AsyncSession = Depends(get_db_session)) -> PhotoService:
    return PhotoService(db)


def get_article_service(
    db: AsyncSession = Depends(get_db_session),
    store: BlobStore = Depends(get_blob_store),
) -> ArticleService:
    return ArticleService(db, store)
