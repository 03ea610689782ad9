"""
Pressroom Backend — Article Schemas
=====================================

What:  Validation for article writes and the nested article representation.
How:   Article writes arrive as multipart/form-data (so a `photo` file can ride
       along); the form fields are collected into ArticlePayload by a route
       dependency and validated here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pressroom.schemas.author import AuthorResponse
from pressroom.schemas.category import CategoryResponse
from pressroom.schemas.common import MAX_ID
from pressroom.schemas.photo import PhotoResponse


class ArticlePayload(BaseModel):
    """
    Scalar and foreign-key fields of an article.

    Used for both create and update; update is a full replace, so every field
    is required. Existence of category_id / author_id targets is checked by
    ArticleService, not here (needs the database).
    """
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    category_id: int = Field(gt=0, le=MAX_ID)
    author_id: int = Field(gt=0, le=MAX_ID)

    model_config = {"str_strip_whitespace": True}


class ArticleResponse(BaseModel):
    """
    Full article with its related author, category and (optional) photo.

    The ORM object must be loaded with all three relations before it is
    validated into this schema.
    """
    id: int
    title: str
    content: str
    category_id: int
    author_id: int
    photo_id: Optional[int] = None
    category: CategoryResponse
    author: AuthorResponse
    photo: Optional[PhotoResponse] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
