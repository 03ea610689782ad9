"""Author request/response schemas."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class AuthorPayload(BaseModel):
    """
    Body of POST /authors and PUT /authors/{id}.

    bio is optional; because updates replace the whole record, a PUT that
    leaves it out clears it.
    """
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    bio: Optional[str] = Field(default=None, max_length=5000)

    model_config = {"str_strip_whitespace": True}


class AuthorResponse(BaseModel):
    id: int
    name: str
    email: str
    bio: Optional[str] = None

    model_config = {"from_attributes": True}
