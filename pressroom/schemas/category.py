"""Category request/response schemas."""

from pydantic import BaseModel, Field


class CategoryPayload(BaseModel):
    """Body of POST /categories and PUT /categories/{id}."""
    name: str = Field(min_length=1, max_length=255, description="Category name")

    model_config = {"str_strip_whitespace": True}


class CategoryResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}
