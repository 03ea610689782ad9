"""Photo response schema. Photos have no payload: they are only created by article uploads."""

from pydantic import BaseModel, Field, computed_field


class PhotoResponse(BaseModel):
    id: int
    name: str = Field(description="Generated file name")
    path: str = Field(description="Path relative to the storage root")

    model_config = {"from_attributes": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        """Public URL served by GET /files/{path}."""
        return f"/files/{self.path}"
