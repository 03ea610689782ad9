"""
Pressroom Backend — Stored File Route
=======================================

What:  Serves blobs from the storage root (the `url` of a photo points here).
Who:   <img> tags in clients rendering article photos.

Security:
    - BlobStore.resolve() rejects any path escaping the storage root (400)
    - Only existing regular files are served (404 otherwise)
    - Not behind require_api_token: an <img> tag cannot send a bearer header.
      Blob names are 128-bit random and only reach a client through the
      token-gated article and photo responses.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from pressroom.dependencies import get_blob_store
from pressroom.exceptions import NotFoundError
from pressroom.schemas.common import ErrorResponse
from pressroom.services.blob_store import BlobStore

router = APIRouter(tags=["Files"])


@router.get(
    "/files/{file_path:path}",
    summary="Serve a stored file",
    responses={
        200: {"description": "File content"},
        400: {"description": "Invalid path", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
)
async def serve_file(
    file_path: str,
    store: BlobStore = Depends(get_blob_store),
) -> FileResponse:
    full_path = store.resolve(file_path)
    if not await store.exists(file_path):
        raise NotFoundError(resource="file", resource_id=file_path)

    # media_type is guessed from the extension by FileResponse
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
