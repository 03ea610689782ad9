"""
Pressroom Backend — Blob Store
================================

What:  Filesystem storage for uploaded photo files.
Why:   Centralizes all file system operations (validation, naming, write,
       delete, safe resolution) behind one small async API.
How:   Files live under <storage_root>/<namespace>/<generated name>. The name is
       a random UUID hex plus the original (lowercased) extension; the
       returned relative path is what the Photo row stores.
Who:   ArticleService (store/delete), the /files route (resolve), health check.

Directory Structure:
    storage/
    └── images/
        └── articles/
            ├── 0b1e4c...d2.png
            └── 9f77a1...3c.jpg

Security Model:
    1. Extension allow-list:  rejects obviously wrong uploads before any I/O
    2. Size limit:            empty and oversized files are rejected
    3. Generated filename:    no user input ever reaches the file system path
    4. resolve():             refuses any path that escapes the storage root
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from pressroom.config import settings
from pressroom.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


class BlobStore:
    """
    Stores and removes blobs addressed by a path relative to the storage root.

    Deleting a blob that is already gone is not an error: the caller wanted
    it gone, and a missing file must not block removing the database rows.
    """

    def __init__(self, storage_root: Optional[str] = None, namespace: Optional[str] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
            namespace:    Sub-directory for new blobs; defaults to settings.photo_namespace.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.namespace = (namespace or settings.photo_namespace).strip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info("BlobStore initialized with storage_root=%s", self.storage_root)

    # ── Validation ────────────────────────────────────────────────────────

    def validate_extension(self, filename: str) -> str:
        """
        Returns: Normalized extension (lowercase with dot).
        Raises:  ValidationError if the extension is not allowed.
        """
        allowed = settings.allowed_photo_extensions_set
        ext = Path(filename).suffix.lower()
        if ext not in allowed:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(allowed))}"
                ),
                field="photo",
                context={"extension": ext, "allowed": sorted(allowed)},
            )
        return ext

    def validate_size(self, content: bytes) -> None:
        """Rejects empty uploads and uploads above settings.max_file_size."""
        if not content:
            raise ValidationError(message="Uploaded photo is empty.", field="photo")

        if len(content) > settings.max_file_size:
            max_mb = settings.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=(
                    f"Photo ({len(content) / (1024 * 1024):.1f}MB) is too large. "
                    f"Maximum size is {max_mb:.0f}MB."
                ),
                field="photo",
                context={"max_size_bytes": settings.max_file_size, "actual_size": len(content)},
            )

    def validate_upload(self, filename: str, content: bytes) -> str:
        """
        Run every upload check; returns the normalized extension.

        Cheapest check first: the extension needs no bytes at all.
        """
        ext = self.validate_extension(filename)
        self.validate_size(content)
        return ext

    # ── Naming & Paths ────────────────────────────────────────────────────

    @staticmethod
    def generate_name(extension: str) -> str:
        """Collision-resistant file name preserving the extension, e.g. '3f2b...9c.png'."""
        return f"{uuid.uuid4().hex}{extension}"

    def relative_path(self, name: str) -> str:
        return f"{self.namespace}/{name}"

    def resolve(self, relative_path: str) -> Path:
        """
        Absolute path for a stored blob.

        Raises:
            ValidationError if the path escapes the storage root (../../etc/passwd).
        """
        candidate = (self.storage_root / relative_path).resolve()
        if candidate != self.storage_root and self.storage_root not in candidate.parents:
            raise ValidationError(message="Invalid file path", field="path")
        return candidate

    # ── I/O ───────────────────────────────────────────────────────────────

    async def store(self, name: str, content: bytes) -> str:
        """
        Write bytes under the namespace with the given generated name.

        Returns: path relative to the storage root (what the Photo row stores).
        Raises:  StorageError if the directory or file cannot be written.
        """
        relative_path = self.relative_path(name)
        absolute_path = self.resolve(relative_path)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store blob at %s: %s", absolute_path, str(e))
            raise StorageError(
                message="Failed to save the uploaded photo. Please try again.",
                context={"path": relative_path, "os_error": str(e)},
            )

        logger.info("Blob stored: %s (%d bytes)", relative_path, len(content))
        return relative_path

    async def delete(self, relative_path: str) -> bool:
        """
        Remove a stored blob.

        Returns: True if a file was removed, False if it was already missing.
        Raises:  StorageError for any other OS failure (permission denied, ...).
        """
        absolute_path = self.resolve(relative_path)
        try:
            await aiofiles.os.remove(absolute_path)
        except FileNotFoundError:
            logger.warning("Blob already missing, nothing to delete: %s", relative_path)
            return False
        except OSError as e:
            logger.error("Failed to delete blob %s: %s", relative_path, str(e))
            raise StorageError(
                message="Failed to delete the stored photo.",
                context={"path": relative_path, "os_error": str(e)},
            )

        logger.info("Blob deleted: %s", relative_path)
        return True

    async def exists(self, relative_path: str) -> bool:
        return await aiofiles.os.path.isfile(self.resolve(relative_path))

    def is_writable(self) -> bool:
        """Cheap probe used by the health check."""
        probe = self.storage_root / f".probe-{uuid.uuid4().hex}"
        try:
            probe.write_bytes(b"")
            probe.unlink()
        except OSError:
            return False
        return True


# ── Singleton Instance ────────────────────────────────────────────────────
# Storage root doesn't change at runtime; tests override the dependency instead.
blob_store = BlobStore()
