"""
Blob store for inventory photos.

Production uses one Supabase Storage bucket (STORAGE_BUCKET, default "images"),
public, so the URL returned by upload can be stored on the inventory record
and rendered directly.

Folder structure:
  images/inventory/{random}_{timestamp_ms}.{ext}

Everything else in the app depends only on BlobStore.upload; tests inject a fake.
"""
import logging
import secrets
import time
from typing import Optional, Protocol

from jewelbox.config import settings
from jewelbox.exceptions import BackendError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_CONTENT_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}
INVENTORY_FOLDER = "inventory"


class BlobStore(Protocol):
    def upload(self, content: bytes, content_type: str, filename: Optional[str] = None) -> str:
        """Store bytes and return a public URL."""
        ...


def validate_image_upload(content: bytes, content_type: str, max_bytes: Optional[int] = None) -> None:
    """
    Validate image upload: image content-type, non-empty, size limit.
    Raises ValidationError.
    """
    max_bytes = max_bytes or settings.MAX_IMAGE_BYTES
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError(f"Unsupported file type: {content_type or 'unknown'}", field="file")
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValidationError(
            "Invalid content-type. Allowed: " + ", ".join(sorted(ALLOWED_IMAGE_CONTENT_TYPES)),
            field="file",
        )
    if len(content) == 0:
        raise ValidationError("File is empty", field="file")
    if len(content) > max_bytes:
        raise ValidationError(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB", field="file"
        )


def object_path(filename: Optional[str], content_type: str) -> str:
    """inventory/{random}_{timestamp_ms}.{ext}; extension from filename, else from content type."""
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
    if not ext:
        ext = content_type.split("/", 1)[-1].lower()
    return f"{INVENTORY_FOLDER}/{secrets.token_hex(6)}_{int(time.time() * 1000)}.{ext}"


class SupabaseBlobStore:
    """Supabase Storage adapter. Uses SUPABASE_SERVICE_ROLE_KEY only."""

    def __init__(self, client=None, bucket: Optional[str] = None):
        self._client = client
        self.bucket = bucket or settings.STORAGE_BUCKET

    @property
    def client(self):
        if self._client is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
                raise BackendError("Storage is not configured (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)")
            from supabase import create_client
            self._client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        return self._client

    def ensure_bucket(self) -> None:
        """Create the public images bucket if missing. Idempotent."""
        buckets = self.client.storage.list_buckets()
        names = [b.name for b in (buckets or [])]
        if self.bucket not in names:
            self.client.storage.create_bucket(
                self.bucket,
                options={
                    "public": True,
                    "allowed_mime_types": sorted(ALLOWED_IMAGE_CONTENT_TYPES),
                    "file_size_limit": settings.MAX_IMAGE_BYTES,
                },
            )
            logger.info("Created storage bucket %s (public)", self.bucket)

    def upload(self, content: bytes, content_type: str, filename: Optional[str] = None) -> str:
        path = object_path(filename, content_type)
        try:
            self.ensure_bucket()
            bucket = self.client.storage.from_(self.bucket)
            bucket.upload(
                path,
                content,
                file_options={"content-type": content_type, "cache-control": "3600", "upsert": "false"},
            )
            url = bucket.get_public_url(path)
        except BackendError:
            raise
        except Exception as e:
            logger.exception("upload %s failed", path)
            raise BackendError(f"Upload failed: {e}") from e
        if not url:
            raise BackendError("Failed to get public URL")
        return url.rstrip("?")


_default_store: Optional[SupabaseBlobStore] = None


def get_blob_store() -> BlobStore:
    """FastAPI dependency; override in tests."""
    global _default_store
    if _default_store is None:
        _default_store = SupabaseBlobStore()
    return _default_store
