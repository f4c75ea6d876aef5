"""
Image blob storage.

Two backends:
- LocalBlobStore writes under `<uploads_dir>/locations/` and returns
  root-relative URLs served by the app's /uploads mount.
- SupabaseBlobStore writes to a Supabase Storage bucket and returns the
  bucket's public URL.

Also holds the helpers that turn client-supplied image strings into
payloads or pass-through references.
"""

import asyncio
import base64
import binascii
import logging
import re
import secrets
import time
from pathlib import Path
from typing import Any, Optional

from shared.exceptions import ExternalServiceError, ValidationError

from .base import BlobStore, ImagePayload

logger = logging.getLogger(__name__)

DATA_URI_PATTERN = re.compile(r"^data:([^;,]+);base64,(.+)$", re.DOTALL)
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


def is_image_reference(value: str) -> bool:
    """True for strings that already point at a stored image."""
    if value.startswith(("http://", "https://")):
        return True
    # Raw base64 JPEG data also starts with "/" but never contains "."
    return value.startswith("/") and "." in value


def decode_image_data(value: str) -> ImagePayload:
    """
    Decode a `data:` URI or raw base64 string into an image payload.

    Raises:
        ValidationError: If the string is not valid base64
    """
    content_type = "image/png"
    encoded = value.strip()
    match = DATA_URI_PATTERN.match(encoded)
    if match:
        content_type, encoded = match.group(1), match.group(2)

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image is not valid base64 data", details={"field": "image"})
    if not data:
        raise ValidationError("Image data is empty", details={"field": "image"})

    extension = EXTENSIONS.get(content_type, content_type.split("/")[-1] or "png")
    return ImagePayload(
        data=data,
        filename=f"{secrets.token_hex(8)}.{extension}",
        content_type=content_type,
    )


def blob_name(filename: str) -> str:
    """Timestamped, filesystem-safe name for a new blob."""
    safe = UNSAFE_FILENAME_CHARS.sub("_", Path(filename).name).strip("._") or "image"
    return f"{int(time.time() * 1000)}_{safe}"


class LocalBlobStore(BlobStore):
    """Stores images on the local filesystem."""

    def __init__(self, uploads_dir: str = "uploads", url_prefix: str = "/uploads/locations"):
        self._directory = Path(uploads_dir) / "locations"
        self._url_prefix = url_prefix.rstrip("/")

    async def upload(self, image: ImagePayload) -> str:
        name = blob_name(image.filename)
        path = self._directory / name
        try:
            await asyncio.to_thread(self._write, path, image.data)
        except OSError as e:
            raise ExternalServiceError(f"Failed to store image: {e}", service="local_storage")
        return f"{self._url_prefix}/{name}"

    async def delete(self, url: str) -> bool:
        if not url.startswith(f"{self._url_prefix}/"):
            return False
        name = Path(url[len(self._url_prefix) + 1:]).name
        path = self._directory / name
        try:
            return await asyncio.to_thread(self._remove, path)
        except OSError as e:
            raise ExternalServiceError(f"Failed to delete image: {e}", service="local_storage")

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    @staticmethod
    def _remove(path: Path) -> bool:
        if not path.exists():
            return False
        path.unlink()
        return True


class SupabaseBlobStore(BlobStore):
    """Stores images in a public Supabase Storage bucket."""

    def __init__(self, client: Any, bucket: str, folder: str = "locations"):
        self._client = client
        self._bucket = bucket
        self._folder = folder

    async def upload(self, image: ImagePayload) -> str:
        path = f"{self._folder}/{blob_name(image.filename)}"
        bucket = self._client.storage.from_(self._bucket)
        try:
            await asyncio.to_thread(
                bucket.upload,
                path,
                image.data,
                {"content-type": image.content_type},
            )
            return await asyncio.to_thread(bucket.get_public_url, path)
        except Exception as e:
            raise ExternalServiceError(f"Failed to upload image: {e}", service="supabase_storage")

    async def delete(self, url: str) -> bool:
        path = self._object_path(url)
        if path is None:
            return False
        try:
            await asyncio.to_thread(self._client.storage.from_(self._bucket).remove, [path])
        except Exception as e:
            raise ExternalServiceError(f"Failed to delete image: {e}", service="supabase_storage")
        return True

    def _object_path(self, url: str) -> Optional[str]:
        marker = f"/object/public/{self._bucket}/"
        if marker not in url:
            return None
        return url.split(marker, 1)[1].split("?", 1)[0] or None
