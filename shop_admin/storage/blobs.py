"""
Blob Storage

Stores uploaded product images and returns a URL that is saved verbatim on
the owning document.
"""

import asyncio
import base64
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Protocol

import structlog

from shop_admin.config import Settings
from shop_admin.errors import ImageTooLargeError, UploadError

logger = structlog.get_logger(__name__)


@dataclass
class UploadedFile:
    """A file received from the dashboard"""
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class BlobStore(Protocol):
    async def upload(self, file: UploadedFile) -> str:
        ...


def _check_image(file: UploadedFile, max_bytes: int) -> None:
    if not file.content_type.startswith("image/"):
        raise UploadError(f"Unsupported file type: {file.content_type or 'unknown'}")
    if file.size > max_bytes:
        raise ImageTooLargeError(f"Please select an image smaller than {max_bytes // 1024}KB")


class DataUrlBlobStore:
    """
    Inline storage: the image becomes a base64 data URL.

    The size limit keeps the encoded image (about 4/3 of the raw size) inside
    the owning document.
    """

    def __init__(self, max_bytes: int = 800 * 1024):
        self.max_bytes = max_bytes

    async def upload(self, file: UploadedFile) -> str:
        _check_image(file, self.max_bytes)
        encoded = base64.b64encode(file.data).decode("ascii")
        logger.info("Image encoded", filename=file.filename, size=file.size)
        return f"data:{file.content_type};base64,{encoded}"


class LocalBlobStore:
    """Writes files to a local directory served under public_base_url."""

    def __init__(self, directory: Path, public_base_url: str, max_bytes: int = 800 * 1024):
        self.directory = Path(directory)
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes

    async def upload(self, file: UploadedFile) -> str:
        _check_image(file, self.max_bytes)
        name = f"{uuid.uuid4().hex}{PurePath(file.filename).suffix.lower()}"
        target = self.directory / name
        try:
            await asyncio.to_thread(self.directory.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_bytes, file.data)
        except OSError as e:
            logger.error("Image write failed", path=str(target), error=str(e))
            raise UploadError("Failed to store image") from e

        logger.info("Image stored", filename=file.filename, path=str(target), size=file.size)
        return f"{self.public_base_url}/{name}"


def create_blob_store(settings: Settings) -> BlobStore:
    """Build the blob store selected by BLOB_BACKEND."""
    blobs = settings.blobs
    if blobs.backend == "local":
        return LocalBlobStore(Path(blobs.local_dir), blobs.public_base_url, blobs.max_image_bytes)
    return DataUrlBlobStore(blobs.max_image_bytes)
