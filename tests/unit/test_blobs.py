"""
Unit Tests - Blob Storage
"""
import base64

import pytest

from shop_admin.config import Settings
from shop_admin.errors import ImageTooLargeError, UploadError
from shop_admin.storage import DataUrlBlobStore, LocalBlobStore, UploadedFile, create_blob_store

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class TestDataUrlBlobStore:

    async def test_returns_data_url(self):
        store = DataUrlBlobStore(max_bytes=1024)

        url = await store.upload(UploadedFile("pixel.png", "image/png", PNG_BYTES))

        assert url.startswith("data:image/png;base64,")
        assert base64.b64decode(url.split(",", 1)[1]) == PNG_BYTES

    async def test_rejects_large_image(self):
        store = DataUrlBlobStore(max_bytes=10)

        with pytest.raises(ImageTooLargeError):
            await store.upload(UploadedFile("pixel.png", "image/png", PNG_BYTES))

    async def test_rejects_non_image(self):
        store = DataUrlBlobStore()

        with pytest.raises(UploadError):
            await store.upload(UploadedFile("notes.txt", "text/plain", b"hello"))


class TestLocalBlobStore:

    async def test_writes_file(self, tmp_path):
        store = LocalBlobStore(tmp_path / "media", "/media/")

        url = await store.upload(UploadedFile("Photo.PNG", "image/png", PNG_BYTES))

        assert url.startswith("/media/")
        assert url.endswith(".png")
        stored = tmp_path / "media" / url.rsplit("/", 1)[1]
        assert stored.read_bytes() == PNG_BYTES

    async def test_rejects_large_image(self, tmp_path):
        store = LocalBlobStore(tmp_path, "/media", max_bytes=4)

        with pytest.raises(ImageTooLargeError):
            await store.upload(UploadedFile("pixel.png", "image/png", PNG_BYTES))


def test_create_blob_store_defaults_to_data_url():
    assert isinstance(create_blob_store(Settings()), DataUrlBlobStore)
