"""
Tests for the local image asset store.
"""

import re
import pytest
from pathlib import Path

from app.services.assets import LocalAssetStore, is_external_ref
from app.utils.file_utils import FileValidator
from app.utils.exceptions import UnsupportedMediaError, PayloadTooLargeError
from tests.conftest import make_image_bytes, make_upload


@pytest.fixture
def store(tmp_path: Path) -> LocalAssetStore:
    validator = FileValidator(
        allowed_extensions=[".jpeg", ".jpg", ".png", ".gif"],
        allowed_mime_types=["image/jpeg", "image/jpg", "image/png", "image/gif"],
        max_file_size=8 * 1024,
    )
    return LocalAssetStore(str(tmp_path / "uploads"), validator)


class TestLocalAssetStore:
    """Test storing, deleting and publishing image assets."""

    def test_upload_dir_created(self, store: LocalAssetStore):
        assert store.upload_dir.is_dir()

    def test_generate_unique_filename(self, store: LocalAssetStore):
        first = store.generate_unique_filename("My House.JPG")
        second = store.generate_unique_filename("My House.JPG")

        assert re.fullmatch(r"image-\d+-[0-9a-f]{12}\.jpg", first)
        assert first != second

    @pytest.mark.asyncio
    async def test_store_writes_file(self, store: LocalAssetStore):
        content = make_image_bytes("PNG")
        ref = await store.store(make_upload(content))

        assert ref.startswith("image-") and ref.endswith(".png")
        assert (store.upload_dir / ref).read_bytes() == content

    @pytest.mark.asyncio
    async def test_store_rejects_wrong_extension(self, store: LocalAssetStore):
        with pytest.raises(UnsupportedMediaError):
            await store.store(make_upload(filename="notes.txt"))
        assert list(store.upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_store_rejects_wrong_mime_type(self, store: LocalAssetStore):
        with pytest.raises(UnsupportedMediaError):
            await store.store(make_upload(content_type="application/pdf"))

    @pytest.mark.asyncio
    async def test_store_rejects_fake_image(self, store: LocalAssetStore):
        with pytest.raises(UnsupportedMediaError):
            await store.store(make_upload(content=b"<?php echo 'hi'; ?>"))
        assert list(store.upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_store_rejects_large_file(self, store: LocalAssetStore):
        with pytest.raises(PayloadTooLargeError):
            await store.store(make_upload(content=b"\x89PNG" + b"0" * (9 * 1024)))

    @pytest.mark.asyncio
    async def test_delete(self, store: LocalAssetStore):
        ref = await store.store(make_upload())

        assert await store.delete(ref) is True
        assert not (store.upload_dir / ref).exists()
        assert await store.delete(ref) is False

    @pytest.mark.asyncio
    async def test_delete_ignores_foreign_refs(self, store: LocalAssetStore, tmp_path: Path):
        outside = tmp_path / "outside.png"
        outside.write_bytes(b"keep")

        assert await store.delete("https://cdn.example.com/a.png") is False
        assert await store.delete("../outside.png") is False
        assert await store.delete(None) is False
        assert outside.exists()

    def test_is_owned(self, store: LocalAssetStore):
        assert store.is_owned("image-1-abc.png") is True
        assert store.is_owned("http://example.com/a.png") is False
        assert store.is_owned("nested/a.png") is False
        assert store.is_owned("..") is False
        assert store.is_owned("") is False

    def test_to_public_url(self, store: LocalAssetStore):
        origin = "http://localhost:5001"

        assert store.to_public_url(None, origin) is None
        assert store.to_public_url("image-1-abc.png", origin) == "http://localhost:5001/uploads/image-1-abc.png"
        assert store.to_public_url("https://cdn.example.com/a.png", origin) == "https://cdn.example.com/a.png"

    def test_to_public_url_with_base_url(self, tmp_path: Path):
        validator = FileValidator([".png"], ["image/png"], 1024)
        store = LocalAssetStore(str(tmp_path), validator, public_base_url="https://api.example.com/")

        assert store.to_public_url("a.png", "http://internal:5001") == "https://api.example.com/uploads/a.png"


@pytest.mark.parametrize("ref, expected", [
    ("http://example.com/a.png", True),
    ("HTTPS://example.com/a.png", True),
    ("image-1.png", False),
    ("", False),
    (None, False),
])
def test_is_external_ref(ref, expected):
    assert is_external_ref(ref) is expected
