"""
Asset storage for property images.
The property service only talks to the AssetStore interface; LocalAssetStore keeps
files on the server's disk and serves them under /uploads.
"""

import abc
import time
import uuid
from pathlib import Path
from typing import Optional
import aiofiles
import aiofiles.os
from fastapi import UploadFile
import logging

from app.config import Settings
from app.utils.file_utils import FileValidator

logger = logging.getLogger(__name__)

UPLOADS_ROUTE = "/uploads"


def is_external_ref(ref: Optional[str]) -> bool:
    """True if the image reference is a fully-qualified URL hosted elsewhere."""
    return bool(ref) and ref.lower().startswith(("http://", "https://"))


class AssetStore(abc.ABC):
    """Interface for storing, removing and publishing image assets."""

    @abc.abstractmethod
    async def store(self, upload: UploadFile) -> str:
        """Validate and persist an uploaded image, returning its reference."""

    @abc.abstractmethod
    async def delete(self, ref: Optional[str]) -> bool:
        """Remove an owned asset. Returns True if something was deleted."""

    @abc.abstractmethod
    def is_owned(self, ref: Optional[str]) -> bool:
        """Whether the reference points at an asset this store manages."""

    @abc.abstractmethod
    def to_public_url(self, ref: Optional[str], origin: str) -> Optional[str]:
        """Turn a stored reference into an absolute URL."""


class LocalAssetStore(AssetStore):
    """Stores images as files in a server-local directory."""

    def __init__(
        self,
        upload_dir: str,
        validator: FileValidator,
        public_base_url: Optional[str] = None
    ):
        self.upload_dir = Path(upload_dir)
        self.validator = validator
        self.public_base_url = public_base_url

        # Ensure upload directory exists
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalAssetStore":
        validator = FileValidator(
            allowed_extensions=settings.allowed_file_extensions,
            allowed_mime_types=settings.allowed_file_types,
            max_file_size=settings.max_file_size,
        )
        return cls(settings.upload_dir, validator, settings.public_base_url)

    def generate_unique_filename(self, original_filename: str) -> str:
        """
        Generate a unique filename while preserving the extension.

        Args:
            original_filename: Original filename

        Returns:
            Filename made of the current time in milliseconds and a random suffix
        """
        extension = Path(original_filename).suffix.lower()
        millis = int(time.time() * 1000)
        return f"image-{millis}-{uuid.uuid4().hex[:12]}{extension}"

    def is_owned(self, ref: Optional[str]) -> bool:
        # Only bare filenames inside upload_dir; never paths that could escape it
        if not ref or is_external_ref(ref):
            return False
        return Path(ref).name == ref and ref not in (".", "..") and "\\" not in ref

    def path_for(self, ref: str) -> Path:
        return self.upload_dir / ref

    async def store(self, upload: UploadFile) -> str:
        """
        Validate the upload and write it to the upload directory.

        Args:
            upload: Uploaded image file

        Returns:
            Stored filename, used as the image reference

        Raises:
            UnsupportedMediaError: If the file is not an accepted image
            PayloadTooLargeError: If the file exceeds the size limit
        """
        self.validator.validate_file_extension(upload.filename)
        self.validator.validate_mime_type(upload.content_type)

        await upload.seek(0)
        content = await upload.read(self.validator.max_file_size + 1)
        self.validator.validate_file_size(len(content))
        self.validator.validate_image_content(content)

        filename = self.generate_unique_filename(upload.filename)
        file_path = self.path_for(filename)

        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError:
            # Clean up partial file if it exists
            if file_path.exists():
                file_path.unlink()
            raise

        logger.info(f"Stored image asset {filename} ({len(content)} bytes)")
        return filename

    async def delete(self, ref: Optional[str]) -> bool:
        """
        Delete a stored asset. Missing files and external URLs are ignored.

        Returns:
            True if a file was deleted, False otherwise
        """
        if not self.is_owned(ref):
            return False

        try:
            await aiofiles.os.remove(self.path_for(ref))
        except FileNotFoundError:
            logger.debug(f"Image asset {ref} already absent")
            return False

        logger.info(f"Deleted image asset {ref}")
        return True

    def to_public_url(self, ref: Optional[str], origin: str) -> Optional[str]:
        if not ref:
            return None
        if is_external_ref(ref):
            return ref
        base = self.public_base_url or origin
        return f"{base.rstrip('/')}{UPLOADS_ROUTE}/{ref}"
