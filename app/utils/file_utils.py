"""
File upload utilities for image validation.
Checks extension, declared MIME type, size and decodability of uploaded images.
"""

import io
from pathlib import Path
from typing import Iterable
from PIL import Image

from app.utils.exceptions import UnsupportedMediaError, PayloadTooLargeError


class FileValidator:
    """Validates uploaded image files against the configured allow-lists."""

    # Pillow format names accepted as image content
    SUPPORTED_IMAGE_FORMATS = {"JPEG", "PNG", "GIF"}

    def __init__(
        self,
        allowed_extensions: Iterable[str],
        allowed_mime_types: Iterable[str],
        max_file_size: int
    ):
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}
        self.allowed_mime_types = {mime.lower() for mime in allowed_mime_types}
        self.max_file_size = max_file_size

    def validate_file_extension(self, filename: str) -> str:
        """
        Validate file extension.

        Args:
            filename: Name of the file

        Returns:
            Lowercase file extension

        Raises:
            UnsupportedMediaError: If extension is missing or not supported
        """
        if not filename:
            raise UnsupportedMediaError("Filename is required")

        extension = Path(filename).suffix.lower()
        if extension not in self.allowed_extensions:
            raise UnsupportedMediaError(
                f"File extension '{extension or filename}' not supported. "
                f"Supported extensions: {', '.join(sorted(self.allowed_extensions))}"
            )
        return extension

    def validate_mime_type(self, mime_type: str) -> str:
        """
        Validate declared MIME type.

        Raises:
            UnsupportedMediaError: If MIME type is not supported
        """
        normalized = (mime_type or "").lower()
        if normalized not in self.allowed_mime_types:
            raise UnsupportedMediaError(
                f"MIME type '{mime_type}' not supported. "
                f"Supported types: {', '.join(sorted(self.allowed_mime_types))}"
            )
        return normalized

    def validate_file_size(self, file_size: int) -> int:
        """
        Validate file size.

        Raises:
            UnsupportedMediaError: If the file is empty
            PayloadTooLargeError: If file size exceeds limit
        """
        if file_size <= 0:
            raise UnsupportedMediaError("Uploaded file is empty")
        if file_size > self.max_file_size:
            raise PayloadTooLargeError(self.max_file_size)
        return file_size

    def validate_image_content(self, content: bytes) -> str:
        """
        Make sure the bytes decode as a supported image.

        Returns:
            Pillow format name

        Raises:
            UnsupportedMediaError: If the content is not a readable image
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                image_format = img.format
                img.verify()
        except Exception as e:
            raise UnsupportedMediaError(f"Invalid image file: {str(e)}")

        if image_format not in self.SUPPORTED_IMAGE_FORMATS:
            raise UnsupportedMediaError(f"Image format '{image_format}' not supported")
        return image_format
