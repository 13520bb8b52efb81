"""
RecipeBox Upload Utilities
Validation of multipart image uploads
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from fastapi import UploadFile

from core.config import Settings
from core.exceptions import ValidationError


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    content: bytes

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lower()


async def read_image_upload(
    file: Optional[UploadFile],
    settings: Settings,
    missing_message: str = "No file uploaded",
) -> ImageUpload:
    """Read an uploaded image, rejecting missing, oversized or non-image files"""
    if file is None or not file.filename:
        raise ValidationError(missing_message)

    content = await file.read()
    if not content:
        raise ValidationError(missing_message)

    if len(content) > settings.MAX_FILE_SIZE:
        raise ValidationError(f"File exceeds the {settings.MAX_FILE_SIZE // (1024 * 1024)}MB limit")

    content_type = (file.content_type or "").lower()
    if content_type not in settings.allowed_image_types:
        raise ValidationError(f"Unsupported file type: {content_type or 'unknown'}")

    # Keep only the final path component of client-supplied names
    filename = PurePath(file.filename.replace("\\", "/")).name or "upload"
    return ImageUpload(filename=filename, content_type=content_type, content=content)
