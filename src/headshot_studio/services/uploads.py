"""Validation of user-supplied image files."""

import io

from PIL import Image, UnidentifiedImageError

from headshot_studio.domain.errors import ValidationError
from headshot_studio.domain.images import UploadedImage

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024

# Pillow format name -> MIME type the generation model accepts.
ACCEPTED_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}

NOT_AN_IMAGE_MESSAGE = "Please upload an image file (JPG or PNG)."
UNSUPPORTED_FORMAT_MESSAGE = (
    "Unsupported image format. Please upload a JPG, PNG or WEBP."
)


def validate_upload(
    content: bytes,
    content_type: str | None,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> UploadedImage:
    """Return the upload as an image or raise a ValidationError."""
    if not content:
        raise ValidationError("The uploaded file is empty.")
    if len(content) > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ValidationError(f"The image is too large (max {limit_mb:g}MB).")
    if content_type is not None and not content_type.startswith("image/"):
        raise ValidationError(NOT_AN_IMAGE_MESSAGE)

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
            image_format = img.format
            width, height = img.size
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValidationError(NOT_AN_IMAGE_MESSAGE) from exc

    mime_type = ACCEPTED_FORMATS.get(image_format or "")
    if mime_type is None:
        raise ValidationError(UNSUPPORTED_FORMAT_MESSAGE)
    return UploadedImage(
        content=content, mime_type=mime_type, width=width, height=height
    )
