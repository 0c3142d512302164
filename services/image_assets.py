"""Helpers for turning uploaded or generated bytes into image references.

Every image that enters a session goes through `materialize_image`, which
opens the bytes with Pillow, checks the format is one the model accepts, and
records the detected MIME type rather than trusting the caller.
"""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

from models.errors import AssetConversionError
from models.image_ref import EXTENSIONS, ImageRef

FORMAT_MIME_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}


def materialize_image(data: bytes, *, filename: Optional[str] = None) -> ImageRef:
    """Verify image bytes and wrap them in an `ImageRef`.

    Args:
        data: Raw image bytes.
        filename: Optional name; defaults to `image.<ext>`.

    Returns:
        A new immutable image reference.

    Raises:
        AssetConversionError: If the bytes are empty, not an image, or in an
            unsupported format.
    """
    if not data:
        raise AssetConversionError("Image bytes are empty.")
    try:
        with Image.open(io.BytesIO(data)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise AssetConversionError("Bytes are not a readable image.") from exc

    mime_type = FORMAT_MIME_TYPES.get(image_format or "")
    if mime_type is None:
        raise AssetConversionError(f"Unsupported image format: {image_format}")

    name = filename or f"image.{EXTENSIONS[mime_type]}"
    return ImageRef(data=data, mime_type=mime_type, filename=name)


def image_from_base64(encoded: str, *, filename: Optional[str] = None) -> ImageRef:
    """Decode base64 text (no data URL prefix) into an `ImageRef`."""
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AssetConversionError("Invalid base64 image data.") from exc
    return materialize_image(raw, filename=filename)


def image_from_data_url(data_url: str, *, filename: Optional[str] = None) -> ImageRef:
    """Decode a `data:<mime>;base64,<payload>` URL into an `ImageRef`."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise AssetConversionError("Expected a base64 data URL.")
    return image_from_base64(payload, filename=filename)


def as_editable_copy(image: ImageRef, filename: str) -> ImageRef:
    """Re-materialize a generated image so it can become a new history root."""
    return materialize_image(image.data, filename=filename)
