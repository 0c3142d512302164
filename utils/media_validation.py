"""Validation helpers for uploaded room and reference images."""

from fastapi import HTTPException, UploadFile

from models.errors import AssetConversionError
from models.image_ref import ImageRef
from services.image_assets import materialize_image

ALLOWED_IMAGE_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
}


def validate_image_file(image_file: UploadFile) -> None:
    """Validate that the uploaded file claims a supported image format.

    The studio accepts PNG, JPEG and WebP. When the client omits the content
    type the filename extension is checked instead; the bytes themselves are
    verified later when the image is materialized.
    """
    if image_file.content_type:
        content_type = image_file.content_type.lower().split(";", 1)[0].strip()
        if content_type in ALLOWED_IMAGE_TYPES:
            return
        # Browsers send application/octet-stream for drag-and-drop from some sources
        if content_type != "application/octet-stream":
            raise HTTPException(status_code=415, detail=f"Unsupported image content type: {image_file.content_type}")
    filename = (image_file.filename or "").lower()
    if not filename.endswith((".png", ".jpg", ".jpeg", ".webp")):
        raise HTTPException(status_code=415, detail="Unsupported or missing image content type.")


async def read_image_upload(image_file: UploadFile) -> ImageRef:
    """Read a validated upload and wrap it as an `ImageRef`."""
    validate_image_file(image_file)
    image_bytes = await image_file.read()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Uploaded image is empty.")
    try:
        return materialize_image(image_bytes, filename=image_file.filename or None)
    except AssetConversionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
