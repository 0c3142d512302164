from __future__ import annotations

import base64
import time
from dataclasses import dataclass, field
from uuid import uuid4

EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


@dataclass(frozen=True)
class ImageRef:
    """Immutable handle to image bytes held by a session.

    Attributes:
        data: Raw image bytes.
        mime_type: One of the supported image MIME types.
        filename: Name used when the image is sent upstream or downloaded.
        ref_id: Random identifier, stable for the lifetime of the reference.
    """

    data: bytes = field(repr=False)
    mime_type: str
    filename: str = "image"
    ref_id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    @property
    def display_url(self) -> str:
        """Return a data URL suitable for rendering the image directly."""
        return f"data:{self.mime_type};base64,{self.base64}"

    @property
    def extension(self) -> str:
        return EXTENSIONS.get(self.mime_type, "png")


@dataclass(frozen=True)
class HistoryEntry:
    """One image state reachable through undo/redo."""

    image: ImageRef
    origin: str = "upload"
    created_at: float = field(default_factory=lambda: time.time())
