from fastapi import HTTPException, Request
from fastapi.responses import Response

from controllers.session_controller import get_session
from models.image_ref import ImageRef
from services.thumbnail_generator import ThumbnailGenerator


def _image_response(image: ImageRef, *, download_name: str | None = None) -> Response:
    headers = {}
    if download_name:
        headers["Content-Disposition"] = f'attachment; filename="{download_name}"'
    return Response(content=image.data, media_type=image.mime_type, headers=headers)


async def get_history_image(request: Request, session_id: str, index: int) -> Response:
    """Return the raw bytes of a history entry.

    Raises:
        HTTPException(404) if the session or entry does not exist.
    """
    session = get_session(request, session_id)
    try:
        entry = session.history.entry_at(index)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _image_response(entry.image)


async def get_history_thumbnail(request: Request, session_id: str, index: int) -> Response:
    """Return a PNG thumbnail of a history entry for the history strip."""
    session = get_session(request, session_id)
    try:
        entry = session.history.entry_at(index)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    try:
        thumbnail = ThumbnailGenerator().create_thumbnail(entry.image.data)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return Response(content=thumbnail, media_type="image/png")


async def get_result_image(request: Request, session_id: str, index: int, download: bool = False) -> Response:
    """Return one of the latest generated designs.

    Args:
        request: FastAPI Request (to access app.state.session_store).
        session_id: Studio session id.
        index: Zero-based position in the latest results.
        download: When True the response is sent as an attachment named
            `ai-design-<n>.<ext>` so browsers save it to disk.

    Returns:
        FastAPI `Response` with the image bytes and their MIME type.
    """
    session = get_session(request, session_id)
    if index < 0 or index >= len(session.results):
        raise HTTPException(status_code=404, detail=f"Result index {index} out of range")
    image = session.results[index]
    download_name = f"ai-design-{index + 1}.{image.extension}" if download else None
    return _image_response(image, download_name=download_name)
