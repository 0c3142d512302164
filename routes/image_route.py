from fastapi import APIRouter, HTTPException, Request

from controllers.image_controller import get_history_image, get_history_thumbnail, get_result_image

router = APIRouter(prefix="/sessions", tags=["images"])


@router.get("/{session_id}/history/{index}/image")
async def get_history_image_route(request: Request, session_id: str, index: int):
	"""Return the image bytes of one history entry."""
	return await get_history_image(request, session_id, index)


@router.get("/{session_id}/history/{index}/thumbnail")
async def get_history_thumbnail_route(request: Request, session_id: str, index: int):
	"""Return the PNG thumbnail bytes for one history entry."""
	try:
		return await get_history_thumbnail(request, session_id, index)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{session_id}/results/{index}")
async def get_result_route(request: Request, session_id: str, index: int, download: bool = False):
	"""Return a generated design, as an attachment when `download` is set."""
	return await get_result_image(request, session_id, index, download)
