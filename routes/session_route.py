"""FastAPI routes for studio sessions."""

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from pydantic import BaseModel

from controllers import session_controller
from models.session_models import EditTool

router = APIRouter(prefix="/sessions", tags=["sessions"])


class SelectObjectPayload(BaseModel):
	label: str


class ToolPayload(BaseModel):
	tool: EditTool


class ToolValuePayload(BaseModel):
	value: str = ""


class PromptPayload(BaseModel):
	prompt: str = ""


@router.post("")
async def start_session_route(request: Request):
	try:
		return await session_controller.create_session(request)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{session_id}")
async def get_session_route(request: Request, session_id: str):
	return session_controller.session_state(session_controller.get_session(request, session_id))


@router.delete("/{session_id}")
async def close_session_route(request: Request, session_id: str):
	return await session_controller.close_session(request, session_id)


@router.post("/{session_id}/image")
async def upload_image_route(request: Request, session_id: str, image: UploadFile = File(...)):
	"""Upload a new room photo; this replaces the whole edit history."""
	try:
		return await session_controller.upload_room_image(request, session_id, image)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/undo")
async def undo_route(request: Request, session_id: str):
	return await session_controller.navigate(request, session_id, "undo")


@router.post("/{session_id}/redo")
async def redo_route(request: Request, session_id: str):
	return await session_controller.navigate(request, session_id, "redo")


@router.post("/{session_id}/scans/objects")
async def scan_objects_route(request: Request, session_id: str):
	try:
		return await session_controller.scan(request, session_id, "objects")
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/scans/structure")
async def scan_structure_route(request: Request, session_id: str):
	try:
		return await session_controller.scan(request, session_id, "structure")
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/selection")
async def select_object_route(request: Request, session_id: str, payload: SelectObjectPayload):
	"""Toggle the targeted object; selecting it again clears the selection."""
	return await session_controller.select_object(request, session_id, payload.label)


@router.post("/{session_id}/tool")
async def set_tool_route(request: Request, session_id: str, payload: ToolPayload):
	return await session_controller.set_tool(request, session_id, payload.tool)


@router.put("/{session_id}/tool-value")
async def set_tool_value_route(request: Request, session_id: str, payload: ToolValuePayload):
	return await session_controller.set_tool_value(request, session_id, payload.value)


@router.put("/{session_id}/prompt")
async def set_prompt_route(request: Request, session_id: str, payload: PromptPayload):
	return await session_controller.set_prompt(request, session_id, payload.prompt)


@router.post("/{session_id}/reference")
async def attach_reference_route(request: Request, session_id: str, image: UploadFile = File(...)):
	try:
		return await session_controller.attach_reference(request, session_id, image)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{session_id}/reference")
async def remove_reference_route(request: Request, session_id: str):
	return await session_controller.remove_reference(request, session_id)


@router.post("/{session_id}/generate")
async def generate_route(request: Request, session_id: str):
	"""Render designs: four candidates for a fresh upload, one for any edit."""
	try:
		return await session_controller.generate_designs(request, session_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/results/{index}/edit")
async def edit_result_route(request: Request, session_id: str, index: int):
	return await session_controller.edit_result(request, session_id, index)
