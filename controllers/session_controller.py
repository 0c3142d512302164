"""Session lifecycle and editing helpers for the studio API."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator

from fastapi import HTTPException, Request, UploadFile

from models.errors import (
	AssetConversionError,
	BusyError,
	EmptyResultError,
	RoomStudioError,
	TransportError,
	ValidationError,
)
from models.session_models import ActionResult, EditTool
from services.session.session_store import SessionStore
from services.session.studio_session import StudioSession
from utils.media_validation import read_image_upload

STATUS_BY_ERROR = (
	(ValidationError, 400),
	(BusyError, 409),
	(AssetConversionError, 422),
	(EmptyResultError, 502),
	(TransportError, 502),
)


def status_for(exc: Exception | None) -> int:
	"""Return the HTTP status used to report a studio error."""
	for error_type, status_code in STATUS_BY_ERROR:
		if isinstance(exc, error_type):
			return status_code
	return 500


@contextmanager
def translate_errors() -> Iterator[None]:
	"""Turn studio errors raised by a session call into HTTP errors."""
	try:
		yield
	except RoomStudioError as exc:
		raise HTTPException(status_code=status_for(exc), detail=str(exc)) from exc


def _store(request: Request) -> SessionStore:
	store = getattr(request.app.state, "session_store", None)
	if store is None:
		raise HTTPException(status_code=500, detail="Session store not initialized.")
	return store


def get_session(request: Request, session_id: str) -> StudioSession:
	"""Return the session or raise a 404."""
	try:
		return _store(request).get(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc


def session_state(session: StudioSession) -> Dict[str, Any]:
	"""Snapshot plus the URLs clients use to render history and results."""
	base = f"/sessions/{session.session_id}"
	state = session.snapshot()
	state["history"] = [
		{
			"index": index,
			"origin": entry.origin,
			"url": f"{base}/history/{index}/image",
			"thumbnail_url": f"{base}/history/{index}/thumbnail",
		}
		for index, entry in enumerate(session.history.entries)
	]
	state["results"] = [
		{"index": index, "url": f"{base}/results/{index}", "download_url": f"{base}/results/{index}?download=true"}
		for index in range(len(session.results))
	]
	return state


def _raise_on_failure(result: ActionResult) -> None:
	if not result.ok:
		raise HTTPException(status_code=status_for(result.error), detail=result.message)


async def create_session(request: Request) -> Dict[str, Any]:
	"""Create a new studio session bound to the shared design client."""
	client = getattr(request.app.state, "design_client", None)
	if client is None:
		raise HTTPException(status_code=500, detail="Design client not initialized.")
	session = _store(request).create(client)
	return session_state(session)


async def close_session(request: Request, session_id: str) -> Dict[str, Any]:
	try:
		_store(request).close(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return {"session_id": session_id, "closed": True}


async def upload_room_image(request: Request, session_id: str, image: UploadFile) -> Dict[str, Any]:
	"""Replace the session history with a freshly uploaded room photo."""
	session = get_session(request, session_id)
	image_ref = await read_image_upload(image)
	with translate_errors():
		session.upload(image_ref)
	return session_state(session)


async def navigate(request: Request, session_id: str, direction: str) -> Dict[str, Any]:
	"""Undo or redo; at either end of the history this is a no-op."""
	session = get_session(request, session_id)
	with translate_errors():
		moved = session.undo() if direction == "undo" else session.redo()
	state = session_state(session)
	state["moved"] = moved
	return state


async def scan(request: Request, session_id: str, kind: str) -> Dict[str, Any]:
	"""Run an object or structure scan and merge the labels it finds."""
	session = get_session(request, session_id)
	with translate_errors():
		if kind == "objects":
			result = await session.scan_for_objects()
		else:
			result = await session.scan_for_structure()
	_raise_on_failure(result)
	return session_state(session)


async def select_object(request: Request, session_id: str, label: str) -> Dict[str, Any]:
	session = get_session(request, session_id)
	label = label.strip()
	if not label:
		raise HTTPException(status_code=400, detail="Object label is required.")
	with translate_errors():
		session.select_object(label)
	return session_state(session)


async def set_tool(request: Request, session_id: str, tool: EditTool) -> Dict[str, Any]:
	session = get_session(request, session_id)
	with translate_errors():
		session.set_active_tool(tool)
	return session_state(session)


async def set_tool_value(request: Request, session_id: str, value: str) -> Dict[str, Any]:
	session = get_session(request, session_id)
	with translate_errors():
		session.set_tool_value(value)
	return session_state(session)


async def set_prompt(request: Request, session_id: str, prompt: str) -> Dict[str, Any]:
	session = get_session(request, session_id)
	with translate_errors():
		session.set_prompt(prompt)
	return session_state(session)


async def attach_reference(request: Request, session_id: str, image: UploadFile) -> Dict[str, Any]:
	session = get_session(request, session_id)
	image_ref = await read_image_upload(image)
	with translate_errors():
		session.attach_reference(image_ref)
	return session_state(session)


async def remove_reference(request: Request, session_id: str) -> Dict[str, Any]:
	session = get_session(request, session_id)
	with translate_errors():
		session.remove_reference()
	return session_state(session)


async def generate_designs(request: Request, session_id: str) -> Dict[str, Any]:
	"""Render designs for the pending edit of the current image."""
	session = get_session(request, session_id)
	with translate_errors():
		result = await session.generate()
	_raise_on_failure(result)
	return session_state(session)


async def edit_result(request: Request, session_id: str, index: int) -> Dict[str, Any]:
	"""Append a generated design to the history and continue editing from it."""
	session = get_session(request, session_id)
	with translate_errors():
		try:
			result = session.select_result_for_editing(index)
		except IndexError as exc:
			raise HTTPException(status_code=404, detail=str(exc)) from exc
	_raise_on_failure(result)
	return session_state(session)
