"""Interactive redesign session: history, pending edits and remote calls.

A session is driven by one user at a time. Scans and generations move the
session out of `idle`; every mutating call made before it returns to `idle`
is rejected with `BusyError` instead of being queued.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from models.errors import AssetConversionError, BusyError, EmptyResultError, RoomStudioError, ValidationError
from models.image_ref import ImageRef
from models.session_models import FRESH_UPLOAD_PROMPT, ActionResult, EditTool, SessionStatus
from services.image_assets import as_editable_copy
from services.session import edit_session
from services.session.history import HistoryNavigator
from services.session.intent_builder import build_generation_request

LOGGER = logging.getLogger(__name__)

OBJECT_SCAN_FAILED = "Could not identify objects in the image. Please try again."
STRUCTURE_SCAN_FAILED = "Could not identify the main elements of the room. Please try again."
GENERATION_FAILED = "Could not create designs. Please try again."
SELECTION_FAILED = "Could not select the image for editing."
EDITABLE_FILENAME = "edited-design.png"

Detector = Callable[[ImageRef], Awaitable[List[str]]]


class StudioSession:
    """Owns one edit history, the pending edit parameters and the latest results."""

    def __init__(self, session_id: str, client) -> None:
        self.session_id = session_id
        self.client = client
        self.history = HistoryNavigator()
        self.edit = edit_session.fresh_session()
        self.results: Tuple[ImageRef, ...] = ()
        self.status = SessionStatus.IDLE
        self.last_error: Optional[str] = None

    # navigation

    def upload(self, image: ImageRef) -> None:
        """Start over from a newly uploaded room photo."""
        self._begin_action()
        self.history.record_new_root(image)
        self._reset_for_new_image(prompt=FRESH_UPLOAD_PROMPT)

    def undo(self) -> bool:
        self._begin_action()
        if self.history.undo():
            self._reset_for_new_image()
            return True
        return False

    def redo(self) -> bool:
        self._begin_action()
        if self.history.redo():
            self._reset_for_new_image()
            return True
        return False

    def select_for_further_editing(self, image: ImageRef) -> ActionResult:
        """Make `image` the new current entry, dropping any redo branch."""
        self._begin_action()
        try:
            editable = as_editable_copy(image, EDITABLE_FILENAME)
        except AssetConversionError as exc:
            return self._fail(exc, SELECTION_FAILED)
        self.history.select_for_further_editing(editable)
        self._reset_for_new_image()
        return ActionResult(ok=True)

    def select_result_for_editing(self, index: int) -> ActionResult:
        """Continue editing from one of the latest generated designs."""
        if index < 0 or index >= len(self.results):
            raise IndexError(f"Result index {index} out of range")
        return self.select_for_further_editing(self.results[index])

    # pending edit parameters

    def select_object(self, label: str) -> None:
        self._begin_action()
        self.edit = edit_session.select_object(self.edit, label)

    def set_active_tool(self, tool: EditTool) -> None:
        self._begin_action()
        self.edit = edit_session.set_active_tool(self.edit, tool)

    def set_tool_value(self, value: str) -> None:
        self._begin_action()
        self.edit = edit_session.set_tool_value(self.edit, value)

    def set_prompt(self, prompt: str) -> None:
        self._begin_action()
        self.edit = edit_session.set_prompt(self.edit, prompt)

    def attach_reference(self, image: ImageRef) -> None:
        self._begin_action()
        self.edit = edit_session.attach_reference(self.edit, image)

    def remove_reference(self) -> None:
        self._begin_action()
        self.edit = edit_session.remove_reference(self.edit)

    # remote actions

    async def scan_for_objects(self) -> ActionResult:
        return await self._scan(self.client.detect_objects, OBJECT_SCAN_FAILED)

    async def scan_for_structure(self) -> ActionResult:
        return await self._scan(self.client.detect_structural_elements, STRUCTURE_SCAN_FAILED)

    async def generate(self) -> ActionResult:
        """Build a request from the pending edit and render designs for it.

        On success the results replace the previous ones and the object
        targeting context is cleared; on failure nothing but `last_error`
        changes.
        """
        self._begin_action()
        try:
            request = build_generation_request(self.edit, self.history.current_image, self.history.is_editing)
        except ValidationError as exc:
            return self._fail(exc, str(exc))

        self.status = SessionStatus.GENERATING
        try:
            designs = await self.client.generate(request)
            if not designs:
                raise EmptyResultError("The model did not return any usable design.")
        except RoomStudioError as exc:
            return self._fail(exc, GENERATION_FAILED)
        finally:
            self.status = SessionStatus.IDLE

        self.results = tuple(designs)
        self.edit = edit_session.clear_targeting(self.edit)
        LOGGER.info("Session %s received %d %s result(s)", self.session_id, len(designs), request.kind)
        return ActionResult(ok=True)

    def snapshot(self) -> Dict[str, Any]:
        """Return a JSON-ready view of the whole session."""
        history = self.history
        edit = self.edit
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "history_length": len(history),
            "current_index": history.current_index,
            "can_undo": history.can_undo,
            "can_redo": history.can_redo,
            "is_editing": history.is_editing,
            "selected_object": edit.selected_object,
            "active_tool": edit.active_tool.value,
            "tool_value": edit.tool_value,
            "prompt": edit.prompt,
            "has_reference_image": edit.reference_image is not None,
            "detected_labels": list(edit.detected_labels),
            "result_count": len(self.results),
            "error": self.last_error,
        }

    # internals

    def _begin_action(self) -> None:
        if self.status != SessionStatus.IDLE:
            raise BusyError(f"Session is busy ({self.status.value}); wait for the current action to finish.")
        self.last_error = None

    def _reset_for_new_image(self, prompt: str = "") -> None:
        self.edit = edit_session.fresh_session(prompt)
        self.results = ()

    async def _scan(self, detector: Detector, failure_message: str) -> ActionResult:
        self._begin_action()
        image = self.history.current_image
        if image is None:
            return self._fail(ValidationError("Upload a room photo before scanning."), failure_message)

        self.status = SessionStatus.SCANNING
        try:
            labels = await detector(image)
            if not labels:
                raise EmptyResultError("The model did not return any labels.")
        except RoomStudioError as exc:
            return self._fail(exc, failure_message)
        finally:
            self.status = SessionStatus.IDLE

        self.edit = edit_session.merge_labels(self.edit, labels)
        return ActionResult(ok=True)

    def _fail(self, exc: RoomStudioError, message: str) -> ActionResult:
        LOGGER.warning("Session %s action failed: %s", self.session_id, exc)
        self.last_error = message
        return ActionResult(ok=False, message=message, error=exc)
