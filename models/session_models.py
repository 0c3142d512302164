"""Session domain models for interactive room redesign."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from models.image_ref import ImageRef

FRESH_UPLOAD_PROMPT = "Make this room modern and minimalist."


class EditTool(str, Enum):
	"""Transform tools available while an object is targeted."""

	RESIZE = "resize"
	ROTATE = "rotate"
	REPOSITION = "reposition"
	NONE = "none"


class SessionStatus(str, Enum):
	"""Busy state of a studio session."""

	IDLE = "idle"
	SCANNING = "scanning"
	GENERATING = "generating"


@dataclass(frozen=True)
class EditSession:
	"""Pending edit parameters for the image currently shown.

	Only meaningful together with the current history entry; every change of
	the active image replaces it with a fresh value.
	"""

	selected_object: Optional[str] = None
	active_tool: EditTool = EditTool.NONE
	tool_value: str = ""
	reference_image: Optional[ImageRef] = None
	prompt: str = ""
	detected_labels: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ActionResult:
	"""Outcome of a session action that talks to the remote model."""

	ok: bool
	message: Optional[str] = None
	error: Optional[Exception] = None
