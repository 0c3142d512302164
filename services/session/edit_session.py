"""Transitions over the pending edit parameters.

Each function takes an `EditSession` and returns a new, fully specified one.
Fields that only make sense for a targeted object (tool, tool value,
reference image) are cleared by every transition that changes the selected
object.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from models.image_ref import ImageRef
from models.session_models import EditSession, EditTool


def fresh_session(prompt: str = "") -> EditSession:
    """Return an empty edit session, optionally with a starting prompt."""
    return EditSession(prompt=prompt)


def select_object(session: EditSession, label: str) -> EditSession:
    """Toggle the targeted object.

    Re-selecting the current label clears the selection but keeps the prompt;
    selecting another label starts that object from a clean slate.
    """
    if session.selected_object == label:
        return replace(
            session,
            selected_object=None,
            active_tool=EditTool.NONE,
            tool_value="",
            reference_image=None,
        )
    return replace(
        session,
        selected_object=label,
        prompt="",
        active_tool=EditTool.NONE,
        tool_value="",
        reference_image=None,
    )


def set_active_tool(session: EditSession, tool: EditTool) -> EditSession:
    """Toggle a transform tool; any tool change discards the typed value."""
    if tool == EditTool.NONE or session.active_tool == tool:
        return replace(session, active_tool=EditTool.NONE, tool_value="")
    return replace(session, active_tool=tool, tool_value="")


def set_tool_value(session: EditSession, value: str) -> EditSession:
    return replace(session, tool_value=value)


def set_prompt(session: EditSession, prompt: str) -> EditSession:
    return replace(session, prompt=prompt)


def attach_reference(session: EditSession, image: Optional[ImageRef]) -> EditSession:
    return replace(session, reference_image=image)


def remove_reference(session: EditSession) -> EditSession:
    return replace(session, reference_image=None)


def merge_labels(session: EditSession, labels: Iterable[str]) -> EditSession:
    """Union new labels into the detected set, keeping first-seen order."""
    merged = list(session.detected_labels)
    seen = set(merged)
    for label in labels:
        if label not in seen:
            seen.add(label)
            merged.append(label)
    return replace(session, detected_labels=tuple(merged))


def clear_targeting(session: EditSession) -> EditSession:
    """Drop the object context after a successful generation."""
    return replace(
        session,
        selected_object=None,
        active_tool=EditTool.NONE,
        tool_value="",
        reference_image=None,
    )
