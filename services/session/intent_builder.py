"""Reduce the pending edit state into a single generation request."""

from __future__ import annotations

from typing import Optional

from models.errors import ValidationError
from models.generation_models import (
    EDIT_OUTPUT_COUNT,
    FRESH_OUTPUT_COUNT,
    FreshGeneration,
    GenerationRequest,
    TargetedEdit,
    WholeImageEdit,
)
from models.image_ref import ImageRef
from models.session_models import EditSession, EditTool


def build_generation_request(
    session: EditSession,
    image: Optional[ImageRef],
    is_editing: bool,
) -> GenerationRequest:
    """Build the request for the current image.

    Args:
        session: Pending edit parameters.
        image: Image currently shown in the history.
        is_editing: True when the shown image is past the original upload.

    Returns:
        A request carrying exactly one intent: a targeted-object edit when an
        object is selected, otherwise a whole-image edit while editing, or a
        fresh generation for an unedited upload.

    Raises:
        ValidationError: If no image is loaded or there is nothing to apply.
    """
    if image is None:
        raise ValidationError("Upload a room photo before generating designs.")

    prompt = session.prompt.strip()
    tool_value = session.tool_value.strip()
    if not prompt and not tool_value and session.reference_image is None:
        raise ValidationError("Describe a style or transformation, or attach a reference image.")

    if session.selected_object:
        transform = tool_value if session.active_tool != EditTool.NONE and tool_value else None
        intent = TargetedEdit(
            label=session.selected_object,
            transform=transform,
            style_text=prompt or None,
            reference_image=session.reference_image,
        )
        return GenerationRequest(image=image, intent=intent, output_count=EDIT_OUTPUT_COUNT)

    if is_editing:
        return GenerationRequest(
            image=image, intent=WholeImageEdit(prompt=prompt), output_count=EDIT_OUTPUT_COUNT
        )
    return GenerationRequest(
        image=image, intent=FreshGeneration(prompt=prompt), output_count=FRESH_OUTPUT_COUNT
    )
