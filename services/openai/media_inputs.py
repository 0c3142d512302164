"""Utilities to build multimodal payloads for the Responses and Images APIs."""

from typing import Any, Dict, List, Tuple

from models.generation_models import GenerationRequest, TargetedEdit
from models.image_ref import ImageRef

UploadTuple = Tuple[str, bytes, str]


def build_detection_inputs(system_prompt: str, user_prompt: str, image: ImageRef) -> List[Dict[str, Any]]:
    """Build the Responses API input array for a detection scan."""
    return [
        {
            "type": "message",
            "role": "system",
            "content": [{"type": "input_text", "text": system_prompt}],
        },
        {
            "type": "message",
            "role": "user",
            "content": [
                {"type": "input_text", "text": user_prompt},
                {"type": "input_image", "image_url": image.display_url},
            ],
        },
    ]


def to_upload(image: ImageRef) -> UploadTuple:
    """Return the `(filename, content, mime_type)` tuple accepted by the SDK for file fields."""
    return (image.filename, image.data, image.mime_type)


def build_edit_images(request: GenerationRequest) -> List[UploadTuple]:
    """Return the room image, followed by the reference image for targeted edits."""
    images = [to_upload(request.image)]
    intent = request.intent
    if isinstance(intent, TargetedEdit) and intent.reference_image is not None:
        images.append(to_upload(intent.reference_image))
    return images
