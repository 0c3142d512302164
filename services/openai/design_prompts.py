"""Prompt builders for room detection and redesign."""

from models.generation_models import FreshGeneration, Intent, TargetedEdit, WholeImageEdit


def detection_system_prompt() -> str:
    """Return the system prompt shared by both detection scans."""
    return (
        "You are an interior design assistant. You look at photos of rooms and name the parts "
        "of the room a user could ask to redesign. Labels are short, lowercase noun phrases."
    )


def objects_prompt() -> str:
    """Return the instruction for the furnishing scan."""
    return (
        "Analyze the provided room image and identify the main, distinct and editable interior "
        "design items. Examples: 'sofa', 'window curtains', 'coffee table', 'rug'. Include only "
        "items that are clearly visible and could realistically be edited. Do not include "
        "structural elements such as walls, floor or ceiling. Return between 3 and 8 labels."
    )


def structure_prompt() -> str:
    """Return the instruction for the structural surface scan."""
    return (
        "Analyze the provided room image and identify the main structural surfaces. Specifically "
        "list the floor, the ceiling and any distinct walls (for example 'left wall', 'back wall', "
        "'wall with window'). Include only 'floor', 'ceiling' and wall descriptions. Return "
        "between 2 and 5 labels."
    )


def _targeted_prompt(intent: TargetedEdit) -> str:
    label = intent.label
    transformation = f'Apply this transformation to it: "{intent.transform}".\n' if intent.transform else ""
    style = f'Then, apply this style change to it: "{intent.style_text}".\n' if intent.style_text else ""
    if intent.reference_image is not None:
        return (
            "You are an expert photo editor. The first image is the user's room. The second image "
            f'is a style reference. The user wants to modify a specific object in the first image: the "{label}". '
            f'Use the second image as a style and material reference. Change the "{label}" to match the '
            f"style of the object in the second image. {transformation} {style} "
            f'Apply the changes ONLY to the "{label}". Preserve the rest of the first image, including '
            "the overall style, layout, lighting, and other objects, as closely as possible. "
            "The final image should be a photorealistic rendering."
        )
    return (
        f'You are an expert photo editor. The user wants to modify a specific object: the "{label}". '
        f'Apply the user\'s requested changes ONLY to the "{label}". {transformation} {style} '
        "Preserve the rest of the image, including the overall style, layout, lighting, and other "
        "objects, as closely as possible. The final image should be a photorealistic rendering."
    )


def build_design_prompt(intent: Intent) -> str:
    """Return the full redesign instruction for a generation intent."""
    if isinstance(intent, TargetedEdit):
        return _targeted_prompt(intent)
    if isinstance(intent, WholeImageEdit):
        return (
            "You are an expert photo editor and interior designer. A user has provided an image of a "
            "room and a request to modify it. Preserve the overall image, style, and layout. Apply the "
            "SPECIFIC change requested by the user. The final image should be a photorealistic "
            f'rendering. User\'s request: "{intent.prompt}"'
        )
    if isinstance(intent, FreshGeneration):
        return (
            "You are an expert interior designer. A user has provided an image of their room and a "
            "request. Your task is to preserve the overall style of the interior shown in the image. "
            "Keep the exact same architectural layout, windows, doors, and perspective of the room. "
            "Subtly enhance and improve the interior furnishings, color palette, lighting, and decor "
            "based on the user's request, while maintaining the original's core aesthetic. The final "
            "image should be a photorealistic rendering of the redesigned space. "
            f'User\'s request: "{intent.prompt}"'
        )
    raise TypeError(f"Unsupported intent: {type(intent).__name__}")
