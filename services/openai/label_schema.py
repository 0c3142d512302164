"""Schema definitions for the room label detection tool."""

from typing import Any, Dict

FUNCTION_NAME = "report_room_labels"

FUNCTION_DEFINITION: Dict[str, Any] = {
    "type": "function",
    "name": FUNCTION_NAME,
    "description": "Return the distinct, editable parts of the room visible in the image.",
    "parameters": {
        "type": "object",
        "properties": {
            "labels": {
                "type": "array",
                "description": "Short lowercase names, each naming one part of the room.",
                "items": {"type": "string"},
            },
        },
        "required": ["labels"],
        "additionalProperties": False,
    },
    "strict": True,
}
