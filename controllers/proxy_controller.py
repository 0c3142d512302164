"""Controller for the stateless design proxy used by single-page frontends."""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException

from controllers.session_controller import status_for
from models.errors import EmptyResultError, RoomStudioError
from models.image_ref import ImageRef
from models.session_models import EditSession, EditTool
from services.image_assets import image_from_base64
from services.openai.design_client import RoomDesignClient
from services.session.intent_builder import build_generation_request

LOGGER = logging.getLogger(__name__)


class DesignProxyController:
    """Dispatch `{action, payload}` requests to the design client.

    The payload keys follow the original frontend contract (camelCase).
    """

    ACTIONS = ("identifyObjects", "identifyElements", "generateDesigns")

    def __init__(self, client: RoomDesignClient) -> None:
        self.client = client

    async def handle(self, action: Optional[str], payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Run one proxy action.

        Args:
            action: One of `ACTIONS`.
            payload: Action parameters, always including `base64Image`.

        Returns:
            `{"objects": [...]}`, `{"elements": [...]}` or `{"designs": [...]}`.

        Raises:
            HTTPException: 400 for a missing or unknown action or bad input,
                502 when the model fails or returns no designs.
        """
        if not action or not payload:
            raise HTTPException(status_code=400, detail="Missing action or payload")
        if action not in self.ACTIONS:
            raise HTTPException(status_code=400, detail="Invalid action")

        try:
            image = self._payload_image(payload, "base64Image", "room.png")
            if action == "identifyObjects":
                return {"objects": await self.client.detect_objects(image)}
            if action == "identifyElements":
                return {"elements": await self.client.detect_structural_elements(image)}
            return {"designs": await self._generate(image, payload)}
        except RoomStudioError as exc:
            LOGGER.error("Design proxy action %s failed: %s", action, exc)
            status_code = status_for(exc)
            # asset errors here always come from the client's base64 input
            raise HTTPException(status_code=400 if status_code == 422 else status_code, detail=str(exc)) from exc

    async def _generate(self, image: ImageRef, payload: Dict[str, Any]) -> list:
        reference = None
        if payload.get("referenceImageBase64") and payload.get("referenceImageMimeType"):
            reference = self._payload_image(payload, "referenceImageBase64", "reference.png")

        try:
            tool = EditTool(payload.get("activeTool") or "none")
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown tool: {payload.get('activeTool')}") from exc

        session = EditSession(
            selected_object=payload.get("selectedObject") or None,
            active_tool=tool,
            tool_value=payload.get("toolValue") or "",
            reference_image=reference,
            prompt=payload.get("userPrompt") or "",
        )
        request = build_generation_request(session, image, bool(payload.get("isEditing")))
        designs = await self.client.generate(request)
        if not designs:
            raise EmptyResultError("The model could not create any valid design.")
        return [design.display_url for design in designs]

    @staticmethod
    def _payload_image(payload: Dict[str, Any], key: str, filename: str) -> ImageRef:
        encoded = payload.get(key)
        if not encoded:
            raise HTTPException(status_code=400, detail=f"Missing {key}")
        return image_from_base64(encoded, filename=filename)
