"""Room detection and redesign calls against the OpenAI API."""

import asyncio
import logging
import os
import time
from typing import List, Optional

import openai
from openai import AsyncOpenAI

from models.errors import AssetConversionError, RoomStudioError, TransportError
from models.generation_models import GenerationRequest
from models.image_ref import ImageRef
from services.image_assets import image_from_base64
from services.openai.design_prompts import (
    build_design_prompt,
    detection_system_prompt,
    objects_prompt,
    structure_prompt,
)
from services.openai.label_schema import FUNCTION_DEFINITION, FUNCTION_NAME
from services.openai.media_inputs import UploadTuple, build_detection_inputs, build_edit_images
from services.openai.response_parser import extract_image_payloads, extract_usage, parse_label_call

LOGGER = logging.getLogger(__name__)
DETECTION_MODEL = os.getenv("OPENAI_MODEL", "gpt-5")
IMAGE_MODEL = os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1")


class RoomDesignClient:
    """Remote collaborator that labels room photos and renders redesigns."""

    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        detection_model: str = DETECTION_MODEL,
        image_model: str = IMAGE_MODEL,
    ) -> None:
        """Initialize the design client with a shared OpenAI async client."""
        if client is None:
            raise ValueError("OpenAI client must be provided.")
        self.client = client
        self.detection_model = detection_model
        self.image_model = image_model

    async def detect_objects(self, image: ImageRef) -> List[str]:
        """Return editable furnishing labels found in the room image."""
        return await self._detect(image, objects_prompt(), scan="objects")

    async def detect_structural_elements(self, image: ImageRef) -> List[str]:
        """Return structural surface labels (floor, ceiling, walls)."""
        return await self._detect(image, structure_prompt(), scan="structure")

    async def generate(self, request: GenerationRequest) -> List[ImageRef]:
        """Render the requested number of designs.

        Multi-output requests run one call per slot concurrently; failed or
        empty slots are dropped and whatever succeeded is returned, possibly
        an empty list. A single-output request propagates `TransportError`.

        Args:
            request: Generation request built from the session state.

        Returns:
            Usable generated images in slot order.
        """
        prompt = build_design_prompt(request.intent)
        images = build_edit_images(request)
        start_time = time.time()

        if request.output_count == 1:
            result = await self._generate_single(prompt, images, slot=0)
            designs = [result] if result is not None else []
        else:
            outcomes = await asyncio.gather(
                *(self._generate_single(prompt, images, slot=slot) for slot in range(request.output_count)),
                return_exceptions=True,
            )
            designs = []
            for slot, outcome in enumerate(outcomes):
                if isinstance(outcome, RoomStudioError):
                    LOGGER.warning("Design slot %d failed: %s", slot, outcome)
                elif isinstance(outcome, BaseException):
                    raise outcome
                elif outcome is not None:
                    designs.append(outcome)

        LOGGER.info(
            "Generated %d/%d %s designs in %.3fs",
            len(designs),
            request.output_count,
            request.kind,
            time.time() - start_time,
        )
        return designs

    async def _detect(self, image: ImageRef, user_prompt: str, *, scan: str) -> List[str]:
        """Send a detection request and parse the returned label list."""
        try:
            response = await self.client.responses.create(
                model=self.detection_model,
                input=build_detection_inputs(detection_system_prompt(), user_prompt, image),
                tools=[FUNCTION_DEFINITION],
                tool_choice={"type": "function", "name": FUNCTION_NAME},
            )
        except openai.APIError as exc:
            LOGGER.error("Error during %s detection call: %s", scan, exc)
            raise TransportError(f"Detection request failed: {exc}") from exc

        labels = parse_label_call(response, tool_name=FUNCTION_NAME)
        LOGGER.info("Detected %d %s labels (usage: %s)", len(labels), scan, extract_usage(response))
        return labels

    async def _generate_single(self, prompt: str, images: List[UploadTuple], *, slot: int) -> Optional[ImageRef]:
        """Request one design; return None when the model produced no usable image."""
        try:
            response = await self.client.images.edit(
                model=self.image_model,
                image=images,
                prompt=prompt,
                n=1,
            )
        except openai.APIError as exc:
            LOGGER.error("Error during image edit call: %s", exc)
            raise TransportError(f"Image generation request failed: {exc}") from exc

        for payload in extract_image_payloads(response):
            try:
                return image_from_base64(payload, filename=f"ai-design-{slot + 1}.png")
            except AssetConversionError as exc:
                LOGGER.warning("Discarding undecodable design output: %s", exc)
        return None
