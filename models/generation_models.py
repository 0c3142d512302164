"""Request values handed to the remote design client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from models.image_ref import ImageRef

FRESH_OUTPUT_COUNT = 4
EDIT_OUTPUT_COUNT = 1


@dataclass(frozen=True)
class FreshGeneration:
    """First redesign of an unedited upload; the prompt is a style brief."""

    prompt: str


@dataclass(frozen=True)
class WholeImageEdit:
    """Specific change to an already generated design."""

    prompt: str


@dataclass(frozen=True)
class TargetedEdit:
    """Change scoped to a single detected object."""

    label: str
    transform: Optional[str] = None
    style_text: Optional[str] = None
    reference_image: Optional[ImageRef] = None


Intent = Union[FreshGeneration, WholeImageEdit, TargetedEdit]


@dataclass(frozen=True)
class GenerationRequest:
    image: ImageRef
    intent: Intent
    output_count: int

    @property
    def kind(self) -> str:
        if isinstance(self.intent, TargetedEdit):
            return "targeted_edit"
        if isinstance(self.intent, WholeImageEdit):
            return "whole_image_edit"
        return "fresh_generation"
