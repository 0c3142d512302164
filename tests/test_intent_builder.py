import pytest

from models.errors import ValidationError
from models.generation_models import FreshGeneration, TargetedEdit, WholeImageEdit
from models.session_models import EditSession, EditTool
from services.session.intent_builder import build_generation_request


def test_nothing_to_do_is_rejected(room_image):
    with pytest.raises(ValidationError):
        build_generation_request(EditSession(), room_image, is_editing=False)


def test_whitespace_only_inputs_count_as_empty(room_image):
    with pytest.raises(ValidationError):
        build_generation_request(EditSession(prompt="   ", tool_value=" "), room_image, is_editing=True)


def test_missing_image_is_rejected():
    with pytest.raises(ValidationError):
        build_generation_request(EditSession(prompt="scandinavian"), None, is_editing=False)


@pytest.mark.parametrize("field", ["prompt", "tool_value", "reference_image"])
def test_any_single_input_is_enough(room_image, field):
    value = room_image if field == "reference_image" else "scandinavian"
    request = build_generation_request(EditSession(**{field: value}), room_image, is_editing=False)
    assert request.image is room_image


def test_fresh_generation_requests_four(room_image):
    request = build_generation_request(EditSession(prompt="hotel suite"), room_image, is_editing=False)
    assert request.intent == FreshGeneration(prompt="hotel suite")
    assert request.output_count == 4
    assert request.kind == "fresh_generation"


def test_whole_image_edit_requests_one(room_image):
    request = build_generation_request(EditSession(prompt="sage walls"), room_image, is_editing=True)
    assert request.intent == WholeImageEdit(prompt="sage walls")
    assert request.output_count == 1


def test_targeted_edit_takes_precedence(room_image):
    session = EditSession(
        selected_object="sofa",
        active_tool=EditTool.RESIZE,
        tool_value="20% larger",
        prompt="navy velvet",
        reference_image=room_image,
    )
    for editing in (False, True):
        request = build_generation_request(session, room_image, is_editing=editing)
        assert request.output_count == 1
        assert request.intent == TargetedEdit(
            label="sofa",
            transform="20% larger",
            style_text="navy velvet",
            reference_image=room_image,
        )


def test_transform_requires_active_tool(room_image):
    session = EditSession(selected_object="lamp", tool_value="move left", prompt="brass")
    request = build_generation_request(session, room_image, is_editing=False)
    assert request.intent.transform is None
    assert request.intent.style_text == "brass"
    assert request.intent.reference_image is None
