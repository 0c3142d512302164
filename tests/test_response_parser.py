from types import SimpleNamespace

from services.openai.response_parser import (
    extract_image_payloads,
    extract_text,
    extract_usage,
    parse_json_labels,
    parse_label_call,
)


def test_parse_json_labels_variants():
    assert parse_json_labels('["sofa", "rug"]') == ["sofa", "rug"]
    assert parse_json_labels('```\n["lamp"]\n```') == ["lamp"]
    assert parse_json_labels('{"labels": ["floor"]}') == ["floor"]


def test_parse_json_labels_rejects_bad_shapes():
    assert parse_json_labels("") == []
    assert parse_json_labels("sofa, rug") == []
    assert parse_json_labels('[1, 2]') == []
    assert parse_json_labels('{"items": ["sofa"]}') == []


def test_parse_label_call_ignores_other_tools():
    response = SimpleNamespace(
        output=[
            SimpleNamespace(type="function_call", name="other_tool", arguments='{"labels": ["x"]}'),
            SimpleNamespace(type="function_call", name="report_room_labels", arguments='{"labels": ["bed"]}'),
        ]
    )
    assert parse_label_call(response, tool_name="report_room_labels") == ["bed"]


def test_parse_label_call_malformed_arguments():
    response = SimpleNamespace(
        output=[SimpleNamespace(type="function_call", name="report_room_labels", arguments="{oops")]
    )
    assert parse_label_call(response, tool_name="report_room_labels") == []


def test_extract_text_prefers_message_content():
    response = SimpleNamespace(
        output=[
            SimpleNamespace(
                type="message",
                content=[SimpleNamespace(type="output_text", text='["desk"]')],
            )
        ],
        output_text="ignored",
    )
    assert extract_text(response) == '["desk"]'
    assert extract_text(SimpleNamespace(output=None, output_text="fallback")) == "fallback"


def test_extract_image_payloads_skips_empty_slots():
    response = SimpleNamespace(data=[SimpleNamespace(b64_json=None), SimpleNamespace(b64_json="abc")])
    assert extract_image_payloads(response) == ["abc"]
    assert extract_image_payloads(SimpleNamespace(data=None)) == []


def test_extract_usage():
    assert extract_usage(SimpleNamespace(usage=None)) == {"input_tokens": None, "output_tokens": None}
    usage = SimpleNamespace(input_tokens=3, output_tokens=4)
    assert extract_usage(SimpleNamespace(usage=usage)) == {"input_tokens": 3, "output_tokens": 4}
