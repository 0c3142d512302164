"""Helpers to parse Responses API and Images API outputs."""

import json
import logging
from typing import Any, Dict, List, Optional

LOGGER = logging.getLogger(__name__)


def _string_list(value: Any) -> List[str]:
    """Return `value` if it is a list of strings, otherwise an empty list."""
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return [item.strip() for item in value if item.strip()]
    return []


def parse_json_labels(text: str) -> List[str]:
    """Parse a JSON array of labels, tolerating a markdown code fence around it.

    Malformed input or any shape other than a list of strings yields [].
    """
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        LOGGER.warning("Could not parse label JSON: %r", cleaned[:200])
        return []
    if isinstance(parsed, dict):
        parsed = parsed.get("labels")
    return _string_list(parsed)


def parse_label_call(response: Any, *, tool_name: str) -> List[str]:
    """Extract the label list from the named function call.

    Falls back to the plain output text when the model answered without
    calling the tool.
    """
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "function_call" or getattr(item, "name", None) != tool_name:
            continue
        try:
            args = json.loads(getattr(item, "arguments", "{}") or "{}")
        except json.JSONDecodeError:
            LOGGER.warning("Function call '%s' returned malformed arguments.", tool_name)
            return []
        return _string_list(args.get("labels")) if isinstance(args, dict) else []
    return parse_json_labels(extract_text(response))


def extract_text(response: Any) -> str:
    """Extract the first output_text entry from the response."""
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                return getattr(content, "text", "") or ""
    return getattr(response, "output_text", "") or ""


def extract_image_payloads(response: Any) -> List[str]:
    """Return the base64 payloads of an Images API response, skipping empty slots."""
    payloads = []
    for item in getattr(response, "data", None) or []:
        b64 = getattr(item, "b64_json", None)
        if b64:
            payloads.append(b64)
    return payloads


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "input_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "output_tokens", None) if usage else None,
    }
