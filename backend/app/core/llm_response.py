# backend/app/core/llm_response.py

"""
Tolerant text extraction from chat-completion style responses.

Providers disagree on where the generated text lives. Seen in the wild:

    {"choices": [{"message": {"content": "..."}}]}
    {"choices": [{"message": {"content": [{"type": "output_text", "text": "..."}]}}]}
    {"choices": [{"message": {"output": "..."}}]}
    {"choices": [{"text": "..."}]}

Rather than pinning one schema, every JSON node is classified into a small set
of shapes and reduced to text by a recursive walk.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from backend.app.core.errors import GenerationFailure

RESULT_FIELDS = ("choices", "results")
ARRAY_SEPARATOR = "\n"


class NodeKind(str, Enum):
    NULL = "null"
    TEXT = "text"
    ARRAY = "array"
    TEXT_OBJECT = "text_object"        # {"text": "..."}
    CONTENT_OBJECT = "content_object"  # {"content": <node>}
    OBJECT = "object"                  # anything else with fields
    SCALAR = "scalar"                  # numbers / booleans carry no text


def classify(node: Any) -> NodeKind:
    if node is None:
        return NodeKind.NULL
    if isinstance(node, str):
        return NodeKind.TEXT
    if isinstance(node, list):
        return NodeKind.ARRAY
    if isinstance(node, dict):
        if isinstance(node.get("text"), str):
            return NodeKind.TEXT_OBJECT
        if "content" in node:
            return NodeKind.CONTENT_OBJECT
        return NodeKind.OBJECT
    return NodeKind.SCALAR


def collect_text(node: Any, parts: Optional[List[str]] = None) -> List[str]:
    """Append every textual leaf under `node` to `parts` (in document order)."""
    if parts is None:
        parts = []
    kind = classify(node)

    if kind is NodeKind.TEXT:
        _append(parts, node)
    elif kind is NodeKind.TEXT_OBJECT:
        _append(parts, node["text"])
    elif kind is NodeKind.CONTENT_OBJECT:
        collect_text(node["content"], parts)
    elif kind is NodeKind.ARRAY:
        for element in node:
            collect_text(element, parts)
            if parts and not parts[-1].endswith(ARRAY_SEPARATOR):
                parts.append(ARRAY_SEPARATOR)
    elif kind is NodeKind.OBJECT:
        for value in node.values():
            collect_text(value, parts)
    # NULL and SCALAR end the walk
    return parts


def node_to_text(node: Any) -> str:
    return "".join(collect_text(node)).strip()


def extract_choice_text(choice: Any) -> str:
    """Pick the most likely content node of one choice and flatten it."""
    if not isinstance(choice, dict):
        return node_to_text(choice)

    message = choice["message"] if "message" in choice else choice
    if isinstance(message, dict) and "content" in message:
        node = message["content"]
    elif isinstance(message, dict) and "output" in message:
        node = message["output"]
    elif "text" in choice:
        node = choice["text"]
    else:
        node = message
    return node_to_text(node)


def extract_completion_text(payload: Any) -> str:
    """
    Text of the first choice of a parsed response body.
    Raises GenerationFailure when the body has no usable choice list.
    """
    if not isinstance(payload, dict):
        raise GenerationFailure(f"Response body is a JSON {type(payload).__name__}, expected an object")

    choices = _first_result_list(payload)
    if not choices:
        raise GenerationFailure("Response missing 'choices' field")
    return extract_choice_text(choices[0])


def _first_result_list(payload: Dict[str, Any]) -> Optional[list]:
    for field in RESULT_FIELDS:
        value = payload.get(field)
        if isinstance(value, list) and value:
            return value
    return None


def _append(parts: List[str], text: str) -> None:
    if text:
        parts.append(text)
