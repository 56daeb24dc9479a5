"""Unit tests for tolerant chat-completion text extraction."""

import pytest

from backend.app.core.errors import GenerationFailure
from backend.app.core.llm_response import (
    NodeKind,
    classify,
    extract_choice_text,
    extract_completion_text,
    node_to_text,
)


@pytest.mark.unit
@pytest.mark.parametrize("node, kind", [
    (None, NodeKind.NULL),
    ("hi", NodeKind.TEXT),
    ([1, 2], NodeKind.ARRAY),
    ({"text": "hi"}, NodeKind.TEXT_OBJECT),
    ({"content": "hi"}, NodeKind.CONTENT_OBJECT),
    ({"text": {"value": "hi"}}, NodeKind.OBJECT),
    ({"foo": "bar"}, NodeKind.OBJECT),
    (42, NodeKind.SCALAR),
    (True, NodeKind.SCALAR),
])
def test_classify(node, kind):
    assert classify(node) is kind


@pytest.mark.unit
def test_plain_string_content():
    payload = {"choices": [{"message": {"content": "X"}}]}

    assert extract_completion_text(payload) == "X"


@pytest.mark.unit
def test_content_parts_are_joined_with_separator():
    payload = {"choices": [{"message": {"content": [{"text": "A"}, {"text": "B"}]}}]}

    assert extract_completion_text(payload) == "A\nB"


@pytest.mark.unit
def test_typed_output_parts():
    payload = {"choices": [{"message": {"content": [
        {"type": "output_text", "text": "- first"},
        {"type": "output_text", "text": "- second"},
    ]}}]}

    assert extract_completion_text(payload) == "- first\n- second"


@pytest.mark.unit
def test_output_field_instead_of_content():
    payload = {"choices": [{"message": {"output": "from output"}}]}

    assert extract_completion_text(payload) == "from output"


@pytest.mark.unit
def test_legacy_text_choice():
    payload = {"choices": [{"text": "  completion text  ", "index": 0}]}

    assert extract_completion_text(payload) == "completion text"


@pytest.mark.unit
def test_nested_content_objects():
    payload = {"choices": [{"message": {"content": [{"content": [{"text": "deep"}]}, "flat"]}}]}

    assert extract_completion_text(payload) == "deep\nflat"


@pytest.mark.unit
def test_unknown_object_visits_every_field():
    node = {"role": "assistant", "parts": {"a": "one", "b": {"c": "two"}}, "n": 3, "missing": None}

    assert node_to_text(node) == "assistantonetwo"


@pytest.mark.unit
def test_null_content_yields_empty_text():
    assert extract_choice_text({"message": {"content": None}}) == ""


@pytest.mark.unit
def test_string_choice():
    assert extract_completion_text({"choices": ["just text"]}) == "just text"


@pytest.mark.unit
def test_results_field_is_accepted():
    assert extract_completion_text({"results": [{"text": "ok"}]}) == "ok"


@pytest.mark.unit
@pytest.mark.parametrize("payload", [
    {},
    {"choices": []},
    {"choices": None},
    {"error": {"message": "quota exceeded"}},
    ["not", "an", "object"],
    "text",
])
def test_missing_choices_raises(payload):
    with pytest.raises(GenerationFailure):
        extract_completion_text(payload)
