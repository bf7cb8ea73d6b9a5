"""
Normalized Content Model Unit Tests
"""

import pytest
from pydantic import ValidationError

from ollama_bridge.domain.content import (
    Candidate,
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
    UsageMetadata,
    normalize_contents,
)


class TestNormalizeContents:
    def test_plain_string_becomes_user_turn(self):
        assert normalize_contents("hi") == [Content(role="user", parts=[Part(text="hi")])]

    def test_single_turn_becomes_list(self):
        turn = Content(role="model", parts=[Part(text="ok")])
        assert normalize_contents(turn) == [turn]

    def test_single_dict_becomes_list(self):
        turns = normalize_contents({"role": "user", "parts": [{"text": "hi"}]})
        assert turns == [Content(role="user", parts=[Part(text="hi")])]

    def test_list_keeps_order_and_wraps_strings(self):
        turns = normalize_contents(["a", {"role": "model", "parts": [{"text": "b"}]}])
        assert [(t.role, t.parts[0].text) for t in turns] == [("user", "a"), ("model", "b")]

    def test_none_is_empty(self):
        assert normalize_contents(None) == []


class TestRequests:
    def test_accepts_camel_case_parts(self):
        request = GenerateContentRequest.model_validate(
            {
                "model": "gemini-pro",
                "contents": [
                    {
                        "role": "user",
                        "parts": [
                            {"inlineData": {"mimeType": "image/png", "data": "aGk="}},
                            {"functionCall": {"name": "lookup", "args": {}}},
                            {"text": "describe"},
                        ],
                    }
                ],
            }
        )

        parts = request.contents[0].parts
        assert parts[0].inline_data.mime_type == "image/png"
        assert parts[1].function_call == {"name": "lookup", "args": {}}
        assert parts[2].text == "describe"

    def test_string_contents(self):
        request = GenerateContentRequest(model="gemini-pro", contents="hello")
        assert request.contents[0].role == "user"
        assert request.contents[0].parts[0].text == "hello"

    def test_model_is_required(self):
        with pytest.raises(ValidationError):
            GenerateContentRequest(model="", contents="hi")

    def test_invalid_contents_rejected(self):
        with pytest.raises(ValidationError):
            GenerateContentRequest(model="gemini-pro", contents=42)

    def test_null_parts_mean_no_fragments(self):
        request = GenerateContentRequest.model_validate(
            {"model": "gemini-pro", "contents": [{"role": "user", "parts": None}]}
        )
        assert request.contents[0].parts == ()

    def test_turns_are_immutable(self):
        turn = Content(role="user", parts=[Part(text="hi")])
        with pytest.raises(ValidationError):
            turn.role = "model"


class TestResponse:
    def test_text_joins_first_candidate_parts(self):
        response = GenerateContentResponse(
            candidates=[
                Candidate(content=Content(role="model", parts=[Part(text="a"), Part(text="b")])),
                Candidate(content=Content(role="model", parts=[Part(text="other")]), index=1),
            ]
        )
        assert response.text == "ab"

    def test_text_without_candidates_is_none(self):
        assert GenerateContentResponse().text is None

    def test_wire_uses_camel_case_and_drops_absent_fields(self):
        response = GenerateContentResponse(
            candidates=[Candidate(content=Content(role="model", parts=[Part(text="a")]))],
            usage_metadata=UsageMetadata(prompt_token_count=1, total_token_count=1),
        )
        assert response.to_wire() == {
            "candidates": [{"content": {"role": "model", "parts": [{"text": "a"}]}, "index": 0}],
            "usageMetadata": {"promptTokenCount": 1, "totalTokenCount": 1},
        }
