"""
Protocol Conversion Between Normalized Content and OpenAI Chat Completions

Request side: turns are flattened to plain-text messages, one message per
turn, order preserved. Response side: completions, stream frames and
embedding bodies are validated and reshaped into the normalized vocabulary.

Non-text parts (inline data, files, function calls) are dropped when a turn
is flattened. This is a known limitation of the text-only backend mapping.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import ValidationError

from ollama_bridge.common.errors import DecodeError, FrameDecodeError
from ollama_bridge.domain.backend import (
    BackendMessage,
    ChatCompletion,
    ChatCompletionChunk,
    EmbeddingItem,
    EmbeddingResponse,
)
from ollama_bridge.domain.content import (
    Candidate,
    Content,
    ContentEmbedding,
    GenerateContentResponse,
    Part,
    UsageMetadata,
)

# Model family marker of the normalized vocabulary
ORIGIN_MODEL_PREFIX = "gemini"

SSE_DATA_PREFIX = "data: "
SSE_DONE_LINE = "data: [DONE]"


def to_openai_role(role: Optional[str]) -> str:
    """Map a normalized role onto the backend vocabulary"""
    if role == "user":
        return "user"
    if role == "model":
        return "assistant"
    return "system"


def flatten_parts(content: Content) -> str:
    """Concatenate the text of every part in order; non-text parts add nothing"""
    return "".join(part.text or "" for part in content.parts)


def to_openai_messages(contents: list[Content]) -> list[dict[str, str]]:
    """
    Convert turns to backend messages

    A turn without a role is sent as a user message.
    """
    messages: list[dict[str, str]] = []
    for content in contents:
        message = BackendMessage(
            role=to_openai_role(content.role or "user"),
            content=flatten_parts(content),
        )
        messages.append(message.model_dump())
    return messages


def resolve_model(requested_model: str, default_model: str) -> str:
    """Swap origin-family model names for the configured backend model"""
    if requested_model.startswith(ORIGIN_MODEL_PREFIX):
        return default_model
    return requested_model


def build_chat_payload(
    model: str,
    contents: list[Content],
    default_model: str,
    stream: bool,
) -> dict[str, Any]:
    """
    Build the /chat/completions request body

    Args:
        model: Requested model name
        contents: Conversation turns
        default_model: Backend model used for origin-family names
        stream: Whether the backend should stream

    Returns:
        dict: Backend JSON payload
    """
    return {
        "model": resolve_model(model, default_model),
        "messages": to_openai_messages(contents),
        "stream": stream,
    }


def build_embedding_payload(model: str, text: str, default_model: str) -> dict[str, Any]:
    """Build the /embeddings request body for a single text"""
    return {
        "model": resolve_model(model, default_model),
        "input": text,
    }


def extract_embedding_texts(contents: list[Content]) -> list[str]:
    """Collect texts in turn then part order; parts without text are skipped"""
    texts: list[str] = []
    for content in contents:
        for part in content.parts:
            if part.text:
                texts.append(part.text)
    return texts


def normalize_finish_reason(finish_reason: Optional[str]) -> Optional[str]:
    if not finish_reason:
        return None
    return finish_reason.upper()


def _model_text_content(text: str) -> Content:
    return Content(role="model", parts=(Part(text=text),))


def _load_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Backend response is not valid JSON: {e.msg}",
            details={"body": raw},
        ) from e


def convert_completion_response(raw: str) -> GenerateContentResponse:
    """
    Reshape a non-streaming completion body into a normalized response

    Raises:
        DecodeError: Body is not JSON or misses required fields
    """
    data = _load_json(raw)
    try:
        completion = ChatCompletion.model_validate(data)
    except ValidationError as e:
        raise DecodeError(
            "Backend completion has an unexpected shape",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    candidates = [
        Candidate(
            content=_model_text_content(choice.message.content or ""),
            finish_reason=normalize_finish_reason(choice.finish_reason),
            index=choice.index,
        )
        for choice in completion.choices
    ]

    usage_metadata = None
    if completion.usage is not None:
        usage_metadata = UsageMetadata(
            prompt_token_count=completion.usage.prompt_tokens,
            candidates_token_count=completion.usage.completion_tokens,
            total_token_count=completion.usage.total_tokens,
        )

    return GenerateContentResponse(candidates=candidates, usage_metadata=usage_metadata)


def parse_stream_line(line: str) -> Optional[ChatCompletionChunk]:
    """
    Decode one line of a streamed completion

    Returns None for blank lines, the [DONE] terminator and lines that are not
    `data: ` fields.

    Raises:
        FrameDecodeError: The data payload is not a valid frame
    """
    stripped = line.strip()
    if not stripped or stripped == SSE_DONE_LINE:
        return None
    if not stripped.startswith(SSE_DATA_PREFIX):
        return None

    payload = stripped[len(SSE_DATA_PREFIX):]
    try:
        return ChatCompletionChunk.model_validate_json(payload)
    except ValidationError as e:
        raise FrameDecodeError(stripped, str(e)) from e


def convert_stream_chunk(chunk: ChatCompletionChunk) -> Optional[GenerateContentResponse]:
    """Turn a frame into a response chunk; frames without delta text yield None"""
    if not chunk.choices:
        return None

    choice = chunk.choices[0]
    if not choice.delta.content:
        return None

    candidate = Candidate(
        content=_model_text_content(choice.delta.content),
        finish_reason=normalize_finish_reason(choice.finish_reason),
        index=0,
    )
    return GenerateContentResponse(candidates=[candidate])


def convert_embedding_response(raw: str) -> Optional[ContentEmbedding]:
    """
    Take the first vector of an embeddings body

    Returns None when `data` is missing or empty.

    Raises:
        DecodeError: Body is not JSON or the first `data` entry is malformed
    """
    data = _load_json(raw)
    try:
        response = EmbeddingResponse.model_validate(data)
        if not response.data:
            return None
        first = EmbeddingItem.model_validate(response.data[0])
    except ValidationError as e:
        raise DecodeError(
            "Backend embedding response has an unexpected shape",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    return ContentEmbedding(values=first.embedding)
