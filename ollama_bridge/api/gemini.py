"""
Generate-Content REST API

Exposes the content generator under Gemini-style REST paths.
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Body, Header
from fastapi.exceptions import RequestValidationError
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ValidationError

from ollama_bridge.api.deps import ContentGeneratorDep
from ollama_bridge.common.model_catalog import list_model_ids
from ollama_bridge.domain.content import (
    CountTokensRequest,
    EmbedContentRequest,
    GenerateContentRequest,
)

router = APIRouter(prefix="/v1beta", tags=["Generate Content"])


def _parse(model_cls: type[BaseModel], model: str, body: dict[str, Any]) -> Any:
    """Validate a request body, taking the model name from the path"""
    try:
        return model_cls.model_validate({**body, "model": model})
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


@router.get("/models")
async def list_models():
    """
    List models served by the backend host

    Each entry carries the backend model id as its name.
    """
    ids = await list_model_ids()
    return {"models": [{"name": model_id} for model_id in ids]}


@router.post("/models/{model}:generateContent")
async def generate_content(
    model: str,
    generator: ContentGeneratorDep,
    body: dict[str, Any] = Body(...),
    x_prompt_id: Optional[str] = Header(None),
):
    request = _parse(GenerateContentRequest, model, body)
    response = await generator.generate_content(request, x_prompt_id)
    return response.to_wire()


@router.post("/models/{model}:streamGenerateContent")
async def stream_generate_content(
    model: str,
    generator: ContentGeneratorDep,
    body: dict[str, Any] = Body(...),
    x_prompt_id: Optional[str] = Header(None),
):
    """
    Streamed generation as Server-Sent Events

    Backend errors surface as a regular error response because the stream is
    opened before the first event is sent.
    """
    request = _parse(GenerateContentRequest, model, body)
    stream = await generator.generate_content_stream(request, x_prompt_id)

    async def event_stream():
        async with stream:
            async for chunk in stream:
                yield f"data: {json.dumps(chunk.to_wire(), ensure_ascii=False)}\n\n"

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.post("/models/{model}:countTokens")
async def count_tokens(
    model: str,
    generator: ContentGeneratorDep,
    body: dict[str, Any] = Body(...),
):
    request = _parse(CountTokensRequest, model, body)
    response = await generator.count_tokens(request)
    return response.to_wire()


@router.post("/models/{model}:embedContent")
async def embed_content(
    model: str,
    generator: ContentGeneratorDep,
    body: dict[str, Any] = Body(...),
):
    request = _parse(EmbedContentRequest, model, body)
    response = await generator.embed_content(request)
    return response.to_wire()
