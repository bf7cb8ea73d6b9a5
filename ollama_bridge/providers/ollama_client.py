"""
Ollama Content Generator

Serves generate-content requests from an OpenAI-compatible backend (Ollama's
/v1 API by default):
- /chat/completions (single-shot and streamed)
- /embeddings
"""

import logging
from typing import Optional

import httpx

from ollama_bridge.common.http_client import HttpClient
from ollama_bridge.common.protocol_conversion import (
    build_chat_payload,
    build_embedding_payload,
    convert_completion_response,
    convert_embedding_response,
    extract_embedding_texts,
)
from ollama_bridge.common.stream_decoder import CompletionStream
from ollama_bridge.config import get_settings
from ollama_bridge.domain.content import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentRequest,
    GenerateContentResponse,
)
from ollama_bridge.providers.base import ContentGenerator

logger = logging.getLogger(__name__)


class OllamaContentGenerator(ContentGenerator):
    """
    Ollama Content Generator

    Configuration is fixed at construction and never mutated afterwards, so
    one instance can serve concurrent calls.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize generator

        Args:
            base_url: Backend base URL, defaults to OLLAMA_BASE_URL
            model: Backend model used for gemini* requests, defaults to OLLAMA_MODEL
            timeout: Request timeout (seconds), defaults to HTTP_TIMEOUT
            transport: Optional httpx transport
        """
        settings = get_settings()
        self.base_url = base_url or settings.OLLAMA_BASE_URL
        self.model = model or settings.OLLAMA_MODEL
        self.http = HttpClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    async def generate_content(
        self,
        request: GenerateContentRequest,
        user_prompt_id: Optional[str] = None,
    ) -> GenerateContentResponse:
        payload = build_chat_payload(request.model, request.contents, self.model, stream=False)
        logger.debug(
            "generate_content: prompt_id=%s model=%s messages=%d",
            user_prompt_id,
            payload["model"],
            len(payload["messages"]),
        )

        response = await self.http.post_json("/chat/completions", payload)
        return convert_completion_response(response.text)

    async def generate_content_stream(
        self,
        request: GenerateContentRequest,
        user_prompt_id: Optional[str] = None,
    ) -> CompletionStream:
        payload = build_chat_payload(request.model, request.contents, self.model, stream=True)
        logger.debug(
            "generate_content_stream: prompt_id=%s model=%s messages=%d",
            user_prompt_id,
            payload["model"],
            len(payload["messages"]),
        )

        body = await self.http.post_stream("/chat/completions", payload)
        return CompletionStream(body)

    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        # The backend offers no tokenizer endpoint; always reports zero.
        return CountTokensResponse(total_tokens=0)

    async def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        """
        Embed each text fragment with its own /embeddings call

        Calls run one after another in fragment order. A body without vectors
        contributes nothing, so the result can be shorter than the input; a
        failed call aborts the whole operation.
        """
        texts = extract_embedding_texts(request.contents)
        logger.debug("embed_content: model=%s texts=%d", request.model, len(texts))

        embeddings = []
        for text in texts:
            payload = build_embedding_payload(request.model, text, self.model)
            response = await self.http.post_json("/embeddings", payload)
            embedding = convert_embedding_response(response.text)
            if embedding is not None:
                embeddings.append(embedding)

        return EmbedContentResponse(embeddings=embeddings)
