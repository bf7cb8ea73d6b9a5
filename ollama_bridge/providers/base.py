"""
Content Generator Base Class

Defines the abstract interface every generate-content backend implements.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional

from ollama_bridge.domain.content import (
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentRequest,
    GenerateContentResponse,
)


class ContentGenerator(ABC):
    """
    Content Generator Abstract Base Class

    Four operations: single-shot generation, streaming generation, token
    counting and embedding.
    """

    @abstractmethod
    async def generate_content(
        self,
        request: GenerateContentRequest,
        user_prompt_id: Optional[str] = None,
    ) -> GenerateContentResponse:
        """
        Generate a complete response

        Args:
            request: Model name and conversation turns
            user_prompt_id: Caller's prompt identifier, used for log correlation

        Returns:
            GenerateContentResponse: One candidate per backend choice
        """
        pass

    @abstractmethod
    async def generate_content_stream(
        self,
        request: GenerateContentRequest,
        user_prompt_id: Optional[str] = None,
    ) -> AsyncIterator[GenerateContentResponse]:
        """
        Start a streamed generation

        Setup failures are raised when this coroutine is awaited; the returned
        iterator is single-pass and must be closed if abandoned early.
        """
        pass

    @abstractmethod
    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        """Count the tokens of a request"""
        pass

    @abstractmethod
    async def embed_content(self, request: EmbedContentRequest) -> EmbedContentResponse:
        """Embed every text fragment of a request"""
        pass
