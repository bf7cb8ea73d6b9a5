"""
Ollama Bridge

Serves generate-content requests (generation, streaming, token counting,
embeddings) from an OpenAI-compatible chat completions backend.
"""

from ollama_bridge.common.errors import (
    BackendHTTPError,
    BridgeError,
    DecodeError,
    FrameDecodeError,
    TransportError,
)
from ollama_bridge.common.stream_decoder import CompletionStream
from ollama_bridge.domain import (
    Candidate,
    Content,
    ContentEmbedding,
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
    UsageMetadata,
)
from ollama_bridge.providers import ContentGenerator, OllamaContentGenerator

__version__ = "0.1.0"
__all__ = [
    "BackendHTTPError",
    "BridgeError",
    "Candidate",
    "CompletionStream",
    "Content",
    "ContentEmbedding",
    "ContentGenerator",
    "CountTokensRequest",
    "CountTokensResponse",
    "DecodeError",
    "EmbedContentRequest",
    "EmbedContentResponse",
    "FrameDecodeError",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "OllamaContentGenerator",
    "Part",
    "TransportError",
    "UsageMetadata",
]
