"""
Domain Model Module
"""

from ollama_bridge.domain.content import (
    Blob,
    Candidate,
    Content,
    ContentEmbedding,
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    EmbedContentResponse,
    FileData,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
    UsageMetadata,
    normalize_contents,
)

__all__ = [
    "Blob",
    "Candidate",
    "Content",
    "ContentEmbedding",
    "CountTokensRequest",
    "CountTokensResponse",
    "EmbedContentRequest",
    "EmbedContentResponse",
    "FileData",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "Part",
    "UsageMetadata",
    "normalize_contents",
]
