"""
Backend Wire Model

Shapes exchanged with the OpenAI-compatible backend. Used to validate backend
JSON before it is reshaped, so a differently-shaped payload fails with a
DecodeError instead of an arbitrary attribute or key error.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


BackendRole = Literal["user", "assistant", "system"]


class _BackendModel(BaseModel):
    # Backends add fields (id, object, created, ...) we do not consume
    model_config = ConfigDict(extra="ignore")


class BackendMessage(_BackendModel):
    """Chat message as sent to the backend"""

    role: BackendRole
    content: str


class ChatCompletionMessage(_BackendModel):
    role: str = "assistant"
    # null for tool-call-only replies
    content: Optional[str] = None


class ChatCompletionChoice(_BackendModel):
    index: int
    message: ChatCompletionMessage
    finish_reason: Optional[str] = None


class CompletionUsage(_BackendModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ChatCompletion(_BackendModel):
    """Non-streaming chat completion body"""

    choices: list[ChatCompletionChoice]
    usage: Optional[CompletionUsage] = None


class ChoiceDelta(_BackendModel):
    content: Optional[str] = None


class ChunkChoice(_BackendModel):
    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None


class ChatCompletionChunk(_BackendModel):
    """One decoded `data: ` frame of a streamed completion"""

    choices: list[ChunkChoice] = Field(default_factory=list)


class EmbeddingItem(_BackendModel):
    embedding: list[float]


class EmbeddingResponse(_BackendModel):
    """
    Embeddings body; a missing `data` field is tolerated

    Items stay unvalidated here since only the first one is read.
    """

    data: Optional[list[Any]] = None


class ModelItem(_BackendModel):
    id: str


class ModelList(_BackendModel):
    """GET /models body"""

    data: list[ModelItem] = Field(default_factory=list)
