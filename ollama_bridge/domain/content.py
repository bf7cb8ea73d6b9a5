"""
Normalized Content Domain Model

Defines the caller-facing generate-content vocabulary: conversation turns,
requests and responses. Field names serialize to camelCase and accept either
spelling on input.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Base model serializing fields with camelCase aliases"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump by alias, leaving out absent fields"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Blob(_CamelModel):
    """Inline binary payload"""

    model_config = ConfigDict(frozen=True)

    mime_type: Optional[str] = None
    data: Optional[str] = None


class FileData(_CamelModel):
    """Reference to an uploaded file"""

    model_config = ConfigDict(frozen=True)

    mime_type: Optional[str] = None
    file_uri: Optional[str] = None


class Part(_CamelModel):
    """
    Content Fragment

    Carries text or one of the non-text kinds. Only text crosses the bridge;
    every other kind is dropped when turns are flattened.
    """

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    inline_data: Optional[Blob] = None
    file_data: Optional[FileData] = None
    function_call: Optional[dict[str, Any]] = None
    function_response: Optional[dict[str, Any]] = None


class Content(_CamelModel):
    """
    Conversation Turn

    Role is "user", "model", "system" or absent.
    """

    model_config = ConfigDict(frozen=True)

    role: Optional[str] = None
    parts: tuple[Part, ...] = ()

    @field_validator("parts", mode="before")
    @classmethod
    def _null_parts(cls, value: Any) -> Any:
        # "parts": null means no fragments
        return () if value is None else value


def normalize_contents(contents: Any) -> list[Content]:
    """
    Normalize the accepted `contents` shapes into a list of turns

    - a plain string becomes a single user turn
    - a single turn becomes a one-element list
    - list items that are strings become user turns
    """
    if contents is None:
        return []
    if isinstance(contents, str):
        return [Content(role="user", parts=(Part(text=contents),))]
    if isinstance(contents, (Content, dict)):
        contents = [contents]
    if not isinstance(contents, (list, tuple)):
        raise ValueError("contents must be a string, a turn or a list of turns")

    turns: list[Content] = []
    for item in contents:
        if isinstance(item, str):
            turns.append(Content(role="user", parts=(Part(text=item),)))
        elif isinstance(item, Content):
            turns.append(item)
        else:
            turns.append(Content.model_validate(item))
    return turns


class _ContentsRequest(_CamelModel):
    """Shared shape of requests carrying a model name and conversation turns"""

    model: str = Field(..., min_length=1)
    contents: list[Content] = Field(default_factory=list)

    @field_validator("contents", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> list[Content]:
        return normalize_contents(value)


class GenerateContentRequest(_ContentsRequest):
    """Single-shot or streaming generation request"""


class CountTokensRequest(_ContentsRequest):
    """Token counting request"""


class EmbedContentRequest(_ContentsRequest):
    """Embedding request, one vector per text fragment"""


class Candidate(_CamelModel):
    """One alternative generated by the backend"""

    content: Content
    finish_reason: Optional[str] = None
    index: int = 0


class UsageMetadata(_CamelModel):
    """Token accounting copied from the backend usage block"""

    prompt_token_count: Optional[int] = None
    candidates_token_count: Optional[int] = None
    total_token_count: Optional[int] = None


class GenerateContentResponse(_CamelModel):
    """Normalized response, also used for each streamed chunk"""

    candidates: list[Candidate] = Field(default_factory=list)
    usage_metadata: Optional[UsageMetadata] = None

    @property
    def text(self) -> Optional[str]:
        """Concatenated text of the first candidate, None without candidates"""
        if not self.candidates:
            return None
        return "".join(part.text or "" for part in self.candidates[0].content.parts)


class CountTokensResponse(_CamelModel):
    """Token count result"""

    total_tokens: int = 0


class ContentEmbedding(_CamelModel):
    """One embedding vector"""

    values: list[float] = Field(default_factory=list)


class EmbedContentResponse(_CamelModel):
    """Embedding vectors in text-fragment order"""

    embeddings: list[ContentEmbedding] = Field(default_factory=list)
