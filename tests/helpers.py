"""
Shared test helpers: fake response bodies and stream frame builders
"""

import json
from typing import Any, Optional

import httpx


BASE_URL = "http://ollama.test/v1"


class ChunkedByteStream(httpx.AsyncByteStream):
    """Response body delivered in the given chunks, recording when it is closed"""

    def __init__(self, chunks: list[bytes], error: Optional[Exception] = None):
        self.chunks = chunks
        self.error = error
        self.yielded = 0
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            self.yielded += 1
            yield chunk
        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.closed = True


def sse_body(*frames: Any, done: bool = True) -> bytes:
    """Encode frames as `data: ` lines the way OpenAI-compatible backends stream them"""
    lines = []
    for frame in frames:
        payload = frame if isinstance(frame, str) else json.dumps(frame)
        lines.append(f"data: {payload}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def delta_frame(content: Optional[str], finish_reason: Optional[str] = None) -> dict[str, Any]:
    delta = {} if content is None else {"content": content}
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "llama3",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }


def completion_body(*choices: tuple[str, str], usage: Optional[dict[str, int]] = None) -> dict[str, Any]:
    """Non-streaming chat completion with one choice per (content, finish_reason)"""
    body: dict[str, Any] = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
            for i, (content, finish_reason) in enumerate(choices)
        ],
    }
    if usage is not None:
        body["usage"] = usage
    return body
