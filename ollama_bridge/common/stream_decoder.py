"""
Streaming Completion Decoding

Turns the byte stream of a streamed chat completion into normalized response
chunks, pulling bytes from the transport only when the consumer asks for the
next chunk.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
from collections import deque
from enum import Enum
from typing import AsyncIterator, Optional

import httpx

from ollama_bridge.common.errors import FrameDecodeError, TransportError
from ollama_bridge.common.http_client import StreamingBody
from ollama_bridge.common.protocol_conversion import convert_stream_chunk, parse_stream_line
from ollama_bridge.domain.content import GenerateContentResponse

logger = logging.getLogger(__name__)

# Strong references to close tasks scheduled by finalizers
_release_tasks: set[asyncio.Task] = set()


class LineDecoder:
    """
    Incremental line splitter for a UTF-8 byte stream

    - Splits on "\\n"; "\\r" left by CRLF is removed when lines are trimmed
    - A multi-byte character split across chunks is decoded once complete
    - The trailing partial line is kept until a later chunk terminates it
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received but not yet resolved into a complete line"""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """Append bytes and return the lines they complete"""
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        return lines

    def close(self) -> str:
        """
        Finish decoding and return the unterminated remainder

        The remainder is not a complete line; callers discard it.
        """
        remainder = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return remainder


class StreamState(str, Enum):
    AWAITING_BYTES = "awaiting_bytes"
    HAS_BUFFERED_LINES = "has_buffered_lines"
    CLOSED = "closed"


class CompletionStream:
    """
    Single-pass async iterator of normalized response chunks

    Each `__anext__` either serves a line already buffered or waits for the
    next chunk of bytes. The byte-stream handle is released when the backend
    ends the stream, when reading fails, or when the consumer calls aclose()
    (also done by `async with`). A stream dropped mid-way without aclose() is
    released on the running loop when it is garbage collected. A final line
    without a terminating newline is dropped at end of stream.

    Example:
        stream = await generator.generate_content_stream(request)
        async with stream:
            async for chunk in stream:
                print(chunk.text, end="")
    """

    def __init__(self, body: StreamingBody):
        self._body = body
        self._chunks: Optional[AsyncIterator[bytes]] = None
        self._lines = LineDecoder()
        self._pending: deque[str] = deque()
        self._state = StreamState.AWAITING_BYTES

    @property
    def state(self) -> StreamState:
        return self._state

    def __aiter__(self) -> "CompletionStream":
        return self

    async def __anext__(self) -> GenerateContentResponse:
        while True:
            if self._state is StreamState.CLOSED:
                raise StopAsyncIteration

            if self._state is StreamState.HAS_BUFFERED_LINES:
                line = self._pending.popleft()
                if not self._pending:
                    self._state = StreamState.AWAITING_BYTES
                chunk = self._decode_line(line)
                if chunk is not None:
                    return chunk
                continue

            raw = await self._read()
            if raw is None:
                dropped = self._lines.close()
                if dropped.strip():
                    logger.debug("Dropping unterminated final stream line: %r", dropped)
                await self.aclose()
                raise StopAsyncIteration

            self._pending.extend(self._lines.feed(raw))
            if self._pending:
                self._state = StreamState.HAS_BUFFERED_LINES

    async def _read(self) -> Optional[bytes]:
        """Next chunk of body bytes, None at end of stream"""
        if self._chunks is None:
            self._chunks = self._body.aiter_bytes()
        try:
            return await self._chunks.__anext__()
        except StopAsyncIteration:
            return None
        except httpx.HTTPError as e:
            await self.aclose()
            raise TransportError(f"Stream read error: {e}", code="stream_read_error") from e
        except BaseException:
            await self.aclose()
            raise

    @staticmethod
    def _decode_line(line: str) -> Optional[GenerateContentResponse]:
        try:
            frame = parse_stream_line(line)
        except FrameDecodeError as e:
            logger.debug("Skipping malformed stream frame: %s", e.line)
            return None
        if frame is None:
            return None
        return convert_stream_chunk(frame)

    async def aclose(self) -> None:
        """Release the byte-stream handle; later pulls end the iteration"""
        if self._state is StreamState.CLOSED:
            return
        self._state = StreamState.CLOSED
        self._pending.clear()
        chunks, self._chunks = self._chunks, None
        try:
            if chunks is not None and hasattr(chunks, "aclose"):
                await chunks.aclose()
        finally:
            await self._body.aclose()

    async def __aenter__(self) -> "CompletionStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __del__(self) -> None:
        # Dropped without aclose(): release the handle on the running loop
        if getattr(self, "_state", StreamState.CLOSED) is StreamState.CLOSED:
            return
        self._state = StreamState.CLOSED
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Completion stream collected outside an event loop; connection not released")
            return
        logger.debug("Releasing abandoned completion stream")
        task = loop.create_task(self._body.aclose())
        _release_tasks.add(task)
        task.add_done_callback(_release_tasks.discard)
