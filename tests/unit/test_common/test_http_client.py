"""
HTTP Client Wrapper Unit Tests
"""

import httpx
import pytest

from ollama_bridge.common.errors import BackendHTTPError, TransportError
from ollama_bridge.common.http_client import HttpClient
from tests.helpers import ChunkedByteStream


class TestHttpClientURL:
    @pytest.mark.parametrize(
        "base_url,path,expected",
        [
            ("http://localhost:11434/v1", "/chat/completions", "http://localhost:11434/v1/chat/completions"),
            ("http://localhost:11434/v1/", "/embeddings", "http://localhost:11434/v1/embeddings"),
            ("http://localhost:11434/v1", "models", "http://localhost:11434/v1/models"),
        ],
    )
    def test_build_url(self, base_url, path, expected):
        assert HttpClient(base_url).build_url(path) == expected


class TestHttpClientRequests:
    @pytest.mark.asyncio
    async def test_post_json_returns_loaded_response(self):
        client = HttpClient(
            "http://backend/v1",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True})),
        )

        response = await client.post_json("/chat/completions", {"model": "m"})

        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_get_raises_backend_error(self):
        client = HttpClient(
            "http://backend/v1",
            transport=httpx.MockTransport(lambda request: httpx.Response(404, text="no such route")),
        )

        with pytest.raises(BackendHTTPError) as exc_info:
            await client.get("/models")

        assert exc_info.value.status == 404
        assert exc_info.value.to_dict()["error"]["details"] == {"status": 404, "body": "no such route"}

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = HttpClient("http://backend/v1", timeout=1.0, transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError):
            await client.post_json("/embeddings", {"input": "x"})

    @pytest.mark.asyncio
    async def test_post_stream_leaves_body_unread_until_closed(self):
        stream = ChunkedByteStream([b"data: [DONE]\n\n"])
        client = HttpClient(
            "http://backend/v1",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, stream=stream)),
        )

        body = await client.post_stream("/chat/completions", {"stream": True})

        assert stream.yielded == 0
        assert not body.closed
        await body.aclose()
        await body.aclose()
        assert body.closed
        assert stream.closed

    @pytest.mark.asyncio
    async def test_post_stream_empty_body_raises_transport_error(self):
        client = HttpClient(
            "http://backend/v1",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, headers={"content-length": "0"}, content=b"")
            ),
        )

        with pytest.raises(TransportError):
            await client.post_stream("/chat/completions", {"stream": True})
