"""
Model Catalog Lookup Unit Tests
"""

import httpx
import pytest

from ollama_bridge.common.errors import BackendHTTPError, DecodeError
from ollama_bridge.common.model_catalog import list_model_ids


@pytest.mark.asyncio
async def test_lists_model_ids_as_plain_strings():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, str(request.url)))
        return httpx.Response(
            200,
            json={
                "object": "list",
                "data": [
                    {"id": "llama3:latest", "object": "model", "owned_by": "library"},
                    {"id": "nomic-embed-text:latest", "object": "model", "owned_by": "library"},
                ],
            },
        )

    ids = await list_model_ids("http://gpu-box:11434/v1", transport=httpx.MockTransport(handler))

    assert ids == ["llama3:latest", "nomic-embed-text:latest"]
    assert seen == [("GET", "http://gpu-box:11434/v1/models")]


@pytest.mark.asyncio
async def test_empty_catalog():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"object": "list"}))
    assert await list_model_ids("http://h/v1", transport=transport) == []


@pytest.mark.asyncio
async def test_backend_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(BackendHTTPError):
        await list_model_ids("http://h/v1", transport=transport)


@pytest.mark.asyncio
async def test_malformed_catalog():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"data": [{"name": "x"}]}))
    with pytest.raises(DecodeError):
        await list_model_ids("http://h/v1", transport=transport)
