"""
HTTP Client Wrapper Module

Provides the asynchronous HTTP calls the bridge makes against the backend.
Each call opens its own httpx.AsyncClient; nothing is pooled or shared
between calls.
"""

import json
import logging
from typing import Any, AsyncIterator, Optional

import httpx

from ollama_bridge.common.errors import BackendHTTPError, TransportError

logger = logging.getLogger(__name__)


class StreamingBody:
    """
    Byte-stream handle of an in-flight streaming response

    Owns both the response and the client that produced it; aclose() releases
    the connection and is safe to call more than once.
    """

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response):
        self.client = client
        self.response = response
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def aiter_bytes(self) -> AsyncIterator[bytes]:
        return self.response.aiter_bytes()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            await self.response.aclose()
        finally:
            await self.client.aclose()


class HttpClient:
    """
    Asynchronous HTTP Client Wrapper

    Wraps httpx.AsyncClient, raising BackendHTTPError for non-2xx answers and
    TransportError when the backend cannot be reached.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP Client

        Args:
            base_url: Backend base URL, e.g. http://localhost:11434/v1
            timeout: Request timeout (seconds), None disables it
            headers: Default request headers
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_headers = {"Content-Type": "application/json", **(headers or {})}
        self.transport = transport

    def build_url(self, path: str) -> str:
        cleaned_path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{cleaned_path}"

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=self.default_headers,
            transport=self.transport,
        )

    @staticmethod
    def raise_for_status(response: httpx.Response) -> None:
        """Raise BackendHTTPError carrying the raw body for non-2xx responses"""
        if response.is_success:
            return
        logger.warning(
            "Backend error: status=%s url=%s body=%s",
            response.status_code,
            response.request.url,
            response.text,
        )
        raise BackendHTTPError(response.status_code, response.text)

    async def post_json(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        """
        Send a JSON POST and read the whole response

        Args:
            path: Path relative to the base URL
            payload: JSON request body

        Returns:
            httpx.Response: Successful (2xx) response with its body loaded
        """
        url = self.build_url(path)
        logger.debug(
            "Ollama Request: method=POST url=%s body=%s",
            url,
            json.dumps(payload, ensure_ascii=False),
        )
        try:
            async with self._new_client() as client:
                response = await client.post(url, json=payload)
        except httpx.RequestError as e:
            raise TransportError(f"Request error: {e}", code="request_error") from e

        self.raise_for_status(response)
        return response

    async def get(self, path: str) -> httpx.Response:
        """Send a GET and read the whole response"""
        url = self.build_url(path)
        logger.debug("Ollama Request: method=GET url=%s", url)
        try:
            async with self._new_client() as client:
                response = await client.get(url)
        except httpx.RequestError as e:
            raise TransportError(f"Request error: {e}", code="request_error") from e

        self.raise_for_status(response)
        return response

    async def post_stream(self, path: str, payload: dict[str, Any]) -> StreamingBody:
        """
        Send a JSON POST and return the response body unread

        The caller owns the returned handle and must aclose() it.

        Raises:
            BackendHTTPError: Non-2xx status (error body is read first)
            TransportError: Backend unreachable or no body to stream
        """
        url = self.build_url(path)
        logger.debug(
            "Ollama Stream Request: method=POST url=%s body=%s",
            url,
            json.dumps(payload, ensure_ascii=False),
        )

        client = self._new_client()
        try:
            request = client.build_request("POST", url, json=payload)
            response = await client.send(request, stream=True)
        except httpx.RequestError as e:
            await client.aclose()
            raise TransportError(f"Request error: {e}", code="request_error") from e

        body = StreamingBody(client, response)
        try:
            if not response.is_success:
                await response.aread()
                self.raise_for_status(response)
            if response.status_code == 204 or response.headers.get("content-length") == "0":
                raise TransportError()
        except BaseException:
            await body.aclose()
            raise
        return body
