"""
Model Catalog Lookup

Lists the model identifiers an OpenAI-compatible host serves, as plain
strings ready for a model picker.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ollama_bridge.common.errors import DecodeError
from ollama_bridge.common.http_client import HttpClient
from ollama_bridge.config import get_settings
from ollama_bridge.domain.backend import ModelList

logger = logging.getLogger(__name__)


async def list_model_ids(
    host: Optional[str] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[str]:
    """
    Fetch GET {host}/models and return the model ids

    Args:
        host: Host base URL, defaults to OLLAMA_HOST
        transport: Optional httpx transport

    Returns:
        list[str]: Model ids in backend order

    Raises:
        BackendHTTPError: Non-2xx status
        DecodeError: Body is not a model list
    """
    settings = get_settings()
    client = HttpClient(
        base_url=host or settings.OLLAMA_HOST,
        timeout=settings.HTTP_TIMEOUT,
        transport=transport,
    )
    response = await client.get("/models")

    try:
        models = ModelList.model_validate_json(response.text)
    except ValidationError as e:
        raise DecodeError(
            "Backend model list has an unexpected shape",
            details={"body": response.text},
        ) from e

    ids = [item.id for item in models.data]
    logger.debug("Listed %d models from %s", len(ids), client.base_url)
    return ids
