"""
Test Configuration Module
"""

from typing import Callable

import httpx
import pytest

from ollama_bridge.providers.ollama_client import OllamaContentGenerator
from tests.helpers import BASE_URL


@pytest.fixture
def make_generator() -> Callable[..., OllamaContentGenerator]:
    """Build a generator whose backend is the given httpx.MockTransport handler"""

    def _make(handler, model: str = "llama3") -> OllamaContentGenerator:
        return OllamaContentGenerator(
            base_url=BASE_URL,
            model=model,
            transport=httpx.MockTransport(handler),
        )

    return _make
