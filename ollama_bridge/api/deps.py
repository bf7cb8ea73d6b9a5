"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ollama_bridge.providers import ContentGenerator, OllamaContentGenerator


@lru_cache()
def get_content_generator() -> ContentGenerator:
    """
    Get the shared content generator

    Its configuration is read-only, so one instance serves every request.
    """
    return OllamaContentGenerator()


ContentGeneratorDep = Annotated[ContentGenerator, Depends(get_content_generator)]
