"""
Content generator module initialization
"""

from ollama_bridge.providers.base import ContentGenerator
from ollama_bridge.providers.ollama_client import OllamaContentGenerator

__all__ = [
    "ContentGenerator",
    "OllamaContentGenerator",
]
