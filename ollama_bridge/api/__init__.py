"""
API routes module
"""

from ollama_bridge.api.gemini import router as gemini_router

__all__ = ["gemini_router"]
