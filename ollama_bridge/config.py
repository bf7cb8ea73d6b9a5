"""
Configuration Management Module

Configures bridge parameters via environment variables or .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Bridge Configuration Class

    All configuration items can be overridden by environment variables, with names matching fields (uppercase).
    """

    # Application Config
    APP_NAME: str = "Ollama Bridge"
    DEBUG: bool = False

    # Server Config
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Backend Config
    # Base URL of the OpenAI-compatible backend (chat/completions, embeddings)
    OLLAMA_BASE_URL: str = "http://localhost:11434/v1"
    # Backend model used when the caller asks for a gemini* model
    OLLAMA_MODEL: str = "llama3"
    # Host queried by the model catalog lookup (GET {host}/models)
    OLLAMA_HOST: str = "http://localhost:11434/v1"

    # HTTP Client Config
    # Request timeout (seconds); None waits indefinitely
    HTTP_TIMEOUT: Optional[float] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get bridge configuration (Singleton)

    Returns:
        Settings: Bridge configuration instance
    """
    return Settings()
