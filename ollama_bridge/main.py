"""
Ollama Bridge Application Entry Point

FastAPI application serving generate-content requests from an
OpenAI-compatible backend.
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ollama_bridge.api import gemini_router
from ollama_bridge.common.errors import BridgeError
from ollama_bridge.config import get_settings
from ollama_bridge.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Initialize logging configuration
setup_logging()

settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Generate-content API backed by an OpenAI-compatible chat completions service",
    version="0.1.0",
)


# Global Exception Handler
@app.exception_handler(BridgeError)
async def bridge_error_handler(request: Request, exc: BridgeError):
    """
    Handle bridge exceptions

    Backend status and body are returned in details only in debug mode.
    """
    settings = get_settings()
    logger.warning("%s: %s (path=%s)", type(exc).__name__, exc.message, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=settings.DEBUG),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions"""
    logger.error(
        "Uncaught exception: %s\nPath: %s\nTraceback:\n%s",
        str(exc),
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "message": "Internal server error",
                "type": "internal_error",
                "code": "internal_error",
            }
        },
    )


# Health Check Endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health Check

    Used for service liveness probe.
    """
    return {"status": "healthy"}


@app.get("/", tags=["Health"])
async def root():
    return {
        "name": settings.APP_NAME,
        "version": "0.1.0",
        "backend": settings.OLLAMA_BASE_URL,
        "default_model": settings.OLLAMA_MODEL,
    }


app.include_router(gemini_router)


def run():
    """Serve the app with uvicorn (console script `ollama-bridge`)"""
    import uvicorn

    uvicorn.run(
        "ollama_bridge.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    run()
