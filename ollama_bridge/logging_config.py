import logging
import logging.config

from ollama_bridge.config import get_settings

# httpx logs every request at INFO; bridge requests are already logged at DEBUG
QUIET_LOGGERS = ("httpx",)


def setup_logging():
    """
    Configure global log format

    Bridge and uvicorn output share one console handler; `uvicorn.error`
    and `uvicorn.access` propagate to the `uvicorn` logger.
    """
    settings = get_settings()
    log_level = "DEBUG" if settings.DEBUG else "INFO"

    loggers = {
        "ollama_bridge": {"handlers": ["console"], "level": log_level, "propagate": False},
        "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"handlers": ["console"], "level": "WARNING", "propagate": False}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": log_level},
            "loggers": loggers,
        }
    )
