"""Logging setup for the HTTP backend and its upstream clients."""

import logging
import logging.config


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_NOISY_CLIENT_LOGGERS = ("httpx", "httpcore", "openai")


def normalize_log_level(log_level: str) -> str:
    normalized_level = log_level.strip().upper()
    if normalized_level not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid APP_LOG_LEVEL: {log_level}")
    return normalized_level


def configure_logging(log_level: str) -> None:
    """Route application, uvicorn and client logs through one console handler.

    Upstream client libraries log every request at INFO, including URLs, so
    they are held at WARNING unless the application itself runs at DEBUG.
    """
    level = normalize_log_level(log_level)
    client_level = "DEBUG" if level == "DEBUG" else "WARNING"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": (
                        "%(asctime)s %(levelname)s %(name)s "
                        "event=%(message)s"
                    )
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "standard",
                }
            },
            "loggers": {
                **{
                    name: {"level": client_level, "propagate": True}
                    for name in _NOISY_CLIENT_LOGGERS
                },
                "uvicorn": {"level": level, "handlers": [], "propagate": True},
                "uvicorn.access": {"level": level, "handlers": [], "propagate": True},
            },
            "root": {
                "level": level,
                "handlers": ["console"],
            },
        }
    )
