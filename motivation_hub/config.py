"""Configuration loading with optional provider credentials and typed defaults."""

from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

from motivation_hub.constants import (
    DEFAULT_AI_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_CHAT_MODEL,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OPENAI_FALLBACK_MODEL,
    DEFAULT_OPENAI_MODEL_PREFIX,
    DEFAULT_PORT,
    DEFAULT_PUBLIC_DIR,
)
from motivation_hub.logging_config import normalize_log_level


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Process-wide settings resolved once from environment variables."""

    groq_api_key: str | None
    openai_api_key: str | None
    default_model: str
    openai_model_prefix: str
    openai_fallback_model: str
    ai_request_timeout_seconds: float
    host: str
    port: int
    public_dir: str
    cors_allow_origins: tuple[str, ...]
    app_log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            groq_api_key=_optional_env("GROQ_API_KEY"),
            openai_api_key=_optional_env("OPENAI_API_KEY"),
            default_model=_env_or_default("DEFAULT_MODEL", DEFAULT_CHAT_MODEL),
            openai_model_prefix=_env_or_default(
                "OPENAI_MODEL_PREFIX", DEFAULT_OPENAI_MODEL_PREFIX
            ),
            openai_fallback_model=_env_or_default(
                "OPENAI_FALLBACK_MODEL", DEFAULT_OPENAI_FALLBACK_MODEL
            ),
            ai_request_timeout_seconds=_parse_positive_float(
                "AI_REQUEST_TIMEOUT_SECONDS", DEFAULT_AI_REQUEST_TIMEOUT_SECONDS
            ),
            host=_env_or_default("HOST", DEFAULT_HOST),
            port=_parse_port("PORT", DEFAULT_PORT),
            public_dir=_env_or_default("PUBLIC_DIR", DEFAULT_PUBLIC_DIR),
            cors_allow_origins=_parse_csv("CORS_ALLOW_ORIGINS", ("*",)),
            app_log_level=normalize_log_level(
                _env_or_default("APP_LOG_LEVEL", DEFAULT_LOG_LEVEL)
            ),
        )
        logger.debug(
            "settings_loaded groq_configured=%s openai_configured=%s default_model=%s port=%s",
            settings.groq_api_key is not None,
            settings.openai_api_key is not None,
            settings.default_model,
            settings.port,
        )
        return settings


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _env_or_default(name: str, default: str) -> str:
    value = _optional_env(name)
    if value is None:
        return default
    return value


def _parse_port(name: str, default: int) -> int:
    raw_value = _optional_env(name)
    if raw_value is None:
        return default
    try:
        port = int(raw_value)
    except ValueError as exc:
        raise ValueError(
            f"Invalid integer for environment variable {name}: {raw_value}"
        ) from exc
    if port < 1 or port > 65535:
        raise ValueError(f"{name} must be between 1 and 65535: {raw_value}")
    return port


def _parse_positive_float(name: str, default: float) -> float:
    raw_value = _optional_env(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(
            f"Invalid float for environment variable {name}: {raw_value}"
        ) from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero: {raw_value}")
    return value


def _parse_csv(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw_value = _optional_env(name)
    if raw_value is None:
        return default
    values = tuple(value.strip() for value in raw_value.split(","))
    if any(value == "" for value in values):
        raise ValueError(f"{name} contains empty value")
    logger.debug("parsed_csv name=%s value_count=%d", name, len(values))
    return values


def load_environment_from_dotenv(dotenv_path: str) -> bool:
    if dotenv_path.strip() == "":
        raise ValueError("dotenv_path must not be empty")
    loaded = load_dotenv(dotenv_path=dotenv_path, override=False)
    logger.info("dotenv_load_attempted dotenv_path=%s loaded=%s", dotenv_path, loaded)
    return loaded
