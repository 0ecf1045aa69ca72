"""Shared immutable constants for provider and endpoint configuration."""

PROVIDER_GROQ = "groq"
PROVIDER_OPENAI = "openai"

GROQ_API_BASE_URL = "https://api.groq.com/openai/v1"
OPENAI_API_BASE_URL = "https://api.openai.com/v1"

DEFAULT_CHAT_MODEL = "llama3-70b-8192"
DEFAULT_OPENAI_MODEL_PREFIX = "gpt"
DEFAULT_OPENAI_FALLBACK_MODEL = "gpt-4o-mini"

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 600
DEFAULT_AI_REQUEST_TIMEOUT_SECONDS = 30.0

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_LOG_LEVEL = "INFO"
