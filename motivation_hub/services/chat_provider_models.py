"""Shared provider models and payload helpers for chat providers."""

from dataclasses import dataclass
from typing import Any, Protocol


def require_non_empty(value: str, field_name: str) -> str:
    normalized_value = value.strip()
    if normalized_value == "":
        raise ValueError(f"{field_name} must not be empty")
    return normalized_value


def is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def describe_error(exc: Exception) -> str:
    message = str(exc)
    if message == "":
        return type(exc).__name__
    return f"{type(exc).__name__}: {message}"


def build_chat_payload(model: str, prompt: str, max_tokens: int) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": max_tokens,
    }


def extract_reply_text(payload: Any, error_prefix: str) -> str:
    """Return ``choices[0].message.content`` or ``""`` when any part is absent.

    Only a body that is not a JSON object is treated as malformed.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"{error_prefix} must be a JSON object")
    choices = payload.get("choices")
    if not isinstance(choices, list) or len(choices) == 0:
        return ""
    first_choice = choices[0]
    if not isinstance(first_choice, dict):
        return ""
    message = first_choice.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if not isinstance(content, str):
        return ""
    return content


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider attempt: a reply or an error reason."""

    provider: str
    reply: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, provider: str, reply: str) -> "ProviderResult":
        return cls(provider=provider, reply=reply)

    @classmethod
    def failure(cls, provider: str, error: str) -> "ProviderResult":
        if error.strip() == "":
            error = "unknown provider error"
        return cls(provider=provider, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ChatReply:
    reply: str
    provider: str
    model: str


class ChatProvider(Protocol):
    name: str

    async def attempt(self, prompt: str, model: str) -> ProviderResult:
        """Try one chat completion and report the outcome without raising."""
