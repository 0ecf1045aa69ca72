"""Router that delivers a prompt through an ordered list of chat providers."""

import logging
from typing import Sequence

from motivation_hub.services.chat_provider_models import (
    ChatProvider,
    ChatReply,
    ProviderResult,
    is_blank,
    require_non_empty,
)
from motivation_hub.services.errors import (
    ConfigurationError,
    UpstreamError,
    ValidationError,
)


logger = logging.getLogger(__name__)

MISSING_PROMPT_ERROR = "Missing prompt"
NO_PROVIDER_ERROR = "No AI key configured. Set GROQ_API_KEY or OPENAI_API_KEY."


class AIRequestRouter:
    """Tries providers in priority order and returns the first successful reply.

    A failing provider that is not last in the list is logged and skipped.
    Only the failure of the last provider reaches the caller, as an
    ``UpstreamError``. Each provider is attempted at most once per request.
    """

    def __init__(self, providers: Sequence[ChatProvider], default_model: str) -> None:
        self._providers = tuple(providers)
        self._default_model = require_non_empty(default_model, "default_model")

    @property
    def provider_names(self) -> tuple[str, ...]:
        return tuple(provider.name for provider in self._providers)

    def resolve_model(self, model: str | None) -> str:
        if is_blank(model):
            return self._default_model
        return model.strip()

    async def reply(self, prompt: str | None, model: str | None = None) -> ChatReply:
        if is_blank(prompt):
            raise ValidationError(MISSING_PROMPT_ERROR)
        resolved_model = self.resolve_model(model)
        if len(self._providers) == 0:
            logger.warning("ai_router_no_provider_configured model=%s", resolved_model)
            raise ConfigurationError(NO_PROVIDER_ERROR)

        last_index = len(self._providers) - 1
        for index, provider in enumerate(self._providers):
            result = await provider.attempt(prompt, resolved_model)
            if result.ok:
                logger.info(
                    "ai_provider_attempt_succeeded provider=%s model=%s attempt=%s "
                    "response_length=%s",
                    result.provider,
                    resolved_model,
                    index + 1,
                    len(result.reply or ""),
                )
                return ChatReply(
                    reply=result.reply or "",
                    provider=result.provider,
                    model=resolved_model,
                )
            if index < last_index:
                _log_fallback(result, resolved_model)
                continue
            _log_final_failure(result, resolved_model)
            raise UpstreamError(detail=result.error or "unknown provider error")
        raise RuntimeError("provider loop exited without a result")


def _log_fallback(result: ProviderResult, model: str) -> None:
    logger.warning(
        "ai_provider_attempt_failed provider=%s model=%s falling_back=true error=%s",
        result.provider,
        model,
        result.error,
    )


def _log_final_failure(result: ProviderResult, model: str) -> None:
    logger.error(
        "ai_provider_attempt_failed provider=%s model=%s falling_back=false error=%s",
        result.provider,
        model,
        result.error,
    )
