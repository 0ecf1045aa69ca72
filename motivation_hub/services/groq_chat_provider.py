"""Primary chat provider backed by a LlamaIndex OpenAI-like LLM pointed at Groq."""

import logging
from typing import Any

from motivation_hub.constants import GROQ_API_BASE_URL, PROVIDER_GROQ
from motivation_hub.services.chat_provider_models import (
    ProviderResult,
    describe_error,
    require_non_empty,
)


logger = logging.getLogger(__name__)


class GroqChatProvider:
    """Runs single-prompt completions through Groq's OpenAI-compatible API.

    The LLM class is resolved once at construction so a missing client
    dependency fails at startup rather than on the first request. Retries are
    disabled: each request attempts this provider at most once.
    """

    def __init__(
        self,
        api_key: str,
        temperature: float,
        max_tokens: int,
        timeout_seconds: float,
        api_base: str = GROQ_API_BASE_URL,
        name: str = PROVIDER_GROQ,
    ) -> None:
        self._api_key = require_non_empty(api_key, "api_key")
        self._api_base = require_non_empty(api_base, "api_base")
        if max_tokens <= 0:
            raise ValueError("max_tokens must be greater than zero")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._llm_class = _import_openai_like_class()
        self.name = name

    async def attempt(self, prompt: str, model: str) -> ProviderResult:
        try:
            reply = await self.generate_reply(prompt, model)
        except Exception as exc:
            return ProviderResult.failure(self.name, describe_error(exc))
        return ProviderResult.success(self.name, reply)

    async def generate_reply(self, prompt: str, model: str) -> str:
        normalized_model = require_non_empty(model, "model")
        llm = self._build_llm(normalized_model)
        logger.info(
            "groq_chat_started provider=%s model=%s api_base=%s",
            self.name,
            normalized_model,
            self._api_base,
        )
        response = await llm.acomplete(prompt)
        content = response.text or ""
        logger.info(
            "groq_chat_completed provider=%s model=%s response_length=%s",
            self.name,
            normalized_model,
            len(content),
        )
        return content

    def _build_llm(self, model: str) -> Any:
        return self._llm_class(
            model=model,
            api_key=self._api_key,
            api_base=self._api_base,
            is_chat_model=True,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            timeout=self._timeout_seconds,
            max_retries=0,
        )


def _import_openai_like_class() -> Any:
    try:
        from llama_index.llms.openai_like import OpenAILike
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "Missing dependency for groq provider: "
            "install llama-index-llms-openai-like"
        ) from exc
    return OpenAILike
