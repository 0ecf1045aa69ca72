"""Provider client for OpenAI-compatible chat completion APIs over HTTPS."""

import logging
from typing import Any

import httpx

from motivation_hub.constants import PROVIDER_OPENAI
from motivation_hub.services.chat_provider_models import (
    ProviderResult,
    build_chat_payload,
    describe_error,
    extract_reply_text,
    require_non_empty,
)


logger = logging.getLogger(__name__)


class OpenAICompatibleChatProvider:
    """Chat provider posting directly to ``<base_url>/chat/completions``.

    Models that do not follow this provider's naming convention (checked by
    prefix) are replaced with ``fallback_model`` before the request is sent.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model_prefix: str,
        fallback_model: str,
        max_tokens: int,
        timeout_seconds: float,
        name: str = PROVIDER_OPENAI,
    ) -> None:
        self._base_url = require_non_empty(base_url, "base_url")
        self._api_key = require_non_empty(api_key, "api_key")
        self._model_prefix = require_non_empty(model_prefix, "model_prefix")
        self._fallback_model = require_non_empty(fallback_model, "fallback_model")
        if max_tokens <= 0:
            raise ValueError("max_tokens must be greater than zero")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self.name = name

    def select_model(self, model: str) -> str:
        if model.startswith(self._model_prefix):
            return model
        return self._fallback_model

    async def attempt(self, prompt: str, model: str) -> ProviderResult:
        selected_model = self.select_model(model)
        try:
            reply = await self.generate_reply(prompt, selected_model)
        except Exception as exc:
            return ProviderResult.failure(self.name, describe_error(exc))
        return ProviderResult.success(self.name, reply)

    async def generate_reply(self, prompt: str, model: str) -> str:
        payload = build_chat_payload(model=model, prompt=prompt, max_tokens=self._max_tokens)
        url = _build_chat_completions_url(self._base_url)
        headers = _build_headers(self._api_key)
        logger.info(
            "openai_compatible_chat_started provider=%s model=%s url=%s",
            self.name,
            model,
            url,
        )
        response = await self._post_json(url, headers, payload)
        if not 200 <= response.status_code < 300:
            raise RuntimeError(
                "OpenAI-compatible chat request failed: "
                f"{response.status_code} {response.text}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise ValueError("OpenAI-compatible chat response is not valid JSON") from exc
        content = extract_reply_text(body, error_prefix="OpenAI-compatible chat response")
        logger.info(
            "openai_compatible_chat_completed provider=%s model=%s response_length=%s",
            self.name,
            model,
            len(content),
        )
        return content

    async def _post_json(
        self,
        url: str,
        headers: dict[str, str],
        payload: dict[str, Any],
    ) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            return await client.post(url, headers=headers, json=payload)


def _build_chat_completions_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/chat/completions"


def _build_headers(api_key: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

