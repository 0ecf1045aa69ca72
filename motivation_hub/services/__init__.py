"""Application services package."""

from motivation_hub.services.ai_router import AIRequestRouter
from motivation_hub.services.groq_chat_provider import GroqChatProvider
from motivation_hub.services.openai_compatible_chat_provider import OpenAICompatibleChatProvider
from motivation_hub.services.quotes import QuoteSelector
from motivation_hub.services.social_share import build_share_url
from motivation_hub.services.static_assets import SinglePageAppStaticFiles


__all__ = [
    "AIRequestRouter",
    "GroqChatProvider",
    "OpenAICompatibleChatProvider",
    "QuoteSelector",
    "SinglePageAppStaticFiles",
    "build_share_url",
]
