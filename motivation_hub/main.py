"""FastAPI application entrypoint."""

from dataclasses import dataclass
import json
import logging
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import (
    request_validation_exception_handler as fastapi_request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from motivation_hub.config import Settings, load_environment_from_dotenv
from motivation_hub.constants import (
    CHAT_MAX_TOKENS,
    CHAT_TEMPERATURE,
    OPENAI_API_BASE_URL,
)
from motivation_hub.logging_config import configure_logging
from motivation_hub.services.ai_router import MISSING_PROMPT_ERROR, AIRequestRouter
from motivation_hub.services.chat_provider_models import ChatProvider
from motivation_hub.services.errors import ServiceError
from motivation_hub.services.groq_chat_provider import GroqChatProvider
from motivation_hub.services.openai_compatible_chat_provider import (
    OpenAICompatibleChatProvider,
)
from motivation_hub.services.quotes import QuoteSelector
from motivation_hub.services.social_share import MISSING_PLATFORM_ERROR, build_share_url
from motivation_hub.services.static_assets import SinglePageAppStaticFiles, build_static_assets


logger = logging.getLogger(__name__)
PayloadModel = TypeVar("PayloadModel", bound=BaseModel)

_AI_PATH = "/api/ai"
_SOCIAL_PATH = "/api/social"
_MISSING_FIELD_ERRORS = {
    _AI_PATH: ("prompt", MISSING_PROMPT_ERROR),
    _SOCIAL_PATH: ("platform", MISSING_PLATFORM_ERROR),
}
_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_MISSING_BODY_ERROR_TYPES = {"missing", "dict_type", "model_attributes_type", "model_type"}


class AIRequest(BaseModel):
    prompt: str | None = None
    model: str | None = None


class AIReplyResponse(BaseModel):
    reply: str


class QuoteResponse(BaseModel):
    quote: str


class SocialShareRequest(BaseModel):
    platform: str | None = None
    text: str | None = None
    url: str | None = None


class SocialShareResponse(BaseModel):
    shareUrl: str


@dataclass(frozen=True)
class AppServices:
    ai_router: AIRequestRouter
    quote_selector: QuoteSelector
    static_assets: SinglePageAppStaticFiles | None


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; settings are resolved from the environment unless given."""
    dotenv_loaded: bool | None = None
    if settings is None:
        dotenv_loaded = load_environment_from_dotenv(".env")
        settings = Settings.from_env()
    configure_logging(settings.app_log_level)
    if dotenv_loaded is not None:
        logger.info("application_startup_dotenv_loaded loaded=%s", dotenv_loaded)
    services = _build_services(settings)
    application = FastAPI(title="Motivation Hub")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(application)
    _register_routes(application, services)
    return application


def _build_services(settings: Settings) -> AppServices:
    ai_router = AIRequestRouter(
        providers=_build_chat_providers(settings),
        default_model=settings.default_model,
    )
    logger.info(
        "ai_providers_configured providers=%s default_model=%s timeout_seconds=%s",
        ",".join(ai_router.provider_names) or "none",
        settings.default_model,
        settings.ai_request_timeout_seconds,
    )
    return AppServices(
        ai_router=ai_router,
        quote_selector=QuoteSelector(),
        static_assets=build_static_assets(settings.public_dir),
    )


def _build_chat_providers(settings: Settings) -> tuple[ChatProvider, ...]:
    providers: list[ChatProvider] = []
    if settings.groq_api_key is not None:
        providers.append(
            GroqChatProvider(
                api_key=settings.groq_api_key,
                temperature=CHAT_TEMPERATURE,
                max_tokens=CHAT_MAX_TOKENS,
                timeout_seconds=settings.ai_request_timeout_seconds,
            )
        )
    if settings.openai_api_key is not None:
        providers.append(
            OpenAICompatibleChatProvider(
                base_url=OPENAI_API_BASE_URL,
                api_key=settings.openai_api_key,
                model_prefix=settings.openai_model_prefix,
                fallback_model=settings.openai_fallback_model,
                max_tokens=CHAT_MAX_TOKENS,
                timeout_seconds=settings.ai_request_timeout_seconds,
            )
        )
    return tuple(providers)


def _register_routes(app: FastAPI, services: AppServices) -> None:
    _register_health_route(app)
    _register_quote_route(app, services)
    _register_ai_route(app, services)
    _register_social_route(app)
    # Mounted last so API routes take precedence.
    _mount_static_assets(app, services)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        logger.info(
            "service_error_returned path=%s status=%s error=%s",
            request.url.path,
            exc.status_code,
            exc.error,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        path = request.url.path
        if request.method.upper() != "POST" or path not in _MISSING_FIELD_ERRORS:
            return await fastapi_request_validation_exception_handler(request, exc)
        payload = _build_validation_payload(path, exc.errors())
        logger.info("payload_validation_failed path=%s error=%s", path, payload["error"])
        return JSONResponse(status_code=400, content=payload)


def _build_validation_payload(path: str, errors: list[dict[str, Any]]) -> dict[str, str]:
    required_field, missing_error = _MISSING_FIELD_ERRORS[path]
    if any(_is_missing_required_value(error, required_field) for error in errors):
        return {"error": missing_error}
    messages = [_build_validation_message(error) for error in errors]
    return {"error": "Invalid payload", "detail": "; ".join(messages)}


def _is_missing_required_value(error: dict[str, Any], required_field: str) -> bool:
    location = tuple(error["loc"])
    if location == ("body",):
        return error["type"] in _MISSING_BODY_ERROR_TYPES
    return location == ("body", required_field) and error["type"] == "missing"


def _build_validation_message(error: dict[str, Any]) -> str:
    location = tuple(error["loc"])
    if len(location) > 0 and location[0] == "body" and error["type"] == "json_invalid":
        return "payload must be valid JSON"
    field_path = [str(part) for part in location if part != "body"]
    if len(field_path) == 0:
        return str(error["msg"])
    return f"{'.'.join(field_path)}: {error['msg']}"


def _register_health_route(app: FastAPI) -> None:
    @app.get("/health")
    async def health() -> dict[str, str]:
        logger.debug("health_check_requested")
        return {"status": "ok"}


def _register_quote_route(app: FastAPI, services: AppServices) -> None:
    @app.get("/api/quote")
    async def quote() -> QuoteResponse:
        logger.info("quote_requested")
        return QuoteResponse(quote=services.quote_selector.pick())


def _register_ai_route(app: FastAPI, services: AppServices) -> None:
    @app.post(_AI_PATH)
    async def ai(payload: AIRequest = Depends(_read_payload(AIRequest))) -> AIReplyResponse:
        logger.info(
            "ai_endpoint_called prompt_length=%s model=%s",
            len(payload.prompt or ""),
            payload.model,
        )
        result = await services.ai_router.reply(payload.prompt, payload.model)
        return AIReplyResponse(reply=result.reply)


def _register_social_route(app: FastAPI) -> None:
    @app.post(_SOCIAL_PATH)
    async def social(
        payload: SocialShareRequest = Depends(_read_payload(SocialShareRequest)),
    ) -> SocialShareResponse:
        logger.info("social_share_requested platform=%s", payload.platform)
        share_url = build_share_url(payload.platform, payload.text, payload.url)
        return SocialShareResponse(shareUrl=share_url)


def _mount_static_assets(app: FastAPI, services: AppServices) -> None:
    if services.static_assets is None:
        return
    app.mount("/", services.static_assets, name="static")


def _read_payload(
    model: type[PayloadModel],
) -> Callable[[Request], Awaitable[PayloadModel]]:
    """Build a dependency that validates a JSON or form-encoded body against ``model``."""

    async def read(request: Request) -> PayloadModel:
        data = await _read_body_data(request)
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
            ) from exc

    return read


async def _read_body_data(request: Request) -> Any:
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in _FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    body = await request.body()
    if body.strip() == b"":
        return {}
    try:
        return json.loads(body)
    except ValueError as exc:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body", 0),
                    "msg": "JSON decode error",
                    "input": {},
                }
            ]
        ) from exc
