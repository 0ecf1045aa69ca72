from types import SimpleNamespace

import httpx
import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

import motivation_hub.services.groq_chat_provider as groq_module
from motivation_hub.main import create_app
from motivation_hub.services.openai_compatible_chat_provider import OpenAICompatibleChatProvider


class FakeResponse:
    def __init__(self, status_code: int, payload: dict, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> dict:
        return self._payload


class FailingOpenAILike:
    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs

    async def acomplete(self, prompt: str) -> SimpleNamespace:
        raise RuntimeError("groq unavailable")


class SucceedingOpenAILike:
    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs

    async def acomplete(self, prompt: str) -> SimpleNamespace:
        return SimpleNamespace(text=f"groq:{self.kwargs['model']}:{prompt}")


def _patch_openai_response(
    monkeypatch: pytest.MonkeyPatch,
    response: object,
) -> list[dict]:
    payloads: list[dict] = []

    async def fake_post_json(self, url: str, headers: dict, payload: dict) -> FakeResponse:
        payloads.append(payload)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(OpenAICompatibleChatProvider, "_post_json", fake_post_json)
    return payloads


@pytest.mark.parametrize("body", [{"prompt": "hello"}, {"prompt": "hello", "model": "gpt-4o"}])
def test_ai_without_keys_returns_503(base_env: None, body: dict) -> None:
    client = TestClient(create_app())

    response = client.post("/api/ai", json=body)

    assert response.status_code == 503
    assert response.json() == {
        "error": "No AI key configured. Set GROQ_API_KEY or OPENAI_API_KEY."
    }


@pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": None}, {"model": "gpt-4o"}])
def test_ai_missing_prompt_returns_400_with_keys(
    base_env: None,
    monkeypatch: pytest.MonkeyPatch,
    body: dict,
) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    payloads = _patch_openai_response(
        monkeypatch,
        FakeResponse(status_code=200, payload={"choices": [{"message": {"content": "x"}}]}),
    )
    client = TestClient(create_app())

    response = client.post("/api/ai", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing prompt"}
    assert payloads == []


def test_ai_missing_body_returns_400(base_env: None) -> None:
    client = TestClient(create_app())

    response = client.post("/api/ai")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing prompt"}


def test_ai_wrong_prompt_type_returns_400(base_env: None) -> None:
    client = TestClient(create_app())

    response = client.post("/api/ai", json={"prompt": ["not", "text"]})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid payload"
    assert response.json()["detail"].startswith("prompt: ")


def test_ai_secondary_only_success(base_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    payloads = _patch_openai_response(
        monkeypatch,
        FakeResponse(
            status_code=200,
            payload={"choices": [{"message": {"content": "Kamu pasti bisa."}}]},
        ),
    )
    client = TestClient(create_app())

    response = client.post("/api/ai", json={"prompt": "motivate me"})

    assert response.status_code == 200
    assert response.json() == {"reply": "Kamu pasti bisa."}
    assert payloads[0]["model"] == "gpt-4o-mini"


def test_ai_secondary_only_failure_returns_500(
    base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    _patch_openai_response(monkeypatch, httpx.ConnectError("connection refused"))
    client = TestClient(create_app())

    response = client.post("/api/ai", json={"prompt": "motivate me"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "AI backend error"
    assert body["detail"] != ""
    assert "connection refused" in body["detail"]


def test_ai_falls_back_when_primary_fails(
    base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "groq-key")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    monkeypatch.setattr(groq_module, "_import_openai_like_class", lambda: FailingOpenAILike)
    payloads = _patch_openai_response(
        monkeypatch,
        FakeResponse(status_code=200, payload={"choices": [{"message": {"content": "from openai"}}]}),
    )
    client = TestClient(create_app())

    response = client.post("/api/ai", json={"prompt": "motivate me", "model": "gpt-4o"})

    assert response.status_code == 200
    assert response.json() == {"reply": "from openai"}
    assert payloads[0]["model"] == "gpt-4o"


def test_ai_primary_success_uses_default_model(
    base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "groq-key")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    monkeypatch.setenv("DEFAULT_MODEL", "mixtral-8x7b-32768")
    monkeypatch.setattr(groq_module, "_import_openai_like_class", lambda: SucceedingOpenAILike)
    payloads = _patch_openai_response(
        monkeypatch,
        FakeResponse(status_code=200, payload={"choices": [{"message": {"content": "unused"}}]}),
    )
    client = TestClient(create_app())

    response = client.post("/api/ai", json={"prompt": "hi"})

    assert response.status_code == 200
    assert response.json() == {"reply": "groq:mixtral-8x7b-32768:hi"}
    assert payloads == []


def test_ai_primary_only_failure_returns_500(
    base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "groq-key")
    monkeypatch.setattr(groq_module, "_import_openai_like_class", lambda: FailingOpenAILike)
    client = TestClient(create_app())

    response = client.post("/api/ai", json={"prompt": "hi"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "AI backend error",
        "detail": "RuntimeError: groq unavailable",
    }


def test_ai_accepts_form_encoded_body(base_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    payloads = _patch_openai_response(
        monkeypatch,
        FakeResponse(status_code=200, payload={"choices": [{"message": {"content": "ok"}}]}),
    )
    client = TestClient(create_app())

    response = client.post("/api/ai", data={"prompt": "from a form", "model": "gpt-4o"})

    assert response.status_code == 200
    assert response.json() == {"reply": "ok"}
    assert payloads[0]["messages"] == [{"role": "user", "content": "from a form"}]
    assert payloads[0]["model"] == "gpt-4o"


def test_ai_form_without_prompt_returns_400(base_env: None) -> None:
    client = TestClient(create_app())

    response = client.post("/api/ai", data={"model": "gpt-4o"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing prompt"}


def test_ai_malformed_json_returns_400(base_env: None) -> None:
    client = TestClient(create_app())

    response = client.post(
        "/api/ai",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": "Invalid payload",
        "detail": "payload must be valid JSON",
    }


@pytest.mark.parametrize("raw_body", [b"null", b'"hello"', b"[1, 2]"])
def test_ai_non_object_json_returns_missing_prompt(base_env: None, raw_body: bytes) -> None:
    client = TestClient(create_app())

    response = client.post(
        "/api/ai",
        content=raw_body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing prompt"}


def test_ai_unexpected_client_error_returns_structured_500(
    base_env: None,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    _patch_openai_response(monkeypatch, httpx.InvalidURL("bad url"))
    client = TestClient(create_app(), raise_server_exceptions=False)

    response = client.post("/api/ai", json={"prompt": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "AI backend error", "detail": "InvalidURL: bad url"}
