"""Shared pytest configuration for the project."""

from pathlib import Path
import sys

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

_APP_ENV_VARS = (
    "GROQ_API_KEY",
    "OPENAI_API_KEY",
    "DEFAULT_MODEL",
    "OPENAI_MODEL_PREFIX",
    "OPENAI_FALLBACK_MODEL",
    "AI_REQUEST_TIMEOUT_SECONDS",
    "HOST",
    "PORT",
    "PUBLIC_DIR",
    "CORS_ALLOW_ORIGINS",
    "APP_LOG_LEVEL",
)


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "index.html").write_text(
        "<!doctype html><title>Motivation Hub</title>", encoding="utf-8"
    )
    (directory / "app.js").write_text("console.log('hub');", encoding="utf-8")
    return directory


@pytest.fixture
def base_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    public_dir: Path,
) -> None:
    for name in _APP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # create_app() reads .env from the working directory.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PUBLIC_DIR", str(public_dir))
    monkeypatch.setenv("APP_LOG_LEVEL", "INFO")
