import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'vibe_lister' imports without an install
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs
from vibe_lister.config import Settings
from vibe_lister.fastapi_app import create_app
from vibe_lister.sessions import InMemorySessionStore

_ENV_VARS = (
    "SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "SPOTIFY_REDIRECT_URI",
    "OPENAI_API_KEY", "OPENAI_MODEL", "PORT", "HOST", "CORS_ORIGINS",
    "SESSION_TTL_SECONDS", "RESOLVE_CONCURRENCY", "HTTP_TIMEOUT_SECONDS",
    "LOG_LEVEL", "LOG_FORMAT", "VIBE_LISTER_API",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep a developer's .env / shell settings out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def settings():
    return Settings(
        spotify_client_id="test-client-id",
        spotify_client_secret="test-client-secret",
        spotify_redirect_uri="http://localhost:8501/callback",
        openai_api_key="test-openai-key",
    )


@pytest.fixture
def spotify_stub():
    return test_stubs.SpotifyStub()


@pytest.fixture
def http(spotify_stub):
    return spotify_stub.client()


@pytest.fixture
def llm():
    return test_stubs.fake_llm("Sunny Vibes\nArtist A - Song One\nArtist B - Song Two\nJust a mood description")


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def app(settings, http, llm, sessions):
    return create_app(settings=settings, http=http, llm=llm, sessions=sessions)


@pytest.fixture
def client(app):
    return TestClient(app)
