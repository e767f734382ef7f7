"""
Configuration des tests pytest.
"""
import json
import os
import sys

import httpx
import pytest

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from llm_toolkit.config import loader  # noqa: E402
from llm_toolkit.config.settings import ToolkitConfig  # noqa: E402
from llm_toolkit.core.models import Message  # noqa: E402


# Configuration pytest-asyncio
def pytest_configure(config):
    """Configure pytest pour async."""
    config.addinivalue_line(
        "markers", "asyncio: marque un test comme asynchrone"
    )


@pytest.fixture(autouse=True)
def clear_config_cache():
    """Chaque test part d'un cache de configuration vide."""
    loader._clear_config_cache()
    yield
    loader._clear_config_cache()


@pytest.fixture
def test_config():
    """Configuration avec des clés pour tous les providers."""
    return ToolkitConfig(
        api_keys={
            "openai": "sk-openai-test",
            "anthropic": "sk-ant-test",
            "google": "google-test",
            "custom": "custom-test",
        },
        endpoints={"custom": "http://localhost:9999/generate"},
    )


@pytest.fixture
def sample_messages():
    """Historique système / utilisateur / assistant."""
    return [
        Message(role="system", content="Tu es un assistant utile.", timestamp="t0", id="m0"),
        Message(role="user", content="Bonjour, comment ça va?", timestamp="t1", id="m1"),
        Message(role="assistant", content="Je vais bien, merci!", timestamp="t2", id="m2"),
    ]


class RecordingTransport:
    """
    Transport httpx factice: enregistre les requêtes et répond via handler.
    """

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_http_client():
    """Fabrique un httpx.AsyncClient branché sur un MockTransport."""
    def _make(handler):
        recorder = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        return client, recorder
    return _make
