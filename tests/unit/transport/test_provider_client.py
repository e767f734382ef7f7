"""
Tests unitaires pour le client HTTP des providers.

Les réponses sont simulées avec httpx.MockTransport.
"""
import json

import httpx
import pytest

from llm_toolkit.core.exceptions import RequestFailedError
from llm_toolkit.providers.custom import CustomAdapter
from llm_toolkit.transport.client import ProviderClient, create_provider_client
from llm_toolkit.transport.stream import consume_stream

URL = "https://api.example.com/v1/chat"


class TestProviderClient:
    """Construction et options du client."""

    def test_init_default_values(self):
        client = ProviderClient()
        assert client.timeout is None

    def test_factory_custom(self):
        client = create_provider_client(timeout=30.0)
        assert isinstance(client, ProviderClient)
        assert client.timeout == 30.0

    def test_build_request(self):
        req = ProviderClient().build_request(
            URL, {"Content-Type": "application/json"}, {"messages": [], "stream": False}
        )

        assert req.method == "POST"
        assert str(req.url) == URL
        assert req.headers["Content-Type"] == "application/json"
        assert json.loads(req.content) == {"messages": [], "stream": False}


class TestPostJson:
    """Requêtes complètes."""

    @pytest.mark.asyncio
    async def test_success(self, make_http_client):
        http_client, recorder = make_http_client(
            lambda request: httpx.Response(200, json={"ok": True})
        )
        client = ProviderClient(http_client=http_client)

        data = await client.post_json(URL, {"Authorization": "Bearer k"}, {"a": 1})

        assert data == {"ok": True}
        assert recorder.requests[0].headers["Authorization"] == "Bearer k"
        assert recorder.last_json() == {"a": 1}
        # Le client injecté n'est pas fermé
        assert not http_client.is_closed

    @pytest.mark.asyncio
    async def test_error_status(self, make_http_client):
        http_client, _ = make_http_client(
            lambda request: httpx.Response(401, text="invalid api key")
        )
        client = ProviderClient(http_client=http_client)

        with pytest.raises(RequestFailedError) as exc_info:
            await client.post_json(URL, {}, {}, provider="openai")

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "invalid api key"
        assert exc_info.value.provider == "openai"

    @pytest.mark.asyncio
    async def test_invalid_json_propagates(self, make_http_client):
        http_client, _ = make_http_client(lambda request: httpx.Response(200, text="<html>"))
        client = ProviderClient(http_client=http_client)

        with pytest.raises(json.JSONDecodeError):
            await client.post_json(URL, {}, {})

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, make_http_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        http_client, _ = make_http_client(refuse)
        client = ProviderClient(http_client=http_client)

        with pytest.raises(httpx.ConnectError):
            await client.post_json(URL, {}, {})


class TestOpenStream:
    """Réponses streaming."""

    @pytest.mark.asyncio
    async def test_yields_open_response_then_closes(self, make_http_client):
        async def body():
            yield b"un"
            yield b"deux"

        http_client, _ = make_http_client(lambda request: httpx.Response(200, content=body()))
        client = ProviderClient(http_client=http_client)

        async with client.open_stream(URL, {}, {"stream": True}) as response:
            chunks = [chunk async for chunk in response.aiter_text()]

        assert chunks == ["un", "deux"]
        assert response.is_closed

    @pytest.mark.asyncio
    async def test_closed_when_callback_fails(self, make_http_client):
        """Le callback qui lève en cours de stream: réponse fermée, erreur propagée."""
        async def body():
            yield b"un"
            yield b"deux"

        http_client, _ = make_http_client(lambda request: httpx.Response(200, content=body()))
        client = ProviderClient(http_client=http_client)
        received = []

        def on_chunk(text):
            received.append(text)
            raise ValueError("callback en erreur")

        with pytest.raises(ValueError, match="callback en erreur"):
            async with client.open_stream(URL, {}, {"stream": True}) as response:
                await consume_stream(response, CustomAdapter(), on_chunk)

        assert received == ["un"]
        assert response.is_closed

    @pytest.mark.asyncio
    async def test_error_status_reads_body(self, make_http_client):
        http_client, _ = make_http_client(lambda request: httpx.Response(500, text="overloaded"))
        client = ProviderClient(http_client=http_client)

        with pytest.raises(RequestFailedError) as exc_info:
            async with client.open_stream(URL, {}, {}, provider="anthropic"):
                pytest.fail("le bloc ne doit pas être exécuté")

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "overloaded"
