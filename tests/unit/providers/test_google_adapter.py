"""
Tests unitaires pour l'adaptateur Google Gemini.
"""
import json

import pytest

from llm_toolkit.core.models import CompletionOptions
from llm_toolkit.providers.google import GoogleAdapter


@pytest.fixture
def adapter():
    return GoogleAdapter()


def test_assistant_role_becomes_model(adapter, sample_messages):
    formatted = adapter.format_history(sample_messages)
    assert [c["role"] for c in formatted["contents"]] == ["system", "user", "model"]
    assert formatted["contents"][1]["parts"] == [{"text": "Bonjour, comment ça va?"}]


def test_body_generation_config(adapter, sample_messages):
    options = CompletionOptions(
        model="gemini-pro", temperature=0.2, max_tokens=256, stream=False,
        api_key="g-key", extra_params={"safetySettings": []}
    )
    body, headers = adapter.build_request(sample_messages, options)

    assert body["model"] == "gemini-pro"
    assert body["generationConfig"] == {"temperature": 0.2, "maxOutputTokens": 256}
    assert body["safetySettings"] == []
    assert "stream" not in body
    assert headers["Authorization"] == "Bearer g-key"


def test_decode_full(adapter):
    data = {"candidates": [{"content": {"parts": [{"text": "Réponse"}]}}]}
    assert adapter.decode_full(data) == "Réponse"
    assert adapter.decode_full({"candidates": []}) == ""


def test_decode_stream(adapter):
    chunk = json.dumps({"candidates": [{"content": {"parts": [{"text": "Frag"}]}}]})
    assert adapter.decode_stream_chunk(chunk) == "Frag"
    assert adapter.decode_stream_chunk("[{") == ""
