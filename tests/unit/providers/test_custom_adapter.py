"""
Tests unitaires pour l'adaptateur custom.
"""
import pytest

from llm_toolkit.core.models import CompletionOptions
from llm_toolkit.providers.custom import CustomAdapter


@pytest.fixture
def adapter():
    return CustomAdapter()


class TestRequest:

    def test_passthrough_body(self, adapter, sample_messages):
        options = CompletionOptions(model="local", temperature=0.7, max_tokens=10, stream=False, api_key="k")
        body, headers = adapter.build_request(sample_messages, options)

        assert body["messages"][2] == {
            "role": "assistant", "content": "Je vais bien, merci!", "timestamp": "t2", "id": "m2"
        }
        assert body["stream"] is False
        assert headers["Authorization"] == "Bearer k"

    def test_history_keeps_id_and_timestamp(self, adapter, sample_messages):
        """Les messages sont transmis complets, sans projection role/content."""
        formatted = adapter.format_history(sample_messages)

        assert [m["id"] for m in formatted] == ["m0", "m1", "m2"]
        assert [m["timestamp"] for m in formatted] == ["t0", "t1", "t2"]
        assert formatted[0]["role"] == "system"

    def test_no_authorization_without_key(self, adapter):
        headers = adapter.build_headers(CompletionOptions(api_key=None))
        assert headers == {"Content-Type": "application/json"}


class TestDecodeFull:

    @pytest.mark.parametrize("data", [
        {"content": "R"},
        {"text": "R"},
        {"message": {"content": "R"}},
        {"choices": [{"message": {"content": "R"}}]},
        {"completion": "R"},
    ])
    def test_fallback_fields(self, adapter, data):
        assert adapter.decode_full(data) == "R"

    def test_priority_order(self, adapter):
        assert adapter.decode_full({"text": "second", "content": "premier"}) == "premier"

    def test_nothing_found(self, adapter):
        assert adapter.decode_full({"output": "x"}) == ""


class TestDecodeStream:

    def test_plain_text_passthrough(self, adapter):
        assert adapter.decode_stream_chunk("plain text") == "plain text"

    def test_json_fields(self, adapter):
        assert adapter.decode_stream_chunk('{"text": "a"}') == "a"
        assert adapter.decode_stream_chunk('{"content": "b"}') == "b"
        assert adapter.decode_stream_chunk('{"completion": "c"}') == "c"

    def test_json_without_text(self, adapter):
        assert adapter.decode_stream_chunk('{"done": true}') == ""
        assert adapter.decode_stream_chunk("[1, 2]") == ""
