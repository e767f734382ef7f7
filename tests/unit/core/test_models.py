"""
Tests unitaires pour les dataclasses métier.
"""
import dataclasses

import pytest

from llm_toolkit.core.models import (
    CompletionOptions,
    CompletionRequest,
    Conversation,
    Message,
)


class TestMessage:
    """Tests du message immuable."""

    def test_frozen(self):
        msg = Message(role="user", content="Salut", timestamp="t", id="m1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            msg.content = "modifié"

    def test_to_dict(self):
        msg = Message(role="user", content="Salut", timestamp="t", id="m1")
        assert msg.to_dict() == {"role": "user", "content": "Salut", "timestamp": "t", "id": "m1"}


class TestConversation:
    """Tests de la conversation."""

    def test_snapshot_is_detached(self):
        """Modifier la copie ne touche pas l'original."""
        conv = Conversation(id="c1", messages=[], token_count=0, metadata={"a": 1})
        copy = conv.snapshot()
        copy.messages.append(Message("user", "x", "t", "m"))
        copy.metadata["b"] = 2

        assert conv.messages == []
        assert conv.metadata == {"a": 1}


class TestCompletionOptions:
    """Tests des options de complétion."""

    def test_defaults_are_unset(self):
        options = CompletionOptions()
        assert options.model is None
        assert options.temperature is None
        assert options.extra_params is None

    def test_from_dict_accepts_camel_case(self):
        options = CompletionOptions.from_dict({
            "maxTokens": 50,
            "apiKey": "k",
            "extraParams": {"top_p": 0.9},
            "temperature": 0,
        })
        assert options.max_tokens == 50
        assert options.api_key == "k"
        assert options.extra_params == {"top_p": 0.9}
        assert options.temperature == 0

    def test_from_dict_rejects_unknown_key(self):
        with pytest.raises(ValueError):
            CompletionOptions.from_dict({"temprature": 0.2})

    def test_coerce(self):
        existing = CompletionOptions(model="m")
        assert CompletionOptions.coerce(existing) is existing
        assert CompletionOptions.coerce(None) == CompletionOptions()
        assert CompletionOptions.coerce({"model": "m"}).model == "m"


class TestCompletionRequest:
    """Tests de la requête batch."""

    def test_coerce_from_snake_and_camel_case(self):
        snake = CompletionRequest.coerce({"conversation_id": "c1", "user_message": "Salut"})
        camel = CompletionRequest.coerce({
            "conversationId": "c2",
            "userMessage": "Hello",
            "options": {"model": "m"},
        })

        assert (snake.conversation_id, snake.user_message, snake.options) == ("c1", "Salut", None)
        assert (camel.conversation_id, camel.user_message) == ("c2", "Hello")
        assert camel.options == {"model": "m"}

    def test_coerce_instance(self):
        request = CompletionRequest("c1", "Salut")
        assert CompletionRequest.coerce(request) is request
