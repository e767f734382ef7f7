"""
Adaptateur générique pour les endpoints custom (et providers inconnus).
"""
import json
from typing import Any, Dict, List, Sequence

from ..core.models import CompletionOptions, Message
from .base import ProviderAdapter, first_text


class CustomAdapter(ProviderAdapter):
    """Passthrough des messages, décodage best-effort sur plusieurs champs."""

    name = "custom"

    def format_history(self, messages: Sequence[Message]) -> List[Dict[str, str]]:
        # Messages complets: role, content, timestamp et id
        return [m.to_dict() for m in messages]

    def build_body(self, formatted: Any, options: CompletionOptions) -> Dict[str, Any]:
        return {
            "model": options.model,
            "messages": formatted,
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "stream": options.stream,
            **(options.extra_params or {})
        }

    def build_headers(self, options: CompletionOptions) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if options.api_key:
            headers["Authorization"] = f"Bearer {options.api_key}"
        return headers

    def decode_full(self, data: Any) -> str:
        return first_text(
            data,
            ("content",),
            ("text",),
            ("message", "content"),
            ("choices", 0, "message", "content"),
            ("completion",),
        )

    def decode_stream_chunk(self, chunk: str) -> str:
        """
        Fragment JSON unique (`text`, `content` ou `completion`).

        Si le fragment n'est pas du JSON, il est retourné tel quel.
        """
        try:
            data = json.loads(chunk)
        except json.JSONDecodeError:
            return chunk
        return first_text(data, ("text",), ("content",), ("completion",))
