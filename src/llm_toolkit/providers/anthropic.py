"""
Adaptateur Anthropic (messages API).
"""
import json
import logging
from typing import Any, Dict, Sequence

from ..core.constants import ANTHROPIC_VERSION
from ..core.models import CompletionOptions, Message
from .base import ProviderAdapter, dig, first_text

logger = logging.getLogger(__name__)


class AnthropicAdapter(ProviderAdapter):
    """Format Anthropic: le prompt système est sorti de la liste de messages."""

    name = "anthropic"

    def format_history(self, messages: Sequence[Message]) -> Dict[str, Any]:
        system = next((m.content for m in messages if m.role == "system"), "")
        return {
            "system": system or "",
            "messages": self.to_role_content([m for m in messages if m.role != "system"]),
        }

    def build_body(self, formatted: Dict[str, Any], options: CompletionOptions) -> Dict[str, Any]:
        return {
            "model": options.model,
            "system": formatted["system"],
            "messages": formatted["messages"],
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "stream": options.stream,
            **(options.extra_params or {})
        }

    def build_headers(self, options: CompletionOptions) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": options.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def decode_full(self, data: Any) -> str:
        return first_text(data, ("content", 0, "text"))

    def decode_stream_chunk(self, chunk: str) -> str:
        """
        Décode un fragment de lignes JSON; seuls les `content_block_delta`
        contribuent au texte.
        """
        text = ""
        try:
            for line in chunk.split("\n"):
                if not line.strip():
                    continue
                data = json.loads(line)
                if isinstance(data, dict) and data.get("type") == "content_block_delta":
                    delta = dig(data, "delta", "text")
                    if isinstance(delta, str):
                        text += delta
        except json.JSONDecodeError as e:
            logger.debug(f"[STREAM] Fragment Anthropic ignoré (JSON invalide): {e}")
            return ""
        return text
