"""
Adaptateur OpenAI (chat/completions).
"""
import json
import logging
from typing import Any, Dict, List, Sequence

from ..core.constants import SSE_DATA_PREFIX, STREAM_DONE_SENTINEL
from ..core.models import CompletionOptions, Message
from .base import ProviderAdapter, dig, first_text

logger = logging.getLogger(__name__)


class OpenAIAdapter(ProviderAdapter):
    """Format OpenAI: liste {role, content} système inclus."""

    name = "openai"

    def format_history(self, messages: Sequence[Message]) -> List[Dict[str, str]]:
        return self.to_role_content(messages)

    def build_body(self, formatted: Any, options: CompletionOptions) -> Dict[str, Any]:
        return {
            "model": options.model,
            "messages": formatted,
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "stream": options.stream,
            **(options.extra_params or {})
        }

    def decode_full(self, data: Any) -> str:
        return first_text(data, ("choices", 0, "message", "content"))

    def decode_stream_chunk(self, chunk: str) -> str:
        """
        Décode un fragment SSE: lignes `data: {...}`, `[DONE]` ignoré.

        Une ligne JSON invalide annule tout le fragment (retourne "").
        """
        lines = [
            line.strip() for line in chunk.split("\n")
            if line.strip().startswith(SSE_DATA_PREFIX) and STREAM_DONE_SENTINEL not in line
        ]

        text = ""
        try:
            for line in lines:
                data_str = line[len(SSE_DATA_PREFIX):].strip()
                if not data_str:
                    continue
                data = json.loads(data_str)
                content = dig(data, "choices", 0, "delta", "content")
                if isinstance(content, str):
                    text += content
        except json.JSONDecodeError as e:
            logger.debug(f"[STREAM] Fragment OpenAI ignoré (JSON invalide): {e}")
            return ""
        return text
