"""
Adaptateur Google Gemini (generateContent).
"""
import json
import logging
from typing import Any, Dict, Sequence

from ..core.models import CompletionOptions, Message
from .base import ProviderAdapter, first_text

logger = logging.getLogger(__name__)

CANDIDATE_TEXT_PATH = ("candidates", 0, "content", "parts", 0, "text")


class GoogleAdapter(ProviderAdapter):
    """Format Gemini: `contents` avec parts, rôle assistant → model."""

    name = "google"

    def format_history(self, messages: Sequence[Message]) -> Dict[str, Any]:
        contents = []
        for msg in messages:
            contents.append({
                "role": "model" if msg.role == "assistant" else msg.role,
                "parts": [{"text": msg.content}]
            })
        return {"contents": contents}

    def build_body(self, formatted: Dict[str, Any], options: CompletionOptions) -> Dict[str, Any]:
        return {
            "model": options.model,
            "contents": formatted["contents"],
            "generationConfig": {
                "temperature": options.temperature,
                "maxOutputTokens": options.max_tokens,
            },
            **(options.extra_params or {})
        }

    def decode_full(self, data: Any) -> str:
        return first_text(data, CANDIDATE_TEXT_PATH)

    def decode_stream_chunk(self, chunk: str) -> str:
        try:
            data = json.loads(chunk)
        except json.JSONDecodeError as e:
            logger.debug(f"[STREAM] Fragment Gemini ignoré (JSON invalide): {e}")
            return ""
        return first_text(data, CANDIDATE_TEXT_PATH)
