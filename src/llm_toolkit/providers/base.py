"""
Interface commune des adaptateurs de providers.

Un adaptateur convertit un historique de messages et des options d'appel
en payload HTTP propre au provider, et reconvertit la réponse (complète
ou fragment de stream) en texte.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from ..core.models import CompletionOptions, Message


def dig(data: Any, *path: Any) -> Any:
    """
    Parcourt un JSON imbriqué sans lever d'exception.

    Args:
        data: Objet JSON décodé
        *path: Clés (str) ou index (int) successifs

    Returns:
        La valeur trouvée ou None si un maillon manque
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict):
            return None
        try:
            current = current[key]
        except (KeyError, IndexError):
            return None
    return current


def first_text(data: Any, *paths: Sequence[Any]) -> str:
    """Retourne la première valeur non vide parmi plusieurs chemins, sinon ""."""
    for path in paths:
        value = dig(data, *path)
        if isinstance(value, str) and value:
            return value
    return ""


class ProviderAdapter(ABC):
    """Adaptateur de provider LLM."""

    name: str = ""

    def to_role_content(self, messages: Sequence[Message]) -> List[Dict[str, str]]:
        """Projection {role, content} des messages."""
        return [{"role": m.role, "content": m.content} for m in messages]

    @abstractmethod
    def format_history(self, messages: Sequence[Message]) -> Any:
        """Convertit l'historique au format du provider."""

    @abstractmethod
    def build_body(self, formatted: Any, options: CompletionOptions) -> Dict[str, Any]:
        """Construit le body JSON de la requête."""

    def build_headers(self, options: CompletionOptions) -> Dict[str, str]:
        """Headers HTTP: content-type JSON + authentification Bearer."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {options.api_key}",
        }

    @abstractmethod
    def decode_full(self, data: Any) -> str:
        """Extrait le texte d'une réponse complète (non streaming)."""

    @abstractmethod
    def decode_stream_chunk(self, chunk: str) -> str:
        """Extrait le texte d'un fragment de stream."""

    def build_request(self, messages: Sequence[Message], options: CompletionOptions):
        """
        Raccourci: (body, headers) pour un historique et des options résolues.
        """
        body = self.build_body(self.format_history(messages), options)
        return body, self.build_headers(options)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} provider={self.name!r}>"
