"""
Registre en mémoire des conversations.

Le store est possédé par une seule instance de toolkit. Aucun verrou:
deux appels concurrents sur la même conversation peuvent entrelacer
leurs messages dans l'ordre d'arrivée.
"""
import logging
import math
import warnings
from datetime import datetime
from typing import Dict, Any, List, Optional

from ..core.constants import (
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TOKEN_LIMIT,
    TOKEN_WARNING_RATIO,
    VALID_ROLES,
)
from ..core.exceptions import ConversationNotFoundError, TokenLimitWarning
from ..core.ids import generate_id, now_ms
from ..core.models import Conversation, Message
from ..core.tokens import estimate_token_count, estimate_history_tokens

logger = logging.getLogger(__name__)


def compute_warning_threshold(token_limit: int, ratio: float = TOKEN_WARNING_RATIO) -> int:
    """Seuil d'alerte en tokens: floor(limit * ratio)."""
    return math.floor(token_limit * ratio)


class ConversationStore:
    """
    Registre des conversations indexé par identifiant.

    Gère:
    - L'ordre des messages (append-only)
    - Le recalcul du comptage de tokens après chaque ajout
    - L'alerte de seuil (80% de la limite)
    """

    def __init__(
        self,
        default_system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        token_limit: int = DEFAULT_TOKEN_LIMIT
    ):
        self.default_system_prompt = default_system_prompt
        self.token_limit = token_limit
        self.warning_threshold = compute_warning_threshold(token_limit)
        self._conversations: Dict[str, Conversation] = {}

    def __len__(self) -> int:
        return len(self._conversations)

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._conversations

    def create(self, system_prompt: Optional[str] = None) -> str:
        """
        Crée une conversation avec un unique message système.

        Args:
            system_prompt: Prompt système (défaut configuré si vide)

        Returns:
            Identifiant de la conversation
        """
        conversation_id = generate_id("conv")
        content = system_prompt or self.default_system_prompt or ""

        initial_message = Message(
            role="system",
            content=content,
            timestamp=datetime.now().isoformat(),
            id=f"msg-system-{now_ms()}"
        )

        self._conversations[conversation_id] = Conversation(
            id=conversation_id,
            messages=[initial_message],
            token_count=estimate_token_count(content),
            metadata={}
        )
        logger.debug(f"[STORE] Conversation créée: {conversation_id}")
        return conversation_id

    def append(
        self,
        conversation_id: str,
        role: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Message:
        """
        Ajoute un message à une conversation.

        Args:
            conversation_id: ID de la conversation
            role: "system", "user" ou "assistant"
            content: Contenu du message
            metadata: Métadonnées fusionnées (shallow) dans la conversation

        Returns:
            Le message créé

        Raises:
            ConversationNotFoundError: Si la conversation n'existe pas
            ValueError: Si le rôle est inconnu
        """
        conversation = self._require(conversation_id)
        if role not in VALID_ROLES:
            raise ValueError(f"Rôle de message invalide: {role!r}")

        message = Message(
            role=role,
            content=content,
            timestamp=datetime.now().isoformat(),
            id=generate_id(f"msg-{role}")
        )
        conversation.messages.append(message)

        if metadata:
            conversation.metadata = {**conversation.metadata, **metadata}

        conversation.token_count = estimate_history_tokens(
            m.content for m in conversation.messages
        )
        self._check_token_warning(conversation, message)
        return message

    def get(self, conversation_id: str) -> Conversation:
        """
        Récupère une copie de la conversation.

        Raises:
            ConversationNotFoundError: Si la conversation n'existe pas
        """
        return self._require(conversation_id).snapshot()

    def list(self) -> List[Conversation]:
        """Copies de toutes les conversations (ordre d'insertion)."""
        return [c.snapshot() for c in self._conversations.values()]

    def delete(self, conversation_id: str) -> bool:
        """Supprime une conversation. Retourne False si absente."""
        return self._conversations.pop(conversation_id, None) is not None

    def history(self, conversation_id: str) -> List[Message]:
        """Copie de la liste des messages, pour le formatage provider."""
        return list(self._require(conversation_id).messages)

    def _require(self, conversation_id: str) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    def _check_token_warning(self, conversation: Conversation, trigger: Message) -> None:
        if conversation.token_count < self.warning_threshold:
            return

        message = (
            f"Token count warning: Conversation {conversation.id} has reached "
            f"{conversation.token_count} tokens, approaching the limit of {self.token_limit} "
            f"(message {trigger.id})."
        )
        # Texte unique par ajout: jamais dédupliqué par le registre de warnings
        logger.warning(f"⚠️ [TOKENS] {message}")
        warnings.warn(TokenLimitWarning(message), stacklevel=3)
