"""
Orchestrateur de complétions.

Relie le store de conversations, les adaptateurs de providers et le
client HTTP: ajout du message utilisateur, résolution des options,
appel du provider, ajout de la réponse de l'assistant.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from .config.settings import ToolkitConfig
from .conversations.store import ConversationStore
from .core.constants import (
    DEFAULT_ENDPOINTS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    SESSION_KEY_PREFIX,
)
from .core.exceptions import MissingCredentialError, MissingEndpointError
from .core.models import CompletionOptions, CompletionRequest, Conversation, Message
from .providers.factory import get_adapter
from .storage.sessions import SessionStorage
from .transport.client import create_provider_client
from .transport.stream import consume_stream

logger = logging.getLogger(__name__)

OptionsLike = Union[CompletionOptions, Mapping[str, Any], None]


def _first_set(*values: Any) -> Any:
    """Première valeur différente de None (0 et "" restent des valeurs)."""
    for value in values:
        if value is not None:
            return value
    return None


class LLMToolkit:
    """
    Toolkit multi-provider pour conversations LLM.

    Chaque instance possède son propre store: deux toolkits ne partagent
    jamais de conversation.
    """

    def __init__(
        self,
        config: Union[ToolkitConfig, Mapping[str, Any], None] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        if config is None:
            config = ToolkitConfig()
        elif not isinstance(config, ToolkitConfig):
            config = ToolkitConfig.from_dict(dict(config))
        self.config = config

        self.store = ConversationStore(
            default_system_prompt=config.default_system_prompt,
            token_limit=config.token_limit
        )
        self.storage = SessionStorage(
            enabled=config.use_storage,
            prefix=config.storage_key_prefix,
            path=config.storage_path
        )
        self.client = create_provider_client(
            timeout=config.request_timeout,
            http_client=http_client
        )

    # ========================================================================
    # Conversations
    # ========================================================================

    def create_conversation(self, system_prompt: Optional[str] = None) -> str:
        return self.store.create(system_prompt)

    def get_conversation(self, conversation_id: str) -> Conversation:
        return self.store.get(conversation_id)

    def get_all_conversations(self) -> List[Conversation]:
        return self.store.list()

    def delete_conversation(self, conversation_id: str) -> bool:
        return self.store.delete(conversation_id)

    def add_context(
        self,
        conversation_id: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Message:
        """Ajoute un message système de contexte (métadonnées fusionnées)."""
        return self.store.append(conversation_id, "system", content, metadata)

    def add_user_message(self, conversation_id: str, content: str) -> Message:
        return self.store.append(conversation_id, "user", content)

    def add_assistant_message(self, conversation_id: str, content: str) -> Message:
        return self.store.append(conversation_id, "assistant", content)

    # ========================================================================
    # Résolution des options
    # ========================================================================

    def _resolve_options(self, options: OptionsLike, stream: bool) -> CompletionOptions:
        """
        Fusionne les options d'appel, la configuration et les défauts.

        Raises:
            MissingCredentialError: Aucune clé API pour le provider
            MissingEndpointError: Aucun endpoint pour le provider
        """
        overrides = CompletionOptions.coerce(options)
        config = self.config

        provider = _first_set(overrides.provider, config.default_provider, DEFAULT_PROVIDER)

        # Clé vide = non définie
        api_key = overrides.api_key or config.get_api_key(provider)
        if not api_key:
            raise MissingCredentialError(provider)

        endpoint = _first_set(
            overrides.endpoint,
            config.get_endpoint(provider),
            DEFAULT_ENDPOINTS.get(provider)
        )
        if not endpoint:
            raise MissingEndpointError(provider)

        return CompletionOptions(
            model=_first_set(overrides.model, config.default_model, DEFAULT_MODEL),
            provider=provider,
            temperature=_first_set(overrides.temperature, DEFAULT_TEMPERATURE),
            max_tokens=_first_set(overrides.max_tokens, DEFAULT_MAX_TOKENS),
            stream=stream,
            api_key=api_key,
            endpoint=endpoint,
            extra_params=dict(overrides.extra_params or {})
        )

    # ========================================================================
    # Complétions
    # ========================================================================

    async def send_completion(
        self,
        conversation_id: str,
        user_message: str,
        options: OptionsLike = None
    ) -> str:
        """
        Envoie l'historique au provider et ajoute la réponse complète.

        Le message utilisateur reste dans l'historique si l'appel échoue.

        Raises:
            ConversationNotFoundError: Conversation inconnue
            MissingCredentialError / MissingEndpointError: Avant tout appel réseau
            RequestFailedError: Statut HTTP non 2xx
            httpx.HTTPError: Erreur réseau
        """
        self.store.append(conversation_id, "user", user_message)

        try:
            resolved = self._resolve_options(options, stream=False)
            adapter = get_adapter(resolved.provider)
            body, headers = adapter.build_request(self.store.history(conversation_id), resolved)

            data = await self.client.post_json(
                resolved.endpoint, headers, body, provider=resolved.provider
            )
            text = adapter.decode_full(data)
        except Exception as e:
            logger.error(f"❌ [TOOLKIT] Complétion échouée ({conversation_id}): {e}")
            raise

        self.store.append(conversation_id, "assistant", text)
        return text

    async def stream_completion(
        self,
        conversation_id: str,
        user_message: str,
        on_chunk: Callable[[str], None],
        options: OptionsLike = None
    ) -> str:
        """
        Variante streaming de send_completion.

        Chaque fragment décodé non vide est passé à on_chunk dans l'ordre
        d'arrivée; le texte complet est ajouté comme message assistant.

        Raises:
            StreamingUnavailableError: Corps de réponse non lisible en stream
        """
        self.store.append(conversation_id, "user", user_message)

        try:
            resolved = self._resolve_options(options, stream=True)
            adapter = get_adapter(resolved.provider)
            body, headers = adapter.build_request(self.store.history(conversation_id), resolved)

            async with self.client.open_stream(
                resolved.endpoint, headers, body, provider=resolved.provider
            ) as response:
                text = await consume_stream(response, adapter, on_chunk)
        except Exception as e:
            logger.error(f"❌ [TOOLKIT] Streaming échoué ({conversation_id}): {e}")
            raise

        self.store.append(conversation_id, "assistant", text)
        return text

    async def batch_completions(
        self,
        requests: Iterable[Union[CompletionRequest, Mapping[str, Any]]]
    ) -> List[str]:
        """
        Lance toutes les complétions en parallèle.

        Returns:
            Textes dans l'ordre des requêtes; la première erreur est relancée
        """
        batch = [CompletionRequest.coerce(r) for r in requests]
        logger.debug(f"[TOOLKIT] Batch de {len(batch)} complétion(s)")

        return list(await asyncio.gather(*(
            self.send_completion(r.conversation_id, r.user_message, r.options)
            for r in batch
        )))

    # ========================================================================
    # Sessions (stockage optionnel)
    # ========================================================================

    def save_session(self, session_id: str, data: str):
        """Stocke data tel quel sous la clé session-<id>."""
        self.storage.set(f"{SESSION_KEY_PREFIX}{session_id}", data)

    def load_session(self, session_id: str) -> Optional[str]:
        """Données de session, ou None (absente, désactivé, erreur de stockage)."""
        return self.storage.get(f"{SESSION_KEY_PREFIX}{session_id}")

    def remove_session(self, session_id: str):
        self.storage.remove(f"{SESSION_KEY_PREFIX}{session_id}")
