"""
Exceptions personnalisées pour LLM Toolkit.
"""


class LLMToolkitError(Exception):
    """Exception de base pour toutes les erreurs du toolkit."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "unknown_error"
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} - Détails: {self.details}"
        return f"[{self.code}] {self.message}"


class ConversationNotFoundError(LLMToolkitError, KeyError):
    """Conversation inconnue du store."""

    def __init__(self, conversation_id: str):
        super().__init__(
            message=f"Conversation with ID {conversation_id} not found",
            code="not_found",
            details={"conversation_id": conversation_id}
        )
        self.conversation_id = conversation_id


class ConfigurationError(LLMToolkitError):
    """Erreur de configuration (fichier manquant, valeur invalide)."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message=message,
            code="config_error",
            details={"key": config_key} if config_key else {}
        )


class ProviderError(LLMToolkitError):
    """Erreur liée à un provider (clé API manquante, URL invalide)."""

    def __init__(self, message: str, provider: str = None, code: str = "provider_error"):
        super().__init__(
            message=message,
            code=code,
            details={"provider": provider} if provider else {}
        )
        self.provider = provider


class MissingCredentialError(ProviderError):
    """Aucune clé API résolue pour le provider."""

    def __init__(self, provider: str):
        super().__init__(
            message=f"No API key configured for provider: {provider}",
            provider=provider,
            code="missing_credential"
        )


class MissingEndpointError(ProviderError):
    """Aucun endpoint résolu pour le provider."""

    def __init__(self, provider: str):
        super().__init__(
            message=f"No endpoint configured for provider: {provider}",
            provider=provider,
            code="missing_endpoint"
        )


class RequestFailedError(LLMToolkitError):
    """Réponse HTTP non 2xx d'un provider."""

    def __init__(self, status_code: int, body: str, provider: str = None):
        super().__init__(
            message=f"API request failed with status {status_code}: {body}",
            code="request_failed",
            details={"status_code": status_code, "provider": provider}
        )
        self.status_code = status_code
        self.body = body
        self.provider = provider


class StreamingUnavailableError(LLMToolkitError):
    """La réponse streaming n'a pas de corps lisible."""

    def __init__(self, provider: str = None):
        super().__init__(
            message="Response body is not readable as a stream",
            code="streaming_unavailable",
            details={"provider": provider} if provider else {}
        )


class TokenLimitWarning(UserWarning):
    """Avertissement non bloquant: conversation proche de la limite de tokens."""
