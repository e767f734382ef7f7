"""
Cœur métier de LLM Toolkit.
Modules indépendants sans dépendances externes au package.
"""

from .exceptions import (
    LLMToolkitError,
    ConversationNotFoundError,
    ConfigurationError,
    ProviderError,
    MissingCredentialError,
    MissingEndpointError,
    RequestFailedError,
    StreamingUnavailableError,
    TokenLimitWarning,
)
from .constants import (
    AVERAGE_CHARS_PER_TOKEN,
    DEFAULT_ENDPOINTS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TOKEN_LIMIT,
    TOKEN_WARNING_RATIO,
)
from .tokens import estimate_token_count, estimate_history_tokens
from .ids import generate_id
from .models import (
    Message,
    Conversation,
    CompletionOptions,
    CompletionRequest,
)

__all__ = [
    # Exceptions
    "LLMToolkitError",
    "ConversationNotFoundError",
    "ConfigurationError",
    "ProviderError",
    "MissingCredentialError",
    "MissingEndpointError",
    "RequestFailedError",
    "StreamingUnavailableError",
    "TokenLimitWarning",
    # Constants
    "AVERAGE_CHARS_PER_TOKEN",
    "DEFAULT_ENDPOINTS",
    "DEFAULT_MODEL",
    "DEFAULT_PROVIDER",
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_TOKEN_LIMIT",
    "TOKEN_WARNING_RATIO",
    # Tokens
    "estimate_token_count",
    "estimate_history_tokens",
    "generate_id",
    # Models
    "Message",
    "Conversation",
    "CompletionOptions",
    "CompletionRequest",
]
