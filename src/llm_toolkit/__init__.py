"""
LLM Toolkit: conversations multi-provider (OpenAI, Anthropic, Google,
endpoint custom) avec estimation de tokens et streaming.
"""

from .config import ToolkitConfig, load_config, reload_config
from .conversations import ConversationStore
from .core import (
    LLMToolkitError,
    ConversationNotFoundError,
    ConfigurationError,
    ProviderError,
    MissingCredentialError,
    MissingEndpointError,
    RequestFailedError,
    StreamingUnavailableError,
    TokenLimitWarning,
    Message,
    Conversation,
    CompletionOptions,
    CompletionRequest,
    estimate_token_count,
)
from .providers import get_adapter, get_supported_providers
from .storage import SessionStorage
from .toolkit import LLMToolkit

__version__ = "1.0.0"

__all__ = [
    "LLMToolkit",
    "ToolkitConfig",
    "load_config",
    "reload_config",
    "ConversationStore",
    "SessionStorage",
    "get_adapter",
    "get_supported_providers",
    "estimate_token_count",
    "Message",
    "Conversation",
    "CompletionOptions",
    "CompletionRequest",
    "LLMToolkitError",
    "ConversationNotFoundError",
    "ConfigurationError",
    "ProviderError",
    "MissingCredentialError",
    "MissingEndpointError",
    "RequestFailedError",
    "StreamingUnavailableError",
    "TokenLimitWarning",
]
