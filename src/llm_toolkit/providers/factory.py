"""
Sélection de l'adaptateur selon le tag de provider.
"""
import logging
from typing import Dict, Type

from .anthropic import AnthropicAdapter
from .base import ProviderAdapter
from .custom import CustomAdapter
from .google import GoogleAdapter
from .openai import OpenAIAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[ProviderAdapter]] = {
    "openai": OpenAIAdapter,
    "anthropic": AnthropicAdapter,
    "google": GoogleAdapter,
    "custom": CustomAdapter,
}


def get_adapter(provider: str) -> ProviderAdapter:
    """
    Retourne l'adaptateur d'un provider.

    Args:
        provider: Tag du provider ("openai", "anthropic", "google", "custom")

    Returns:
        Instance d'adaptateur; format custom pour un provider inconnu
    """
    adapter_cls = ADAPTERS.get(provider)
    if adapter_cls is None:
        logger.debug(f"Provider inconnu '{provider}', fallback vers le format custom")
        adapter_cls = CustomAdapter
    return adapter_cls()


def get_supported_providers() -> Dict[str, Type[ProviderAdapter]]:
    """Copie du registre provider → classe d'adaptateur."""
    return dict(ADAPTERS)
