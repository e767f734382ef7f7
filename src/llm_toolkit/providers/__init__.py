"""
Adaptateurs de format par provider LLM.
"""

from .base import ProviderAdapter, dig, first_text
from .openai import OpenAIAdapter
from .anthropic import AnthropicAdapter
from .google import GoogleAdapter
from .custom import CustomAdapter
from .factory import ADAPTERS, get_adapter, get_supported_providers

__all__ = [
    "ProviderAdapter",
    "dig",
    "first_text",
    "OpenAIAdapter",
    "AnthropicAdapter",
    "GoogleAdapter",
    "CustomAdapter",
    "ADAPTERS",
    "get_adapter",
    "get_supported_providers",
]
