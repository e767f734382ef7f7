"""
Transport HTTP vers les APIs LLM (httpx).
"""

from .client import ProviderClient, create_provider_client
from .stream import consume_stream, STREAMING_ERROR_TYPES

__all__ = [
    "ProviderClient",
    "create_provider_client",
    "consume_stream",
    "STREAMING_ERROR_TYPES",
]
