"""
Dataclass de configuration du toolkit.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from ..core.constants import (
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_STORAGE_FILE,
    DEFAULT_STORAGE_PREFIX,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TOKEN_LIMIT,
)
from ..core.exceptions import ConfigurationError
from .loader import load_config


def _clean_mapping(data: Optional[Dict[str, Any]], key: str) -> Dict[str, str]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"'{key}' doit être une table provider → valeur", config_key=key)
    return {provider: value for provider, value in data.items() if value}


@dataclass
class ToolkitConfig:
    """Configuration globale du toolkit."""
    default_provider: str = DEFAULT_PROVIDER
    default_model: str = DEFAULT_MODEL
    default_system_prompt: str = DEFAULT_SYSTEM_PROMPT
    token_limit: int = DEFAULT_TOKEN_LIMIT
    api_keys: Dict[str, str] = field(default_factory=dict)
    endpoints: Dict[str, str] = field(default_factory=dict)
    use_storage: bool = False
    storage_key_prefix: str = DEFAULT_STORAGE_PREFIX
    storage_path: str = DEFAULT_STORAGE_FILE
    request_timeout: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.token_limit, int) or self.token_limit <= 0:
            raise ConfigurationError(
                f"token_limit doit être un entier positif (reçu: {self.token_limit!r})",
                config_key="token_limit"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToolkitConfig":
        """
        Crée une instance depuis un dictionnaire.

        Accepte les clés à plat ou les tables TOML `[toolkit]`,
        `[api_keys]`, `[endpoints]` et `[storage]`.
        """
        section = {**data, **data.get("toolkit", {})}
        storage = data.get("storage", {})

        return cls(
            default_provider=section.get("default_provider", DEFAULT_PROVIDER),
            default_model=section.get("default_model", DEFAULT_MODEL),
            default_system_prompt=section.get("default_system_prompt", DEFAULT_SYSTEM_PROMPT),
            token_limit=section.get("token_limit", DEFAULT_TOKEN_LIMIT),
            api_keys=_clean_mapping(data.get("api_keys"), "api_keys"),
            endpoints=_clean_mapping(data.get("endpoints"), "endpoints"),
            use_storage=storage.get("enabled", section.get("use_storage", False)),
            storage_key_prefix=storage.get(
                "key_prefix", section.get("storage_key_prefix", DEFAULT_STORAGE_PREFIX)
            ),
            storage_path=storage.get("path", section.get("storage_path", DEFAULT_STORAGE_FILE)),
            request_timeout=section.get("request_timeout"),
        )

    @classmethod
    def from_file(cls, config_path: str = None) -> "ToolkitConfig":
        """Charge le fichier TOML puis crée l'instance."""
        return cls.from_dict(load_config(config_path))

    def get_api_key(self, provider: str) -> Optional[str]:
        """Clé API configurée pour un provider."""
        return self.api_keys.get(provider)

    def get_endpoint(self, provider: str) -> Optional[str]:
        """Endpoint configuré (override) pour un provider."""
        return self.endpoints.get(provider)

    def to_dict(self, mask_api_keys: bool = True) -> Dict[str, Any]:
        """Convertit la configuration en dictionnaire."""
        return {
            "default_provider": self.default_provider,
            "default_model": self.default_model,
            "default_system_prompt": self.default_system_prompt,
            "token_limit": self.token_limit,
            "api_keys": {
                provider: "***" if mask_api_keys else key
                for provider, key in self.api_keys.items()
            },
            "endpoints": dict(self.endpoints),
            "use_storage": self.use_storage,
            "storage_key_prefix": self.storage_key_prefix,
            "storage_path": self.storage_path,
            "request_timeout": self.request_timeout,
        }
