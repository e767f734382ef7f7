"""
Chargement de la configuration TOML.

Exemple de fichier:

    [toolkit]
    default_provider = "anthropic"
    default_model = "claude-3-haiku-20240307"
    token_limit = 18000

    [api_keys]
    anthropic = "${ANTHROPIC_API_KEY}"

    [endpoints]
    custom = "http://localhost:8080/v1/generate"

    [storage]
    enabled = true
    key_prefix = "llmtoolkit:"
    path = "sessions.db"
"""
import os
import re
from pathlib import Path
from typing import Dict, Any, Optional

from ..core.exceptions import ConfigurationError

CONFIG_ENV_VAR = "LLM_TOOLKIT_CONFIG"
DEFAULT_CONFIG_FILE = "llm_toolkit.toml"

# Cache de configuration par chemin résolu
_config_cache: Dict[str, Dict[str, Any]] = {}

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def _expand_env_vars(obj: Any) -> Any:
    """
    Récursivement étend les variables d'environnement ${VAR} dans la config.

    Une variable absente de l'environnement est laissée telle quelle.
    """
    if isinstance(obj, str):
        def replace_env_var(match):
            var_name = match.group(1)
            return os.environ.get(var_name, match.group(0))
        return _ENV_VAR_PATTERN.sub(replace_env_var, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def _clear_config_cache(path: Optional[Path] = None):
    """Vide le cache (entier, ou pour un seul fichier)."""
    if path is None:
        _config_cache.clear()
    else:
        _config_cache.pop(str(path.resolve()), None)


def _resolve_config_path(config_path: Optional[str]) -> Path:
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
    return Path(config_path)


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Charge la configuration brute depuis un fichier TOML.

    Args:
        config_path: Chemin du fichier (défaut: $LLM_TOOLKIT_CONFIG puis
            ./llm_toolkit.toml)

    Returns:
        Dictionnaire de configuration, variables d'environnement étendues

    Raises:
        ConfigurationError: Si le fichier n'existe pas ou est invalide
    """
    path = _resolve_config_path(config_path)
    cache_key = str(path.resolve())
    if cache_key in _config_cache:
        return _config_cache[cache_key]

    if not path.exists():
        raise ConfigurationError(
            message=f"Fichier de configuration non trouvé: {path}",
            config_key="config_path"
        )

    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    try:
        with open(path, "rb") as f:
            raw_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            message=f"Fichier de configuration invalide ({path}): {e}",
            config_key="config_path"
        ) from e

    config = _expand_env_vars(raw_config)
    _config_cache[cache_key] = config
    return config


def reload_config(config_path: str = None) -> Dict[str, Any]:
    """
    Recharge la configuration depuis le fichier.

    Returns:
        Nouvelle configuration chargée
    """
    _clear_config_cache(_resolve_config_path(config_path))
    return load_config(config_path)
