"""
Configuration de LLM Toolkit.
"""

from .loader import load_config, reload_config
from .settings import ToolkitConfig

__all__ = [
    "load_config",
    "reload_config",
    "ToolkitConfig",
]
