"""
Gestion des conversations et du comptage de tokens.
"""

from .store import ConversationStore, compute_warning_threshold

__all__ = [
    "ConversationStore",
    "compute_warning_threshold",
]
